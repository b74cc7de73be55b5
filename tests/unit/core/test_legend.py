"""Unit tests for legend layout and color assignment."""

import pytest

from citationcurve.chart.legend import LEGEND_MARGIN, SERIES_COLORS, layout_legend, series_color
from citationcurve.chart.models import ChartGeometry, LegendPosition

pytestmark = pytest.mark.unit

GEOMETRY = ChartGeometry()
LABELS = ["Attention Is All You Need", "BERT", "ResNet"]


class TestColors:
    """Tests for palette assignment."""

    def test_palette_has_eight_colors(self):
        assert len(SERIES_COLORS) == 8

    def test_colors_cycle(self):
        assert series_color(8) == series_color(0)
        assert series_color(9) == SERIES_COLORS[1]

    def test_colors_stable_across_positions(self):
        by_position = {
            position: [e.color for e in layout_legend(LABELS, position, GEOMETRY)]
            for position in LegendPosition
        }
        assert all(colors == SERIES_COLORS[:3] for colors in by_position.values())


class TestHorizontalLegend:
    """Tests for TOP and BOTTOM legends."""

    def test_top_row_near_canvas_top(self):
        entries = layout_legend(LABELS, LegendPosition.TOP, GEOMETRY)

        assert all(e.box.y == LEGEND_MARGIN for e in entries)
        assert entries[0].box.x < entries[1].box.x < entries[2].box.x

    def test_row_centered_over_plot(self):
        entries = layout_legend(LABELS, LegendPosition.TOP, GEOMETRY)

        left = entries[0].box.x
        right = entries[-1].box.x + entries[-1].box.width
        assert (left + right) / 2 == pytest.approx(GEOMETRY.plot_rect.center_x)

    def test_entries_do_not_overlap(self):
        entries = layout_legend(LABELS, LegendPosition.BOTTOM, GEOMETRY)

        for first, second in zip(entries, entries[1:]):
            assert first.box.x + first.box.width < second.box.x

    def test_bottom_row_near_canvas_bottom(self):
        entries = layout_legend(LABELS, LegendPosition.BOTTOM, GEOMETRY)

        for entry in entries:
            assert entry.box.y + entry.box.height == pytest.approx(GEOMETRY.height - LEGEND_MARGIN)


class TestVerticalLegend:
    """Tests for LEFT and RIGHT legends."""

    def test_left_column_near_canvas_left(self):
        entries = layout_legend(LABELS, LegendPosition.LEFT, GEOMETRY)

        assert all(e.box.x == LEGEND_MARGIN for e in entries)
        assert entries[0].box.y < entries[1].box.y < entries[2].box.y

    def test_column_centered_on_plot(self):
        entries = layout_legend(LABELS, LegendPosition.RIGHT, GEOMETRY)
        plot = GEOMETRY.plot_rect

        top = entries[0].box.y
        bottom = entries[-1].box.y + entries[-1].box.height
        assert (top + bottom) / 2 == pytest.approx(plot.top + plot.height / 2)

    def test_right_column_ends_near_canvas_right(self):
        entries = layout_legend(LABELS, LegendPosition.RIGHT, GEOMETRY)

        widest = max(e.box.x + e.box.width for e in entries)
        assert widest == pytest.approx(GEOMETRY.width - LEGEND_MARGIN)


class TestSwatch:
    """Tests for the per-entry swatch box."""

    def test_swatch_vertically_centered_in_entry(self):
        entry = layout_legend(["A"], LegendPosition.TOP, GEOMETRY)[0]

        assert entry.swatch.x == entry.box.x
        swatch_mid = entry.swatch.y + entry.swatch.height / 2
        assert swatch_mid == pytest.approx(entry.box.y + entry.box.height / 2)

    def test_no_labels(self):
        assert layout_legend([], LegendPosition.TOP, GEOMETRY) == []
