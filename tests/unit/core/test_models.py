"""Unit tests for input and chart models."""

import pytest
from pydantic import ValidationError

from citationcurve.chart.models import (
    AggregationMode,
    AlignmentMode,
    ChartGeometry,
    ChartOptions,
    LegendPosition,
    Padding,
    ValueTransform,
)
from citationcurve.models import CitationObservation, PaperData, Series

# Mark all tests in this module as unit tests
pytestmark = pytest.mark.unit


class TestEnums:
    """Tests for option enums."""

    def test_enum_values(self):
        assert AlignmentMode.CALENDAR.value == "calendar"
        assert AlignmentMode.RELATIVE.value == "relative"
        assert AggregationMode.CUMULATIVE.value == "cumulative"
        assert ValueTransform.LOG10.value == "log10"

    def test_legend_position_from_string(self):
        assert LegendPosition("left") == LegendPosition.LEFT
        assert {p.value for p in LegendPosition} == {"top", "bottom", "left", "right"}


class TestCitationObservation:
    """Tests for CitationObservation model."""

    def test_accepts_openalex_field_name(self):
        obs = CitationObservation.model_validate({"year": 2020, "cited_by_count": 12})
        assert obs.count == 12

    def test_accepts_count_field_name(self):
        obs = CitationObservation(year=2020, count=3)
        assert obs.count == 3

    def test_serializes_with_alias(self):
        obs = CitationObservation(year=2020, count=3)
        assert obs.model_dump(by_alias=True) == {"year": 2020, "cited_by_count": 3}

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            CitationObservation(year=2020, count=-5)


class TestSeriesAndPaperData:
    """Tests for Series and PaperData."""

    def test_series_defaults_to_no_observations(self):
        assert Series(label="A").observations == []

    def test_paper_data_to_series(self):
        paper = PaperData(
            paper_label="BERT",
            doi="10.18653/v1/N19-1423",
            citations=[CitationObservation(year=2019, count=10)],
            total_citations=10,
        )

        series = paper.to_series()

        assert series.label == "BERT"
        assert series.observations[0].year == 2019


class TestGeometry:
    """Tests for chart geometry defaults."""

    def test_default_plot_rect(self):
        plot = ChartGeometry().plot_rect

        assert (plot.left, plot.top) == (170, 80)
        assert (plot.width, plot.height) == (570, 390)
        assert (plot.right, plot.bottom) == (740, 470)
        assert plot.center_x == 455

    def test_custom_padding(self):
        geometry = ChartGeometry(width=200, height=100, padding=Padding(top=0, right=0, bottom=0, left=0))
        assert geometry.plot_rect.width == 200

    def test_options_defaults(self):
        options = ChartOptions()

        assert options.alignment == AlignmentMode.CALENDAR
        assert options.aggregation == AggregationMode.RAW
        assert options.value_transform == ValueTransform.LINEAR
        assert options.legend_position == LegendPosition.TOP
        assert (options.x_tick_count, options.y_tick_count) == (6, 5)

    def test_tick_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            ChartOptions(y_tick_count=0)
