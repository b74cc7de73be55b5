"""Legend placement around the plot area."""

from collections.abc import Sequence

from citationcurve.chart.models import Box, ChartGeometry, LegendEntry, LegendPosition

# Series colors, assigned by series index and cycled past eight series
SERIES_COLORS = [
    "#8884d8",
    "#82ca9d",
    "#ffc658",
    "#ff7300",
    "#0088FE",
    "#00C49F",
    "#FFBB28",
    "#FF8042",
]

LEGEND_FONT_SIZE = 24
LEGEND_MARGIN = 20       # distance from the canvas edge
LEGEND_GAP = 24          # between entries
SWATCH_WIDTH = 34
SWATCH_HEIGHT = 14
SWATCH_LABEL_GAP = 8
# Average glyph advance of a sans-serif face, as a fraction of font size
CHAR_WIDTH_RATIO = 0.55
LINE_HEIGHT_RATIO = 1.2


def series_color(index: int) -> str:
    return SERIES_COLORS[index % len(SERIES_COLORS)]


def estimate_text_width(text: str, font_size: float = LEGEND_FONT_SIZE) -> float:
    return len(text) * font_size * CHAR_WIDTH_RATIO


def _entry_size(label: str) -> tuple[float, float]:
    width = SWATCH_WIDTH + SWATCH_LABEL_GAP + estimate_text_width(label)
    height = max(SWATCH_HEIGHT, LEGEND_FONT_SIZE * LINE_HEIGHT_RATIO)
    return width, height


def _entry(label: str, index: int, x: float, y: float, width: float, height: float) -> LegendEntry:
    return LegendEntry(
        label=label,
        color=series_color(index),
        box=Box(x=x, y=y, width=width, height=height),
        swatch=Box(
            x=x,
            y=y + (height - SWATCH_HEIGHT) / 2,
            width=SWATCH_WIDTH,
            height=SWATCH_HEIGHT,
        ),
    )


def layout_legend(
    labels: Sequence[str],
    position: LegendPosition,
    geometry: ChartGeometry,
) -> list[LegendEntry]:
    """Place one legend entry per series label.

    TOP and BOTTOM lay entries out in a row centred over the plot's
    horizontal extent; LEFT and RIGHT stack them in a column centred on
    the plot's vertical extent.

    Args:
        labels: Series labels in series order
        position: Legend anchor relative to the plot
        geometry: Canvas size and padding

    Returns:
        Legend entries in series order
    """
    if not labels:
        return []

    plot = geometry.plot_rect
    sizes = [_entry_size(label) for label in labels]
    entries: list[LegendEntry] = []

    if position in (LegendPosition.TOP, LegendPosition.BOTTOM):
        row_width = sum(w for w, _ in sizes) + LEGEND_GAP * (len(sizes) - 1)
        row_height = max(h for _, h in sizes)
        x = plot.left + (plot.width - row_width) / 2
        if position == LegendPosition.TOP:
            top = LEGEND_MARGIN
        else:
            top = geometry.height - LEGEND_MARGIN - row_height

        for index, (label, (width, height)) in enumerate(zip(labels, sizes)):
            y = top + (row_height - height) / 2
            entries.append(_entry(label, index, x, y, width, height))
            x += width + LEGEND_GAP
        return entries

    column_height = sum(h for _, h in sizes) + LEGEND_GAP * (len(sizes) - 1)
    column_width = max(w for w, _ in sizes)
    y = plot.top + (plot.height - column_height) / 2
    if position == LegendPosition.LEFT:
        left = LEGEND_MARGIN
    else:
        left = geometry.width - LEGEND_MARGIN - column_width

    for index, (label, (width, height)) in enumerate(zip(labels, sizes)):
        entries.append(_entry(label, index, left, y, width, height))
        y += height + LEGEND_GAP
    return entries
