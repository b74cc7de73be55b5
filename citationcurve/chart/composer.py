"""Compose a complete chart description from citation series.

WHY: The same chart is drawn as an embeddable SVG image and as an
     interactive figure; keeping every coordinate, path and label in one
     technology-neutral description means both agree to the pixel.
HOW: 1. Normalize series onto the shared x domain
     2. Build x/y scales from the domain, y maximum and plot rect
     3. Generate ticks, grid lines and tick labels
     4. Render one monotone spline path (split at gaps) and dots per series
     5. Lay out the legend and pick the axis titles
"""

from collections.abc import Sequence

from citationcurve.chart.legend import layout_legend, series_color
from citationcurve.chart.models import (
    AlignmentMode,
    AxisTitles,
    ChartDescription,
    ChartOptions,
    Dot,
    LineSegment,
    SeriesPath,
    Tick,
    TickLabel,
    ValueTransform,
)
from citationcurve.chart.normalize import normalize
from citationcurve.chart.scales import Scales, build_scales, transform_value
from citationcurve.chart.spline import path_to_svg, render_segments
from citationcurve.chart.ticks import x_ticks, y_ticks
from citationcurve.logging import get_logger
from citationcurve.models import Series

logger = get_logger(__name__)

GRID_COLOR = "#e5e7eb"
GRID_DASH = "3 3"
AXIS_COLOR = "#9ca3af"
AXIS_WIDTH = 2

# Tick label offsets from the axis lines
X_TICK_LABEL_OFFSET = 12
Y_TICK_LABEL_OFFSET = 20


def axis_titles(options: ChartOptions) -> AxisTitles:
    return AxisTitles(
        x="Relative Years" if options.alignment == AlignmentMode.RELATIVE else "Year",
        y="Log Citations" if options.value_transform == ValueTransform.LOG10 else "Citations",
    )


def _grid_lines(scales: Scales, xs: list[Tick], ys: list[Tick]) -> list[LineSegment]:
    plot = scales.plot_rect
    lines = []
    for tick in xs:
        x = scales.scale_x(tick.value)
        lines.append(LineSegment(
            x1=x, y1=plot.top, x2=x, y2=plot.bottom,
            stroke=GRID_COLOR, dash=GRID_DASH,
        ))
    for tick in ys:
        y = scales.scale_y(tick.value)
        lines.append(LineSegment(
            x1=plot.left, y1=y, x2=plot.right, y2=y,
            stroke=GRID_COLOR, dash=GRID_DASH,
        ))
    return lines


def _axis_lines(scales: Scales) -> list[LineSegment]:
    plot = scales.plot_rect
    return [
        LineSegment(
            x1=plot.left, y1=plot.bottom, x2=plot.right, y2=plot.bottom,
            stroke=AXIS_COLOR, stroke_width=AXIS_WIDTH,
        ),
        LineSegment(
            x1=plot.left, y1=plot.top, x2=plot.left, y2=plot.bottom,
            stroke=AXIS_COLOR, stroke_width=AXIS_WIDTH,
        ),
    ]


def _tick_labels(scales: Scales, xs: list[Tick], ys: list[Tick]) -> list[TickLabel]:
    plot = scales.plot_rect
    labels = [
        TickLabel(
            axis="x",
            text=tick.label,
            x=scales.scale_x(tick.value),
            y=plot.bottom + X_TICK_LABEL_OFFSET,
            anchor="middle",
        )
        for tick in xs
    ]
    labels.extend(
        TickLabel(
            axis="y",
            text=tick.label,
            x=plot.left - Y_TICK_LABEL_OFFSET,
            y=scales.scale_y(tick.value),
            anchor="end",
        )
        for tick in ys
    )
    return labels


def build_chart(
    series: Sequence[Series],
    options: ChartOptions | None = None,
    current_year: int | None = None,
) -> ChartDescription:
    """Build the full chart description for a set of citation series.

    Never raises for well-typed input: empty input yields an empty chart
    with the default domain.

    Args:
        series: One Series per paper, in legend order
        options: Alignment, aggregation, transform, legend and geometry
        current_year: Fallback x for a calendar chart with no observations

    Returns:
        ChartDescription ready for rendering (``ready`` is True)
    """
    if series is None:
        raise TypeError("series must be a sequence of Series, not None")
    options = options or ChartOptions()
    transform = options.value_transform

    normalized = normalize(series, options.alignment, options.aggregation, current_year)
    scales = build_scales(normalized, transform, options.geometry)

    xs = x_ticks(normalized.x_min, normalized.x_max, options.x_tick_count)
    ys = y_ticks(scales.y_max, options.y_tick_count, transform)

    series_paths: list[SeriesPath] = []
    dots: list[Dot] = []
    for index, norm in enumerate(normalized.series):
        color = series_color(index)
        pixels: list[tuple[float, float | None]] = []
        for point in norm.points:
            px = scales.scale_x(point.x)
            if point.y is None:
                pixels.append((px, None))
                continue
            py = scales.scale_y(transform_value(point.y, transform))
            pixels.append((px, py))
            dots.append(Dot(label=norm.label, color=color, cx=px, cy=py))

        segments = render_segments(pixels)
        series_paths.append(SeriesPath(
            label=norm.label,
            color=color,
            segments=segments,
            d=" ".join(path_to_svg(seg) for seg in segments),
        ))

    legend = layout_legend(
        [s.label for s in normalized.series],
        options.legend_position,
        options.geometry,
    )

    logger.debug(
        "chart_built",
        series_count=len(series_paths),
        dot_count=len(dots),
        x_domain=(normalized.x_min, normalized.x_max),
        y_max=scales.y_max,
    )

    return ChartDescription(
        geometry=options.geometry,
        plot_rect=scales.plot_rect,
        x_domain=(normalized.x_min, normalized.x_max),
        y_max=scales.y_max,
        value_transform=transform,
        legend_position=options.legend_position,
        grid_lines=_grid_lines(scales, xs, ys),
        axis_lines=_axis_lines(scales),
        series_paths=series_paths,
        dots=dots,
        tick_labels=_tick_labels(scales, xs, ys),
        legend=legend,
        axis_titles=axis_titles(options),
        ready=True,
    )
