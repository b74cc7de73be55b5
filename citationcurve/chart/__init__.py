"""Citation chart engine.

Turns sparse per-paper citation counts into a pixel-exact multi-series
line chart description: shared x domain, optional cumulative and log
views, ticks, monotone spline paths and legend layout.

Example:
    from citationcurve.chart import ChartOptions, build_chart, render_svg
    from citationcurve.models import Series

    chart = build_chart([Series(label="BERT", observations=[...])], ChartOptions())
    svg = render_svg(chart)
"""

from citationcurve.chart.composer import axis_titles, build_chart
from citationcurve.chart.legend import SERIES_COLORS, layout_legend, series_color
from citationcurve.chart.models import (
    AggregationMode,
    AlignmentMode,
    ChartDescription,
    ChartGeometry,
    ChartOptions,
    LegendPosition,
    NormalizedChart,
    NormalizedPoint,
    NormalizedSeries,
    Padding,
    PathCommand,
    PlotRect,
    Tick,
    ValueTransform,
)
from citationcurve.chart.normalize import compute_domain, normalize
from citationcurve.chart.scales import Scales, build_scales, transform_value
from citationcurve.chart.spline import (
    monotone_tangents,
    path_to_svg,
    render_path,
    render_segments,
    sample_path,
)
from citationcurve.chart.svg import render_message_svg, render_svg
from citationcurve.chart.ticks import format_log_label, x_ticks, y_ticks

__all__ = [
    # Models
    "AlignmentMode",
    "AggregationMode",
    "ValueTransform",
    "LegendPosition",
    "NormalizedPoint",
    "NormalizedSeries",
    "NormalizedChart",
    "Padding",
    "PlotRect",
    "ChartGeometry",
    "ChartOptions",
    "PathCommand",
    "Tick",
    "ChartDescription",
    # Normalization
    "normalize",
    "compute_domain",
    # Scales
    "Scales",
    "build_scales",
    "transform_value",
    # Spline
    "monotone_tangents",
    "render_path",
    "render_segments",
    "path_to_svg",
    "sample_path",
    # Ticks
    "x_ticks",
    "y_ticks",
    "format_log_label",
    # Legend
    "SERIES_COLORS",
    "series_color",
    "layout_legend",
    # Composer
    "build_chart",
    "axis_titles",
    # SVG
    "render_svg",
    "render_message_svg",
]
