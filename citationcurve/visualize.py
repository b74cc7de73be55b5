"""Interactive Plotly rendition of the citation chart.

The SVG image is drawn from a ChartDescription; this module draws the same
normalized data as an interactive Plotly figure for the editing page and
for HTML export.

WHY: Hover tooltips and zooming help when comparing many papers, while
     the static image is what gets embedded.
HOW: Per series, a line trace sampled from the same monotone cubic curves
     the image draws (Plotly's own spline shape overshoots) and a marker
     trace carrying the hover text. Absent points are left as gaps,
     colors come from the image palette, and y ticks come from the same
     tick generator so log labels match.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from citationcurve.chart.composer import axis_titles
from citationcurve.chart.legend import series_color
from citationcurve.chart.models import ChartOptions, LegendPosition
from citationcurve.chart.normalize import normalize
from citationcurve.chart.scales import compute_y_max, transform_value
from citationcurve.chart.spline import render_segments, sample_path
from citationcurve.chart.ticks import y_ticks
from citationcurve.models import Series

if TYPE_CHECKING:
    from plotly.graph_objects import Figure

CURVE_SAMPLES = 16


def _legend_layout(position: LegendPosition) -> dict[str, Any]:
    if position == LegendPosition.BOTTOM:
        return dict(orientation="h", x=0.5, xanchor="center", y=-0.2, yanchor="top")
    if position == LegendPosition.LEFT:
        return dict(orientation="v", x=-0.15, xanchor="right", y=0.5, yanchor="middle")
    if position == LegendPosition.RIGHT:
        return dict(orientation="v", x=1.02, xanchor="left", y=0.5, yanchor="middle")
    return dict(orientation="h", x=0.5, xanchor="center", y=1.02, yanchor="bottom")


def create_citation_figure(
    series: Sequence[Series],
    options: ChartOptions | None = None,
    title: str | None = None,
    current_year: int | None = None,
) -> "Figure":
    """Create an interactive line chart of citation histories.

    Args:
        series: One Series per paper, in legend order
        options: Same options the image is built with
        title: Optional plot title
        current_year: Fallback x for a calendar chart with no observations

    Returns:
        Plotly Figure object
    """
    import plotly.graph_objects as go

    options = options or ChartOptions()
    transform = options.value_transform
    normalized = normalize(series, options.alignment, options.aggregation, current_year)

    traces = []
    for index, norm in enumerate(normalized.series):
        if not norm.points:
            continue
        color = series_color(index)
        points = [
            (p.x, None if p.y is None else transform_value(p.y, transform))
            for p in norm.points
        ]

        # Monotone curve as a dense polyline; None breaks the line at gaps
        line_x: list[float | None] = []
        line_y: list[float | None] = []
        for commands in render_segments(points):
            if line_x:
                line_x.append(None)
                line_y.append(None)
            xs, ys = sample_path(commands, CURVE_SAMPLES)
            line_x.extend(xs)
            line_y.extend(ys)

        traces.append(go.Scatter(
            x=line_x,
            y=line_y,
            mode="lines",
            name=norm.label,
            legendgroup=norm.label,
            line=dict(color=color, width=3, shape="linear"),
            connectgaps=False,
            hoverinfo="skip",
        ))
        traces.append(go.Scatter(
            x=[x for x, _ in points],
            y=[y for _, y in points],
            mode="markers",
            name=norm.label,
            legendgroup=norm.label,
            showlegend=False,
            marker=dict(size=6, color="white", line=dict(width=2, color=color)),
            customdata=[None if p.y is None else int(p.y) for p in norm.points],
            hovertemplate=f"<b>{norm.label}</b><br>%{{x}}: %{{customdata}}<extra></extra>",
        ))

    fig = go.Figure(data=traces)

    titles = axis_titles(options)
    ticks = y_ticks(compute_y_max(normalized, transform), options.y_tick_count, transform)

    fig.update_layout(
        title=dict(
            text=title or "",
            x=0.5,
            xanchor="center",
            font=dict(size=20),
        ),
        xaxis=dict(
            title=titles.x,
            range=[normalized.x_min, normalized.x_max] if normalized.x_min != normalized.x_max else None,
            showgrid=True,
            gridcolor="rgba(0,0,0,0.1)",
            zeroline=False,
        ),
        yaxis=dict(
            title=titles.y,
            range=[0, ticks[-1].value],
            tickvals=[t.value for t in ticks],
            ticktext=[t.label for t in ticks],
            showgrid=True,
            gridcolor="rgba(0,0,0,0.1)",
            zeroline=False,
        ),
        legend=_legend_layout(options.legend_position),
        hovermode="closest",
        template="plotly_white",
        width=options.geometry.width,
        height=options.geometry.height,
    )

    return fig


def save_html(fig: "Figure", path: str | Path) -> None:
    """Save Plotly figure as interactive HTML file.

    Args:
        fig: Plotly Figure object
        path: Output file path
    """
    path = Path(path)
    fig.write_html(
        str(path),
        include_plotlyjs="cdn",
        full_html=True,
    )


def save_citation_chart(
    series: Sequence[Series],
    html_path: str | Path,
    options: ChartOptions | None = None,
    title: str | None = None,
) -> None:
    """One-step function to create and save the interactive chart."""
    fig = create_citation_figure(series, options, title)
    save_html(fig, html_path)
