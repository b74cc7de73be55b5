"""Render a ChartDescription as a standalone SVG document."""

from html import escape

from citationcurve.chart.legend import LEGEND_FONT_SIZE, SWATCH_LABEL_GAP
from citationcurve.chart.models import ChartDescription, LegendEntry, LineSegment

FONT_FAMILY = "sans-serif"
TICK_FONT_SIZE = 20
TICK_COLOR = "#6b7280"
TITLE_FONT_SIZE = 24
TITLE_COLOR = "#374151"
# Distance from the x axis line to the x axis title
X_TITLE_OFFSET = 60
Y_TITLE_LEFT = 8
SERIES_STROKE_WIDTH = 3


def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _line(seg: LineSegment) -> str:
    dash = f' stroke-dasharray="{seg.dash}"' if seg.dash else ""
    return (
        f'<line x1="{_num(seg.x1)}" y1="{_num(seg.y1)}" x2="{_num(seg.x2)}" y2="{_num(seg.y2)}" '
        f'stroke="{seg.stroke}" stroke-width="{_num(seg.stroke_width)}"{dash}/>'
    )


def _legend_entry(entry: LegendEntry) -> list[str]:
    swatch = entry.swatch
    mid_y = swatch.y + swatch.height / 2
    mid_x = swatch.x + swatch.width / 2
    text_x = swatch.x + swatch.width + SWATCH_LABEL_GAP
    text_y = entry.box.y + entry.box.height / 2
    return [
        f'<line x1="{_num(swatch.x)}" y1="{_num(mid_y)}" x2="{_num(swatch.x + swatch.width)}" '
        f'y2="{_num(mid_y)}" stroke="{entry.color}" stroke-width="4" stroke-linecap="round"/>',
        f'<circle cx="{_num(mid_x)}" cy="{_num(mid_y)}" r="4" fill="white" '
        f'stroke="{entry.color}" stroke-width="2"/>',
        f'<text x="{_num(text_x)}" y="{_num(text_y)}" font-size="{LEGEND_FONT_SIZE}" '
        f'font-weight="500" fill="{entry.color}" dominant-baseline="middle">{escape(entry.label)}</text>',
    ]


def render_svg(chart: ChartDescription) -> str:
    """Serialize a composed chart to SVG markup."""
    width = chart.geometry.width
    height = chart.geometry.height
    plot = chart.plot_rect

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(width)}" height="{_num(height)}" '
        f'viewBox="0 0 {_num(width)} {_num(height)}" font-family="{FONT_FAMILY}">',
        '<rect x="0" y="0" width="100%" height="100%" fill="#ffffff"/>',
        "<defs>",
        f'<clipPath id="plotAreaClip"><rect x="{_num(plot.left)}" y="{_num(plot.top)}" '
        f'width="{_num(plot.width)}" height="{_num(plot.height)}"/></clipPath>',
        "</defs>",
    ]

    lines.extend(_line(seg) for seg in chart.grid_lines)
    lines.extend(_line(seg) for seg in chart.axis_lines)

    lines.append('<g clip-path="url(#plotAreaClip)">')
    for path in chart.series_paths:
        if not path.d:
            continue
        lines.append(
            f'<path d="{path.d}" stroke="{path.color}" stroke-width="{SERIES_STROKE_WIDTH}" '
            'fill="none" stroke-linecap="round" stroke-linejoin="round"/>'
        )
    for dot in chart.dots:
        lines.append(
            f'<circle cx="{_num(dot.cx)}" cy="{_num(dot.cy)}" r="{_num(dot.r)}" fill="white" '
            f'stroke="{dot.color}" stroke-width="2"/>'
        )
    lines.append("</g>")

    for label in chart.tick_labels:
        baseline = "hanging" if label.axis == "x" else "middle"
        lines.append(
            f'<text x="{_num(label.x)}" y="{_num(label.y)}" font-size="{TICK_FONT_SIZE}" '
            f'fill="{TICK_COLOR}" text-anchor="{label.anchor}" dominant-baseline="{baseline}">'
            f"{escape(label.text)}</text>"
        )

    for entry in chart.legend:
        lines.extend(_legend_entry(entry))

    x_title_y = plot.bottom + X_TITLE_OFFSET
    y_title_x = Y_TITLE_LEFT + TITLE_FONT_SIZE / 2
    y_title_y = height / 2
    lines.append(
        f'<text x="{_num(width / 2)}" y="{_num(x_title_y)}" font-size="{TITLE_FONT_SIZE}" '
        f'font-weight="bold" fill="{TITLE_COLOR}" text-anchor="middle" dominant-baseline="hanging">'
        f"{escape(chart.axis_titles.x)}</text>"
    )
    lines.append(
        f'<text x="{_num(y_title_x)}" y="{_num(y_title_y)}" font-size="{TITLE_FONT_SIZE}" '
        f'font-weight="bold" fill="{TITLE_COLOR}" text-anchor="middle" dominant-baseline="middle" '
        f'transform="rotate(-90 {_num(y_title_x)} {_num(y_title_y)})">'
        f"{escape(chart.axis_titles.y)}</text>"
    )

    lines.append("</svg>")
    return "\n".join(lines)


def render_message_svg(
    message: str,
    color: str = "black",
    width: float = 800,
    height: float = 630,
    font_size: int = 40,
) -> str:
    """Render a blank canvas with a single centred message."""
    return "\n".join([
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(width)}" height="{_num(height)}" '
        f'viewBox="0 0 {_num(width)} {_num(height)}" font-family="{FONT_FAMILY}">',
        '<rect x="0" y="0" width="100%" height="100%" fill="#ffffff"/>',
        f'<text x="{_num(width / 2)}" y="{_num(height / 2)}" font-size="{font_size}" fill="{color}" '
        f'text-anchor="middle" dominant-baseline="middle">{escape(message)}</text>',
        "</svg>",
    ])
