"""Monotone cubic spline paths (Fritsch-Carlson).

Citation curves are drawn smoothed, but a plain cubic spline overshoots
around peaks and troughs and would suggest counts that never occurred.
Monotone cubic interpolation limits the tangents at every data point so
that each Bezier segment stays within the range of its two end points.

HOW: 1. Secant slope d[i] for every segment
     2. Endpoint tangents copy the adjacent secant; interior tangents are
        the secant average, or 0 at a local extremum
     3. Limiter pass: flat segments get zero tangents; otherwise tangents
        are rescaled whenever alpha^2 + beta^2 > 9
     4. One cubic Bezier per segment with control points a third of the
        way along each tangent

All inputs are pixel coordinates with strictly increasing x.
"""

import math
from collections.abc import Sequence

import numpy as np

from citationcurve.chart.models import PathCommand, PixelPoint


def monotone_tangents(xs: Sequence[float], ys: Sequence[float]) -> list[float]:
    """Compute overshoot-free tangents (dy/dx) at every point.

    Args:
        xs: Strictly increasing x coordinates
        ys: y coordinates, same length as xs

    Returns:
        One tangent per point
    """
    n = len(xs)
    if n < 2:
        return [0.0] * n

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    d = np.diff(y) / np.diff(x)

    m = np.empty(n, dtype=float)
    m[0] = d[0]
    m[-1] = d[-1]
    if n > 2:
        m[1:-1] = np.where(d[:-1] * d[1:] <= 0, 0.0, (d[:-1] + d[1:]) / 2)

    # Sequential: segment i may rewrite m[i + 1] before segment i + 1 reads it
    secants = d.tolist()
    tangents = m.tolist()
    for i, slope in enumerate(secants):
        if slope == 0:
            tangents[i] = 0.0
            tangents[i + 1] = 0.0
            continue

        alpha = tangents[i] / slope
        beta = tangents[i + 1] / slope
        norm = alpha * alpha + beta * beta
        if norm > 9:
            tau = 3 / math.sqrt(norm)
            tangents[i] = tau * alpha * slope
            tangents[i + 1] = tau * beta * slope

    return tangents


def render_path(points: Sequence[PixelPoint]) -> list[PathCommand]:
    """Build the draw commands for one unbroken run of points.

    Returns an empty list for no points and a lone move-to for one point.
    """
    if not points:
        return []

    first = points[0]
    commands = [PathCommand(op="M", x=first.x, y=first.y)]
    if len(points) == 1:
        return commands

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    tangents = monotone_tangents(xs, ys)

    for i in range(len(points) - 1):
        p0 = points[i]
        p1 = points[i + 1]
        third = (p1.x - p0.x) / 3

        commands.append(
            PathCommand(
                op="C",
                x1=p0.x + third,
                y1=p0.y + tangents[i] * third,
                x2=p1.x - third,
                y2=p1.y - tangents[i + 1] * third,
                x=p1.x,
                y=p1.y,
            )
        )

    return commands


def split_runs(points: Sequence[tuple[float, float | None]]) -> list[list[PixelPoint]]:
    """Split a point sequence at absent values (y is None)."""
    runs: list[list[PixelPoint]] = []
    current: list[PixelPoint] = []
    for x, y in points:
        if y is None:
            if current:
                runs.append(current)
                current = []
            continue
        current.append(PixelPoint(x=x, y=y))
    if current:
        runs.append(current)
    return runs


def render_segments(points: Sequence[tuple[float, float | None]]) -> list[list[PathCommand]]:
    """Render each run of present points as its own sub-path.

    Gaps are never bridged: a line ends at the last point before an absent
    value and starts fresh after it.
    """
    return [render_path(run) for run in split_runs(points)]


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def path_to_svg(commands: Sequence[PathCommand]) -> str:
    """Serialize draw commands to SVG path data."""
    parts = []
    for cmd in commands:
        if cmd.op == "M":
            parts.append(f"M {_fmt(cmd.x)} {_fmt(cmd.y)}")
        else:
            parts.append(
                f"C {_fmt(cmd.x1)} {_fmt(cmd.y1)}, "
                f"{_fmt(cmd.x2)} {_fmt(cmd.y2)}, "
                f"{_fmt(cmd.x)} {_fmt(cmd.y)}"
            )
    return " ".join(parts)


def sample_path(commands: Sequence[PathCommand], steps: int = 16) -> tuple[list[float], list[float]]:
    """Evaluate a path at evenly spaced parameters along every cubic.

    Used where a renderer can only draw straight lines between points.

    Args:
        commands: Output of render_path for one run
        steps: Samples per cubic segment

    Returns:
        (xs, ys) polyline that starts and ends on the data points
    """
    if not commands:
        return [], []

    start = commands[0]
    xs = [start.x]
    ys = [start.y]
    t = np.linspace(0.0, 1.0, steps + 1)[1:]
    u = 1 - t
    b0, b1, b2, b3 = u**3, 3 * u * u * t, 3 * u * t * t, t**3

    x0, y0 = start.x, start.y
    for cmd in commands[1:]:
        xs.extend((b0 * x0 + b1 * cmd.x1 + b2 * cmd.x2 + b3 * cmd.x).tolist())
        ys.extend((b0 * y0 + b1 * cmd.y1 + b2 * cmd.y2 + b3 * cmd.y).tolist())
        x0, y0 = cmd.x, cmd.y
    return xs, ys
