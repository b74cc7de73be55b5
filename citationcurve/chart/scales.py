"""Numeric-to-pixel mapping for the chart axes."""

import math

from pydantic import BaseModel

from citationcurve.chart.models import (
    ChartGeometry,
    NormalizedChart,
    PlotRect,
    ValueTransform,
)

# Upper y bound used when every present value is zero
DEFAULT_Y_MAX = 10.0
# Linear charts get this much room above the highest point
LINEAR_HEADROOM = 1.1


def transform_value(value: float, transform: ValueTransform) -> float:
    """Apply the y value transform.

    LOG10 maps v to log10(v + 1), which keeps 0 at 0.
    """
    if transform == ValueTransform.LOG10:
        return math.log10(value + 1)
    return value


def inverse_transform(value: float, transform: ValueTransform) -> float:
    if transform == ValueTransform.LOG10:
        return math.pow(10, value) - 1
    return value


class Scales(BaseModel):
    """Pixel mapping derived once per chart from the domain and plot rect."""
    x_min: float
    x_max: float
    y_max: float
    plot_rect: PlotRect

    def scale_x(self, x: float) -> float:
        rect = self.plot_rect
        if self.x_max == self.x_min:
            return rect.center_x
        return rect.left + rect.width * (x - self.x_min) / (self.x_max - self.x_min)

    def scale_y(self, y: float) -> float:
        rect = self.plot_rect
        return rect.top + rect.height * (1 - y / self.y_max)


def compute_y_max(normalized: NormalizedChart, transform: ValueTransform) -> float:
    """Upper bound of the y domain in transformed units."""
    highest = max(
        (
            transform_value(point.y, transform)
            for series in normalized.series
            for point in series.points
            if point.y is not None
        ),
        default=0.0,
    )

    if highest == 0:
        return DEFAULT_Y_MAX
    if transform == ValueTransform.LINEAR:
        return highest * LINEAR_HEADROOM
    return highest


def build_scales(
    normalized: NormalizedChart,
    transform: ValueTransform,
    geometry: ChartGeometry,
) -> Scales:
    """Build x and y scales for a normalized chart.

    Args:
        normalized: Output of normalize()
        transform: Value transform applied to y before scaling
        geometry: Canvas size and padding

    Returns:
        Scales whose scale_y expects transformed values
    """
    return Scales(
        x_min=normalized.x_min,
        x_max=normalized.x_max,
        y_max=compute_y_max(normalized, transform),
        plot_rect=geometry.plot_rect,
    )
