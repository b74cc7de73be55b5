"""Axis tick positions and display labels."""

import math

from citationcurve.chart.models import Tick, ValueTransform
from citationcurve.chart.scales import inverse_transform


def round_half_up(value: float) -> int:
    """Round like a browser's Math.round (halves go towards +inf)."""
    return math.floor(value + 0.5)


def to_fixed(value: float, digits: int) -> str:
    """Format with a fixed number of decimals, rounding halves up."""
    scale = 10**digits
    return f"{round_half_up(value * scale) / scale:.{digits}f}"


def tick_values(low: float, high: float, count: int) -> list[float]:
    """Return count + 1 evenly spaced values from low to high inclusive."""
    return [low + (high - low) * i / count for i in range(count + 1)]


def format_log_label(value: float) -> str:
    """Label a log10(v + 1) tick with the untransformed citation count.

    Examples:
        0 -> "0"; 2 -> "99"; 3.5 -> "3.2k"; 0.1 -> "0.26"
    """
    if value == 0:
        # log10(0 + 1) and rounding of tiny counts both land here
        return "0"

    original = inverse_transform(value, ValueTransform.LOG10)
    if original >= 1000:
        thousands = to_fixed(original / 1000, 1)
        if thousands.endswith(".0"):
            thousands = thousands[:-2]
        return f"{thousands}k"
    if original >= 1:
        return str(round_half_up(original))
    return to_fixed(original, 2)


def x_ticks(x_min: float, x_max: float, count: int = 6) -> list[Tick]:
    """Ticks along the x domain, labelled with the rounded year index."""
    return [
        Tick(value=value, label=str(round_half_up(value)))
        for value in tick_values(x_min, x_max, count)
    ]


def y_ticks(y_max: float, count: int = 5, transform: ValueTransform = ValueTransform.LINEAR) -> list[Tick]:
    """Ticks from 0 to y_max (transformed units).

    Log10 ticks are labelled with the inverse-transformed count; linear
    ticks with the rounded value.
    """
    ticks = []
    for value in tick_values(0.0, y_max, count):
        if transform == ValueTransform.LOG10:
            label = format_log_label(value)
        else:
            label = str(round_half_up(value))
        ticks.append(Tick(value=value, label=label))
    return ticks
