"""Resample sparse per-paper citation counts onto a shared x domain.

Citation histories arrive as unordered (year, count) pairs with gaps and
possibly repeated years. Before anything can be scaled or drawn, every
series is laid out on one contiguous integer range:

- CALENDAR alignment uses the year itself as x; the domain spans the
  earliest to the latest year observed in any series.
- RELATIVE alignment re-bases each series so its first observed year is
  x=0; the domain spans 0 to the longest series duration and shorter
  series stop (absent points, not zeros) after their own last year.
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import UTC, datetime

from citationcurve.chart.models import (
    AggregationMode,
    AlignmentMode,
    NormalizedChart,
    NormalizedPoint,
    NormalizedSeries,
)
from citationcurve.logging import get_logger
from citationcurve.models import Series

logger = get_logger(__name__)


def _counts_by_year(series: Series) -> dict[int, int]:
    """Sum counts per year; repeated years add up."""
    counts: dict[int, int] = defaultdict(int)
    for obs in series.observations:
        counts[obs.year] += obs.count
    return dict(counts)


def _year_bounds(series: Series) -> tuple[int, int] | None:
    if not series.observations:
        return None
    years = [obs.year for obs in series.observations]
    return min(years), max(years)


def compute_domain(
    series: Sequence[Series],
    alignment: AlignmentMode,
    current_year: int | None = None,
) -> tuple[int, int]:
    """Return the inclusive (x_min, x_max) shared by all series.

    Args:
        series: Series to plot
        alignment: Calendar or relative alignment
        current_year: Fallback year when no series has any observation
                      (defaults to the current UTC year)

    Returns:
        Tuple of (x_min, x_max)
    """
    bounds = [b for b in (_year_bounds(s) for s in series) if b is not None]

    if alignment == AlignmentMode.RELATIVE:
        max_duration = max((hi - lo for lo, hi in bounds), default=0)
        return 0, max_duration

    if not bounds:
        year = current_year if current_year is not None else datetime.now(UTC).year
        return year, year

    return min(lo for lo, _ in bounds), max(hi for _, hi in bounds)


def _normalize_one(
    series: Series,
    x_min: int,
    x_max: int,
    alignment: AlignmentMode,
    aggregation: AggregationMode,
) -> NormalizedSeries:
    bounds = _year_bounds(series)
    if bounds is None:
        return NormalizedSeries(label=series.label, points=[])

    local_min, local_max = bounds
    counts = _counts_by_year(series)
    offset = local_min if alignment == AlignmentMode.RELATIVE else 0

    # Running total of everything observed before the first plotted year
    first_year = x_min + offset
    running = sum(c for year, c in counts.items() if year < first_year)

    points: list[NormalizedPoint] = []
    for x in range(x_min, x_max + 1):
        year = x + offset

        if alignment == AlignmentMode.RELATIVE and year > local_max:
            points.append(NormalizedPoint(x=x, y=None))
            continue

        count = counts.get(year, 0)
        if aggregation == AggregationMode.CUMULATIVE:
            running += count
            value = running
        else:
            value = count

        points.append(NormalizedPoint(x=x, y=float(value)))

    return NormalizedSeries(label=series.label, points=points)


def normalize(
    series: Sequence[Series],
    alignment: AlignmentMode = AlignmentMode.CALENDAR,
    aggregation: AggregationMode = AggregationMode.RAW,
    current_year: int | None = None,
) -> NormalizedChart:
    """Lay every series out on the shared integer x domain.

    A series with no observations yields an empty point list and takes no
    part in the domain.

    Args:
        series: Series to plot, in legend order
        alignment: Calendar or relative alignment
        aggregation: Per-year or cumulative counts
        current_year: Fallback year for an all-empty calendar chart

    Returns:
        NormalizedChart with the domain and one NormalizedSeries per input
    """
    if series is None:
        raise TypeError("series must be a sequence of Series, not None")

    x_min, x_max = compute_domain(series, alignment, current_year)

    normalized = [
        _normalize_one(s, x_min, x_max, alignment, aggregation)
        for s in series
    ]

    logger.debug(
        "series_normalized",
        series_count=len(normalized),
        x_min=x_min,
        x_max=x_max,
        alignment=alignment.value,
        aggregation=aggregation.value,
    )

    return NormalizedChart(x_min=x_min, x_max=x_max, series=normalized)
