"""Data models for the citation chart engine.

Everything a chart build produces is described here in pixel coordinates,
path commands and label strings, so any surface (SVG, canvas, DOM) can
draw it without repeating the layout arithmetic.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class AlignmentMode(str, Enum):
    """What the x axis represents."""
    CALENDAR = "calendar"  # raw publication-history years
    RELATIVE = "relative"  # years since each paper's first observed year


class AggregationMode(str, Enum):
    """What the y axis represents."""
    RAW = "raw"                # citations received in that year
    CUMULATIVE = "cumulative"  # running total up to that year


class ValueTransform(str, Enum):
    LINEAR = "linear"
    LOG10 = "log10"  # v -> log10(v + 1)


class LegendPosition(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class NormalizedPoint(BaseModel):
    """One sample of a series on the shared x domain.

    ``y`` is None where the series has no line segment (past its own
    duration in relative alignment).
    """
    x: int
    y: float | None


class NormalizedSeries(BaseModel):
    label: str
    points: list[NormalizedPoint] = Field(default_factory=list)


class NormalizedChart(BaseModel):
    """All series resampled onto one contiguous integer x domain."""
    x_min: int
    x_max: int
    series: list[NormalizedSeries] = Field(default_factory=list)


class Padding(BaseModel):
    top: float = 80
    right: float = 60
    bottom: float = 160
    left: float = 170


class PlotRect(BaseModel):
    """Pixel sub-region of the canvas where data is drawn."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2


class ChartGeometry(BaseModel):
    """Fixed pixel canvas and the padding that carves out the plot rect.

    The defaults leave room for 20px tick labels, 24px axis titles and a
    one-row legend above the plot.
    """
    width: float = 800
    height: float = 630
    padding: Padding = Field(default_factory=Padding)

    @property
    def plot_rect(self) -> PlotRect:
        return PlotRect(
            left=self.padding.left,
            top=self.padding.top,
            width=self.width - self.padding.left - self.padding.right,
            height=self.height - self.padding.top - self.padding.bottom,
        )


class ChartOptions(BaseModel):
    """Everything besides the series data that shapes one chart."""
    alignment: AlignmentMode = AlignmentMode.CALENDAR
    aggregation: AggregationMode = AggregationMode.RAW
    value_transform: ValueTransform = ValueTransform.LINEAR
    legend_position: LegendPosition = LegendPosition.TOP
    geometry: ChartGeometry = Field(default_factory=ChartGeometry)
    x_tick_count: int = Field(6, ge=1)
    y_tick_count: int = Field(5, ge=1)


class PixelPoint(BaseModel):
    x: float
    y: float


class PathCommand(BaseModel):
    """A single draw command.

    ``M`` carries only the end point; ``C`` also carries both Bezier
    control points.
    """
    op: Literal["M", "C"]
    x: float
    y: float
    x1: float | None = None
    y1: float | None = None
    x2: float | None = None
    y2: float | None = None


class Tick(BaseModel):
    value: float
    label: str


class LineSegment(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1
    dash: str | None = None


class Box(BaseModel):
    x: float
    y: float
    width: float
    height: float


class LegendEntry(BaseModel):
    label: str
    color: str
    box: Box     # whole entry (swatch + label)
    swatch: Box  # line-and-dot marker at the start of the entry


class SeriesPath(BaseModel):
    label: str
    color: str
    # One command list per run of present points
    segments: list[list[PathCommand]] = Field(default_factory=list)
    d: str = ""  # SVG path data for all segments


class Dot(BaseModel):
    label: str
    color: str
    cx: float
    cy: float
    r: float = 3


class TickLabel(BaseModel):
    axis: Literal["x", "y"]
    text: str
    x: float
    y: float
    anchor: Literal["start", "middle", "end"]


class AxisTitles(BaseModel):
    x: str
    y: str


class ChartDescription(BaseModel):
    """Technology-neutral description of a composed chart.

    ``ready`` is the completion signal a rasterizing collaborator waits on
    before capturing the drawn chart.
    """
    geometry: ChartGeometry
    plot_rect: PlotRect
    x_domain: tuple[int, int]
    y_max: float
    value_transform: ValueTransform
    legend_position: LegendPosition
    grid_lines: list[LineSegment] = Field(default_factory=list)
    axis_lines: list[LineSegment] = Field(default_factory=list)
    series_paths: list[SeriesPath] = Field(default_factory=list)
    dots: list[Dot] = Field(default_factory=list)
    tick_labels: list[TickLabel] = Field(default_factory=list)
    legend: list[LegendEntry] = Field(default_factory=list)
    axis_titles: AxisTitles
    ready: bool = False
