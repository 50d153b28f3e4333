"""Chart geometry: pure layout functions for pies, bars and stacked bars.

Nothing here draws. Each function maps chart data and a target box to a
layout value (segments, bars, labels and legend entries in absolute page
coordinates) that :mod:`src.rendering.charts` turns into draw operations.
Keeping the arithmetic separate makes the geometric guarantees testable
without a PDF backend.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from src.reporting.models import Bucket, ChartDatum, FrequencyResult, round_half_up
from src.rendering.document import Point, Style
from src.rendering.text import text_width

NO_DATA_TEXT = "No hay datos disponibles"
NO_INFORMATION_TEXT = "Sin información"

FREQUENCY_COLORS = {
    Bucket.ALWAYS: "#4472C4",
    Bucket.SOMETIMES: "#FFC000",
    Bucket.NEVER: "#FF0000",
}

LABEL_STYLE = Style(size=8)

Measure = Callable[[str], float]


def _default_measure(text: str) -> float:
    return text_width(text, LABEL_STYLE)


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, top: float = 0, right: float = 0, bottom: float = 0, left: float = 0) -> "Box":
        return Box(
            self.x + left,
            self.y + top,
            max(0.0, self.width - left - right),
            max(0.0, self.height - top - bottom),
        )


# ---------------------------------------------------------------------------
# Legends
# ---------------------------------------------------------------------------

LEGEND_BOX = 8.0
LEGEND_TEXT_PADDING = 5.0
LEGEND_RIGHT_STEP = LEGEND_BOX + 10
LEGEND_COLUMN_STEP = 60.0
LEGEND_ROW_STEP = 15.0


class LegendPlacement(str, Enum):
    RIGHT = "right"
    BELOW = "below"
    BELOW_ROWS = "below_rows"


@dataclass(frozen=True)
class LegendSpec:
    placement: LegendPlacement = LegendPlacement.RIGHT
    rows: int = 1

    @classmethod
    def right(cls) -> "LegendSpec":
        return cls(LegendPlacement.RIGHT)

    @classmethod
    def below(cls) -> "LegendSpec":
        return cls(LegendPlacement.BELOW)

    @classmethod
    def below_rows(cls, rows: int) -> "LegendSpec":
        if rows < 1:
            raise ValueError("A legend needs at least one row.")
        return cls(LegendPlacement.BELOW_ROWS, rows)


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str
    box: Box
    text_x: float
    text_y: float


def legend_grid(
    data: Sequence[ChartDatum],
    origin: Point,
    rows: int,
    *,
    column_step: float = LEGEND_COLUMN_STEP,
    row_step: float = LEGEND_ROW_STEP,
) -> List[LegendEntry]:
    """Distribute *data* over *rows* rows of ``ceil(len / rows)`` entries."""
    if not data:
        return []
    per_row = max(1, math.ceil(len(data) / max(1, rows)))
    x0, y0 = origin
    entries = []
    for index, datum in enumerate(data):
        row, col = divmod(index, per_row)
        x = x0 + col * column_step
        y = y0 + row * row_step
        entries.append(
            LegendEntry(
                datum.label,
                datum.color,
                Box(x, y, LEGEND_BOX, LEGEND_BOX),
                x + LEGEND_BOX + LEGEND_TEXT_PADDING,
                y,
            )
        )
    return entries


def legend_height(count: int, rows: int) -> float:
    used = min(rows, count) if count else 0
    return used * LEGEND_ROW_STEP


# ---------------------------------------------------------------------------
# Pie
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PieSegment:
    datum: ChartDatum
    start_angle: float
    end_angle: float
    points: Tuple[Point, ...]

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class ChartLabel:
    """Text centred on ``(x, y)``."""

    text: str
    x: float
    y: float


@dataclass(frozen=True)
class PieLayout:
    center: Point
    radius: float
    segments: Tuple[PieSegment, ...]
    labels: Tuple[ChartLabel, ...]
    legend: Tuple[LegendEntry, ...]
    is_placeholder: bool = False

    @property
    def bottom(self) -> float:
        """Lowest y used by the pie and its legend."""
        lowest = self.center[1] + self.radius
        for entry in self.legend:
            lowest = max(lowest, entry.box.bottom)
        return lowest


def _arc_points(center: Point, radius: float, start: float, end: float, steps: int) -> Tuple[Point, ...]:
    cx, cy = center
    points = [center]
    for i in range(steps + 1):
        angle = start + (end - start) * i / steps
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    points.append(center)
    return tuple(points)


def _pie_legend(data: Sequence[ChartDatum], center: Point, radius: float, spec: LegendSpec) -> List[LegendEntry]:
    cx, cy = center
    if spec.placement is LegendPlacement.RIGHT:
        return legend_grid(
            data,
            (cx + radius + 20, cy - radius),
            len(data),
            row_step=LEGEND_RIGHT_STEP,
        )
    if spec.placement is LegendPlacement.BELOW:
        return legend_grid(data, (cx - radius + 12, cy + radius + 10), 1)
    return legend_grid(data, (cx - radius - 30, cy + radius + 10), spec.rows)


def pie_layout(
    data: Sequence[ChartDatum],
    center: Point,
    radius: float,
    legend: LegendSpec = LegendSpec(),
    *,
    steps: int = 16,
    label_radius: float = 0.65,
    label_threshold: float = 0.05,
) -> PieLayout:
    """Lay out a pie chart.

    Segments sweep ``value / total * 2π`` each, accumulated from angle 0 in
    data order. Percentage labels are placed on each segment's bisector at
    *label_radius* of the radius, only for segments larger than
    *label_threshold* of the circle. A zero total yields a placeholder layout
    with a single "no data" label and no angles.
    """
    total = sum(d.value for d in data)
    if total <= 0:
        return PieLayout(
            center,
            radius,
            (),
            (ChartLabel(NO_DATA_TEXT, center[0], center[1]),),
            (),
            is_placeholder=True,
        )

    segments: List[PieSegment] = []
    labels: List[ChartLabel] = []
    angle = 0.0
    for datum in data:
        share = datum.value / total
        sweep = share * 2 * math.pi
        end = angle + sweep
        if sweep > 0:
            segments.append(
                PieSegment(datum, angle, end, _arc_points(center, radius, angle, end, steps))
            )
        if share > label_threshold:
            mid = angle + sweep / 2
            labels.append(
                ChartLabel(
                    f"{round_half_up(share * 100)}%",
                    center[0] + radius * label_radius * math.cos(mid),
                    center[1] + radius * label_radius * math.sin(mid),
                )
            )
        angle = end

    return PieLayout(
        center,
        radius,
        tuple(segments),
        tuple(labels),
        tuple(_pie_legend(data, center, radius, legend)),
    )


# ---------------------------------------------------------------------------
# Horizontal bars
# ---------------------------------------------------------------------------

BAR_PADDING_TOP = 35.0
BAR_PADDING_RIGHT = 10.0
BAR_PADDING_BOTTOM = 30.0
BAR_LABEL_MARGIN = 60.0
BAR_LABEL_MARGIN_WIDE = 100.0
BAR_MAX_THICKNESS = 15.0
BAR_GAP = 5.0


@dataclass(frozen=True)
class Bar:
    datum: ChartDatum
    x: float
    y: float
    length: float
    thickness: float
    label_box: Box
    value_x: float

    @property
    def center_y(self) -> float:
        return self.y + self.thickness / 2


@dataclass(frozen=True)
class BarLayout:
    box: Box
    plot: Box
    bars: Tuple[Bar, ...]
    max_value: float

    @property
    def plot_width(self) -> float:
        return self.plot.width


def horizontal_bar_layout(
    data: Sequence[ChartDatum],
    box: Box,
    *,
    measure: Optional[Measure] = None,
) -> BarLayout:
    """Lay out one horizontal bar per datum inside *box*.

    The title strip takes the top padding. Bar length is
    ``value / max(max(values), 1) * plot_width``, so the largest value spans
    the whole plot. Labels sit right-aligned in the left margin, which widens
    when any label does not fit the short margin.
    """
    measure = measure or _default_measure
    short_capacity = BAR_LABEL_MARGIN - 10
    wide = any(measure(d.label) > short_capacity for d in data)
    left = BAR_LABEL_MARGIN_WIDE if wide else BAR_LABEL_MARGIN
    plot = box.inset(BAR_PADDING_TOP, BAR_PADDING_RIGHT, BAR_PADDING_BOTTOM, left)

    max_value = max([d.value for d in data] + [1])
    count = len(data)
    if count == 0:
        return BarLayout(box, plot, (), max_value)

    thickness = max(0.0, min(BAR_MAX_THICKNESS, (plot.height - (count - 1) * BAR_GAP) / count))
    step = thickness + BAR_GAP
    bars = []
    for index, datum in enumerate(data):
        y = plot.y + index * step
        length = datum.value / max_value * plot.width
        bars.append(
            Bar(
                datum,
                plot.x,
                y,
                length,
                thickness,
                Box(box.x + 5, y, left - 10, thickness),
                plot.x + max(length, 1.0) + 5,
            )
        )
    return BarLayout(box, plot, tuple(bars), max_value)


# ---------------------------------------------------------------------------
# Stacked bars
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StackSegment:
    datum: ChartDatum
    x: float
    width: float
    label: Optional[ChartLabel]


@dataclass(frozen=True)
class StackedBarLayout:
    box: Box
    segments: Tuple[StackSegment, ...]
    placeholder: Optional[ChartLabel] = None

    @property
    def is_placeholder(self) -> bool:
        return self.placeholder is not None


def _placeholder_bar(box: Box) -> StackedBarLayout:
    return StackedBarLayout(
        box,
        (),
        ChartLabel(NO_INFORMATION_TEXT, box.x + box.width / 2, box.y + box.height / 2),
    )


def stacked_bar_layout(
    data: Sequence[ChartDatum],
    box: Box,
    *,
    label_threshold: float = 0.05,
    measure: Optional[Measure] = None,
) -> StackedBarLayout:
    """Lay out contiguous segments left to right, proportional to value.

    A percentage label is centred in every segment whose share exceeds
    *label_threshold* and whose width fits the text. An all-zero input yields
    the neutral "Sin información" placeholder.
    """
    measure = measure or _default_measure
    total = sum(d.value for d in data)
    if total <= 0:
        return _placeholder_bar(box)

    segments = []
    x = box.x
    for datum in data:
        share = datum.value / total
        width = share * box.width
        label = None
        if share > label_threshold:
            text = f"{round_half_up(share * 100)}%"
            if measure(text) <= width:
                label = ChartLabel(text, x + width / 2, box.y + box.height / 2)
        segments.append(StackSegment(datum, x, width, label))
        x += width
    return StackedBarLayout(box, tuple(segments))


def frequency_bar_layout(
    result: FrequencyResult,
    box: Box,
    *,
    measure: Optional[Measure] = None,
) -> StackedBarLayout:
    """Stacked S/A/N bar for one (averaged) frequency result.

    Widths come from the values normalised to 100; labels show the values
    themselves. Rows with no data or all zeros render the placeholder.
    """
    measure = measure or _default_measure
    if not result.has_data or result.is_zero:
        return _placeholder_bar(box)

    total = result.total()
    segments = []
    x = box.x
    for bucket in Bucket:
        value = result.get(bucket)
        width = value / total * box.width
        datum = ChartDatum(bucket.legend, value, FREQUENCY_COLORS[bucket])
        label = None
        text = f"{value}%"
        if value > 0 and measure(text) <= width:
            label = ChartLabel(text, x + width / 2, box.y + box.height / 2)
        segments.append(StackSegment(datum, x, width, label))
        x += width
    return StackedBarLayout(box, tuple(segments))
