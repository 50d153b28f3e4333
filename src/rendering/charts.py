"""Turn chart layouts from :mod:`src.rendering.geometry` into draw operations."""
from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from src.reporting.demographics import LOAD_ERROR_LABEL, NO_DATA_LABEL
from src.reporting.models import ChartDatum
from src.rendering.document import (
    Align,
    Cursor,
    DrawOp,
    PageSurface,
    Paint,
    PathOp,
    Point,
    RectOp,
    Style,
    TextOp,
)
from src.rendering.geometry import (
    BarLayout,
    Box,
    ChartLabel,
    LegendEntry,
    LegendSpec,
    PieLayout,
    StackedBarLayout,
    horizontal_bar_layout,
    pie_layout,
)

logger = logging.getLogger(__name__)

TITLE_STYLE = Style(font="Helvetica-Bold", size=10)
LEGEND_STYLE = Style(size=8)
VALUE_STYLE = Style(size=8)
PLACEHOLDER_STYLE = Style(size=10, color="#666666", align=Align.CENTER)

PLACEHOLDER_FILL = "#E0E0E0"

# Single-datum series that stand for "nothing to chart"
_MESSAGE_LABELS = {NO_DATA_LABEL, LOAD_ERROR_LABEL}


def text_color_for(background: str) -> str:
    """Black or white, whichever reads better on *background* (``#RRGGBB``)."""
    value = background.lstrip("#")
    if len(value) != 6:
        return "#FFFFFF"
    r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return "#000000" if luminance > 170 else "#FFFFFF"


def centered_text(text: str, x: float, y: float, style: Style, width: float = 0.0) -> TextOp:
    """Text op whose visual centre is ``(x, y)``."""
    width = width or max(1.0, len(text) * style.size)
    return TextOp(
        text,
        x - width / 2,
        y - style.size * 0.4,
        style.with_(align=Align.CENTER),
        width=width,
    )


def label_ops(labels: Iterable[ChartLabel], style: Style) -> List[DrawOp]:
    return [centered_text(label.text, label.x, label.y, style) for label in labels]


def legend_ops(entries: Iterable[LegendEntry], style: Style = LEGEND_STYLE) -> List[DrawOp]:
    ops: List[DrawOp] = []
    for entry in entries:
        b = entry.box
        ops.append(RectOp(b.x, b.y, b.width, b.height, Paint(fill=entry.color)))
        ops.append(TextOp(entry.label, entry.text_x, entry.text_y, style))
    return ops


# ---------------------------------------------------------------------------
# Pie
# ---------------------------------------------------------------------------


def _is_message(data: Sequence[ChartDatum]) -> bool:
    return len(data) == 1 and data[0].label in _MESSAGE_LABELS


def draw_pie(
    surface: PageSurface,
    cursor: Cursor,
    data: Sequence[ChartDatum],
    center: Point,
    radius: float,
    title: str,
    legend: LegendSpec = LegendSpec(),
) -> PieLayout:
    """Draw a titled pie with its legend; returns the layout used."""
    cx, cy = center
    surface.draw(
        cursor,
        TextOp(title, cx - radius * 2, cy - radius - 25, TITLE_STYLE.with_(align=Align.CENTER), width=radius * 4),
    )

    if _is_message(data):
        message = data[0].label
        logger.debug("Pie '%s' has no chartable data: %s", title, message)
        surface.draw(cursor, centered_text(message, cx, cy, PLACEHOLDER_STYLE, width=radius * 3))
        return PieLayout(center, radius, (), (ChartLabel(message, cx, cy),), (), is_placeholder=True)

    layout = pie_layout(data, center, radius, legend)
    if layout.is_placeholder:
        for label in layout.labels:
            surface.draw(cursor, centered_text(label.text, label.x, label.y, PLACEHOLDER_STYLE, width=radius * 3))
        return layout

    for segment in layout.segments:
        surface.draw(cursor, PathOp(segment.points, Paint(fill=segment.datum.color)))
    label_style = Style(font="Helvetica-Bold", size=9, color="#FFFFFF")
    surface.draw(cursor, *label_ops(layout.labels, label_style))
    surface.draw(cursor, *legend_ops(layout.legend))
    return layout


# ---------------------------------------------------------------------------
# Horizontal bars
# ---------------------------------------------------------------------------


def draw_horizontal_bars(
    surface: PageSurface,
    cursor: Cursor,
    data: Sequence[ChartDatum],
    box: Box,
    title: str,
) -> BarLayout:
    """Draw a titled horizontal bar chart inside *box*."""
    layout = horizontal_bar_layout(data, box)
    surface.draw(
        cursor,
        TextOp(title, box.x, box.y + 5, TITLE_STYLE.with_(align=Align.CENTER), width=box.width),
    )
    for bar in layout.bars:
        text_y = bar.center_y - VALUE_STYLE.size / 2
        surface.draw(
            cursor,
            TextOp(
                bar.datum.label,
                bar.label_box.x,
                text_y,
                VALUE_STYLE.with_(align=Align.RIGHT),
                width=bar.label_box.width,
            ),
            # Zero values still get a hairline so the category is visible.
            RectOp(bar.x, bar.y, max(bar.length, 1.0), bar.thickness, Paint(fill=bar.datum.color)),
            TextOp(_format_value(bar.datum.value), bar.value_x, text_y, VALUE_STYLE),
        )
    return layout


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"


# ---------------------------------------------------------------------------
# Stacked bars
# ---------------------------------------------------------------------------


def draw_stacked_bar(
    surface: PageSurface,
    cursor: Cursor,
    layout: StackedBarLayout,
    *,
    label_size: float = 8,
) -> None:
    box = layout.box
    if layout.placeholder is not None:
        surface.draw(
            cursor,
            RectOp(box.x, box.y, box.width, box.height, Paint(fill=PLACEHOLDER_FILL)),
            centered_text(
                layout.placeholder.text,
                layout.placeholder.x,
                layout.placeholder.y,
                PLACEHOLDER_STYLE.with_(size=9),
                width=80,
            ),
        )
        return

    for segment in layout.segments:
        if segment.width <= 0:
            continue
        surface.draw(
            cursor,
            RectOp(segment.x, box.y, segment.width, box.height, Paint(fill=segment.datum.color)),
        )
    for segment in layout.segments:
        if segment.label is None:
            continue
        style = Style(size=label_size, color=text_color_for(segment.datum.color))
        surface.draw(
            cursor,
            centered_text(segment.label.text, segment.label.x, segment.label.y, style, width=segment.width),
        )
