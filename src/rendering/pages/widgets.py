"""Drawing helpers shared by several page builders."""
from __future__ import annotations

from typing import List

from src.rendering.document import (
    Align,
    Cursor,
    PageSurface,
    Paint,
    RectOp,
    Style,
    TextOp,
)
from src.rendering.geometry import Box
from src.rendering.text import line_height, wrap

BAND_COLOR = "#1E3A8A"
ALERT_COLOR = "#FF0000"

PAGE_TITLE_STYLE = Style(font="Helvetica-Bold", size=14)
BAND_STYLE = Style(font="Helvetica-Bold", size=12, color="#FFFFFF")


def page_title(
    surface: PageSurface, cursor: Cursor, text: str, x: float, width: float, *, align: Align = Align.LEFT
) -> Cursor:
    """Draw a bold section title and return the cursor below it."""
    surface.draw(cursor, TextOp(text, x, cursor.y, PAGE_TITLE_STYLE.with_(align=align), width=width))
    return cursor.moved(line_height(PAGE_TITLE_STYLE) + 8)


def section_band(
    surface: PageSurface,
    cursor: Cursor,
    box: Box,
    text: str,
    *,
    align: Align = Align.CENTER,
    color: str = BAND_COLOR,
) -> Cursor:
    """Filled band with white text (``DOCENTES`` etc.)."""
    surface.draw(
        cursor,
        RectOp(box.x, box.y, box.width, box.height, Paint(fill=color)),
        TextOp(text, box.x, box.y + 4, BAND_STYLE.with_(align=align), width=box.width),
    )
    return cursor.at(box.bottom)


def count_band(surface: PageSurface, cursor: Cursor, box: Box, heading: str, count: int) -> Cursor:
    """Band reading ``HEADING:  N encuestados`` with a right-aligned label."""
    label_width = 200
    surface.draw(
        cursor,
        RectOp(box.x, box.y, box.width, box.height, Paint(fill=BAND_COLOR)),
        TextOp(f"{heading}:", box.x, box.y + 4, BAND_STYLE.with_(align=Align.RIGHT), width=label_width),
        TextOp(
            f"{count} encuestados",
            box.x + label_width + 10,
            box.y + 4,
            BAND_STYLE.with_(font="Helvetica"),
        ),
    )
    return cursor.at(box.bottom)


def instruction_box(
    surface: PageSurface,
    cursor: Cursor,
    box_x: float,
    width: float,
    text: str,
    *,
    style: Style = Style(size=10, color=ALERT_COLOR, align=Align.CENTER),
    marker: bool = True,
    padding: float = 10.0,
    min_height: float = 30.0,
) -> Cursor:
    """Bordered box of centred text, with a red ``!`` in front of it.

    The box grows with the wrapped text; the page breaks first if the box
    does not fit.
    """
    lines: List[str] = wrap(text, style, width - 2 * padding)
    height = max(min_height, len(lines) * line_height(style) + 2 * padding)
    cursor = surface.ensure_space(cursor, height)
    y = cursor.y
    if marker:
        marker_style = Style(font="Helvetica-Bold", size=24, color=ALERT_COLOR)
        surface.draw(cursor, TextOp("!", box_x - 18, y + height / 2 - 14, marker_style))
    surface.draw(cursor, RectOp(box_x, y, width, height, Paint(stroke="#000000", line_width=0.5)))
    text_y = y + (height - len(lines) * line_height(style)) / 2
    for line in lines:
        surface.draw(cursor, TextOp(line, box_x + padding, text_y, style, width=width - 2 * padding))
        text_y += line_height(style)
    return cursor.at(y + height)
