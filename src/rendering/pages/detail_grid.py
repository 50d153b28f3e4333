"""Detail grid ("FORTALEZAS Y RETOS") and the closing challenges box.

One table row per catalog statement with the S/A/N percentages of every
group. Rows are atomic: when a row does not fit, the page breaks before it
and the column headers are drawn again. The coloured category band on the
left is drawn once per page segment of the category.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from src.reporting import config
from src.reporting.models import Bucket, CategoryFrequencies, FrequencyResult, GridItem
from src.rendering.composer import BuildContext
from src.rendering.document import (
    Align,
    Cursor,
    DrawOp,
    LineOp,
    PageSurface,
    Paint,
    RectOp,
    Style,
    TextOp,
)
from src.rendering.pages.widgets import instruction_box, page_title
from src.rendering.text import line_height, wrap
from src.survey.catalog import RespondentGroup

logger = logging.getLogger(__name__)

START_X = 40.0
NUMBER_WIDTH = 30.0
QUESTION_WIDTH = 240.0
RATING_WIDTH = 25.0
GROUP_WIDTH = RATING_WIDTH * 3
TABLE_WIDTH = NUMBER_WIDTH + QUESTION_WIDTH + GROUP_WIDTH * len(RespondentGroup)
ROW_HEIGHT = 30.0
GROUP_HEADER_HEIGHT = ROW_HEIGHT
RATING_HEADER_HEIGHT = ROW_HEIGHT / 2
HEADER_HEIGHT = GROUP_HEADER_HEIGHT + RATING_HEADER_HEIGHT

LOW_SCORE_FILL = "#FFA500"
NO_DATA_TEXT = "Sin datos"

CHALLENGES_TITLE = "RETOS PARA EL DIRECTIVO EVALUADO"
CHALLENGES_NOTE = "En el recuadro escriba los retos que estos resultados le plantean como líder."
CHALLENGES_BOX_HEIGHT = 200.0

HIGHLIGHT_NOTE = "Los elementos en naranja representan elementos a mejorar."
RATING_LEGEND = (
    "S = Siempre / Casi Siempre",
    "A = A veces",
    "N = Nunca / Casi nunca",
)

_THIN = Paint(stroke="#000000", line_width=0.5)
_THICK = Paint(stroke="#000000", line_width=2)
_HEADER_TEXT = Style(font="Helvetica-Bold", size=10, align=Align.CENTER)
_RATING_TEXT = Style(size=10, align=Align.CENTER)
_QUESTION_TEXT = Style(size=9)
_CELL_TEXT = Style(size=7, align=Align.CENTER)
_NO_DATA_STYLE = Style(font="Helvetica-Oblique", size=7, color="#666666", align=Align.CENTER)
_BAND_TEXT = Style(font="Helvetica-Bold", size=10, color="#FFFFFF", align=Align.CENTER)


def _groups_x() -> float:
    return START_X + NUMBER_WIDTH + QUESTION_WIDTH


def group_x(index: int) -> float:
    return _groups_x() + index * GROUP_WIDTH


def rating_x(group_index: int, rating_index: int) -> float:
    return group_x(group_index) + rating_index * RATING_WIDTH


def row_height(item: GridItem) -> float:
    """Height of the row for *item*: at least one standard row, more for long text."""
    lines = wrap(item.display_text, _QUESTION_TEXT, QUESTION_WIDTH - 6)
    return max(ROW_HEIGHT, len(lines) * line_height(_QUESTION_TEXT) + 6)


def is_low_score(bucket: Bucket, value: int) -> bool:
    return bucket is Bucket.ALWAYS and 0 <= value < config.LOW_SCORE_THRESHOLD


# ---------------------------------------------------------------------------
# Drawing primitives
# ---------------------------------------------------------------------------


def _separators(y: float, height: float) -> List[DrawOp]:
    """Thick vertical lines at the group boundaries and both table edges."""
    count = len(RespondentGroup)
    return [LineOp(group_x(i), y, group_x(i), y + height, _THICK) for i in range(count + 1)]


def draw_column_headers(surface: PageSurface, cursor: Cursor) -> Cursor:
    y = cursor.y
    ops: List[DrawOp] = []
    for index, group in enumerate(RespondentGroup):
        x = group_x(index)
        ops.append(RectOp(x, y, GROUP_WIDTH, GROUP_HEADER_HEIGHT, _THIN))
        ops.append(TextOp(group.label, x + 3, y + 8, _HEADER_TEXT, width=GROUP_WIDTH - 6))

    rating_y = y + GROUP_HEADER_HEIGHT
    ops.append(RectOp(START_X + NUMBER_WIDTH, rating_y, QUESTION_WIDTH, RATING_HEADER_HEIGHT, _THIN))
    ops.append(
        TextOp(
            "Item de la encuesta",
            START_X + NUMBER_WIDTH + 3,
            rating_y + 3,
            _HEADER_TEXT,
            width=QUESTION_WIDTH - 6,
        )
    )
    for g in range(len(RespondentGroup)):
        for r, bucket in enumerate(Bucket):
            x = rating_x(g, r)
            ops.append(RectOp(x, rating_y, RATING_WIDTH, RATING_HEADER_HEIGHT, _THIN))
            ops.append(TextOp(bucket.value, x + 3, rating_y + 3, _RATING_TEXT, width=RATING_WIDTH - 6))
    ops.extend(_separators(y, HEADER_HEIGHT))
    surface.draw(cursor, *ops)
    return cursor.moved(HEADER_HEIGHT)


def _cell_ops(x: float, y: float, height: float, bucket: Bucket, value: int) -> List[DrawOp]:
    text_y = y + height / 2 - 4
    if value < 0:
        return [
            RectOp(x, y, RATING_WIDTH, height, _THIN),
            TextOp(NO_DATA_TEXT, x + 1, text_y, _NO_DATA_STYLE, width=RATING_WIDTH - 2),
        ]
    ops: List[DrawOp] = []
    if is_low_score(bucket, value):
        ops.append(RectOp(x, y, RATING_WIDTH, height, Paint(fill=LOW_SCORE_FILL)))
    ops.append(RectOp(x, y, RATING_WIDTH, height, _THIN))
    ops.append(TextOp(f"{value}%", x + 1, text_y, _CELL_TEXT, width=RATING_WIDTH - 2))
    return ops


def draw_row(surface: PageSurface, cursor: Cursor, item: GridItem) -> Cursor:
    """Draw one statement row at the cursor (no page-break logic here)."""
    height = row_height(item)
    y = cursor.y
    ops: List[DrawOp] = [RectOp(START_X + NUMBER_WIDTH, y, QUESTION_WIDTH, height, _THIN)]
    text_y = y + 3
    for line in wrap(item.display_text, _QUESTION_TEXT, QUESTION_WIDTH - 6):
        ops.append(TextOp(line, START_X + NUMBER_WIDTH + 3, text_y, _QUESTION_TEXT))
        text_y += line_height(_QUESTION_TEXT)

    for g, group in enumerate(RespondentGroup):
        result: FrequencyResult = item.result_for(group)
        for r, bucket in enumerate(Bucket):
            ops.extend(_cell_ops(rating_x(g, r), y, height, bucket, result.get(bucket)))
    ops.extend(_separators(y, height))
    surface.draw(cursor, *ops)
    return cursor.moved(height)


def draw_category_band(
    surface: PageSurface, cursor: Cursor, title: str, color: str, top: float, bottom: float
) -> None:
    """Coloured number column with the category title rotated 90°."""
    height = bottom - top
    if height <= 0:
        return
    surface.draw(
        cursor,
        RectOp(START_X, top, NUMBER_WIDTH, height, Paint(fill=color)),
        TextOp(
            title,
            START_X + NUMBER_WIDTH / 2,
            top + height / 2,
            _BAND_TEXT,
            width=height,
            rotation=90,
        ),
    )


def _rating_legend(surface: PageSurface, cursor: Cursor) -> Cursor:
    style = Style(size=10)
    for offset, line in enumerate(RATING_LEGEND):
        surface.draw(cursor, TextOp(line, START_X, cursor.y + offset * 15, style))
    return cursor.moved(len(RATING_LEGEND) * 15 + 10)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@dataclass
class _Segment:
    """Rows of one category drawn on the current page."""

    cursor: Cursor
    top: float


def draw_category(surface: PageSurface, cursor: Cursor, data: CategoryFrequencies) -> Cursor:
    """Draw the headers and all rows of one category, breaking pages per row."""
    category = data.category
    first_row = row_height(data.items[0]) if data.items else ROW_HEIGHT
    cursor = surface.ensure_space(cursor, HEADER_HEIGHT + first_row)
    cursor = draw_column_headers(surface, cursor)
    segment = _Segment(cursor, cursor.y)

    for item in data.items:
        height = row_height(item)
        if not surface.fits(cursor, height):
            draw_category_band(surface, segment.cursor, category.title, category.color, segment.top, cursor.y)
            cursor = draw_column_headers(surface, surface.new_page())
            segment = _Segment(cursor, cursor.y)
            logger.debug("Detail grid for %s continues on page %s", category.key, cursor.page)
        cursor = draw_row(surface, cursor, item)

    draw_category_band(surface, segment.cursor, category.title, category.color, segment.top, cursor.y)
    return cursor


def draw_challenges(surface: PageSurface, cursor: Cursor) -> Cursor:
    """Title, instruction and an empty box for the principal's notes."""
    needed = 24 + 40 + 20 + CHALLENGES_BOX_HEIGHT
    cursor = surface.ensure_space(cursor.moved(30), needed)
    cursor = page_title(surface, cursor, CHALLENGES_TITLE, START_X, TABLE_WIDTH)
    cursor = instruction_box(
        surface,
        cursor,
        START_X + 30,
        TABLE_WIDTH - 30,
        CHALLENGES_NOTE,
        style=Style(size=10, align=Align.CENTER),
    ).moved(20)
    cursor = surface.ensure_space(cursor, CHALLENGES_BOX_HEIGHT)
    surface.draw(cursor, RectOp(START_X, cursor.y, TABLE_WIDTH, CHALLENGES_BOX_HEIGHT, _THIN))
    return cursor.moved(CHALLENGES_BOX_HEIGHT)


def build_detail_grid(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = surface.new_page()
    cursor = page_title(surface, cursor, "FORTALEZAS Y RETOS", START_X, TABLE_WIDTH)
    cursor = instruction_box(
        surface,
        cursor,
        START_X + 30,
        TABLE_WIDTH - 30,
        HIGHLIGHT_NOTE,
        style=Style(size=10, align=Align.CENTER),
    ).moved(10)
    cursor = _rating_legend(surface, cursor)

    for index, data in enumerate(context.frequency_data):
        if data.category.starts_new_page and index > 0:
            cursor = _rating_legend(surface, surface.new_page().moved(20))
        cursor = draw_category(surface, cursor, data)

    return draw_challenges(surface, cursor)
