"""Summary page: one stacked S/A/N bar per category for each group."""
from __future__ import annotations

from src.reporting.averager import summarize
from src.reporting.models import Bucket
from src.rendering.charts import draw_stacked_bar
from src.rendering.composer import BuildContext
from src.rendering.document import PAGE_WIDTH, Cursor, PageSurface, Paint, RectOp, Style, TextOp
from src.rendering.geometry import FREQUENCY_COLORS, Box, frequency_bar_layout
from src.rendering.pages.widgets import instruction_box, page_title, section_band
from src.survey.catalog import RespondentGroup

SECTION_X = 40.0
SECTION_WIDTH = PAGE_WIDTH - 2 * SECTION_X
BAND_HEIGHT = 20.0
LABEL_WIDTH = 150.0
BAR_HEIGHT = 20.0
BAR_SPACING = 10.0

LEGEND_BOX = 12.0
LEGEND_TEXT_MARGIN = 16.0
LEGEND_SPACING = 70.0
# "A veces" is short; the entry after it needs the extra room of the first one.
LEGEND_SHIFT = 40.0

CLOSING_NOTE = (
    "Lo ideal sería que, en los tres componentes, la percepción de cada uno de los "
    "actores fuera lo más positiva posible. Identifique en cuáles actores y "
    "componentes la percepción negativa es mayor."
)

_ROW_LABEL = Style(size=10)
_LEGEND_TEXT = Style(size=8)


def _legend(surface: PageSurface, cursor: Cursor) -> Cursor:
    x = SECTION_X + LABEL_WIDTH
    offsets = (0.0, LEGEND_SPACING + LEGEND_SHIFT, LEGEND_SPACING * 2 + LEGEND_SHIFT * 2)
    for bucket, offset in zip(Bucket, offsets):
        surface.draw(
            cursor,
            RectOp(x + offset, cursor.y, LEGEND_BOX, LEGEND_BOX, Paint(fill=FREQUENCY_COLORS[bucket])),
            TextOp(bucket.legend, x + offset + LEGEND_TEXT_MARGIN, cursor.y + 2, _LEGEND_TEXT),
        )
    return cursor.moved(LEGEND_BOX)


def _group_section(
    surface: PageSurface, cursor: Cursor, context: BuildContext, group: RespondentGroup
) -> Cursor:
    rows = summarize(context.frequency_data, group)
    section_height = BAND_HEIGHT + 20 + len(rows) * (BAR_HEIGHT + BAR_SPACING) + LEGEND_BOX
    cursor = surface.ensure_space(cursor, section_height)

    cursor = section_band(surface, cursor, Box(SECTION_X, cursor.y, SECTION_WIDTH, BAND_HEIGHT), group.heading)
    y = cursor.y + 20
    bar_width = SECTION_WIDTH - LABEL_WIDTH
    for category, result in rows:
        surface.draw(cursor, TextOp(category.label, SECTION_X, y + 4, _ROW_LABEL, width=LABEL_WIDTH))
        layout = frequency_bar_layout(result, Box(SECTION_X + LABEL_WIDTH, y, bar_width, BAR_HEIGHT))
        draw_stacked_bar(surface, cursor, layout)
        y += BAR_HEIGHT + BAR_SPACING
    return _legend(surface, cursor.at(y))


def build_summary(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = surface.new_page().moved(10)
    cursor = page_title(surface, cursor, "RESUMEN GENERAL", SECTION_X, SECTION_WIDTH).moved(10)
    for group in RespondentGroup:
        cursor = _group_section(surface, cursor, context, group).moved(30)
    return instruction_box(surface, cursor.moved(10), SECTION_X, SECTION_WIDTH, CLOSING_NOTE, padding=8)
