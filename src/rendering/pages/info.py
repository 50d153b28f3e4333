"""Single-message pages: the all-schools notice and the failure page."""
from __future__ import annotations

from src.rendering.composer import BuildContext
from src.rendering.document import CONTENT_WIDTH, MARGIN, Cursor, PageSurface, Style, TextOp
from src.rendering.text import draw_text_block

NO_SCHOOL_MESSAGE = "No school specified. Please select a school to view detailed data."
ERROR_TITLE = "Error generating PDF report"


def build_no_school_notice(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = surface.new_page(header=False).at(100)
    return draw_text_block(
        surface, cursor, NO_SCHOOL_MESSAGE, 100, CONTENT_WIDTH - 50, Style(size=14)
    )


def draw_error_page(surface: PageSurface, message: str) -> Cursor:
    """Append a page explaining that the report could not be generated."""
    cursor = surface.new_page(header=False).at(100)
    surface.draw(cursor, TextOp(ERROR_TITLE, 100, cursor.y, Style(size=20, color="#FF0000")))
    return draw_text_block(
        surface,
        cursor.moved(40),
        f"An error occurred: {message or 'Unknown error'}",
        100,
        CONTENT_WIDTH - 2 * (100 - MARGIN),
        Style(size=12),
    )
