"""The two explanatory pages that follow the cover."""
from __future__ import annotations

from src.rendering.composer import BuildContext
from src.rendering.document import CONTENT_BOTTOM, PAGE_WIDTH, Align, Cursor, PageSurface, Style
from src.rendering.narrative import CONTEXT_TEMPLATE, INTRO_TEMPLATE, NarrativeText, render_narrative
from src.rendering.pages.widgets import page_title
from src.rendering.text import draw_rich_paragraph, draw_text_block, text_block_height

TEXT_X = 75.0
TEXT_WIDTH = PAGE_WIDTH - 2 * TEXT_X

BODY_STYLE = Style(size=10)
FOOTNOTE_STYLE = Style(font="Helvetica-Oblique", size=7.5)


def _draw_narrative(surface: PageSurface, cursor: Cursor, narrative: NarrativeText) -> Cursor:
    for paragraph in narrative.paragraphs:
        cursor = draw_rich_paragraph(
            surface, cursor, paragraph, TEXT_X, TEXT_WIDTH, BODY_STYLE, spacing_after=6
        )
    if not narrative.footnotes:
        return cursor

    # Footnotes sit at the foot of the page the body ended on.
    notes_height = sum(
        text_block_height(note, FOOTNOTE_STYLE, TEXT_WIDTH) for note in narrative.footnotes
    )
    cursor = surface.ensure_space(cursor, notes_height + 10)
    cursor = cursor.at(max(cursor.y + 10, CONTENT_BOTTOM - notes_height))
    for note in narrative.footnotes:
        cursor = draw_text_block(surface, cursor, note, TEXT_X, TEXT_WIDTH, FOOTNOTE_STYLE)
    return cursor


def build_narrative_intro(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = surface.new_page().moved(15)
    cursor = page_title(
        surface, cursor, "ENCUESTA DE AMBIENTE ESCOLAR", TEXT_X, TEXT_WIDTH, align=Align.CENTER
    ).moved(12)
    return _draw_narrative(surface, cursor, render_narrative(INTRO_TEMPLATE))


def build_narrative_context(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = surface.new_page().moved(15)
    return _draw_narrative(surface, cursor, render_narrative(CONTEXT_TEMPLATE))
