"""Unit tests for rendering.text and rendering.narrative."""
from __future__ import annotations

from src.rendering.document import CONTENT_BOTTOM, PageSurface, Style
from src.rendering.narrative import CONTEXT_TEMPLATE, INTRO_TEMPLATE, render_narrative
from src.rendering.text import (
    draw_rich_paragraph,
    layout_rich_paragraph,
    line_height,
    parse_markup,
    text_width,
    wrap,
)

STYLE = Style(size=10)


def test_wrap_respects_width():
    text = "uno dos tres cuatro cinco seis siete ocho nueve diez " * 3
    lines = wrap(text, STYLE, 100)

    assert len(lines) > 1
    assert all(text_width(line, STYLE) <= 100 for line in lines)
    assert " ".join(lines).split() == text.split()


def test_wrap_keeps_long_words_and_newlines():
    assert wrap("a\nb", STYLE, 100) == ["a", "b"]
    assert wrap("supercalifragilistico", STYLE, 10) == ["supercalifragilistico"]


def test_parse_markup_runs():
    runs = parse_markup("La **comunicación** es *clave* hoy")

    assert [(r.text, r.font) for r in runs] == [
        ("La ", "Helvetica"),
        ("comunicación", "Helvetica-Bold"),
        (" es ", "Helvetica"),
        ("clave", "Helvetica-Oblique"),
        (" hoy", "Helvetica"),
    ]


def test_rich_layout_merges_same_font_words():
    lines = layout_rich_paragraph(parse_markup("uno dos **tres**"), 10, 500)

    assert len(lines) == 1
    assert [(text, font) for text, font, _ in lines[0]] == [
        ("uno dos", "Helvetica"),
        (" tres", "Helvetica-Bold"),
    ]
    assert lines[0][0][2] == 0.0


def test_rich_paragraph_breaks_page_between_lines():
    surface = PageSurface()
    start = surface.new_page().at(CONTENT_BOTTOM - line_height(STYLE) * 2)
    text = "palabra " * 200

    end = draw_rich_paragraph(surface, start, text, 50, 200, STYLE)

    assert end.page == 1
    assert surface.report.page_count == 2


def test_render_narrative_splits_footnotes():
    intro = render_narrative(INTRO_TEMPLATE, program_name="Programa X")

    assert len(intro.paragraphs) >= 3
    assert any("Programa X" in p for p in intro.paragraphs)
    assert intro.footnotes and intro.footnotes[0].startswith("(1)")

    context = render_narrative(CONTEXT_TEMPLATE)
    assert context.paragraphs
