"""Text measurement and line wrapping on top of reportlab font metrics."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from reportlab.pdfbase import pdfmetrics

from src.rendering.document import Align, Cursor, PageSurface, Style, TextOp

BOLD = {"Helvetica": "Helvetica-Bold", "Helvetica-Oblique": "Helvetica-BoldOblique"}
ITALIC = {"Helvetica": "Helvetica-Oblique", "Helvetica-Bold": "Helvetica-BoldOblique"}

# Line height relative to font size
LEADING = 1.2

_MARKUP = re.compile(r"(\*\*.+?\*\*|\*.+?\*)")


def text_width(text: str, style: Style) -> float:
    return pdfmetrics.stringWidth(text, style.font, style.size)


def line_height(style: Style) -> float:
    return style.size * LEADING


def wrap(text: str, style: Style, width: float) -> List[str]:
    """Greedy word wrap of *text* into lines no wider than *width*.

    Explicit newlines are kept. A single word wider than *width* gets a line
    of its own.
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if text_width(candidate, style) <= width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


def text_block_height(text: str, style: Style, width: float) -> float:
    return len(wrap(text, style, width)) * line_height(style)


def draw_text_block(
    surface: PageSurface,
    cursor: Cursor,
    text: str,
    x: float,
    width: float,
    style: Style,
) -> Cursor:
    """Draw wrapped *text* at ``(x, cursor.y)`` and return the cursor below it."""
    y = cursor.y
    for line in wrap(text, style, width):
        surface.draw(cursor, TextOp(line, x, y, style, width=width))
        y += line_height(style)
    return cursor.at(y)


# ---------------------------------------------------------------------------
# Rich text (**bold** and *italic* runs)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Run:
    text: str
    font: str


def parse_markup(text: str, font: str = "Helvetica") -> List[Run]:
    """Split *text* into runs, turning ``**x**`` bold and ``*x*`` italic."""
    runs: List[Run] = []
    for part in _MARKUP.split(text):
        if not part:
            continue
        if part.startswith("**") and part.endswith("**") and len(part) > 4:
            runs.append(Run(part[2:-2], BOLD.get(font, font)))
        elif part.startswith("*") and part.endswith("*") and len(part) > 2:
            runs.append(Run(part[1:-1], ITALIC.get(font, font)))
        else:
            runs.append(Run(part, font))
    return runs


def _tokens(runs: Sequence[Run]) -> List[Tuple[str, str, bool]]:
    """Return ``(word, font, space_before)`` tokens across run boundaries."""
    tokens: List[Tuple[str, str, bool]] = []
    pending_space = False
    for run in runs:
        pieces = re.split(r"(\s+)", run.text)
        for piece in pieces:
            if not piece:
                continue
            if piece.isspace():
                pending_space = True
                continue
            tokens.append((piece, run.font, pending_space and bool(tokens)))
            pending_space = False
    return tokens


def layout_rich_paragraph(
    runs: Sequence[Run], size: float, width: float
) -> List[List[Tuple[str, str, float]]]:
    """Wrap *runs* into lines of ``(fragment, font, x_offset)``.

    Consecutive words in the same font on one line are merged into a single
    fragment so each line produces as few text operations as possible.
    """
    space_widths = {}
    lines: List[List[Tuple[str, str, float]]] = [[]]
    x = 0.0
    for word, font, space_before in _tokens(runs):
        if font not in space_widths:
            space_widths[font] = pdfmetrics.stringWidth(" ", font, size)
        word_width = pdfmetrics.stringWidth(word, font, size)
        gap = space_widths[font] if space_before and lines[-1] else 0.0
        if lines[-1] and x + gap + word_width > width:
            lines.append([])
            x, gap = 0.0, 0.0
        line = lines[-1]
        if line and line[-1][1] == font:
            text, _, offset = line[-1]
            line[-1] = (text + (" " if gap else "") + word, font, offset)
        else:
            line.append(((" " if gap else "") + word, font, x))
        x += gap + word_width
    return [line for line in lines if line]


def draw_rich_paragraph(
    surface: PageSurface,
    cursor: Cursor,
    text: str,
    x: float,
    width: float,
    style: Style,
    *,
    spacing_after: float = 0.0,
) -> Cursor:
    """Draw a markup paragraph, breaking the page between lines if needed."""
    step = line_height(style)
    for line in layout_rich_paragraph(parse_markup(text, style.font), style.size, width):
        cursor = surface.ensure_space(cursor, step)
        for fragment, font, offset in line:
            surface.draw(
                cursor,
                TextOp(fragment, x + offset, cursor.y, style.with_(font=font, align=Align.LEFT)),
            )
        cursor = cursor.moved(step)
    return cursor.moved(spacing_after)
