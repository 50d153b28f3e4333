"""In-memory document model: pages of positioned draw operations.

A :class:`Report` is a plain value: an ordered list of :class:`Page` objects,
each holding draw operations in absolute page coordinates (points, origin at
the top-left corner, y growing downwards). Every operation carries its own
style, so the PDF writer never depends on a "current" font or colour.

Page builders do not share a global drawing position. They receive an
immutable :class:`Cursor` and return the cursor where they stopped;
:class:`PageSurface` offers the page-break primitives around it.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from src.reporting import config

# A4 portrait, in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
MARGIN = 50.0

HEADER_HEIGHT = 60.0
HEADER_BACKGROUND = "#F5F5F5"
HEADER_COLOR = "#800000"

# First usable y on a page carrying the header band
CONTENT_TOP = HEADER_HEIGHT + 20.0
CONTENT_BOTTOM = PAGE_HEIGHT - MARGIN
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

Point = Tuple[float, float]


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Style:
    """Font settings for one text operation."""

    font: str = "Helvetica"
    size: float = 10.0
    color: str = "#000000"
    align: Align = Align.LEFT

    def with_(self, **changes) -> "Style":
        return replace(self, **changes)


@dataclass(frozen=True)
class Paint:
    """Fill/stroke settings for one shape operation."""

    fill: Optional[str] = None
    stroke: Optional[str] = None
    line_width: float = 1.0
    dash: Optional[Tuple[float, float]] = None


# ---------------------------------------------------------------------------
# Draw operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextOp:
    """A single line of text.

    ``y`` is the top of the line box. With ``width`` set the text is aligned
    within ``[x, x + width]``. A non-zero ``rotation`` (degrees,
    counter-clockwise) rotates the text around the point ``(x, y)``, which
    then marks the centre of the text.
    """

    text: str
    x: float
    y: float
    style: Style = Style()
    width: Optional[float] = None
    rotation: float = 0.0


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    paint: Paint = Paint(stroke="#000000")

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    paint: Paint = Paint(stroke="#000000")


@dataclass(frozen=True)
class PathOp:
    """A polyline through *points*; closed paths can be filled."""

    points: Tuple[Point, ...]
    paint: Paint = Paint(fill="#000000")
    closed: bool = True


@dataclass(frozen=True)
class ImageOp:
    """An image file scaled into the given box."""

    source: str
    x: float
    y: float
    width: float
    height: float


DrawOp = Union[TextOp, RectOp, LineOp, PathOp, ImageOp]


@dataclass
class Page:
    ops: List[DrawOp] = field(default_factory=list)

    def add(self, op: DrawOp) -> None:
        self.ops.append(op)

    def extend(self, ops: Sequence[DrawOp]) -> None:
        self.ops.extend(ops)

    def texts(self) -> List[str]:
        """Return the text of every text operation (used by tests and logs)."""
        return [op.text for op in self.ops if isinstance(op, TextOp)]


@dataclass
class Report:
    pages: List[Page] = field(default_factory=list)
    title: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self) -> int:
        self.pages.append(Page())
        return len(self.pages) - 1


# ---------------------------------------------------------------------------
# Cursor & surface
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cursor:
    """Drawing position: a page index (``None`` before any page) and a y."""

    page: Optional[int]
    y: float

    @property
    def has_page(self) -> bool:
        return self.page is not None

    def moved(self, dy: float) -> "Cursor":
        return Cursor(self.page, self.y + dy)

    def at(self, y: float) -> "Cursor":
        return Cursor(self.page, y)


NO_PAGE = Cursor(None, CONTENT_TOP)


class PageSurface:
    """Paginated drawing surface over a :class:`Report`."""

    def __init__(self, report: Optional[Report] = None, *, bottom: float = CONTENT_BOTTOM):
        self.report = report if report is not None else Report()
        self.bottom = bottom

    # Pages -------------------------------------------------------------

    def new_page(self, *, header: bool = True) -> Cursor:
        """Open a new page and return a cursor at its first content line."""
        index = self.report.add_page()
        if not header:
            return Cursor(index, MARGIN)
        self._draw_header(index)
        return Cursor(index, CONTENT_TOP)

    def _draw_header(self, index: int) -> None:
        page = self.report.pages[index]
        page.add(RectOp(0, 0, PAGE_WIDTH, HEADER_HEIGHT, Paint(fill=HEADER_BACKGROUND)))
        style = Style(size=10, color=HEADER_COLOR)
        page.add(TextOp(config.PROGRAM_NAME, 40, 20, style))
        page.add(
            TextOp(
                config.REPORT_TITLE,
                PAGE_WIDTH - 240,
                20,
                style.with_(align=Align.RIGHT),
                width=200,
            )
        )

    def remaining(self, cursor: Cursor) -> float:
        if not cursor.has_page:
            return 0.0
        return self.bottom - cursor.y

    def fits(self, cursor: Cursor, height: float) -> bool:
        return cursor.has_page and cursor.y + height <= self.bottom

    def ensure_space(self, cursor: Cursor, height: float) -> Cursor:
        """Return *cursor*, or the top of a fresh page if *height* won't fit.

        The check happens before anything is drawn, so a block is never split
        across pages. A block taller than an empty page is placed at the top
        of a new page and allowed to overflow.
        """
        if self.fits(cursor, height):
            return cursor
        return self.new_page()

    # Drawing -----------------------------------------------------------

    def draw(self, cursor: Cursor, *ops: DrawOp) -> None:
        """Append *ops* to the cursor's page."""
        if cursor.page is None:
            raise RuntimeError("Cannot draw before a page has been opened.")
        self.report.pages[cursor.page].extend(ops)

    def page(self, cursor: Cursor) -> Page:
        if cursor.page is None:
            raise RuntimeError("Cursor is not on a page.")
        return self.report.pages[cursor.page]
