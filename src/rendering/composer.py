"""Run page builders in order against one paginated surface.

A page builder is any callable ``builder(surface, cursor, context) -> Cursor``.
The composer threads the cursor from one builder to the next and isolates
failures: an exception inside a builder is logged and replaced by a bordered
placeholder box, and composition continues with the next builder.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from src.reporting import config
from src.reporting.models import CategoryFrequencies
from src.rendering.document import (
    CONTENT_WIDTH,
    MARGIN,
    NO_PAGE,
    Align,
    Cursor,
    PageSurface,
    Paint,
    RectOp,
    Report,
    Style,
    TextOp,
)
from src.survey.records import InstitutionInfo
from src.survey.store import ResponseStore

logger = logging.getLogger(__name__)

__all__ = ["BuildContext", "PageBuilder", "PageComposer", "ERROR_PLACEHOLDER_TEXT"]

ERROR_PLACEHOLDER_TEXT = "Error al cargar datos"
PLACEHOLDER_HEIGHT = 60.0


@dataclass
class BuildContext:
    """Everything a page builder may read while drawing one report."""

    store: ResponseStore
    school: Optional[str] = None
    institution: Optional[InstitutionInfo] = None
    frequency_data: List[CategoryFrequencies] = field(default_factory=list)
    assets_dir: Path = config.ASSETS_DIR


PageBuilder = Callable[[PageSurface, Cursor, BuildContext], Cursor]


def builder_name(builder: PageBuilder) -> str:
    return getattr(builder, "__name__", type(builder).__name__)


class PageComposer:
    """Compose a :class:`Report` from an ordered sequence of page builders."""

    def __init__(self, builders: Sequence[PageBuilder]):
        self.builders = list(builders)

    def compose(self, context: BuildContext, report: Optional[Report] = None) -> Report:
        surface = PageSurface(report)
        cursor = NO_PAGE
        for builder in self.builders:
            cursor = self._run(builder, surface, cursor, context)
        logger.debug(
            "Composed report for school=%s with %d pages",
            context.school or "*",
            surface.report.page_count,
        )
        return surface.report

    def _run(
        self,
        builder: PageBuilder,
        surface: PageSurface,
        cursor: Cursor,
        context: BuildContext,
    ) -> Cursor:
        name = builder_name(builder)
        try:
            return builder(surface, cursor, context)
        except Exception as exc:  # noqa: BLE001 – one page must not sink the report
            logger.exception(
                "Page builder %s failed for school=%s", name, context.school or "*"
            )
            return draw_error_placeholder(surface, surface.new_page(), f"{name}: {exc}")


def draw_error_placeholder(surface: PageSurface, cursor: Cursor, detail: str = "") -> Cursor:
    """Draw a bordered box announcing that a section could not be rendered."""
    cursor = surface.ensure_space(cursor, PLACEHOLDER_HEIGHT)
    y = cursor.y
    surface.draw(
        cursor,
        RectOp(MARGIN, y, CONTENT_WIDTH, PLACEHOLDER_HEIGHT, Paint(stroke="#FF0000", line_width=1)),
        TextOp(
            ERROR_PLACEHOLDER_TEXT,
            MARGIN,
            y + 15,
            Style(font="Helvetica-Bold", size=12, color="#FF0000", align=Align.CENTER),
            width=CONTENT_WIDTH,
        ),
    )
    if detail:
        surface.draw(
            cursor,
            TextOp(
                detail[:120],
                MARGIN,
                y + 35,
                Style(size=8, color="#666666", align=Align.CENTER),
                width=CONTENT_WIDTH,
            ),
        )
    return cursor.at(y + PLACEHOLDER_HEIGHT + 10)
