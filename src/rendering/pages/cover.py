"""Cover page: program logos, titles, school name and territorial entity."""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Tuple

from reportlab.lib.utils import ImageReader

from src.exceptions import ResourceMissingError
from src.reporting import config
from src.rendering.composer import BuildContext
from src.rendering.document import (
    PAGE_WIDTH,
    Align,
    Cursor,
    ImageOp,
    PageSurface,
    Paint,
    RectOp,
    Style,
    TextOp,
)
from src.rendering.text import line_height, text_width

logger = logging.getLogger(__name__)

LOGO_WIDTH = 180.0
LOGO_HEIGHT = 100.0
LOGO_Y = 50.0
LOGO_SIDE_MARGIN = 40.0

SCHOOL_BOX_COLOR = "#2C5282"
UNKNOWN_TERRITORY = "No especificada"

_TITLE = Style(font="Helvetica-Bold", size=16, align=Align.CENTER)
_SURVEY = Style(font="Helvetica", size=36, align=Align.CENTER)
_RESULTS = Style(font="Helvetica-Bold", size=20, align=Align.CENTER)
_LABEL = Style(font="Helvetica-Bold", size=14, align=Align.CENTER)


def locate_resource(assets_dir: Path, name: str) -> Path:
    """Return the path of asset *name*, or raise :class:`ResourceMissingError`."""
    path = Path(assets_dir) / name
    if not path.is_file():
        raise ResourceMissingError(str(path))
    return path


def _fit(image_size: Tuple[int, int], box_w: float, box_h: float) -> Tuple[float, float]:
    iw, ih = image_size
    if iw <= 0 or ih <= 0:
        return box_w, box_h
    scale = min(box_w / iw, box_h / ih)
    return iw * scale, ih * scale


def _draw_logo(surface: PageSurface, cursor: Cursor, assets_dir: Path, filename: str, x: float) -> bool:
    """Draw one logo, or a labelled placeholder box when it can't be loaded."""
    try:
        path = locate_resource(assets_dir, filename)
        width, height = _fit(ImageReader(str(path)).getSize(), LOGO_WIDTH, LOGO_HEIGHT)
    except Exception as exc:  # noqa: BLE001 – a missing logo is cosmetic
        logger.warning("Logo %s unavailable, drawing placeholder: %s", filename, exc)
        label = filename.split("_", 1)[0] + " Logo"
        surface.draw(
            cursor,
            RectOp(x, LOGO_Y, LOGO_WIDTH, LOGO_HEIGHT, Paint(stroke="#000000")),
            TextOp(label, x + 10, LOGO_Y + 40, Style(size=12, align=Align.CENTER), width=LOGO_WIDTH - 20),
        )
        return False
    surface.draw(cursor, ImageOp(str(path), x, LOGO_Y, width, height))
    return True


def school_name_font_size(name: str, max_width: float = PAGE_WIDTH - 120) -> int:
    """Font size for the school name box: smaller for longer names."""
    text = name.upper()
    size = 16
    if len(text) > 50:
        size = 10
    elif len(text) > 40:
        size = 12
    elif len(text) > 30:
        size = 14
    width = text_width(text, Style(size=size))
    if width > max_width:
        size = max(1, math.floor(size * max_width / width))
    return size


def _centered(surface: PageSurface, cursor: Cursor, text: str, y: float, style: Style) -> float:
    surface.draw(cursor, TextOp(text, 0, y, style, width=PAGE_WIDTH))
    return y + line_height(style)


def build_cover(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = surface.new_page(header=False)
    left_x = LOGO_SIDE_MARGIN
    right_x = PAGE_WIDTH - LOGO_SIDE_MARGIN - LOGO_WIDTH
    for filename, x in zip(config.LOGO_FILES, (left_x, right_x)):
        _draw_logo(surface, cursor, context.assets_dir, filename, x)

    y = LOGO_Y + LOGO_HEIGHT + 80
    y = _centered(surface, cursor, "PROGRAMA", y, _TITLE) + 8
    y = _centered(surface, cursor, "RECTORES LÍDERES TRANSFORMADORES", y, _TITLE) + 8
    y = _centered(surface, cursor, "COORDINADORES LÍDERES TRANSFORMADORES", y, _TITLE) + 60
    y = _centered(surface, cursor, "Encuesta de", y, _SURVEY)
    y = _centered(surface, cursor, "Ambiente Escolar", y, _SURVEY) + 40
    y = _centered(surface, cursor, "INFORME DE RESULTADOS", y, _RESULTS) + 24

    if context.school:
        y = _draw_school(surface, cursor, context, y)
    return cursor.at(y)


def _draw_school(surface: PageSurface, cursor: Cursor, context: BuildContext, y: float) -> float:
    name = context.school.upper()
    size = school_name_font_size(name)
    style = Style(size=size, color="#FFFFFF", align=Align.CENTER)
    padding = 20
    box_w = text_width(name, style) + padding * 2
    box_h = size + padding * 1.2
    surface.draw(
        cursor,
        RectOp((PAGE_WIDTH - box_w) / 2, y - padding / 2, box_w, box_h, Paint(fill=SCHOOL_BOX_COLOR)),
        TextOp(name, 0, y, style, width=PAGE_WIDTH),
    )
    y += box_h + 30

    territory: Optional[str] = None
    if context.institution is not None:
        territory = context.institution.territorial_entity
    y = _centered(surface, cursor, "ENTIDAD TERRITORIAL:", y, _LABEL) + 6
    return _centered(surface, cursor, territory or UNKNOWN_TERRITORY, y, _LABEL.with_(font="Helvetica"))
