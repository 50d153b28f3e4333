"""Demographics ("ENCUESTADOS") page: who answered the survey."""
from __future__ import annotations

import logging
import math

from src.reporting import demographics
from src.rendering.charts import draw_horizontal_bars, draw_pie, draw_stacked_bar, legend_ops
from src.rendering.composer import BuildContext
from src.rendering.document import (
    PAGE_WIDTH,
    Align,
    Cursor,
    LineOp,
    PageSurface,
    Paint,
    Style,
    TextOp,
)
from src.rendering.geometry import Box, LegendSpec, legend_grid, stacked_bar_layout
from src.rendering.pages.widgets import count_band, instruction_box, page_title
from src.survey.catalog import RespondentGroup

logger = logging.getLogger(__name__)

START_X = 75.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * START_X
BAND_HEIGHT = 20.0
CHART_MARGIN = 30.0
CHART_WIDTH = (PAGE_WIDTH - CHART_MARGIN * 4) / 2.5
CHART_HEIGHT = 150.0
PIE_RADIUS = CHART_WIDTH / 4

SEPARATOR = Paint(stroke="#CCCCCC", line_width=1, dash=(5, 5))

GUARDIAN_BAR_HEIGHT = 20.0
GUARDIAN_LEGEND_STEP = 50.0

CLOSING_NOTE = (
    "Analice la composición de los distintos grupos encuestados y tenga encuenta "
    "que esta muestra no representa la totalidad de su IE."
)


def _vline(x: float, y1: float, y2: float) -> LineOp:
    return LineOp(x, y1, x, y2, SEPARATOR)


def _hline(x1: float, x2: float, y: float) -> LineOp:
    return LineOp(x1, y, x2, y, SEPARATOR)


def _band(surface: PageSurface, cursor: Cursor, context: BuildContext, group: RespondentGroup) -> Cursor:
    count = context.store.count(group, context.school)
    box = Box(START_X, cursor.y, CONTENT_WIDTH, BAND_HEIGHT)
    return count_band(surface, cursor, box, group.heading, count)


def _teachers(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    store, school = context.store, context.school
    cursor = _band(surface, cursor, context, RespondentGroup.DOCENTES)
    top = cursor.y + 10
    cy = top + CHART_HEIGHT / 2

    draw_pie(
        surface, cursor, demographics.teacher_grade_levels(store, school),
        (START_X + CHART_WIDTH / 4, cy), PIE_RADIUS,
        "¿En qué grados tiene clases?", LegendSpec.right(),
    )
    separator_x = START_X + CHART_WIDTH * 1.1
    surface.draw(cursor, _vline(separator_x, top + 10, top + CHART_HEIGHT - 10))
    draw_pie(
        surface, cursor, demographics.teacher_schedules(store, school),
        (separator_x + CHART_WIDTH / 3, cy), PIE_RADIUS,
        "¿En qué jornada tiene clases?", LegendSpec.right(),
    )

    divider_y = top + CHART_HEIGHT - 10
    surface.draw(cursor, _hline(START_X, START_X + CHART_WIDTH * 1.3 + CHART_MARGIN, divider_y))

    bars_top = divider_y + 5
    draw_horizontal_bars(
        surface, cursor, demographics.teacher_years(store, school),
        Box(START_X, bars_top, CHART_WIDTH, CHART_HEIGHT),
        "¿Cuántos años lleva en la IE?",
    )
    draw_horizontal_bars(
        surface, cursor, demographics.teacher_feedback_sources(store, school),
        Box(START_X + CHART_WIDTH + CHART_MARGIN, bars_top, CHART_WIDTH, CHART_HEIGHT),
        "Usted recibe retroalimentación de",
    )
    return cursor.at(bars_top + CHART_HEIGHT)


def _students(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    store, school = context.store, context.school
    cursor = _band(surface, cursor, context, RespondentGroup.ESTUDIANTES)
    top = cursor.y + 2
    cy = top + CHART_HEIGHT / 2

    grades = draw_pie(
        surface, cursor, demographics.student_grades(store, school),
        (START_X + CHART_WIDTH / 3, cy), PIE_RADIUS,
        "¿En qué grado te encuentras?", LegendSpec.below_rows(3),
    )
    surface.draw(
        cursor, _vline(START_X + CHART_WIDTH / 3 + CHART_WIDTH / 2, top + 25, top + CHART_HEIGHT - 25)
    )
    schedules = draw_pie(
        surface, cursor, demographics.student_schedules(store, school),
        (START_X + CHART_WIDTH + CHART_MARGIN, cy), PIE_RADIUS,
        "¿En qué jornada tiene clases?", LegendSpec.below_rows(2),
    )
    right_x = START_X + CHART_WIDTH * 1.3 + CHART_MARGIN
    surface.draw(cursor, _vline(right_x, top + 25, top + CHART_HEIGHT - 25))
    draw_horizontal_bars(
        surface, cursor, demographics.student_years(store, school),
        Box(right_x + 20, top, CHART_WIDTH / 1.5, CHART_HEIGHT),
        "¿Cuántos años lleva en la IE?",
    )
    return cursor.at(max(grades.bottom, schedules.bottom, top + CHART_HEIGHT - 20) + 5)


def _guardians(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = _band(surface, cursor, context, RespondentGroup.ACUDIENTES)
    data = demographics.guardian_student_grades(context.store, context.school)

    title_y = cursor.y + 10
    surface.draw(
        cursor,
        TextOp(
            "¿En qué grado se encuentran los estudiantes que representa?",
            START_X,
            title_y,
            Style(font="Helvetica-Bold", size=10),
            width=CONTENT_WIDTH,
        ),
    )
    bar_y = title_y + 20
    draw_stacked_bar(
        surface,
        cursor,
        stacked_bar_layout(data, Box(START_X, bar_y, CONTENT_WIDTH, GUARDIAN_BAR_HEIGHT)),
    )

    # Two centred legend rows under the bar
    legend_y = bar_y + GUARDIAN_BAR_HEIGHT + 10
    per_row = math.ceil(len(data) / 2) if data else 0
    for row, items in enumerate((data[:per_row], data[per_row:])):
        if not items:
            continue
        row_width = len(items) * GUARDIAN_LEGEND_STEP - 5
        origin = ((PAGE_WIDTH - row_width) / 2, legend_y + row * 15)
        entries = legend_grid(items, origin, 1, column_step=GUARDIAN_LEGEND_STEP)
        surface.draw(cursor, *legend_ops(entries, Style(size=6)))
    return cursor.at(legend_y + 30)


def build_demographics(surface: PageSurface, cursor: Cursor, context: BuildContext) -> Cursor:
    cursor = surface.new_page().moved(15)
    logger.debug("Demographics for school=%s on page %s", context.school, cursor.page)
    cursor = page_title(surface, cursor, "ENCUESTADOS", START_X, CONTENT_WIDTH)
    cursor = _teachers(surface, cursor, context)
    cursor = _students(surface, cursor, context)
    cursor = _guardians(surface, cursor, context)
    return instruction_box(
        surface,
        cursor,
        START_X + 30,
        CONTENT_WIDTH - 30,
        CLOSING_NOTE,
        style=Style(font="Helvetica-Bold", size=10, color="#FF0000", align=Align.CENTER),
        padding=6,
    )
