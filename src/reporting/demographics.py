"""Distributions charted on the demographics ("ENCUESTADOS") page.

Every function takes the response store and a school name and returns a list
of :class:`ChartDatum` ready for the geometry engine. Read failures never
propagate: each distribution has its own fallback, matching what the page is
expected to show when data cannot be loaded.
"""
from __future__ import annotations

import functools
import logging
import re
import unicodedata
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from src.reporting.models import ChartDatum
from src.survey.catalog import RespondentGroup
from src.survey.store import ResponseStore

logger = logging.getLogger(__name__)

__all__ = [
    "NO_DATA_LABEL",
    "LOAD_ERROR_LABEL",
    "teacher_grade_levels",
    "teacher_schedules",
    "teacher_years",
    "teacher_feedback_sources",
    "student_grades",
    "student_schedules",
    "student_years",
    "guardian_student_grades",
    "clean_grade",
    "grade_level",
]

NO_DATA_LABEL = "No hay datos"
LOAD_ERROR_LABEL = "Error al cargar datos"

_NO_DATA_COLOR = "#CCCCCC"
_ERROR_COLOR = "#FF0000"
_UNKNOWN_COLOR = "#000000"

# ---------------------------------------------------------------------------
# Label / colour tables
# ---------------------------------------------------------------------------

GRADE_LEVELS: Tuple[Tuple[str, str], ...] = (
    ("Preescolar", "#FF9F40"),
    ("Primaria", "#4B89DC"),
    ("Secundaria", "#37BC9B"),
    ("Media", "#967ADC"),
)

SCHEDULES: Tuple[Tuple[str, str], ...] = (
    ("Mañana", "#D55E00"),
    ("Tarde", "#0072B2"),
    ("Noche", "#548235"),
    ("Única", "#7030A0"),
)

# (raw export value, display label, colour)
YEARS: Tuple[Tuple[str, str, str], ...] = (
    ("Menos de 1", "Menos de 1", "#4472C4"),
    ("1", "1 año", "#ED7D31"),
    ("2", "2 años", "#A5A5A5"),
    ("3", "3 años", "#FFC000"),
    ("4", "4 años", "#5B9BD5"),
    ("5", "5 años", "#70AD47"),
    ("Más de 5", "6 o mas", "#7030A0"),
)

FEEDBACK_SOURCES: Tuple[Tuple[str, str], ...] = (
    ("Ninguno", "#A5A5A5"),
    ("Rector", "#4472C4"),
    ("Coordinator", "#FFC000"),
    ("Otros docentes", "#70AD47"),
    ("Acudientes", "#ED7D31"),
    ("Estudiantes", "#5B9BD5"),
    ("Otros", "#7030A0"),
)

_FEEDBACK_ALIASES: Dict[str, str] = {
    "Rector/a": "Rector",
    "Coordinador/a": "Coordinator",
    "Otros/as docentes": "Otros docentes",
}

STUDENT_GRADES: Tuple[Tuple[str, str, str], ...] = (
    ("5", "Quinto", "#4472C4"),
    ("6", "Sexto", "#ED7D31"),
    ("7", "Séptimo", "#A5A5A5"),
    ("8", "Octavo", "#FFC000"),
    ("9", "Noveno", "#5B9BD5"),
    ("10", "Décimo", "#70AD47"),
    ("11", "Undécimo", "#7030A0"),
    ("12", "Duodécimo", "#C00000"),
)

GUARDIAN_GRADE_COLORS: Dict[str, str] = {
    "Preescolar": "#FF9F40",
    "1": "#4472C4",
    "2": "#ED7D31",
    "3": "#A5A5A5",
    "4": "#FFC000",
    "5": "#5B9BD5",
    "6": "#70AD47",
    "7": "#264478",
    "8": "#9E480E",
    "9": "#636363",
    "10": "#997300",
    "11": "#2F5597",
    "12": "#385723",
}

_PRESCHOOL_ALIASES = {"preescolar", "primerainfancia"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fold(text: str) -> str:
    """Lower-case *text* and strip accents (``"MAÑANA" -> "manana"``)."""
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def clean_grade(raw: str) -> str:
    """Remove ordinal marks and all whitespace from a grade value."""
    return re.sub(r"\s+", "", raw.replace("°", "").replace("º", ""))


def grade_level(raw: str) -> Optional[str]:
    """Map a teacher's assigned grade onto its school level.

    Returns ``None`` for values outside preschool..11 so they are left out of
    the chart.
    """
    grade = clean_grade(raw)
    if grade.lower() in _PRESCHOOL_ALIASES:
        return "Preescolar"
    if re.fullmatch(r"[1-5]", grade):
        return "Primaria"
    if re.fullmatch(r"[6-9]", grade):
        return "Secundaria"
    if re.fullmatch(r"1[01]", grade):
        return "Media"
    return None


_SCHEDULE_BY_KEY = {_fold(label): (label, color) for label, color in SCHEDULES}


def _default_schedules() -> List[ChartDatum]:
    return [ChartDatum(label, 0, color) for label, color in SCHEDULES]


def _default_years() -> List[ChartDatum]:
    return [ChartDatum(label, 0, color) for _, label, color in YEARS]


def _default_feedback() -> List[ChartDatum]:
    return [ChartDatum(label, 0, color) for label, color in FEEDBACK_SOURCES]


def _default_student_grades() -> List[ChartDatum]:
    return [ChartDatum(label, 0, color) for _, label, color in STUDENT_GRADES]


def _fallback(factory: Callable[[], List[ChartDatum]]):
    """Return *factory()* instead of raising when the wrapped reader fails."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(store: ResponseStore, school: str) -> List[ChartDatum]:
            try:
                return func(store, school)
            except Exception:  # noqa: BLE001 – chart falls back to defaults
                logger.exception(
                    "Failed to load %s for school=%s", func.__name__, school
                )
                return factory()

        return wrapper

    return decorator


def _schedule_counts(values: Iterable[str]) -> List[ChartDatum]:
    counts: Counter = Counter()
    unknown: Counter = Counter()
    for value in values:
        known = _SCHEDULE_BY_KEY.get(_fold(value))
        if known:
            counts[known[0]] += 1
        else:
            unknown[value] += 1
    if not counts and not unknown:
        return _default_schedules()
    data = [ChartDatum(label, counts[label], color) for label, color in SCHEDULES if counts[label]]
    data.extend(ChartDatum(label, n, _UNKNOWN_COLOR) for label, n in sorted(unknown.items()))
    return data


def _years_counts(values: Iterable[Optional[str]]) -> List[ChartDatum]:
    counts = Counter(v for v in values if v)
    data = [ChartDatum(label, counts.pop(raw, 0), color) for raw, label, color in YEARS]
    data.extend(ChartDatum(raw, n, _UNKNOWN_COLOR) for raw, n in sorted(counts.items()))
    return data


# ---------------------------------------------------------------------------
# Teachers
# ---------------------------------------------------------------------------


def _grade_error() -> List[ChartDatum]:
    return [ChartDatum(LOAD_ERROR_LABEL, 1, _ERROR_COLOR)]


@_fallback(_grade_error)
def teacher_grade_levels(store: ResponseStore, school: str) -> List[ChartDatum]:
    """Count assigned grades per school level (Preescolar..Media)."""
    counts: Counter = Counter()
    for response in store.responses(RespondentGroup.DOCENTES, school):
        for raw in response.assigned_grades:
            level = grade_level(raw)
            if level:
                counts[level] += 1
    if not counts:
        return [ChartDatum(NO_DATA_LABEL, 1, _NO_DATA_COLOR)]
    return [ChartDatum(label, counts[label], color) for label, color in GRADE_LEVELS]


@_fallback(_default_schedules)
def teacher_schedules(store: ResponseStore, school: str) -> List[ChartDatum]:
    """Count every schedule each teacher works (multi-select)."""
    return _schedule_counts(
        value
        for response in store.responses(RespondentGroup.DOCENTES, school)
        for value in response.schedules
    )


@_fallback(_default_years)
def teacher_years(store: ResponseStore, school: str) -> List[ChartDatum]:
    """Years at the school; all seven ranges are always present."""
    return _years_counts(
        r.years_at_school for r in store.responses(RespondentGroup.DOCENTES, school)
    )


@_fallback(_default_feedback)
def teacher_feedback_sources(store: ResponseStore, school: str) -> List[ChartDatum]:
    """Who gives the teacher feedback; an empty selection counts as *Ninguno*."""
    counts: Counter = Counter()
    for response in store.responses(RespondentGroup.DOCENTES, school):
        sources = response.feedback_sources or ("Ninguno",)
        for source in sources:
            label = _FEEDBACK_ALIASES.get(source, source)
            counts[label] += 1
    return [ChartDatum(label, counts[label], color) for label, color in FEEDBACK_SOURCES]


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------


@_fallback(_default_student_grades)
def student_grades(store: ResponseStore, school: str) -> List[ChartDatum]:
    """Current grade of each student, ordered numerically."""
    names = {raw: (label, color) for raw, label, color in STUDENT_GRADES}
    counts: Counter = Counter()
    for response in store.responses(RespondentGroup.ESTUDIANTES, school):
        if response.current_grade:
            counts[clean_grade(response.current_grade)] += 1

    def order(grade: str) -> Tuple[int, str]:
        return (int(grade), grade) if re.fullmatch(r"[0-9]+", grade) else (99, grade)

    data = []
    for grade in sorted(counts, key=order):
        label, color = names.get(grade, (grade, _UNKNOWN_COLOR))
        data.append(ChartDatum(label, counts[grade], color))
    return data


@_fallback(_default_schedules)
def student_schedules(store: ResponseStore, school: str) -> List[ChartDatum]:
    return _schedule_counts(
        value
        for response in store.responses(RespondentGroup.ESTUDIANTES, school)
        for value in response.schedules
    )


@_fallback(_default_years)
def student_years(store: ResponseStore, school: str) -> List[ChartDatum]:
    return _years_counts(
        r.years_at_school for r in store.responses(RespondentGroup.ESTUDIANTES, school)
    )


# ---------------------------------------------------------------------------
# Guardians
# ---------------------------------------------------------------------------


@_fallback(list)
def guardian_student_grades(store: ResponseStore, school: str) -> List[ChartDatum]:
    """Grades of the students each guardian represents (multi-select).

    Only grades that were actually selected are returned; the page draws
    nothing for an empty list.
    """
    counts: Counter = Counter()
    for response in store.responses(RespondentGroup.ACUDIENTES, school):
        for raw in response.student_grades:
            grade = clean_grade(raw)
            if grade.lower() in _PRESCHOOL_ALIASES:
                grade = "Preescolar"
            counts[grade] += 1

    def order(grade: str) -> Tuple[int, str]:
        if grade == "Preescolar":
            return (0, grade)
        digits = re.sub(r"[^0-9]", "", grade)
        return (int(digits), grade) if digits else (99, grade)

    data = []
    for grade in sorted(counts, key=order):
        label = grade if grade == "Preescolar" else f"Grado {grade}"
        data.append(ChartDatum(label, counts[grade], GUARDIAN_GRADE_COLORS.get(grade, _NO_DATA_COLOR)))
    return data
