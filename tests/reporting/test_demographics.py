"""Unit tests for reporting.demographics."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.reporting import demographics
from src.reporting.demographics import (
    LOAD_ERROR_LABEL,
    NO_DATA_LABEL,
    clean_grade,
    grade_level,
)
from src.survey.catalog import RespondentGroup
from src.survey.store import InMemoryResponseStore
from tests.factories import SCHOOL, make_response


def _broken_store():
    store = MagicMock()
    store.responses.side_effect = RuntimeError("boom")
    return store


def _as_dict(data):
    return {d.label: d.value for d in data}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Preescolar", "Preescolar"),
        ("Primera infancia", "Preescolar"),
        ("3°", "Primaria"),
        ("7", "Secundaria"),
        (" 11 º", "Media"),
        ("12", None),
        ("Otros", None),
    ],
)
def test_grade_level(raw, expected):
    assert grade_level(raw) == expected


def test_clean_grade():
    assert clean_grade(" 10 ° ") == "10"


def test_teacher_grade_levels(store):
    data = _as_dict(demographics.teacher_grade_levels(store, SCHOOL))
    assert data == {"Preescolar": 0, "Primaria": 10, "Secundaria": 10, "Media": 0}


def test_teacher_grade_levels_fallbacks():
    empty = demographics.teacher_grade_levels(InMemoryResponseStore(), SCHOOL)
    assert [(d.label, d.value) for d in empty] == [(NO_DATA_LABEL, 1)]

    failed = demographics.teacher_grade_levels(_broken_store(), SCHOOL)
    assert [(d.label, d.color) for d in failed] == [(LOAD_ERROR_LABEL, "#FF0000")]


def test_schedules_match_accents_and_case():
    store = InMemoryResponseStore()
    for value in ("MANANA", "Mañana", "tarde", "Sabatina"):
        store.add_response(make_response(RespondentGroup.ESTUDIANTES, schedules=(value,)))

    data = _as_dict(demographics.student_schedules(store, SCHOOL))

    assert data == {"Mañana": 2, "Tarde": 1, "Sabatina": 1}


def test_schedules_default_to_zeros():
    data = demographics.teacher_schedules(InMemoryResponseStore(), SCHOOL)
    assert [d.label for d in data] == ["Mañana", "Tarde", "Noche", "Única"]
    assert all(d.value == 0 for d in data)


def test_years_always_list_every_range(store):
    data = demographics.teacher_years(store, SCHOOL)

    assert len(data) == 7
    assert _as_dict(data)["2 años"] == 10
    assert _as_dict(data)["6 o mas"] == 0


def test_feedback_sources_count_empty_selection_as_ninguno():
    store = InMemoryResponseStore()
    store.add_response(make_response(RespondentGroup.DOCENTES))
    store.add_response(
        make_response(RespondentGroup.DOCENTES, feedback_sources=("Rector/a", "Estudiantes"))
    )

    data = _as_dict(demographics.teacher_feedback_sources(store, SCHOOL))

    assert len(data) == 7
    assert data["Ninguno"] == 1
    assert data["Rector"] == 1
    assert data["Estudiantes"] == 1


def test_student_grades_sorted_numerically():
    store = InMemoryResponseStore()
    for grade in ("10", "6°", "11", "6"):
        store.add_response(make_response(RespondentGroup.ESTUDIANTES, current_grade=grade))

    data = demographics.student_grades(store, SCHOOL)

    assert [(d.label, d.value) for d in data] == [("Sexto", 2), ("Décimo", 1), ("Undécimo", 1)]


def test_student_grades_keep_counts_beside_odd_values():
    store = InMemoryResponseStore()
    for grade in ("10", "10", "11", "9²"):
        store.add_response(make_response(RespondentGroup.ESTUDIANTES, current_grade=grade))

    data = demographics.student_grades(store, SCHOOL)

    assert [(d.label, d.value) for d in data] == [("Décimo", 2), ("Undécimo", 1), ("9²", 1)]


def test_guardian_student_grades(store):
    data = demographics.guardian_student_grades(store, SCHOOL)
    assert [(d.label, d.value) for d in data] == [("Preescolar", 1), ("Grado 5", 1)]


def test_guardian_student_grades_failure_is_empty():
    assert demographics.guardian_student_grades(_broken_store(), SCHOOL) == []
