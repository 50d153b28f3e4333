"""Shared fixtures: a small in-memory store with one surveyed school."""
from __future__ import annotations

import pytest

from src.survey.catalog import RespondentGroup
from src.survey.records import InstitutionInfo
from src.survey.store import InMemoryResponseStore
from tests.factories import OTHER_SCHOOL, SCHOOL, make_response


@pytest.fixture()
def store() -> InMemoryResponseStore:
    store = InMemoryResponseStore()
    store.add_institution(InstitutionInfo(SCHOOL, "Medellín"))
    store.add_institution(InstitutionInfo(OTHER_SCHOOL))

    answers = ["Siempre"] * 6 + ["A veces"] * 3 + ["Nunca"]
    store.add_responses(
        make_response(
            RespondentGroup.DOCENTES,
            answer=a,
            assigned_grades=("3", "7"),
            schedules=("Mañana",),
            years_at_school="2",
        )
        for a in answers
    )
    store.add_responses(
        make_response(RespondentGroup.ESTUDIANTES, answer="Casi siempre", current_grade="10°")
        for _ in range(4)
    )
    store.add_response(
        make_response(RespondentGroup.ACUDIENTES, answer="Casi nunca", student_grades=("5", "Preescolar"))
    )
    store.add_response(make_response(RespondentGroup.DOCENTES, school=OTHER_SCHOOL, answer="Nunca"))
    return store
