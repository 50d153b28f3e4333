"""Unit tests for reporting.monitoring."""
from __future__ import annotations

from src.reporting.monitoring import SchoolMonitoring, build_monitoring
from src.survey.catalog import RespondentGroup
from tests.factories import OTHER_SCHOOL, SCHOOL


def test_build_monitoring_counts_per_group(store):
    entries = {e.school: e for e in build_monitoring(store, minimum=1)}

    assert set(entries) == {SCHOOL, OTHER_SCHOOL}
    school = entries[SCHOOL]
    assert school.counts == {
        RespondentGroup.DOCENTES: 10,
        RespondentGroup.ESTUDIANTES: 4,
        RespondentGroup.ACUDIENTES: 1,
    }
    assert school.meets_requirements
    assert not entries[OTHER_SCHOOL].meets_requirements


def test_missing_lists_groups_below_minimum():
    entry = SchoolMonitoring(
        "X",
        {RespondentGroup.DOCENTES: 30, RespondentGroup.ESTUDIANTES: 20},
        minimum=25,
    )

    assert entry.missing == {RespondentGroup.ESTUDIANTES: 5, RespondentGroup.ACUDIENTES: 25}
    assert entry.to_dict() == {
        "school": "X",
        "counts": {"docentes": 30, "estudiantes": 20},
        "minimum": 25,
        "meets_requirements": False,
    }
