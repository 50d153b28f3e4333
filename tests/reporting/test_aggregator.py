"""Unit tests for reporting.aggregator.

The store is mocked where the test is about which queries are issued.
"""

from __future__ import annotations

from unittest.mock import MagicMock

from src.exceptions import StoreUnavailableError
from src.reporting.aggregator import aggregate, aggregate_statement, build_frequency_data
from src.reporting.models import NO_DATA, FrequencyResult
from src.survey.catalog import CATALOG, COMUNICACION, NOT_APPLICABLE, RespondentGroup, Statement
from tests.factories import SCHOOL


def _statement(**overrides) -> Statement:
    values = dict(display_text="Display", docentes="Q-doc", estudiantes="Q-est", acudientes="Q-acu")
    values.update(overrides)
    return Statement(**values)


def _store_with(answers):
    store = MagicMock()
    store.answers_for.return_value = answers
    return store


def test_aggregate_happy_path():
    store = _store_with(["Siempre"] * 6 + ["A veces"] * 3 + ["Nunca"])

    result = aggregate(_statement(), RespondentGroup.DOCENTES, "X", store=store)

    assert result == FrequencyResult(60, 30, 10)
    store.answers_for.assert_called_once_with(RespondentGroup.DOCENTES, "Q-doc", "X")


def test_not_applicable_skips_store():
    store = MagicMock()
    store.answers_for.side_effect = AssertionError("Should not be called")

    result = aggregate(_statement(acudientes=NOT_APPLICABLE), RespondentGroup.ACUDIENTES, store=store)

    assert result.values() == (NO_DATA, NO_DATA, NO_DATA)
    store.answers_for.assert_not_called()


def test_store_failure_degrades_to_no_data(caplog):
    store = MagicMock()
    store.answers_for.side_effect = StoreUnavailableError("database down")

    result = aggregate(_statement(), RespondentGroup.ESTUDIANTES, store=store)

    assert not result.has_data
    assert "database down" in caplog.text


def test_no_answers_and_no_recognized_answers_are_no_data():
    assert not aggregate(_statement(), RespondentGroup.DOCENTES, store=_store_with([])).has_data
    assert not aggregate(
        _statement(), RespondentGroup.DOCENTES, store=_store_with(["foo", "", "bar"])
    ).has_data


def test_unrecognized_answers_leave_denominator():
    store = _store_with(["Siempre", "Nunca", "no aplica", "no aplica"])
    assert aggregate(_statement(), RespondentGroup.DOCENTES, store=store) == FrequencyResult(50, 0, 50)


def test_rounding_always_sums_to_hundred():
    # 1/3 each rounds to 33+33+33; the largest bucket (first on ties) absorbs the rest.
    store = _store_with(["Siempre", "A veces", "Nunca"])
    result = aggregate(_statement(), RespondentGroup.DOCENTES, store=store)
    assert result == FrequencyResult(34, 33, 33)

    # 2/3 and 1/3 with half-up rounding: 67 + 33.
    store = _store_with(["Siempre", "Siempre", "A veces"])
    assert aggregate(_statement(), RespondentGroup.DOCENTES, store=store).total() == 100


def test_aggregate_is_idempotent(store):
    statement = COMUNICACION.statements[0]
    first = aggregate(statement, RespondentGroup.DOCENTES, SCHOOL, store=store)
    second = aggregate(statement, RespondentGroup.DOCENTES, SCHOOL, store=store)
    assert first == second == FrequencyResult(60, 30, 10)


def test_school_filter(store):
    statement = COMUNICACION.statements[0]
    item = aggregate_statement(statement, SCHOOL, store=store)

    assert item.result_for(RespondentGroup.ESTUDIANTES) == FrequencyResult(100, 0, 0)
    assert item.result_for(RespondentGroup.ACUDIENTES) == FrequencyResult(0, 0, 100)
    # All schools mixes in the other school's "Nunca"
    everyone = aggregate(statement, RespondentGroup.DOCENTES, store=store)
    assert everyone.never > 10


def test_build_frequency_data_covers_catalog(store):
    data = build_frequency_data(store, SCHOOL)

    assert [d.category for d in data] == list(CATALOG)
    for category_data in data:
        assert len(category_data.items) == len(category_data.category.statements)
        for item in category_data.items:
            for group in RespondentGroup:
                result = item.result_for(group)
                assert result.total() == 100 or result.values() == (NO_DATA,) * 3
