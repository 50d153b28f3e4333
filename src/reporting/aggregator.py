"""Aggregate raw survey answers into :class:`FrequencyResult` values."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from src.reporting.models import CategoryFrequencies, FrequencyResult, GridItem
from src.reporting.normalizer import tally
from src.survey.catalog import CATALOG, Category, RespondentGroup, Statement
from src.survey.store import ResponseStore

logger = logging.getLogger(__name__)


def aggregate(
    statement: Statement,
    group: RespondentGroup,
    school: Optional[str] = None,
    *,
    store: ResponseStore,
) -> FrequencyResult:
    """Return the S/A/N distribution of *group*'s answers to *statement*.

    The function is read-only. It returns :meth:`FrequencyResult.no_data` when
    the statement does not apply to *group*, when no answers match, when none
    of the answers is recognized, or when the store cannot be read; a single
    missing data point must never abort a report.
    """
    question = statement.question_for(group)
    if question is None:
        return FrequencyResult.no_data()

    try:
        answers = store.answers_for(group, question, school)
    except Exception as exc:  # noqa: BLE001 – degrade to "no data"
        logger.warning(
            "Failed to read answers for group=%s school=%s question=%.40s…: %s",
            group.value,
            school or "*",
            question,
            exc,
        )
        return FrequencyResult.no_data()

    if not answers:
        return FrequencyResult.no_data()

    return FrequencyResult.from_counts(tally(answers))


def aggregate_statement(
    statement: Statement,
    school: Optional[str] = None,
    *,
    store: ResponseStore,
) -> GridItem:
    """Aggregate *statement* for every respondent group."""
    return GridItem(
        statement=statement,
        results={
            group: aggregate(statement, group, school, store=store)
            for group in RespondentGroup
        },
    )


def build_frequency_data(
    store: ResponseStore,
    school: Optional[str] = None,
    catalog: Iterable[Category] = CATALOG,
) -> List[CategoryFrequencies]:
    """Run the aggregator for every statement × group in *catalog*."""
    results: List[CategoryFrequencies] = []
    for category in catalog:
        items = [
            aggregate_statement(statement, school, store=store)
            for statement in category
        ]
        results.append(CategoryFrequencies(category=category, items=items))

    logger.debug(
        "Frequency data built for school=%s: %d categories, %d statements",
        school or "*",
        len(results),
        sum(len(c.items) for c in results),
    )
    return results
