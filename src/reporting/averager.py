"""Reduce per-statement results to one result per category and group."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from src.reporting.models import (
    Bucket,
    CategoryFrequencies,
    FrequencyResult,
    GridItem,
    balance_to_hundred,
    round_half_up,
)
from src.survey.catalog import Category, RespondentGroup

logger = logging.getLogger(__name__)


def _rescale(values: Sequence[int]) -> List[int]:
    """Scale *values* proportionally to a total of 100 (half-up rounding)."""
    total = sum(values)
    if total == 0 or total == 100:
        return list(values)
    return [round_half_up(v * 100 / total) for v in values]


def average(
    items: Iterable[GridItem],
    group: RespondentGroup,
    *,
    exact_total: bool = True,
) -> FrequencyResult:
    """Average *group*'s results over *items*, skipping "no data" statements.

    Each bucket is the arithmetic mean of the surviving statements, rounded
    half-up. When no statement has data the result is all zeros (not the
    no-data sentinel) so the summary page can draw its neutral placeholder.

    Rounding the three means independently can leave the row at 99 or 101.
    With *exact_total* the row is rescaled to 100 and any remaining
    difference goes to the largest bucket, as for single statements.
    """
    valid = [item.result_for(group) for item in items]
    valid = [r for r in valid if r.has_data]
    if not valid:
        return FrequencyResult.zero()

    count = len(valid)
    values = [
        round_half_up(sum(r.get(bucket) for r in valid) / count) for bucket in Bucket
    ]
    if exact_total:
        values = balance_to_hundred(_rescale(values))
    return FrequencyResult(*values)


def summarize(
    frequency_data: Iterable[CategoryFrequencies],
    group: RespondentGroup,
    *,
    exact_total: bool = True,
) -> List[Tuple[Category, FrequencyResult]]:
    """Return one ``(category, averaged result)`` row per category."""
    rows = [
        (data.category, average(data.items, group, exact_total=exact_total))
        for data in frequency_data
    ]
    logger.debug(
        "Summary for %s: %s",
        group.value,
        ", ".join(f"{c.key}={r.to_dict()}" for c, r in rows),
    )
    return rows
