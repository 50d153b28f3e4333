"""Data structures for the reporting pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Tuple

from src.survey.catalog import Category, RespondentGroup, Statement

# Sentinel stored in every bucket when a statement has no usable data.
NO_DATA = -1


class Bucket(str, Enum):
    """Frequency buckets, in the fixed order they are reported and drawn."""

    ALWAYS = "S"
    SOMETIMES = "A"
    NEVER = "N"

    @property
    def legend(self) -> str:
        return _BUCKET_LEGENDS[self]


_BUCKET_LEGENDS = {
    Bucket.ALWAYS: "Siempre/Casi siempre",
    Bucket.SOMETIMES: "A veces",
    Bucket.NEVER: "Casi nunca/Nunca",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``2.5 -> 3``)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class FrequencyResult:
    """Percentages of S/A/N answers for one statement (or category) and group.

    Either the three values sum to 100, or all three are :data:`NO_DATA`.
    Averaged rows may also be all zero (see :mod:`src.reporting.averager`).
    """

    always: int
    sometimes: int
    never: int

    @classmethod
    def no_data(cls) -> "FrequencyResult":
        return cls(NO_DATA, NO_DATA, NO_DATA)

    @classmethod
    def zero(cls) -> "FrequencyResult":
        return cls(0, 0, 0)

    @classmethod
    def from_counts(cls, counts: Mapping[Bucket, int]) -> "FrequencyResult":
        """Convert raw bucket counts into percentages summing to exactly 100.

        An empty or all-zero *counts* yields :meth:`no_data`.
        """
        total = sum(counts.get(b, 0) for b in Bucket)
        if total <= 0:
            return cls.no_data()
        values = [round_half_up(counts.get(b, 0) / total * 100) for b in Bucket]
        return cls(*balance_to_hundred(values))

    @property
    def has_data(self) -> bool:
        return NO_DATA not in (self.always, self.sometimes, self.never)

    @property
    def is_zero(self) -> bool:
        return self.always == 0 and self.sometimes == 0 and self.never == 0

    def get(self, bucket: Bucket) -> int:
        return self.values()[list(Bucket).index(bucket)]

    def values(self) -> Tuple[int, int, int]:
        return (self.always, self.sometimes, self.never)

    def total(self) -> int:
        return sum(self.values())

    def to_dict(self) -> Dict[str, int]:  # noqa: D401 – simple helper
        """Return ``{"S": .., "A": .., "N": ..}``."""
        return {b.value: v for b, v in zip(Bucket, self.values())}


def balance_to_hundred(values: List[int]) -> List[int]:
    """Return *values* adjusted so they sum to exactly 100.

    The whole rounding error is added to (or removed from) the bucket that
    currently holds the largest share; ties go to the earliest bucket. Inputs
    summing to zero are returned unchanged.
    """
    values = list(values)
    total = sum(values)
    if total == 0 or total == 100:
        return values
    largest = values.index(max(values))
    values[largest] += 100 - total
    return values


@dataclass(frozen=True, slots=True)
class GridItem:
    """A catalog statement with its aggregated result for every group."""

    statement: Statement
    results: Dict[RespondentGroup, FrequencyResult]

    @property
    def display_text(self) -> str:
        return self.statement.display_text

    def result_for(self, group: RespondentGroup) -> FrequencyResult:
        return self.results.get(group, FrequencyResult.no_data())


@dataclass(frozen=True, slots=True)
class CategoryFrequencies:
    """All grid items of one catalog category, in catalog order."""

    category: Category
    items: List[GridItem] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.category.title


@dataclass(frozen=True, slots=True)
class ChartDatum:
    """Minimal unit consumed by the chart geometry functions."""

    label: str
    value: float
    color: str

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"Chart value must be non-negative, got {self.value}")
