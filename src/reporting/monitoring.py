"""Participation monitoring: how many responses each school has collected."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from src.reporting import config
from src.survey.catalog import RespondentGroup
from src.survey.store import ResponseStore

logger = logging.getLogger(__name__)

__all__ = ["SchoolMonitoring", "build_monitoring"]


@dataclass(slots=True)
class SchoolMonitoring:
    """Response counts for one school."""

    school: str
    counts: Dict[RespondentGroup, int] = field(default_factory=dict)
    minimum: int = 25

    @property
    def meets_requirements(self) -> bool:
        return all(self.counts.get(group, 0) >= self.minimum for group in RespondentGroup)

    @property
    def missing(self) -> Dict[RespondentGroup, int]:
        """Responses still needed per group (only groups below the minimum)."""
        return {
            group: self.minimum - self.counts.get(group, 0)
            for group in RespondentGroup
            if self.counts.get(group, 0) < self.minimum
        }

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a JSON-friendly representation."""
        data = asdict(self)
        data["counts"] = {g.value: n for g, n in self.counts.items()}
        data["meets_requirements"] = self.meets_requirements
        return data


def build_monitoring(
    store: ResponseStore, minimum: Optional[int] = None
) -> List[SchoolMonitoring]:
    """Return one :class:`SchoolMonitoring` entry per school, sorted by name."""
    minimum = config.MIN_RESPONSES_PER_GROUP if minimum is None else minimum
    entries = [
        SchoolMonitoring(
            school=school,
            counts={group: store.count(group, school) for group in RespondentGroup},
            minimum=minimum,
        )
        for school in store.schools()
    ]
    complete = sum(1 for e in entries if e.meets_requirements)
    logger.info(
        "Monitoring built: %d schools, %d meeting the minimum of %d per group",
        len(entries),
        complete,
        minimum,
    )
    return entries
