"""Read-only access to survey responses.

The report engine only needs a handful of queries against the response data,
captured by the :class:`ResponseStore` protocol. :class:`InMemoryResponseStore`
is the thread-safe implementation used by the CLI and the tests; it is
populated once (e.g. via :func:`load_store`) and then shared read-only between
concurrent report generations.
"""
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from src.exceptions import StoreUnavailableError
from src.survey.catalog import RespondentGroup
from src.survey.records import InstitutionInfo, SurveyResponse

__all__ = ["ResponseStore", "InMemoryResponseStore", "load_store"]


class ResponseStore(Protocol):
    """Queries the report engine runs against the survey data."""

    def responses(
        self, group: RespondentGroup, school: Optional[str] = None
    ) -> List[SurveyResponse]:
        ...

    def answers_for(
        self, group: RespondentGroup, question: str, school: Optional[str] = None
    ) -> List[str]:
        ...

    def count(self, group: RespondentGroup, school: Optional[str] = None) -> int:
        ...

    def schools(self) -> List[str]:
        ...

    def institution(self, name: str) -> Optional[InstitutionInfo]:
        ...


class InMemoryResponseStore:
    """A thread-safe in-memory store of survey responses."""

    def __init__(self) -> None:
        self._responses: Dict[RespondentGroup, List[SurveyResponse]] = {
            group: [] for group in RespondentGroup
        }
        self._institutions: Dict[str, InstitutionInfo] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add_response(self, response: SurveyResponse) -> None:
        """Append *response* to its group's collection."""
        with self._lock:
            self._responses[response.group].append(response)

    def add_responses(self, responses: Iterable[SurveyResponse]) -> None:
        for response in responses:
            self.add_response(response)

    def add_institution(self, info: InstitutionInfo) -> None:
        """Register a school from the principals' directory.

        Raises ValueError if a school with the same name already exists.
        """
        with self._lock:
            if info.name in self._institutions:
                raise ValueError(f"Institution {info.name!r} already registered.")
            self._institutions[info.name] = info
        self._logger.debug("Registered institution %s", info.name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def responses(
        self, group: RespondentGroup, school: Optional[str] = None
    ) -> List[SurveyResponse]:
        """Return a copy of *group*'s responses, optionally for one school."""
        with self._lock:
            items = list(self._responses[group])
        if school is None:
            return items
        return [r for r in items if r.institution == school]

    def answers_for(
        self, group: RespondentGroup, question: str, school: Optional[str] = None
    ) -> List[str]:
        """Return every raw answer *group* gave to *question*."""
        return [
            r.answers[question]
            for r in self.responses(group, school)
            if question in r.answers
        ]

    def count(self, group: RespondentGroup, school: Optional[str] = None) -> int:
        return len(self.responses(group, school))

    def schools(self) -> List[str]:
        """Return the sorted school list.

        The principals' directory is authoritative; when it is empty the
        distinct institutions found in the responses are used instead.
        """
        with self._lock:
            if self._institutions:
                return sorted(self._institutions)
            names = {
                r.institution for items in self._responses.values() for r in items
            }
        return sorted(names)

    def institution(self, name: str) -> Optional[InstitutionInfo]:
        with self._lock:
            return self._institutions.get(name)

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{group.value}={len(items)}" for group, items in self._responses.items()
        )
        return f"InMemoryResponseStore({counts}, institutions={len(self._institutions)})"


def _institution_from(entry: Union[str, Mapping[str, Any]]) -> InstitutionInfo:
    if isinstance(entry, str):
        return InstitutionInfo(name=entry.strip())
    name = str(entry.get("nombre") or entry.get("name") or "").strip()
    if not name:
        raise ValueError(f"Institution entry without a name: {entry!r}")
    territorial = entry.get("entidad_territorial") or entry.get("territorial_entity")
    return InstitutionInfo(name=name, territorial_entity=territorial or None)


def load_store(path: Union[str, Path]) -> InMemoryResponseStore:
    """Build a store from a JSON export.

    The export has the shape::

        {
          "institutions": [{"nombre": "...", "entidad_territorial": "..."}],
          "responses": {"docentes": [...], "estudiantes": [...], "acudientes": [...]}
        }

    Rows that cannot be parsed are logged and skipped.

    Raises
    ------
    StoreUnavailableError
        If the file cannot be read.
    ValueError
        If the file is not a JSON object or names an unknown respondent group.
    """
    logger = logging.getLogger(__name__)
    try:
        with open(path, encoding="utf-8") as fh:
            payload = json.load(fh)
    except OSError as exc:
        raise StoreUnavailableError(f"Cannot read survey data from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object in {path}")

    store = InMemoryResponseStore()
    for entry in payload.get("institutions", []):
        store.add_institution(_institution_from(entry))

    skipped = 0
    for group_key, rows in (payload.get("responses") or {}).items():
        try:
            group = RespondentGroup(group_key)
        except ValueError as exc:
            raise ValueError(f"Unknown respondent group: {group_key!r}") from exc
        for row in rows:
            try:
                store.add_response(SurveyResponse.from_mapping(group, row))
            except ValueError as exc:
                skipped += 1
                logger.warning("Skipping %s row: %s", group.value, exc)

    logger.info("Loaded %r from %s (%d rows skipped)", store, path, skipped)
    return store
