"""Respondent records as read from the survey exports.

A :class:`SurveyResponse` is one submitted form: the institution it belongs
to, the frequency answers keyed by question text, and the handful of profile
fields the demographics page charts. Records are built with
:meth:`SurveyResponse.from_mapping`, which validates field shapes generically
instead of patching individual submissions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from src.exceptions import MalformedAnswerError
from src.survey.catalog import RespondentGroup

logger = logging.getLogger(__name__)

__all__ = ["InstitutionInfo", "SurveyResponse", "coerce_multi_select"]

# Export keys → attribute names. Exports use the Spanish column names.
_PROFILE_FIELDS: Dict[str, str] = {
    "grados_asignados": "assigned_grades",
    "jornada": "schedules",
    "anos_como_docente": "years_at_school",
    "anos_estudiando": "years_at_school",
    "retroalimentacion_de": "feedback_sources",
    "grado_actual": "current_grade",
    "grados_estudiantes": "student_grades",
}

_MULTI_SELECT = {"assigned_grades", "schedules", "feedback_sources", "student_grades"}


def coerce_multi_select(field_name: str, value: Any) -> Tuple[str, ...]:
    """Return *value* as a tuple of non-empty strings.

    A bare string is a single selection. ``None`` is an empty selection.
    Numbers, mappings and any other scalar are rejected.

    Raises
    ------
    MalformedAnswerError
        If *value* is not a string, ``None`` or a list/tuple of strings.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise MalformedAnswerError(field_name, value)

    items = []
    for item in value:
        if not isinstance(item, str):
            raise MalformedAnswerError(field_name, value)
        item = item.strip()
        if item:
            items.append(item)
    return tuple(items)


def _coerce_single(field_name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise MalformedAnswerError(field_name, value)
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class InstitutionInfo:
    """A participating school as listed in the principals' directory."""

    name: str
    territorial_entity: Optional[str] = None


@dataclass(frozen=True)
class SurveyResponse:
    """One submitted survey form."""

    group: RespondentGroup
    institution: str
    answers: Mapping[str, str] = field(default_factory=dict)
    assigned_grades: Tuple[str, ...] = ()
    schedules: Tuple[str, ...] = ()
    years_at_school: Optional[str] = None
    feedback_sources: Tuple[str, ...] = ()
    current_grade: Optional[str] = None
    student_grades: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(
        cls, group: RespondentGroup, data: Mapping[str, Any]
    ) -> "SurveyResponse":
        """Build a response from one exported row.

        Frequency answers may arrive flat under ``answers`` or split per
        category (``comunicacion``, ``practicas_pedagogicas``,
        ``convivencia``) as in the database columns; both are merged
        into a single question → answer mapping. Malformed profile fields are
        logged and dropped so one bad cell does not discard the whole form.

        Raises
        ------
        ValueError
            If the row has no ``institucion_educativa``.
        """
        institution = str(data.get("institucion_educativa") or "").strip()
        if not institution:
            raise ValueError("Survey row is missing 'institucion_educativa'.")

        answers: Dict[str, str] = {}
        for key in ("answers", "comunicacion", "practicas_pedagogicas", "convivencia"):
            block = data.get(key)
            if not block:
                continue
            if not isinstance(block, Mapping):
                logger.warning(
                    "Ignoring non-mapping answer block '%s' for %s", key, institution
                )
                continue
            for question, raw in block.items():
                if isinstance(raw, str):
                    answers[str(question)] = raw
                else:
                    logger.warning(
                        "Dropping non-text answer for question %.40s… (%s)",
                        question,
                        type(raw).__name__,
                    )

        profile: Dict[str, Any] = {}
        for source_key, attr in _PROFILE_FIELDS.items():
            if source_key not in data:
                continue
            try:
                if attr in _MULTI_SELECT:
                    profile[attr] = coerce_multi_select(source_key, data[source_key])
                else:
                    profile[attr] = _coerce_single(source_key, data[source_key])
            except MalformedAnswerError as exc:
                logger.warning("Rejected field for %s: %s", institution, exc)

        return cls(group=group, institution=institution, answers=answers, **profile)
