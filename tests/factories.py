"""Builders for survey test data."""
from __future__ import annotations

from src.survey.catalog import COMUNICACION, RespondentGroup
from src.survey.records import SurveyResponse

SCHOOL = "IE San José"
OTHER_SCHOOL = "IE La Esperanza"


def make_response(group: RespondentGroup, school: str = SCHOOL, answer: str = "Siempre", **profile):
    """A response answering the first COMUNICACION statement with *answer*."""
    question = COMUNICACION.statements[0].question_for(group)
    return SurveyResponse(group=group, institution=school, answers={question: answer}, **profile)
