"""Render the narrative page texts from Jinja2 templates."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from src.reporting import config
from src.survey.catalog import CATALOG, RespondentGroup

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Plain-text templates for the PDF; HTML escaping would mangle quotes.
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)

# Separates the body from the footnotes in a rendered template
_FOOTNOTE_RULE = "---"

INTRO_TEMPLATE = "narrative_intro.md.j2"
CONTEXT_TEMPLATE = "narrative_context.md.j2"


@dataclass(slots=True)
class NarrativeText:
    """Paragraphs (with ``**bold**``/``*italic*`` markup) and footnotes."""

    paragraphs: List[str] = field(default_factory=list)
    footnotes: List[str] = field(default_factory=list)


def _split_blocks(text: str) -> List[str]:
    blocks = []
    for block in text.split("\n\n"):
        block = " ".join(line.strip() for line in block.splitlines() if line.strip())
        if block:
            blocks.append(block)
    return blocks


def _default_context() -> dict:
    articles = {"comunicacion": "la", "practicas_pedagogicas": "las", "convivencia": "la"}
    return {
        "program_name": config.PROGRAM_NAME,
        "groups": [group.value for group in RespondentGroup],
        "components": [
            f"{articles.get(c.key, 'la')} {c.label.lower()}" for c in CATALOG
        ],
    }


def render_narrative(template_name: str, **context) -> NarrativeText:
    """Render *template_name* and split it into paragraphs and footnotes."""
    values = _default_context()
    values.update(context)
    text = _env.get_template(template_name).render(**values)

    body, _, notes = text.partition(f"\n{_FOOTNOTE_RULE}\n")
    narrative = NarrativeText(
        paragraphs=_split_blocks(body),
        footnotes=[line.strip() for line in notes.splitlines() if line.strip()],
    )
    logger.debug(
        "Rendered %s: %d paragraphs, %d footnotes",
        template_name,
        len(narrative.paragraphs),
        len(narrative.footnotes),
    )
    return narrative
