"""Smoke and content tests for the individual page builders."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from src.exceptions import ResourceMissingError
from src.reporting import config
from src.reporting.aggregator import build_frequency_data
from src.rendering.composer import BuildContext
from src.rendering.document import NO_PAGE, ImageOp, PageSurface
from src.rendering.pages.cover import UNKNOWN_TERRITORY, build_cover, locate_resource, school_name_font_size
from src.rendering.pages.demographics import build_demographics
from src.rendering.pages.info import NO_SCHOOL_MESSAGE, build_no_school_notice
from src.rendering.pages.narrative import build_narrative_context, build_narrative_intro
from src.rendering.pages.summary import build_summary
from src.reporting.demographics import NO_DATA_LABEL
from src.survey.catalog import RespondentGroup
from src.survey.records import InstitutionInfo
from src.survey.store import InMemoryResponseStore
from tests.factories import OTHER_SCHOOL, SCHOOL


def _all_texts(surface):
    return [text for page in surface.report.pages for text in page.texts()]


def _context(store, school=SCHOOL, tmp_path=None):
    return BuildContext(
        store=store,
        school=school,
        institution=store.institution(school) if school else None,
        frequency_data=build_frequency_data(store, school) if school else [],
        assets_dir=tmp_path,
    )


# ---------------------------------------------------------------------------
# Cover
# ---------------------------------------------------------------------------


def test_locate_resource_missing(tmp_path):
    with pytest.raises(ResourceMissingError) as excinfo:
        locate_resource(tmp_path, "RLT_logo.jpeg")
    assert "RLT_logo.jpeg" in excinfo.value.resource


def test_cover_draws_logo_placeholders(store, tmp_path):
    surface = PageSurface()

    build_cover(surface, NO_PAGE, _context(store, tmp_path=tmp_path))

    texts = surface.report.pages[0].texts()
    assert "RLT Logo" in texts and "CLT Logo" in texts
    assert not any(isinstance(op, ImageOp) for op in surface.report.pages[0].ops)
    assert SCHOOL.upper() in texts
    assert "Medellín" in texts


def test_cover_draws_logos_from_assets_dir(store, tmp_path):
    for filename in config.LOGO_FILES:
        (tmp_path / filename).write_bytes(b"")
    surface = PageSurface()

    with patch("src.rendering.pages.cover.ImageReader") as reader:
        reader.return_value.getSize.return_value = (200, 100)
        build_cover(surface, NO_PAGE, _context(store, tmp_path=tmp_path))

    images = [op for op in surface.report.pages[0].ops if isinstance(op, ImageOp)]
    assert [op.source for op in images] == [str(tmp_path / f) for f in config.LOGO_FILES]
    assert "RLT Logo" not in surface.report.pages[0].texts()


def test_default_assets_dir_ships_with_package():
    assert config.ASSETS_DIR.name == "assets"
    assert config.ASSETS_DIR.is_dir()


def test_cover_unknown_territory(store, tmp_path):
    surface = PageSurface()
    build_cover(surface, NO_PAGE, _context(store, OTHER_SCHOOL, tmp_path))
    assert UNKNOWN_TERRITORY in surface.report.pages[0].texts()


def test_cover_without_school_has_no_name_box(store, tmp_path):
    surface = PageSurface()
    build_cover(surface, NO_PAGE, _context(store, None, tmp_path))
    assert "ENTIDAD TERRITORIAL:" not in surface.report.pages[0].texts()


def test_school_name_font_shrinks_with_length():
    assert school_name_font_size("IE UNO") == 16
    assert school_name_font_size("X" * 45) == 12
    assert school_name_font_size("INSTITUCIÓN EDUCATIVA " * 5) <= 10


# ---------------------------------------------------------------------------
# Narrative
# ---------------------------------------------------------------------------


def test_narrative_pages_render_markup_and_footnotes(store):
    surface = PageSurface()
    cursor = build_narrative_intro(surface, NO_PAGE, BuildContext(store=store))
    build_narrative_context(surface, cursor, BuildContext(store=store))

    texts = _all_texts(surface)
    assert surface.report.page_count >= 2
    assert "ENCUESTA DE AMBIENTE ESCOLAR" in texts
    assert any(t.startswith("(1)") for t in texts)
    # markup markers never reach the page
    assert not any("**" in t for t in texts)


# ---------------------------------------------------------------------------
# Demographics / summary / info
# ---------------------------------------------------------------------------


def test_demographics_page(store):
    surface = PageSurface()

    build_demographics(surface, NO_PAGE, _context(store))

    texts = _all_texts(surface)
    assert "ENCUESTADOS" in texts
    for group in RespondentGroup:
        assert any(group.heading in t for t in texts)
    assert "Primaria" in texts


def test_demographics_page_without_data():
    surface = PageSurface()
    empty = InMemoryResponseStore()
    empty.add_institution(InstitutionInfo(SCHOOL))

    build_demographics(surface, NO_PAGE, _context(empty))

    assert NO_DATA_LABEL in _all_texts(surface)


def test_summary_page_has_a_section_per_group(store):
    surface = PageSurface()

    build_summary(surface, NO_PAGE, _context(store))

    texts = _all_texts(surface)
    assert "RESUMEN GENERAL" in texts
    for group in RespondentGroup:
        assert group.heading in texts
    assert "Comunicación" in texts
    # the acudientes average for Comunicación is all "Nunca"
    assert "100%" in texts


def test_no_school_notice(store):
    surface = PageSurface()
    build_no_school_notice(surface, NO_PAGE, BuildContext(store=store))

    assert surface.report.page_count == 1
    assert " ".join(surface.report.pages[0].texts()) == NO_SCHOOL_MESSAGE
