"""End-to-end tests for the report pipeline."""
from __future__ import annotations

import io
import zipfile
from unittest.mock import patch

import pytest

from src.pipeline import ReportPipeline, builders_for, bundle_reports, report_filename
from src.rendering.composer import ERROR_PLACEHOLDER_TEXT
from src.rendering.pages.detail_grid import build_detail_grid
from src.rendering.pages.info import ERROR_TITLE, NO_SCHOOL_MESSAGE, build_no_school_notice
from src.survey.store import InMemoryResponseStore
from tests.factories import OTHER_SCHOOL, SCHOOL


@pytest.fixture()
def pipeline(store, tmp_path) -> ReportPipeline:
    return ReportPipeline(store, assets_dir=tmp_path, max_workers=2)


def test_builders_depend_on_school():
    assert builders_for(None)[-1] is build_no_school_notice
    assert builders_for(SCHOOL)[-1] is build_detail_grid
    assert len(builders_for(None)) == 4


def test_all_schools_report_has_four_pages(pipeline):
    report = pipeline.build_report()

    assert report.page_count == 4
    assert " ".join(report.pages[-1].texts()) == NO_SCHOOL_MESSAGE


def test_school_report_contains_every_section(pipeline):
    report = pipeline.build_report(SCHOOL)
    texts = [t for page in report.pages for t in page.texts()]

    for heading in ("ENCUESTADOS", "RESUMEN GENERAL", "FORTALEZAS Y RETOS"):
        assert heading in texts
    assert ERROR_PLACEHOLDER_TEXT not in texts
    assert report.page_count >= 7


def test_generate_report_returns_pdf(pipeline):
    assert pipeline.generate_report(SCHOOL).startswith(b"%PDF")
    assert pipeline.generate_report().startswith(b"%PDF")


def test_failing_builder_is_contained(pipeline):
    with patch("src.rendering.pages.summary.summarize", side_effect=RuntimeError("no summary")):
        report = pipeline.build_report(SCHOOL)

    texts = [t for page in report.pages for t in page.texts()]
    assert ERROR_PLACEHOLDER_TEXT in texts
    assert "FORTALEZAS Y RETOS" in texts


def test_pipeline_failure_yields_error_page(pipeline):
    with patch("src.pipeline.build_frequency_data", side_effect=RuntimeError("store exploded")), patch(
        "src.pipeline.write_pdf", return_value=b"%PDF-error"
    ) as write_mock:
        data = pipeline.generate_report(SCHOOL)

    assert data == b"%PDF-error"
    error_report = write_mock.call_args.args[0]
    assert error_report.page_count == 1
    texts = error_report.pages[0].texts()
    assert texts[0] == ERROR_TITLE
    assert "store exploded" in " ".join(texts)


def test_generate_all_reports(pipeline):
    with patch("src.pipeline.write_pdf", side_effect=lambda report: report.title.encode()):
        reports = pipeline.generate_all_reports()

    assert list(reports) == sorted([SCHOOL, OTHER_SCHOOL])
    assert reports[SCHOOL].decode().endswith(SCHOOL)


def test_generate_all_reports_without_schools(tmp_path):
    assert ReportPipeline(InMemoryResponseStore(), assets_dir=tmp_path).generate_all_reports() == {}


def test_report_filename():
    assert report_filename("IE San José") == "frequency-report-ie_san_jos_.pdf"


def test_bundle_reports():
    data = bundle_reports({"IE Uno": b"%PDF-1", "IE-Uno": b"%PDF-2", "IE Dos": b"%PDF-3"})

    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        names = archive.namelist()
        assert names == [
            "frequency-report-ie_uno.pdf",
            "frequency-report-ie_uno-2.pdf",
            "frequency-report-ie_dos.pdf",
        ]
        assert archive.read("frequency-report-ie_dos.pdf") == b"%PDF-3"


def test_require_school(pipeline):
    assert pipeline.require_school(SCHOOL) == SCHOOL
    with pytest.raises(ValueError, match="IE San Jose"):
        pipeline.require_school("IE San Jose")
