"""Top-level report pipeline: aggregate, compose and serialize.

:class:`ReportPipeline` is the only entry point callers need::

    pipeline = ReportPipeline(store)
    pdf_bytes = pipeline.generate_report("IE San José")
    every_school = pipeline.generate_all_reports()

A report is always returned. Failures inside one page are contained by the
composer; anything escaping composition is turned into a single error page.
"""
from __future__ import annotations

import io
import logging
import re
import time
import zipfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from src.reporting import config
from src.reporting.aggregator import build_frequency_data
from src.rendering.composer import BuildContext, PageBuilder, PageComposer
from src.rendering.document import PageSurface, Report
from src.rendering.pages.cover import build_cover
from src.rendering.pages.demographics import build_demographics
from src.rendering.pages.detail_grid import build_detail_grid
from src.rendering.pages.info import build_no_school_notice, draw_error_page
from src.rendering.pages.narrative import build_narrative_context, build_narrative_intro
from src.rendering.pages.summary import build_summary
from src.rendering.pdf import write_pdf
from src.survey.catalog import CATALOG, Category
from src.survey.store import ResponseStore

logger = logging.getLogger(__name__)

__all__ = ["ReportPipeline", "bundle_reports", "report_filename"]

COMMON_BUILDERS: Sequence[PageBuilder] = (
    build_cover,
    build_narrative_intro,
    build_narrative_context,
)
SCHOOL_BUILDERS: Sequence[PageBuilder] = (
    build_demographics,
    build_summary,
    build_detail_grid,
)
ALL_SCHOOLS_BUILDERS: Sequence[PageBuilder] = (build_no_school_notice,)


def builders_for(school: Optional[str]) -> List[PageBuilder]:
    """Fixed builder order; per-school pages only when a school is given."""
    tail = SCHOOL_BUILDERS if school else ALL_SCHOOLS_BUILDERS
    return [*COMMON_BUILDERS, *tail]


class ReportPipeline:
    """Generate survey reports from a read-only :class:`ResponseStore`."""

    def __init__(
        self,
        store: ResponseStore,
        *,
        catalog: Sequence[Category] = CATALOG,
        assets_dir: Optional[Path] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.assets_dir = Path(assets_dir) if assets_dir else config.ASSETS_DIR
        self.max_workers = max_workers or config.MAX_WORKERS

    # ------------------------------------------------------------------
    # Single report
    # ------------------------------------------------------------------

    def require_school(self, school: str) -> str:
        """Return *school* if the store knows it, else raise ``ValueError``."""
        known = self.store.schools()
        if school not in known:
            raise ValueError(f"Unknown school {school!r}; known schools: {', '.join(known) or 'none'}")
        return school

    def build_report(self, school: Optional[str] = None) -> Report:
        """Compose the page model for *school* (or all schools)."""
        context = BuildContext(
            store=self.store,
            school=school,
            institution=self.store.institution(school) if school else None,
            frequency_data=build_frequency_data(self.store, school, self.catalog) if school else [],
            assets_dir=self.assets_dir,
        )
        report = Report(title=_report_title(school))
        return PageComposer(builders_for(school)).compose(context, report)

    def generate_report(self, school: Optional[str] = None) -> bytes:
        """Return the PDF bytes of the report for *school*.

        Never raises: an unexpected failure yields a one-page error document
        carrying the failure message.
        """
        started = time.perf_counter()
        try:
            report = self.build_report(school)
            data = write_pdf(report)
        except Exception as exc:  # noqa: BLE001 – always hand back a document
            logger.exception(
                "Report generation failed for school=%s",
                school or "*",
                extra={"event": "report_failed", "school": school},
            )
            return self._error_document(school, exc)

        logger.info(
            "Report generated for school=%s pages=%d bytes=%d in %.2fs",
            school or "*",
            report.page_count,
            len(data),
            time.perf_counter() - started,
            extra={"event": "report_generated", "school": school},
        )
        return data

    def _error_document(self, school: Optional[str], exc: Exception) -> bytes:
        surface = PageSurface(Report(title=_report_title(school)))
        draw_error_page(surface, str(exc))
        return write_pdf(surface.report)

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def generate_all_reports(self, schools: Optional[Sequence[str]] = None) -> Dict[str, bytes]:
        """Generate one report per school on a bounded worker pool.

        Each task builds its own report; only the read-only store and the
        immutable catalog are shared. Results are keyed by school name in
        school-list order.
        """
        names = list(schools) if schools is not None else self.store.schools()
        if not names:
            logger.warning("No schools found; nothing to generate.")
            return {}

        logger.info(
            "Generating %d reports with %d workers", len(names), self.max_workers
        )
        results: Dict[str, bytes] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(self.generate_report, name): name for name in names}
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return {name: results[name] for name in names}


def _report_title(school: Optional[str]) -> str:
    suffix = school if school else "Todas las instituciones"
    return f"{config.REPORT_TITLE} - {suffix}"


def report_filename(school: str) -> str:
    """``frequency-report-<name>.pdf`` with non-alphanumerics replaced by ``_``."""
    safe = re.sub(r"[^a-z0-9]", "_", school.lower())
    return f"frequency-report-{safe}.pdf"


def bundle_reports(reports: Mapping[str, bytes]) -> bytes:
    """Pack ``{school: pdf_bytes}`` into a ZIP archive, one entry per school."""
    buffer = io.BytesIO()
    used: Dict[str, int] = {}
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for school, data in reports.items():
            name = report_filename(school)
            # Distinct schools may map to the same safe name.
            if name in used:
                used[name] += 1
                name = name.replace(".pdf", f"-{used[name]}.pdf")
            else:
                used[name] = 1
            archive.writestr(name, data)
    logger.info("Bundled %d reports (%d bytes)", len(reports), buffer.tell())
    return buffer.getvalue()
