"""Command-line bootstrap for the survey report engine.

Loads a JSON export of the survey data and writes one PDF report, a ZIP with
every school's report, or the participation monitoring table::

    python -m src.main --data export.json --school "IE San José" --out report.pdf
    python -m src.main --data export.json --all --out reports.zip
    python -m src.main --data export.json --monitoring

Runtime configuration (log level, workers, assets) is read from the
environment; a ``.env`` file in the working directory is honoured.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from src.exceptions import StoreUnavailableError
from src.pipeline import ReportPipeline, bundle_reports, report_filename
from src.reporting import config
from src.reporting.monitoring import build_monitoring
from src.survey.store import load_store

logger = logging.getLogger("school_report")


def configure_logging() -> None:
    logging_level = getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging_level,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="school-report",
        description="Generate school environment survey reports.",
    )
    parser.add_argument("--data", required=True, type=Path, help="JSON export of the survey data")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--school", help="Generate the report of one school")
    mode.add_argument("--all", action="store_true", help="Generate a ZIP with every school's report")
    mode.add_argument("--monitoring", action="store_true", help="Print response counts per school as JSON")
    parser.add_argument("--out", type=Path, help="Output file (defaults to a name derived from the mode)")
    parser.add_argument("--assets", type=Path, help="Directory holding the cover logos")
    return parser


def _default_output(args: argparse.Namespace) -> Path:
    if args.all:
        return Path("frequency-reports.zip")
    if args.school:
        return Path(report_filename(args.school))
    return Path("frequency-report.pdf")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        store = load_store(args.data)
    except (StoreUnavailableError, ValueError) as exc:
        logger.error("Could not load survey data from %s: %s", args.data, exc)
        return 1

    if args.monitoring:
        rows = [entry.to_dict() for entry in build_monitoring(store)]
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return 0

    pipeline = ReportPipeline(store, assets_dir=args.assets)
    if args.school:
        try:
            pipeline.require_school(args.school)
        except ValueError as exc:
            logger.error("%s", exc)
            return 1

    if args.all:
        data = bundle_reports(pipeline.generate_all_reports())
    else:
        data = pipeline.generate_report(args.school)

    out = args.out or _default_output(args)
    out.write_bytes(data)
    logger.info("Wrote %s (%d bytes)", out, len(data))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
