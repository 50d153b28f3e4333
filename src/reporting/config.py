"""Configuration constants for the reporting pipeline.

The cover looks for two logos, `RLT_logo.jpeg` (left) and `CLT_logo.jpeg`
(right), in `REPORT_ASSETS_DIR`, which defaults to the `src/assets`
directory shipped with the package. A missing file is drawn as a labelled
placeholder box.
"""
from __future__ import annotations

import os
from pathlib import Path

# Worker threads used by ReportPipeline.generate_all_reports
MAX_WORKERS: int = max(1, int(os.getenv("REPORT_MAX_WORKERS", "4")))

# Directory holding the cover logos (RLT_logo.jpeg, CLT_logo.jpeg)
ASSETS_DIR: Path = Path(
    os.getenv("REPORT_ASSETS_DIR", str(Path(__file__).resolve().parent.parent / "assets"))
)

# Responses each group needs before a school's report is considered complete
MIN_RESPONSES_PER_GROUP: int = int(os.getenv("REPORT_MIN_RESPONSES_PER_GROUP", "25"))

# "Siempre" percentage under which a detail grid cell is highlighted
LOW_SCORE_THRESHOLD: int = int(os.getenv("REPORT_LOW_SCORE_THRESHOLD", "50"))

# Logging level used by the CLI bootstrap
LOG_LEVEL: str = os.getenv("REPORT_LOG_LEVEL", "INFO").upper()

# Program name shown in the page header band
PROGRAM_NAME: str = os.getenv("REPORT_PROGRAM_NAME", "Programa RLT y CLT")

# Document title shown in the page header band
REPORT_TITLE: str = "Informe Encuesta de Ambiente Escolar"

# Logo files looked up in ASSETS_DIR, left to right on the cover
LOGO_FILES = ("RLT_logo.jpeg", "CLT_logo.jpeg")
