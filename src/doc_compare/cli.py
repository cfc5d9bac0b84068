"""
doc_compare.cli

Command-line front end: compare two PDFs and print or save the report.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from compare_utils.errors import DocCompareError
from compare_utils.report import render_html_report, render_text_report, report_to_json

from .options import RASTER_FAILURE_POLICIES, ComparisonOptions, options_from_env
from .orchestrator import compare_documents

logger = logging.getLogger(__name__)

EXIT_FAILURE = 2


def _configure_logging(level_name: Optional[str]) -> None:
    # Allow overriding log level via env var; default to WARNING to keep stdout clean
    level_name = (level_name or os.environ.get("DOC_COMPARE_LOG_LEVEL", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def build_parser(defaults: ComparisonOptions) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-compare",
        description="Compare two PDFs by text content and visual layout",
    )
    parser.add_argument("pdf_a", help="Path to the original PDF")
    parser.add_argument("pdf_b", help="Path to the PDF to compare")
    parser.add_argument(
        "--threshold",
        type=float,
        default=defaults.pixel_threshold,
        help="Per-pixel colour tolerance in [0, 1] (default: %(default)s)",
    )
    parser.add_argument(
        "--max-samples",
        type=int,
        default=defaults.max_text_samples,
        help="Example words listed per removed/added category (default: %(default)s)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=defaults.scale,
        help="Render zoom, 1.0 = 72dpi (default: %(default)s)",
    )
    parser.add_argument(
        "--on-raster-error",
        dest="raster_failure",
        choices=RASTER_FAILURE_POLICIES,
        default=defaults.raster_failure,
        help="Abort, or compare an unrenderable page as blank (default: %(default)s)",
    )
    parser.add_argument("--format", choices=("text", "json", "html"), default="text", help="Report format")
    parser.add_argument("--out", dest="out", default=None, help="Write the report to this path instead of stdout")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $DOC_COMPARE_LOG_LEVEL or WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        defaults = options_from_env()
    except ValueError as e:
        print(f"doc-compare: invalid environment setting: {e}", file=sys.stderr)
        return EXIT_FAILURE

    parser = build_parser(defaults)
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        options = ComparisonOptions(
            pixel_threshold=args.threshold,
            max_text_samples=args.max_samples,
            scale=args.scale,
            raster_failure=args.raster_failure,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        report = compare_documents(args.pdf_a, args.pdf_b, options=options)
    except DocCompareError as e:
        logger.debug("comparison failed", exc_info=True)
        print(f"Comparison failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.format == "html":
        meta = {"A": Path(args.pdf_a).name, "B": Path(args.pdf_b).name}
        output = render_html_report(report, meta=meta)
    elif args.format == "json":
        output = report_to_json(report) + "\n"
    else:
        output = render_text_report(report)

    if args.out:
        Path(args.out).write_text(output, encoding="utf-8")
        logger.info("Report written to %s", args.out)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
