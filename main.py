"""
main.py: peer review score report.

Usage:
    FOUNDERS="Tom,Jerry" python main.py goals.json ratings/*.json

Reads one goals document and any number of ratings documents, prints the
per-person weighted score table. Exit code 1 when FOUNDERS is missing or
there is not exactly one goals document.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from config import get_settings
from core.review.errors import ConfigurationError
from core.review.loader import load_documents
from core.review.pipeline import build_review_report
from core.review.report import generate_text_report

# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

logger = logging.getLogger("peerscore")

# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="peer-scores",
        description="Aggregate peer-review ratings against a goals document",
    )
    p.add_argument("files", nargs="+", metavar="FILE", help="Goals and ratings JSON documents")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)

    try:
        # founders are checked before any file is touched
        config = settings.review_config()

        logger.info("Review started: files=%d founders=%s", len(args.files), ",".join(config.founders))
        documents = load_documents(args.files, max_workers=settings.MAX_LOAD_WORKERS)
        report = build_review_report(documents=documents, config=config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(generate_text_report(report))
    logger.info(
        "Review complete: people=%d filled=%d required=%d invalid=%d",
        len(report.results),
        report.scores_filled_total,
        report.scores_required_total,
        len(report.invalid_files),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
