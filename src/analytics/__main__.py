"""Standalone entry point: python -m src.analytics"""
import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

from src.analytics.runner import ANALYSIS_RESULTS_FILE, analyze_data
from src.config import get_log_directory, load_settings
from src.errors import AnalysisError
from src.logging_config import logging_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.analytics",
        description="Analyze a support-platform XML export and estimate migration time",
    )
    parser.add_argument(
        "--samples",
        action="store_true",
        help="Analyze the bundled sample data in data/source/samples",
    )
    parser.add_argument(
        "--source-dir",
        default=None,
        help="Directory containing tickets.xml, users.xml, organizations.xml "
        "(default: $SOURCE_DIR or data/source)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for analysis_results.json (default: mapping/ next to the source dir)",
    )
    parser.add_argument(
        "--requests-per-minute",
        type=int,
        default=None,
        help="API rate limit used for the time estimate (default: $REQUESTS_PER_MINUTE or 75)",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for info.log and error.log (default: $LOG_DIR or logs)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    with logging_session(get_log_directory(args.log_dir)) as logger:
        try:
            settings = load_settings(
                use_samples=args.samples,
                source_dir=args.source_dir,
                output_dir=args.output_dir,
                log_dir=args.log_dir,
                requests_per_minute=args.requests_per_minute,
            )
            logger.info(f"Starting analysis of support export data from {settings.source_dir}...")
            results = analyze_data(
                settings.source_dir,
                output_dir=settings.output_dir,
                requests_per_minute=settings.requests_per_minute,
            )
        except (AnalysisError, ValueError) as e:
            logger.error(f"Analysis failed: {e}")
            return 1

        logger.info("Analysis complete! Summary:")
        logger.info(f"Total Tickets: {results.tickets.total}")
        logger.info(f"Total Users: {results.users.total}")
        logger.info(f"Total Organizations: {results.organizations.total}")
        logger.info(f"Estimated migration time: {results.estimated_time_minutes} minutes")
        logger.info(f"Full results saved to {settings.output_dir / ANALYSIS_RESULTS_FILE}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
