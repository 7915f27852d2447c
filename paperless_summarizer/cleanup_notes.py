"""
Paperless Summarizer - cleanup entry point.

Deletes summary notes written by the summarizer.

Examples:
    # Remove every summary note on every document
    paperless-cleanup-notes all

    # Remove the summary notes of document 42
    paperless-cleanup-notes 42
"""

import argparse
import sys

from paperless_summarizer.cleanup import CleanupOrchestrator, parse_cleanup_target
from paperless_summarizer.exceptions import PaperlessSummarizerError, UsageError
from paperless_summarizer.logging_config import critical
from paperless_summarizer.paperless import PaperlessClient
from paperless_summarizer.settings import (
    load_environment_configuration,
    load_summarizer_configuration,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='paperless-cleanup-notes',
        description="Delete AI summary notes from Paperless documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split('Examples:', 1)[1],
    )
    parser.add_argument(
        'target',
        help='"all" to clean every document, or a positive document ID',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Validate the argument, then run the selected cleanup mode.

    Usage errors exit with status 2 before the environment is read or any
    request is made.
    Returns 1 when a deletion failed or an all-mode crawl stopped early.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        target = parse_cleanup_target(args.target)
    except UsageError as e:
        parser.error(str(e))

    try:
        environment = load_environment_configuration()
        configuration = load_summarizer_configuration()
        client = PaperlessClient(environment.paperless_url, environment.api_key)
        result = CleanupOrchestrator(client, configuration.summary_marker).run(target)
    except PaperlessSummarizerError as e:
        critical(f"[CLEANUP] {e}")
        return 1

    return 0 if result.completed and not result.failed_notes else 1


if __name__ == "__main__":
    sys.exit(main())
