from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from patchdelta.adapters.extraction import ExtractionFileSource
from patchdelta.app import build_patch_report, list_versions
from patchdelta.config import configure_logging
from patchdelta.domain.versions import display_version, parse_version
from patchdelta.ui.report import render_json

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile game patch data with its changelog")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    diff = subparsers.add_parser("diff", help="Build the change report for one version")
    diff.add_argument(
        "--version",
        type=str,
        help="Provider version to report on (defaults to the newest published one)",
    )
    diff.add_argument(
        "--previous",
        type=str,
        help="Version to compare against (defaults to the one published before --version)",
    )
    changelog = diff.add_mutually_exclusive_group()
    changelog.add_argument(
        "--extraction",
        type=Path,
        help="Model-extracted changelog JSON to use instead of the release notes page",
    )
    changelog.add_argument(
        "--changelog-text",
        type=Path,
        help="Plain heading-delimited changelog text to use instead of the release notes page",
    )
    changelog.add_argument(
        "--no-patch-notes",
        action="store_true",
        help="Skip the changelog entirely and report structural changes only",
    )
    diff.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the JSON report to this file instead of stdout",
    )

    versions = subparsers.add_parser("versions", help="List published versions")
    versions.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Number of versions to list (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    if args.command == "diff":
        for value in (args.version, args.previous):
            if value is not None:
                parse_version(value)
        for path in (args.extraction, args.changelog_text):
            if path is not None and not path.is_file():
                raise ValueError(f"File not found: {path}")
    elif args.command == "versions" and args.limit < 1:
        raise ValueError("--limit must be positive")


def _run_diff(args: argparse.Namespace) -> None:
    result = build_patch_report(
        changelog_source=ExtractionFileSource(args.extraction) if args.extraction else None,
        changelog_text=(
            args.changelog_text.read_text(encoding="utf-8") if args.changelog_text else None
        ),
        version=args.version,
        previous=args.previous,
        use_patch_notes=not args.no_patch_notes,
    )
    rendered = render_json(result)
    if args.output is not None:
        args.output.write_text(rendered + "\n", encoding="utf-8")
        log.info("Wrote report for %s to %s", result.version, args.output)
    else:
        sys.stdout.write(rendered + "\n")


def _run_versions(args: argparse.Namespace) -> None:
    for version in list_versions()[: args.limit]:
        sys.stdout.write(f"{version}\t{display_version(version)}\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        _validate_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "diff":
            _run_diff(parsed_args)
        elif parsed_args.command == "versions":
            _run_versions(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during run")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
