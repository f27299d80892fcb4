"""locale-sync – Command line entry point.

    locale-sync [REFERENCE_FILE] [--locales-dir DIR] [--workers N]
                [--skip-invalid-targets] [--repair-type-mismatches]
                [--log-level LEVEL] [--log-format {console,json}]

AWS credentials and region are read from the environment or a .env file
(AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_REGION).
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Optional, Sequence

import structlog

from config.settings import Settings, get_settings
from locale_sync.core.errors import SyncError
from locale_sync.core.instrumentation import setup_logging
from locale_sync.sync.orchestrator import SyncOrchestrator

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locale-sync",
        description="Synchronize locale JSON files with a reference file, "
                    "machine-translating missing keys and removing obsolete ones.",
    )
    parser.add_argument(
        "reference_file",
        nargs="?",
        help="Reference file relative to the locales directory (default: en/en.json)",
    )
    parser.add_argument("--locales-dir", help="Directory holding the locale files")
    parser.add_argument("--workers", type=int, help="Concurrent translation calls per locale")
    parser.add_argument(
        "--skip-invalid-targets",
        action="store_true",
        default=None,
        help="Skip locales whose file is missing or malformed instead of aborting",
    )
    parser.add_argument(
        "--repair-type-mismatches",
        action="store_true",
        default=None,
        help="Replace target subtrees where the reference has a plain string",
    )
    parser.add_argument("--log-level", help="debug, info, warning, error")
    parser.add_argument("--log-format", choices=["console", "json"])
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with every explicitly given CLI flag applied."""
    overrides: dict[str, Any] = {
        "reference_file": args.reference_file,
        "locales_dir": args.locales_dir,
        "translate_max_workers": args.workers,
        "skip_invalid_targets": args.skip_invalid_targets,
        "repair_type_mismatches": args.repair_type_mismatches,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    return settings.model_copy(update=update) if update else settings


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(settings or get_settings(), args)
    setup_logging(settings.log_level, settings.log_format)

    try:
        report = SyncOrchestrator(settings).run()
    except SyncError as e:
        logger.error("sync.failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if report.translation_failures:
        logger.warning(
            "sync.untranslated",
            count=report.translation_failures,
            hint="search the locale files for TO_BE_TRANSLATED",
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
