from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from vendorrecon.app import (
    import_inventory_snapshot,
    list_review_entries,
    reconcile_vendor_feed,
)
from vendorrecon.config import ConfigurationError, configure_logging, get_engine_config
from vendorrecon.domain.model import ReviewReason

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from vendorrecon.config import EngineConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vendorrecon",
        description="Reconcile vendor catalog feeds against inventory",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-record decisions (DEBUG level)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Reconcile a vendor CSV feed")
    reconcile.add_argument("feed", type=Path, help="Vendor catalog CSV export")
    target = reconcile.add_mutually_exclusive_group()
    target.add_argument(
        "--database",
        type=str,
        help="Database URI of the inventory mirror (defaults to DATABASE_URI or the data dir)",
    )
    target.add_argument(
        "--gateway",
        action="store_true",
        help="Use the inventory gateway (INVENTORY_GATEWAY_URL) instead of the mirror",
    )
    reconcile.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute outcomes without writing patches or review entries",
    )
    reconcile.add_argument(
        "--workers",
        type=int,
        help="Maximum number of records processed concurrently (defaults to config)",
    )

    review = subparsers.add_parser("review", help="List queued review entries")
    review.add_argument(
        "--reason",
        type=str,
        choices=[reason.value for reason in ReviewReason],
        help="Only list entries queued for this reason",
    )
    review.add_argument(
        "--limit",
        type=int,
        help="Maximum number of entries to list",
    )
    review.add_argument("--database", type=str, help="Database URI of the review queue")

    snapshot = subparsers.add_parser(
        "import-inventory",
        help="Load an inventory snapshot export into the mirror",
    )
    snapshot.add_argument("snapshot", type=Path, help="Inventory snapshot CSV export")
    snapshot.add_argument("--database", type=str, help="Database URI of the inventory mirror")

    return parser.parse_args(list(argv))


def _engine_config(args: argparse.Namespace) -> EngineConfig:
    config = get_engine_config()
    if args.workers is not None:
        if args.workers < 1:
            raise ValueError("--workers must be at least 1")
        config = replace(config, max_workers=args.workers)
    return config


def _validate(args: argparse.Namespace) -> None:
    if args.command == "review" and args.limit is not None and args.limit < 1:
        raise ValueError("--limit must be at least 1")
    if args.command == "reconcile" and not args.feed.is_file():
        raise ValueError(f"Feed file not found: {args.feed}")
    if args.command == "import-inventory" and not args.snapshot.is_file():
        raise ValueError(f"Snapshot file not found: {args.snapshot}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(verbose=parsed_args.verbose)
        _validate(parsed_args)
        config = _engine_config(parsed_args) if parsed_args.command == "reconcile" else None
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            report = reconcile_vendor_feed(
                parsed_args.feed,
                use_gateway=parsed_args.gateway,
                dry_run=parsed_args.dry_run,
                config=config,
                database_uri=parsed_args.database,
            )
            for name, count in report.summary().items():
                log.info("%s: %s", name, count)
        elif parsed_args.command == "review":
            entries = list_review_entries(
                reason=ReviewReason(parsed_args.reason) if parsed_args.reason else None,
                limit=parsed_args.limit,
                database_uri=parsed_args.database,
            )
            for entry in entries:
                item = entry.context.item_number if entry.context is not None else "-"
                log.info(
                    "%s %s sku=%s upc=%s item=%s %s",
                    entry.created_at.isoformat(timespec="seconds"),
                    entry.reason.value,
                    entry.record.vendor_sku,
                    entry.record.upc,
                    item,
                    entry.detail or "",
                )
            log.info("%s review entr%s", len(entries), "y" if len(entries) == 1 else "ies")
        elif parsed_args.command == "import-inventory":
            result = import_inventory_snapshot(
                parsed_args.snapshot,
                database_uri=parsed_args.database,
            )
            log.info(
                "Inventory import finished: imported=%s, skipped=%s, rejected=%s",
                result.imported,
                result.skipped,
                result.rejected,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
