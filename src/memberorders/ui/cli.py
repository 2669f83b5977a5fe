from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from memberorders.app import initialise_storage, reconcile_member_orders
from memberorders.config import ConfigurationError, configure_logging, get_reconcile_config
from memberorders.domain.reconciliation import SubmissionFetchError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from memberorders.config import ReconcileConfig

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Value must be at least 1: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile member orders into shared plans")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        help="Logging level (defaults to MEMBERORDERS_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile", help="Merge pending member orders into their plans"
    )
    reconcile.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and merge without writing plans or member order statuses",
    )
    reconcile.add_argument(
        "--max-groups",
        type=_positive_int,
        help="Maximum number of plan groups processed concurrently (defaults to config)",
    )
    reconcile.add_argument(
        "--max-writes",
        type=_positive_int,
        help="Maximum concurrent status writes per plan group (defaults to config)",
    )

    subparsers.add_parser("init-db", help="Create the member order tables")

    return parser.parse_args(list(argv))


def _reconcile_config(args: argparse.Namespace) -> ReconcileConfig:
    config = get_reconcile_config()
    if args.max_groups is not None:
        config = replace(config, max_concurrent_groups=args.max_groups)
    if args.max_writes is not None:
        config = replace(config, max_concurrent_writes=args.max_writes)
    return config


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        configure_logging(level=parsed_args.log_level)
        if parsed_args.command == "reconcile":
            report = reconcile_member_orders(
                config=_reconcile_config(parsed_args),
                dry_run=parsed_args.dry_run,
            )
            if report.aborted or report.failed or report.failed_writes:
                log.warning(
                    "%d plan groups aborted, %d failed and %d status writes failed; "
                    "their member orders stay pending",
                    report.aborted,
                    report.failed,
                    report.failed_writes,
                )
        elif parsed_args.command == "init-db":
            initialise_storage()
            log.info("Member order tables are ready")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except SubmissionFetchError:
        log.exception("Could not load pending member orders")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
