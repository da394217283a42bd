"""``storefront-e2e`` command line entry point.

    storefront-e2e wait [--timeout SECONDS] [--interval SECONDS]
    storefront-e2e setup
    storefront-e2e teardown

``wait`` exits 1 when the services do not come up in time.  ``setup`` and
``teardown`` always exit 0 so CI goes on to run the suite, which fails on
its own if the data it needs is missing; pass ``--strict`` to ``setup`` to
exit 1 instead.
"""

import argparse
import asyncio
import logging
from collections.abc import Sequence

from storefront_e2e.config import Settings, settings
from storefront_e2e.logging_config import configure_logging
from storefront_e2e.services.bootstrap import run_global_setup, run_global_teardown
from storefront_e2e.services.health import wait_for_services

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront-e2e",
        description="Prepare the storefront end-to-end test environment.",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit one JSON object per log line")
    subparsers = parser.add_subparsers(dest="command", required=True)

    wait_parser = subparsers.add_parser("wait", help="Wait for the backend and frontend to respond")
    wait_parser.add_argument(
        "--timeout", type=float, default=None, help="Overall timeout in seconds (default: TIMEOUT)"
    )
    wait_parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between polls (default: POLL_INTERVAL)",
    )

    setup_parser = subparsers.add_parser("setup", help="Reset, seed and bootstrap the environment")
    setup_parser.add_argument(
        "--strict", action="store_true", help="Exit 1 when any setup phase fails"
    )

    subparsers.add_parser("teardown", help="Reset the database when CLEANUP_AFTER_TESTS is set")
    return parser


async def _run(args: argparse.Namespace, config: Settings) -> int:
    if args.command == "wait":
        ready = await wait_for_services(config, timeout=args.timeout, interval=args.interval)
        return 0 if ready else 1

    if args.command == "setup":
        report = await run_global_setup(config)
        if report.failed_registrations:
            logger.warning("Registration failed for: %s", ", ".join(report.failed_registrations))
        if args.strict and not report.succeeded:
            return 1
        return 0

    if args.command == "teardown":
        await run_global_teardown(config)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None, config: Settings = settings) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        level=args.log_level or config.log_level, json_logs=args.json_logs or config.json_logs
    )
    return asyncio.run(_run(args, config))


if __name__ == "__main__":
    raise SystemExit(main())
