"""
CLI entrypoint for the await-workflows gate.

Invoked as a GitHub Actions step (`await-workflows` or `python main.py`);
inputs normally arrive as INPUT_* environment variables and the flags below
override them for local runs.

Exit codes:
    0 — no matching run in flight (and none failed, with --require-success)
    1 — timeout, failed runs, API or configuration error
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from await_workflows.agents.orchestrator import GateOrchestrator
from await_workflows.core.config import GateConfig
from await_workflows.core.exceptions import ConfigurationError
from await_workflows.models.gate_result import GateResult, GateStatus
from await_workflows.services.results_writer import ResultsWriter
from await_workflows.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="await-workflows",
        description="Wait for other workflow runs on the same commit to finish",
    )
    parser.add_argument("--timeout", type=int, help="Seconds to wait for in-flight runs")
    parser.add_argument("--interval", type=int, help="Seconds between two checks")
    parser.add_argument("--initial-delay", type=int, help="Seconds to sleep before the first check")
    parser.add_argument(
        "--require-success",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail if a matching run failed, was cancelled or timed out "
             "(--no-require-success overrides INPUT_REQUIRE_SUCCESS)",
    )
    parser.add_argument(
        "--workflow",
        action="append",
        dest="include_names",
        metavar="NAME",
        help="Only wait for this workflow (repeatable)",
    )
    parser.add_argument(
        "--exclude-workflow",
        action="append",
        dest="exclude_names",
        metavar="NAME",
        help="Never wait for this workflow (repeatable)",
    )
    parser.add_argument("--log-level", choices=_LOG_LEVELS, help="Logging level (default: INFO)")
    parser.add_argument("--log-dir", help="Also write logs to a file in this directory")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = {
        "timeout": args.timeout,
        "interval": args.interval,
        "initial_delay": args.initial_delay,
        "require_success": args.require_success,
        "include_names": args.include_names,
        "exclude_names": args.exclude_names,
        "log_level": args.log_level,
    }

    try:
        config = GateConfig.from_env(overrides=overrides)
    except ConfigurationError as exc:
        setup_logging(level=args.log_level or logging.INFO, log_dir=args.log_dir)
        logger.error("Invalid configuration: %s", exc)
        ResultsWriter.write_results(GateResult(status=GateStatus.WORKFLOWS_FAILED, message=str(exc)))
        return 1

    setup_logging(level=config.log_level, log_dir=args.log_dir)
    logger.info(config.describe())
    logger.info("")

    try:
        result = asyncio.run(GateOrchestrator(config).run())
    except Exception as exc:
        logger.exception("Unexpected error while awaiting workflows: %s", exc)
        result = GateResult(status=GateStatus.WORKFLOWS_FAILED, message=str(exc))

    ResultsWriter.write_results(result)

    if result.success:
        logger.info("👌 %s", result.message)
        return 0

    logger.error(result.message)
    return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
