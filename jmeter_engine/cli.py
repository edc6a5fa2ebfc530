"""CLI entry point for running JMeter test runs outside of the host."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from jmeter_engine.engines.loading import load_engine_manifest
from jmeter_engine.models.test_run import AutomatedTestRun
from jmeter_engine.settings import (
    DEFAULT_SETTINGS_FILE,
    SettingsPanel,
    load_settings,
)

DEFAULT_ENGINE = "jmeter2"

STATUS_SYMBOLS = {
    "Passed": "✓",
    "Failed": "✗",
    "NotApplicable": "-",
}

EXIT_CODES = {
    "Passed": 0,
    "NotApplicable": 0,
    "Failed": 1,
}
ENGINE_ERROR_EXIT_CODE = 2


def log_run_summary(log: logging.Logger, test_run: AutomatedTestRun) -> None:
    """Log a formatted summary of a completed test run."""
    log.info("=" * 80)
    log.info("Test Run Summary:")
    log.info("=" * 80)

    symbol = STATUS_SYMBOLS.get(test_run.execution_status, "?")
    log.info(
        "%s %s: %s",
        symbol,
        test_run.runner_test_name,
        test_run.execution_status,
    )
    if test_run.runner_message:
        log.info("  Message: %s", test_run.runner_message)
    for line in test_run.runner_stack_trace.splitlines():
        log.info("  %s", line)


def load_test_run(request_path: Path) -> AutomatedTestRun:
    """Load a test run request from a JSON file.

    Raises:
        ValueError: If the file is not a valid test run request

    """
    return AutomatedTestRun.model_validate_json(request_path.read_text())


async def run(engine_key: str, request_path: Path, settings_path: Path) -> int:
    """Execute a test run and return exit code."""
    log = logging.getLogger("jmeter_engine")

    log.info("Loading engine: %s", engine_key)
    manifest = load_engine_manifest(engine_key)
    config = load_settings(settings_path)
    test_run = load_test_run(request_path)

    async with manifest.engine_factory(config) as engine:
        try:
            await engine.start_execution(test_run)
        except Exception as e:
            print(json.dumps({"status": engine.status, "error": str(e)}, indent=2))
            return ENGINE_ERROR_EXIT_CODE

    log_run_summary(log, test_run)
    print(test_run.model_dump_json(indent=2))
    return EXIT_CODES[test_run.execution_status]


def configure(
    settings_path: Path, location: str | None, trace_logging: bool | None
) -> int:
    """Update the saved settings and print them."""
    panel = SettingsPanel(settings_path)
    if location is not None:
        panel.location = location
    if trace_logging is not None:
        panel.trace_logging = trace_logging
    panel.save()

    print(
        json.dumps(
            {"location": panel.location, "trace_logging": panel.trace_logging},
            indent=2,
        )
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Run JMeter automated test runs")
    parser.add_argument(
        "--settings",
        type=Path,
        default=DEFAULT_SETTINGS_FILE,
        help="Path to the engine settings file",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Execute a test run")
    run_parser.add_argument(
        "--request",
        type=Path,
        required=True,
        help="JSON file describing the test run",
    )
    run_parser.add_argument(
        "--engine",
        default=DEFAULT_ENGINE,
        help="Engine entry point key or token (e.g. jmeter2 or JMeter2)",
    )

    settings_parser = subparsers.add_parser("settings", help="Update engine settings")
    settings_parser.add_argument(
        "--location",
        help="JMeter bin folder containing the launcher",
    )
    settings_parser.add_argument(
        "--trace-logging",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Log every execution step",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "settings":
        exit_code = configure(args.settings, args.location, args.trace_logging)
    else:
        exit_code = asyncio.run(run(args.engine, args.request, args.settings))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
