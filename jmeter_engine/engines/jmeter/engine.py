"""JMeter automation engine implementation."""

import logging
from collections.abc import AsyncGenerator, Iterator
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar
from uuid import UUID

from jmeter_engine.command import (
    build_command,
    normalize_parameters,
    split_script_reference,
)
from jmeter_engine.engines.base import AutomationEngine, EngineInfo
from jmeter_engine.engines.jmeter.config import JMeterConfig
from jmeter_engine.errors import UnsupportedOperationError
from jmeter_engine.models.result import ParsedResults
from jmeter_engine.models.test_run import AutomatedTestRun
from jmeter_engine.results import parse_result_log
from jmeter_engine.runner import run_process
from jmeter_engine.tokens import substitute_arguments, substitute_path

log = logging.getLogger(__name__)

EXTERNAL_SYSTEM_NAME = "JMeter 2.x"
OUTPUT_LOG_NAME = "JMeterEngine_Output.log"
RUNNER_NAME_LENGTH = 13

JMETER_ENGINE_INFO = EngineInfo(
    extension_id=UUID("5C87B5F7-74E8-4662-862E-F3DC3FAD338F"),
    name="Apache JMeter 2.x Automation Engine",
    token="JMeter2",
    version="3.0.0",
    author="Inflectra Corporation",
)


@contextmanager
def output_log(output_dir: Path, *, keep: bool = True) -> Iterator[Path]:
    """Provide a fresh result log path for a single run.

    Any log left over from a previous run is deleted up front. Unless keep is
    set, the log is also deleted once the run is over, whatever the outcome.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / OUTPUT_LOG_NAME
    output_file.unlink(missing_ok=True)
    try:
        yield output_file
    finally:
        if not keep:
            output_file.unlink(missing_ok=True)


@dataclass(kw_only=True)
class JMeterEngine(AutomationEngine):
    """Runs linked JMeter test plans in non-GUI mode.

    Test runs are executed one at a time. All runs of an engine share the same
    result log path, so callers must not start overlapping runs.
    """

    info: ClassVar[EngineInfo] = JMETER_ENGINE_INFO

    config: JMeterConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: JMeterConfig
    ) -> AsyncGenerator["JMeterEngine", None]:
        """Create engine for the given configuration."""
        yield cls(config=config)

    async def start_execution(self, test_run: AutomatedTestRun) -> AutomatedTestRun:
        """Run the test plan referenced by the test run and record its outcome."""
        self.status = "ok"
        try:
            self._trace("Starting test execution")
            start_date = datetime.now(timezone.utc)

            with output_log(
                self.config.output_dir, keep=self.config.keep_output_log
            ) as output_file:
                script_path = await self._run_script(test_run, output_file)
                end_date = datetime.now(timezone.utc)
                results = parse_result_log(output_file)

            self._populate(test_run, script_path, start_date, end_date, results)
        except Exception:
            log.exception("Test execution failed for %s", test_run.filename_or_url)
            self.status = "error"
            raise

        self.status = "ok"
        return test_run

    async def _run_script(self, test_run: AutomatedTestRun, output_file: Path) -> str:
        """Resolve the linked script, run JMeter on it and return the script path."""
        if test_run.type != "linked":
            raise UnsupportedOperationError(
                f"The {EXTERNAL_SYSTEM_NAME} automation engine only supports "
                "linked test scripts"
            )

        folders = self.config.special_folders
        script_path, arguments = split_script_reference(test_run.filename_or_url)
        script_path = substitute_path(script_path, folders)
        arguments = substitute_arguments(arguments, folders, test_run)
        parameters = normalize_parameters(
            test_run.parameters, trace=self.config.trace_logging
        )

        command = build_command(
            script_path,
            arguments,
            parameters,
            output_file,
            install_dir=self.config.location,
            executable_name=self.config.executable_name,
        )
        self._trace(
            "Executing %s test located at %s", EXTERNAL_SYSTEM_NAME, script_path
        )
        self._trace("Running %s", command.command_line)

        returncode = await run_process(command)
        self._trace("%s exited with code %s", EXTERNAL_SYSTEM_NAME, returncode)
        return script_path

    def _populate(
        self,
        test_run: AutomatedTestRun,
        script_path: str,
        start_date: datetime,
        end_date: datetime,
        results: ParsedResults,
    ) -> None:
        if not test_run.runner_name:
            test_run.runner_name = self.info.name[:RUNNER_NAME_LENGTH]
        test_run.runner_test_name = Path(script_path).stem
        test_run.start_date = start_date
        test_run.end_date = end_date
        test_run.execution_status = results.status
        test_run.runner_message = results.summary
        test_run.runner_stack_trace = results.detail

    def _trace(self, message: str, *args: object) -> None:
        if self.config.trace_logging:
            log.info(message, *args)
