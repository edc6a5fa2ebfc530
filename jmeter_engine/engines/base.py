"""Abstract base class for automation engines."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Literal
from uuid import UUID

from jmeter_engine.models.test_run import AutomatedTestRun

type EngineStatus = Literal["ok", "error"]


@dataclass(frozen=True, kw_only=True)
class EngineInfo:
    """Static metadata the host uses to identify an engine."""

    extension_id: UUID
    name: str
    token: str
    version: str
    author: str


@dataclass(kw_only=True)
class AutomationEngine(ABC):
    """Abstract base for automation engines.

    An engine runs one automated test run at a time and reports its outcome
    by populating the run it was given. The status reflects the last run.
    """

    info: ClassVar[EngineInfo]

    status: EngineStatus = "ok"

    @abstractmethod
    async def start_execution(self, test_run: AutomatedTestRun) -> AutomatedTestRun:
        """Execute a test run and return it populated with its outcome.

        Args:
            test_run: Test run requested by the host

        Returns:
            The same test run with runner, dates, status and messages set

        Raises:
            Exception: Any failure is re-raised unchanged after logging

        """
