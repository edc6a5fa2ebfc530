"""Models for results read back from the JMeter result log."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from jmeter_engine.models.test_run import ExecutionStatus


@dataclass(frozen=True, kw_only=True)
class AssertionResult:
    """Single assertion outcome recorded by JMeter.

    The flags are kept as the raw text found in the log so they can be
    reported back verbatim.
    """

    name: str
    failure: str = "false"
    error: str = "false"
    failure_message: str = ""

    @property
    def failed(self) -> bool:
        return self.failure.lower() == "true"

    @property
    def errored(self) -> bool:
        return self.error.lower() == "true"

    def describe(self) -> str:
        """Format as a single trace line."""
        return (
            f"{self.name}: failure={self.failure}, error={self.error}, "
            f"message='{self.failure_message}'"
        )


@dataclass(frozen=True, kw_only=True)
class ParsedResults:
    """Aggregated verdict of a result log."""

    status: ExecutionStatus
    summary: str = ""
    detail: str = ""
    assertions: Sequence[AssertionResult] = field(default_factory=tuple)
    failure_count: int = 0
    error_count: int = 0
