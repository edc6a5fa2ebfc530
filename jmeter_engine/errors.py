"""Errors raised while executing a test run."""

from pathlib import Path


class EngineError(Exception):
    """Base class for failures the engine classifies itself."""


class ConfigurationError(EngineError):
    """Raised when the engine configuration does not point at a usable JMeter."""


class InputError(EngineError):
    """Raised when the test run request cannot be executed as given."""


class UnsupportedOperationError(InputError):
    """Raised for test runs using a feature the engine does not support."""


class MissingOutputError(EngineError):
    """Raised when JMeter exits without producing a result log."""


class UnparseableOutputError(EngineError):
    """Raised when the result log is not well-formed XML.

    The raw log text is kept on the exception so the failure report can show
    what JMeter actually wrote.
    """

    def __init__(self, path: Path, raw_content: str) -> None:
        super().__init__(
            f"Unable to parse the JMeter XML output file '{path}' - {raw_content}"
        )
        self.path = path
        self.raw_content = raw_content
