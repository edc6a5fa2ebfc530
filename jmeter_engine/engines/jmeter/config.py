"""Configuration for the JMeter automation engine."""

import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field

from jmeter_engine.tokens import SpecialFolders


def default_executable_name() -> str:
    """Name of the JMeter launcher script for the current platform."""
    return "jmeter.bat" if sys.platform == "win32" else "jmeter"


def default_output_dir() -> Path:
    """Folder the engine writes JMeter result logs to."""
    if local_app_data := os.environ.get("LOCALAPPDATA"):
        return Path(local_app_data) / "RemoteLaunch"
    data_home = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(data_home) / "RemoteLaunch"


class JMeterConfig(BaseModel):
    """Configuration for the JMeter automation engine.

    Only location and trace_logging are exposed on the settings panel, the
    remaining fields default to platform conventions.
    """

    location: Path = Field(
        default=Path(), description="JMeter bin folder containing the launcher"
    )
    trace_logging: bool = False
    executable_name: str = Field(default_factory=default_executable_name)
    output_dir: Path = Field(default_factory=default_output_dir)
    keep_output_log: bool = True
    special_folders: SpecialFolders = Field(default_factory=SpecialFolders)
