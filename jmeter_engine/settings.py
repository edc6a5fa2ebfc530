"""Persisted settings for the JMeter automation engine."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from jmeter_engine.engines.jmeter.config import JMeterConfig

log = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path.home() / ".config" / "jmeter-engine" / "settings.yaml"


def load_settings(path: Path) -> JMeterConfig:
    """Load engine settings from a YAML file.

    A missing file yields the default settings, so a fresh installation can be
    configured from scratch.

    Raises:
        ValueError: If the file is not valid YAML or does not match the schema

    """
    if not path.exists():
        log.debug("Settings file %s not found, using defaults", path)
        return JMeterConfig()

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return JMeterConfig()

    try:
        return JMeterConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings schema in {path}: {e}") from e


def save_settings(path: Path, config: JMeterConfig) -> None:
    """Write engine settings to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json", exclude_unset=True)
    path.write_text(yaml.safe_dump(data, sort_keys=True))


class SettingsPanel:
    """Editable view over the user-facing engine settings.

    Only the install location and the trace logging flag are editable here;
    other settings in the file are preserved on save.
    """

    def __init__(self, path: Path = DEFAULT_SETTINGS_FILE) -> None:
        self.path = path
        self.location = ""
        self.trace_logging = False
        self.load()

    def load(self) -> None:
        """Load the saved settings into the panel fields."""
        config = load_settings(self.path)
        self.location = str(config.location)
        self.trace_logging = config.trace_logging

    def save(self) -> None:
        """Save the panel fields and reload them."""
        config = load_settings(self.path).model_copy(
            update={
                "location": Path(self.location.strip()),
                "trace_logging": self.trace_logging,
            }
        )
        save_settings(self.path, config)
        self.load()
