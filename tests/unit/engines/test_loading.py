"""Tests for engine loading module."""

from unittest.mock import Mock, patch

import pytest

from jmeter_engine.engines.jmeter import JMeterConfig, JMeterEngine, jmeter_manifest
from jmeter_engine.engines.loading import (
    EngineNotFoundError,
    installed_engines,
    load_engine_manifest,
)


@pytest.mark.parametrize("key", ["jmeter2", "JMeter2", "JMETER2"])
def test_load_engine_manifest_by_key_or_token(key: str) -> None:
    """Loads the manifest by entry point key or engine token."""
    assert load_engine_manifest(key) is jmeter_manifest


def test_installed_engines_includes_jmeter() -> None:
    """Lists the installed engines by entry point key."""
    assert installed_engines()["jmeter2"] is jmeter_manifest


def test_load_engine_manifest_raises_for_unknown_engine() -> None:
    """Lists installed engines with their token and version."""
    with pytest.raises(EngineNotFoundError) as exc_info:
        load_engine_manifest("loadrunner")

    message = str(exc_info.value)
    assert "'loadrunner'" in message
    assert "jmeter2 (JMeter2 3.0.0)" in message


def test_load_engine_manifest_without_engines() -> None:
    """Reports that no engine is installed."""
    with (
        patch("jmeter_engine.engines.loading.entry_points", return_value=[]),
        pytest.raises(EngineNotFoundError, match="Installed engines: none"),
    ):
        load_engine_manifest("jmeter2")


def test_load_engine_manifest_loads_matching_entry() -> None:
    """Matches the token of a manifest registered under another key."""
    entry = Mock()
    entry.name = "jmeter-legacy"
    entry.load.return_value = jmeter_manifest
    with patch("jmeter_engine.engines.loading.entry_points", return_value=[entry]):
        assert load_engine_manifest("jmeter2") is jmeter_manifest


def test_jmeter_manifest_describes_engine() -> None:
    """Manifest exposes the engine metadata, config and factory."""
    assert jmeter_manifest.info is JMeterEngine.info
    assert jmeter_manifest.config_cls is JMeterConfig
    assert jmeter_manifest.engine_factory == JMeterEngine.from_config
