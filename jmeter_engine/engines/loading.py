"""Loading of automation engines from entry points."""

from collections.abc import Mapping
from importlib.metadata import entry_points
from typing import Any

from jmeter_engine.engines.manifest import EngineManifest

ENTRY_POINT_GROUP = "jmeter_engine.engines"


class EngineNotFoundError(Exception):
    """Raised when no installed engine matches the requested key or token."""


def installed_engines() -> Mapping[str, EngineManifest[Any]]:
    """Load the manifests of all installed engines, keyed by entry point name."""
    return {entry.name: entry.load() for entry in entry_points(group=ENTRY_POINT_GROUP)}


def load_engine_manifest(key: str) -> EngineManifest[Any]:
    """Load an engine manifest by entry point key or engine token.

    The host refers to engines by their token (e.g. ``JMeter2``), while the
    entry point key (e.g. ``jmeter2``) is what the package registers. Either
    is accepted, ignoring case.

    Raises:
        EngineNotFoundError: If no installed engine matches

    """
    wanted = key.casefold()
    engines = installed_engines()
    for name, manifest in engines.items():
        if wanted in (name.casefold(), manifest.info.token.casefold()):
            return manifest

    available = ", ".join(
        f"{name} ({manifest.info.token} {manifest.info.version})"
        for name, manifest in engines.items()
    )
    raise EngineNotFoundError(
        f"No automation engine registered for '{key}'. "
        f"Installed engines: {available or 'none'}"
    )
