"""Engine manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from jmeter_engine.engines.base import AutomationEngine, EngineInfo


@dataclass(frozen=True, kw_only=True)
class EngineManifest[ConfigT: BaseModel]:
    """Manifest describing an automation engine plugin.

    The manifest carries the static engine metadata, the configuration class
    and the engine factory so engines can be loaded lazily by key.
    """

    info: EngineInfo
    config_cls: type[ConfigT]
    engine_factory: Callable[[ConfigT], AbstractAsyncContextManager[AutomationEngine]]
