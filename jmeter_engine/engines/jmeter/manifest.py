"""JMeter automation engine manifest."""

from jmeter_engine.engines.jmeter.config import JMeterConfig
from jmeter_engine.engines.jmeter.engine import JMETER_ENGINE_INFO, JMeterEngine
from jmeter_engine.engines.manifest import EngineManifest

jmeter_manifest = EngineManifest(
    info=JMETER_ENGINE_INFO,
    config_cls=JMeterConfig,
    engine_factory=JMeterEngine.from_config,
)
