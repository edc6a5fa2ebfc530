"""JMeter automation engine module."""

from jmeter_engine.engines.jmeter.config import JMeterConfig
from jmeter_engine.engines.jmeter.engine import JMeterEngine
from jmeter_engine.engines.jmeter.manifest import jmeter_manifest

__all__ = ["JMeterConfig", "JMeterEngine", "jmeter_manifest"]
