"""JMeter automation engine for test-management remote launchers."""
