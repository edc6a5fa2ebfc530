"""Automation engine plugin contract."""
