"""Data models shared by automation engines."""
