"""Deterministic isometric terrain worlds from contribution calendars."""

__version__ = "0.1.0"
