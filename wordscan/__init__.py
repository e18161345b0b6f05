"""Concurrent text corpus analysis."""

__version__ = "0.1.0"
