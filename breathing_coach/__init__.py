"""Guided-breathing session controller with a persisted daily quota."""

__version__ = "0.1.0"
