"""Taskify: a small task manager backed by MongoDB."""

__version__ = "1.0.0"
