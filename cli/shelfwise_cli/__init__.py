"""Shelfwise - terminal client for the library catalogue."""

__version__ = "0.1.0"
