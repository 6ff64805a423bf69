"""Speedrun split formatting and classification."""

__version__ = "0.1.0"
