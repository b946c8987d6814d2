"""Sliding tile puzzle core."""

__version__ = "0.1.0"
