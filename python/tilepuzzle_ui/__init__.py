"""Frontends for the tile puzzle: pygame and PyQt6 windows, a Rich terminal view."""
