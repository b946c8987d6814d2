"""Puzzle engine: moves, shuffling, animation timing, input and persistence."""
