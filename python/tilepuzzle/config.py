"""Puzzle configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tilepuzzle.models.grid import Cell

DEFAULT_SIZE = 10
DEFAULT_MOVE_DURATION_MS = 500
DEFAULT_SHUFFLE_DELAY_MS = 2000
DEFAULT_STEP_MS = 50


class Corner(StrEnum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


@dataclass(frozen=True)
class PuzzleConfig:
    """Everything a session needs to know before the first move."""

    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    move_duration_ms: int = DEFAULT_MOVE_DURATION_MS
    shuffle_moves: int | None = None
    hole_corner: Corner = Corner.TOP_RIGHT
    shuffle_delay_ms: int = DEFAULT_SHUFFLE_DELAY_MS
    step_ms: int = DEFAULT_STEP_MS

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise ValueError(
                f"Puzzle must be at least 2×2, got {self.width}×{self.height}."
            )
        if self.move_duration_ms <= 0 or self.step_ms <= 0:
            raise ValueError("Animation durations must be positive.")
        if self.shuffle_delay_ms < 0:
            raise ValueError("Shuffle delay cannot be negative.")
        if self.shuffle_moves is not None and self.shuffle_moves < 0:
            raise ValueError("Shuffle budget cannot be negative.")

    @classmethod
    def from_dimensions(
        cls, width: int | None = None, height: int | None = None, **overrides
    ) -> PuzzleConfig:
        """Build a config where a missing dimension copies the other one.

        With neither given the puzzle is ``DEFAULT_SIZE × DEFAULT_SIZE``.
        """
        if width is None and height is None:
            width = height = DEFAULT_SIZE
        elif width is None:
            width = height
        elif height is None:
            height = width
        return cls(width=width, height=height, **overrides)

    # -- derived values -------------------------------------------------------

    @property
    def shuffle_budget(self) -> int:
        if self.shuffle_moves is not None:
            return self.shuffle_moves
        return self.width * self.height * 4

    @property
    def hole_cell(self) -> Cell:
        """Cell that holds the hole in the solved picture."""
        x = self.width - 1 if self.hole_corner in (Corner.TOP_RIGHT, Corner.BOTTOM_RIGHT) else 0
        y = self.height - 1 if self.hole_corner in (Corner.BOTTOM_LEFT, Corner.BOTTOM_RIGHT) else 0
        return Cell(x, y)
