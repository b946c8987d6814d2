"""Move validation and application.

A move names the cell that should become the hole.  That cell must share
a row or a column with the current hole; every tile between the two then
shifts one cell toward the old hole, so a single call covers both the
plain one-tile move and the whole-line slide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from tilepuzzle.config import DEFAULT_MOVE_DURATION_MS
from tilepuzzle.models.grid import Cell, Direction, GridState, Tile

logger = logging.getLogger(__name__)


class Animator(Protocol):
    def enqueue(self, tile: Tile, from_cell: Cell, to_cell: Cell, duration_ms: int) -> object: ...


class RejectReason(StrEnum):
    OUT_OF_BOUNDS = "out of bounds"
    IS_HOLE = "target is the hole"
    DIAGONAL = "diagonal move not allowed"
    NO_HOLE = "no hole reachable"


@dataclass(frozen=True)
class Slide:
    tile: Tile
    source: Cell
    target: Cell


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    hole: Cell
    reason: RejectReason | None = None
    slides: tuple[Slide, ...] = field(default=())
    solved: bool = False

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def rejected(cls, hole: Cell, reason: RejectReason) -> MoveResult:
        return cls(accepted=False, hole=hole, reason=reason)


class MoveEngine:
    """Validates and applies moves against a :class:`GridState`.

    User moves that bring the hole back to its home cell also run the
    solved check; shuffle moves (``user=False``) never do.
    """

    def __init__(
        self,
        grid: GridState,
        animator: Animator | None = None,
        move_duration_ms: int = DEFAULT_MOVE_DURATION_MS,
    ) -> None:
        self.grid = grid
        self.animator = animator
        self.move_duration_ms = move_duration_ms

    # -- movement -------------------------------------------------------------

    def try_move(self, target: Cell, *, user: bool = True) -> MoveResult:
        """Make *target* the hole by sliding the tiles between it and the hole."""
        grid = self.grid
        hole = grid.hole
        if not grid.contains(target):
            return self._reject(target, RejectReason.OUT_OF_BOUNDS)
        if target == hole:
            return self._reject(target, RejectReason.IS_HOLE)

        direction = Direction.between(hole, target)
        if direction is None:
            return self._reject(target, RejectReason.DIAGONAL)

        path = [hole]
        while path[-1] != target:
            nxt = path[-1].step(direction)
            if not grid.contains(nxt):
                return self._reject(target, RejectReason.NO_HOLE)
            path.append(nxt)

        # Hole end first: each tile moves into the cell freed by the previous one.
        slides = tuple(
            Slide(tile=grid.get(src), source=src, target=dst)  # type: ignore[arg-type]
            for dst, src in zip(path, path[1:])
        )
        if self.animator is not None:
            for s in slides:
                self.animator.enqueue(s.tile, s.source, s.target, self.move_duration_ms)
        for s in slides:
            grid.slide(s.source)

        solved = user and grid.hole == grid.home_hole and grid.is_solved()
        return MoveResult(accepted=True, hole=grid.hole, slides=slides, solved=solved)

    def drag(self, source: Cell, toward: Cell, *, user: bool = True) -> MoveResult:
        """Push the tile at *source* toward *toward*.

        Only the direction matters: the hole must lie further along it,
        and every tile from *source* up to the hole moves one cell.
        """
        direction = Direction.between(source, toward)
        if direction is None:
            reason = RejectReason.IS_HOLE if source == toward else RejectReason.DIAGONAL
            return self._reject(source, reason)
        if source == self.grid.hole:
            return self._reject(source, RejectReason.IS_HOLE)
        if Direction.between(source, self.grid.hole) is not direction:
            return self._reject(source, RejectReason.NO_HOLE)
        return self.try_move(source, user=user)

    def neighbour_hole_direction(self, cell: Cell) -> Direction | None:
        """Direction from *cell* to an orthogonally adjacent hole, if any."""
        for d in Direction:
            nxt = cell.step(d)
            if self.grid.contains(nxt) and nxt == self.grid.hole:
                return d
        return None

    # -- helpers --------------------------------------------------------------

    def _reject(self, target: Cell, reason: RejectReason) -> MoveResult:
        logger.debug("Rejected move to %s: %s", target, reason.value)
        return MoveResult.rejected(self.grid.hole, reason)
