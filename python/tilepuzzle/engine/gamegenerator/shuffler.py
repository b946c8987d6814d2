"""Scrambles the puzzle with a random walk of the hole."""

from __future__ import annotations

import logging
import random

from tilepuzzle.engine.gameplay.engine import MoveEngine
from tilepuzzle.models.grid import Direction

logger = logging.getLogger(__name__)


class ShuffleGenerator:
    """Drives :class:`MoveEngine` with random legal moves.

    Every step goes through the same engine call as player input, so the
    result is always reachable from (and back to) the solved picture.
    """

    def __init__(self, engine: MoveEngine, rng: random.Random | None = None) -> None:
        self.engine = engine
        self.rng = rng or random.Random()

    def default_budget(self) -> int:
        grid = self.engine.grid
        return grid.width * grid.height * 4

    def shuffle(self, moves: int | None = None) -> int:
        """Apply exactly *moves* successful moves and return that count."""
        remaining = self.default_budget() if moves is None else moves
        grid = self.engine.grid
        last: Direction | None = None
        done = 0
        logger.debug("Shuffling %s with %d moves", grid, remaining)

        while remaining > 0:
            # Never step straight back over the previous move.
            d = Direction.random(self.rng, exclude=last.opposite if last else None)
            target = grid.hole.step(d)
            if not grid.contains(target):
                continue
            result = self.engine.try_move(target, user=False)
            if not result:
                continue
            remaining -= 1
            done += 1
            last = d

        logger.info("Shuffle finished after %d moves, hole at %s", done, grid.hole)
        return done
