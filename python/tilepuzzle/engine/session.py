"""Orchestrates a single puzzle session.

Wires the grid, move engine, shuffler, input resolver and (optionally) the
animation scheduler together, runs the delayed initial shuffle, restores
saved state and raises the "solved" signal.  Everything runs on the host's
loop: hosts call :meth:`PuzzleSession.update` once per frame.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from enum import StrEnum

from tilepuzzle.config import PuzzleConfig
from tilepuzzle.engine.animation.scheduler import AnimationScheduler, monotonic_ms
from tilepuzzle.engine.gamegenerator.shuffler import ShuffleGenerator
from tilepuzzle.engine.gameplay.engine import MoveEngine, MoveResult
from tilepuzzle.engine.input.resolver import InputResolver, PointerEvent
from tilepuzzle.engine.persistence.codec import PersistenceCodec, PersistenceFormatError
from tilepuzzle.models.grid import Cell, Direction, GridState
from tilepuzzle.models.savedstate import SavedGame

logger = logging.getLogger(__name__)


class Decision(StrEnum):
    SHUFFLE = "shuffle"
    TERMINATE = "terminate"


class PuzzleSession:
    def __init__(
        self,
        config: PuzzleConfig,
        animator: AnimationScheduler | None = None,
        clock: Callable[[], int] = monotonic_ms,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.animator = animator
        self._clock = clock
        self.grid = GridState.solved(config.width, config.height, config.hole_cell)
        self.engine = MoveEngine(self.grid, animator, config.move_duration_ms)
        self.shuffler = ShuffleGenerator(self.engine, rng)
        self.resolver = InputResolver(self.engine)

        self.awaiting_decision = False
        self.terminated = False
        self._shuffle_at: int | None = None
        self._solved_listeners: list[Callable[[], None]] = []

    # -- lifecycle ------------------------------------------------------------

    def start(self, saved: SavedGame | Sequence[int] | None = None) -> bool:
        """Restore *saved* if it fits, otherwise schedule a fresh shuffle.

        A :class:`SavedGame` must match the configured dimensions and hole
        corner; a bare sequence is decoded as is.  Returns True when the
        saved arrangement was restored.
        """
        if saved is not None:
            try:
                if isinstance(saved, SavedGame):
                    saved = self._matching_tiles(saved)
                PersistenceCodec.decode(saved, self.grid)
            except PersistenceFormatError as exc:
                logger.warning("Discarding saved state: %s", exc)
            else:
                logger.info("Restored %d×%d puzzle", self.grid.width, self.grid.height)
                return True
        self._shuffle_at = self._clock() + self.config.shuffle_delay_ms
        logger.info(
            "Started %d×%d puzzle, shuffling in %d ms",
            self.grid.width,
            self.grid.height,
            self.config.shuffle_delay_ms,
        )
        return False

    def update(self, now_ms: int | None = None) -> int | None:
        """Run whatever is due; returns the animator's next delay, if any."""
        now = self._clock() if now_ms is None else now_ms
        if self._shuffle_at is not None and now >= self._shuffle_at:
            self._shuffle_at = None
            self.shuffle()
        if self.animator is not None and self.animator.due(now):
            return self.animator.tick(now)
        return None

    @property
    def shuffle_pending(self) -> bool:
        return self._shuffle_at is not None

    def shuffle(self, moves: int | None = None) -> int:
        self._shuffle_at = None
        self.resolver.reset()
        budget = self.config.shuffle_budget if moves is None else moves
        return self.shuffler.shuffle(budget)

    def snapshot(self) -> list[int]:
        return PersistenceCodec.encode(self.grid)

    def saved_game(self) -> SavedGame:
        return SavedGame(
            self.config.width,
            self.config.height,
            str(self.config.hole_corner),
            tuple(self.snapshot()),
        )

    def _matching_tiles(self, saved: SavedGame) -> tuple[int, ...]:
        cfg = self.config
        if (saved.width, saved.height) != (cfg.width, cfg.height):
            raise PersistenceFormatError(
                f"saved for a {saved.width}×{saved.height} puzzle, not {cfg.width}×{cfg.height}"
            )
        if saved.hole_corner != str(cfg.hole_corner):
            raise PersistenceFormatError(
                f"saved with the hole {saved.hole_corner}, not {cfg.hole_corner}"
            )
        return saved.tiles

    # -- input ----------------------------------------------------------------

    def handle_pointer(self, event: PointerEvent) -> MoveResult | None:
        if self.awaiting_decision or self.terminated:
            return None
        return self._after_move(self.resolver.handle(event))

    def move_toward(self, direction: Direction) -> MoveResult | None:
        """Slide the tile next to the hole one cell in *direction*."""
        if self.awaiting_decision or self.terminated:
            return None
        source = self.grid.hole.step(direction.opposite)
        return self._after_move(self.engine.try_move(source))

    def try_move(self, target: Cell) -> MoveResult | None:
        if self.awaiting_decision or self.terminated:
            return None
        return self._after_move(self.engine.try_move(target))

    # -- completion -----------------------------------------------------------

    def on_solved(self, callback: Callable[[], None]) -> None:
        self._solved_listeners.append(callback)

    def resolve(self, decision: Decision) -> None:
        """Answer the solved signal."""
        if not self.awaiting_decision:
            return
        self.awaiting_decision = False
        if decision is Decision.SHUFFLE:
            self.shuffle()
        else:
            logger.info("Session terminated after solve")
            self.terminated = True

    def _after_move(self, result: MoveResult | None) -> MoveResult | None:
        if result is not None and result.solved and not self.awaiting_decision:
            self.awaiting_decision = True
            self.resolver.reset()
            logger.info("Puzzle solved")
            for callback in self._solved_listeners:
                callback()
        return result
