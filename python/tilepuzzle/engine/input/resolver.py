"""Turns raw pointer events into taps and drags.

One gesture is tracked at a time, keyed by the pointer id that started it.
Moving onto another cell pushes the tile from the previous cell toward the
new one and keeps the gesture alive, so a finger can sweep several tiles
in one go.  Releasing on the cell that was pressed, without having dragged,
is a tap: the tile slides into the hole if the hole is right next to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from tilepuzzle.engine.gameplay.engine import MoveEngine, MoveResult
from tilepuzzle.models.grid import EMPTY, Cell

logger = logging.getLogger(__name__)


class PointerPhase(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    phase: PointerPhase
    cell: Cell | None
    pointer_id: int = 0


class InputResolver:
    def __init__(self, engine: MoveEngine) -> None:
        self.engine = engine
        self._pointer_id: int | None = None
        self._origin: Cell | None = None
        self._dragged = False
        self.selected: Cell | None = None

    @property
    def touching(self) -> bool:
        return self._pointer_id is not None

    def reset(self) -> None:
        self._pointer_id = None
        self._origin = None
        self._dragged = False
        self.selected = None

    def handle(self, event: PointerEvent) -> MoveResult | None:
        """Feed one pointer event; returns the move it caused, if any."""
        if event.phase is PointerPhase.DOWN:
            return self._down(event)
        if self._pointer_id is None or event.pointer_id != self._pointer_id:
            return None
        if event.phase is PointerPhase.MOVE:
            return self._move(event)
        return self._up(event)

    # -- transitions ----------------------------------------------------------

    def _down(self, event: PointerEvent) -> None:
        if event.cell is None:
            return None
        if self._pointer_id is not None and event.pointer_id != self._pointer_id:
            return None
        self._pointer_id = event.pointer_id
        self._origin = event.cell
        self._dragged = False
        self.selected = event.cell if self.engine.grid.get(event.cell) is not EMPTY else None
        return None

    def _move(self, event: PointerEvent) -> MoveResult | None:
        cell = event.cell
        if cell is None or cell == self._origin:
            return None
        assert self._origin is not None
        self.selected = None
        self._dragged = True
        result = self.engine.drag(self._origin, cell)
        self._origin = cell
        return result

    def _up(self, event: PointerEvent) -> MoveResult | None:
        tap = (
            event.cell is not None
            and event.cell == self._origin
            and not self._dragged
            and self.selected == event.cell
        )
        self.reset()
        if not tap:
            return None
        return self.tap(event.cell)  # type: ignore[arg-type]

    # -- intents --------------------------------------------------------------

    def tap(self, cell: Cell) -> MoveResult | None:
        """Slide the tile at *cell* into an adjacent hole, if there is one."""
        direction = self.engine.neighbour_hole_direction(cell)
        if direction is None:
            logger.debug("Tap on %s: no hole next to it", cell)
            return None
        return self.engine.drag(cell, cell.step(direction))
