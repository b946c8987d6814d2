"""Tile slide animations on a fixed time step.

Every in-flight slide keeps its current pixel position and the number of
steps left.  Each tick moves it ``(end - current) / steps_left`` pixels on
each axis, truncating toward zero, so it lands exactly on ``end`` when the
last step divides by one.  Truncation makes the early steps up to a
pixel shorter than the later ones.

Ticks are due every ``step_ms`` counted from the previous *scheduled* tick,
not from when the host got round to it, so a late frame is followed by an
immediate catch-up tick instead of stretching the animation.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from tilepuzzle.config import DEFAULT_STEP_MS
from tilepuzzle.models.grid import Cell, Tile
from tilepuzzle.models.layout import TileLayout

STEP_MS = DEFAULT_STEP_MS


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _toward_zero(numerator: int, denominator: int) -> int:
    q = abs(numerator) // denominator
    return q if numerator >= 0 else -q


@dataclass(slots=True)
class Animation:
    tile: Tile
    x: int
    y: int
    end_x: int
    end_y: int
    steps: int

    def advance(self) -> None:
        self.x += _toward_zero(self.end_x - self.x, self.steps)
        self.y += _toward_zero(self.end_y - self.y, self.steps)
        self.steps -= 1

    @property
    def finished(self) -> bool:
        return self.steps <= 0


class AnimationScheduler:
    """Queue of in-flight slides advanced by :meth:`tick`.

    The host loop asks :meth:`due` (or uses the delay returned by
    :meth:`tick`) and draws :attr:`animations` at their current positions,
    skipping the static drawing of any tile for which :meth:`is_animating`
    is true.
    """

    def __init__(
        self,
        layout: TileLayout,
        clock: Callable[[], int] = monotonic_ms,
        step_ms: int = STEP_MS,
    ) -> None:
        if step_ms <= 0:
            raise ValueError("step_ms must be positive.")
        self.layout = layout
        self.step_ms = step_ms
        self._clock = clock
        self._active: list[Animation] = []
        self._next_tick: int | None = None

    # -- queue ----------------------------------------------------------------

    def enqueue(self, tile: Tile, from_cell: Cell, to_cell: Cell, duration_ms: int) -> Animation:
        start = self.layout.tile_rect(from_cell)
        end = self.layout.tile_rect(to_cell)
        anim = Animation(
            tile=tile,
            x=start.left,
            y=start.top,
            end_x=end.left,
            end_y=end.top,
            steps=max(1, math.ceil(duration_ms / self.step_ms)),
        )
        self._active.append(anim)
        if len(self._active) == 1:
            self._next_tick = self._clock() + self.step_ms
        return anim

    def relayout(self, layout: TileLayout) -> None:
        """Switch to a resized panel.

        In-flight slides carry pixel positions of the old layout, so they
        end at once; the grid already holds their final cells.
        """
        self.layout = layout
        self._active.clear()
        self._next_tick = None

    # -- timeline -------------------------------------------------------------

    @property
    def next_tick(self) -> int | None:
        """Scheduled time of the next tick, ``None`` when idle."""
        return self._next_tick

    def due(self, now_ms: int) -> bool:
        return self._next_tick is not None and now_ms >= self._next_tick

    def tick(self, now_ms: int) -> int | None:
        """Advance every animation one step.

        Returns the delay in milliseconds until the next tick (``0`` when
        the host is already late and should redraw at once), or ``None``
        once nothing is left to animate.
        """
        if not self._active:
            self._next_tick = None
            return None
        for anim in self._active:
            anim.advance()
        self._active = [a for a in self._active if not a.finished]
        if not self._active:
            self._next_tick = None
            return None
        if self._next_tick is None:
            self._next_tick = now_ms
        self._next_tick += self.step_ms
        return max(0, self._next_tick - now_ms)

    # -- queries --------------------------------------------------------------

    @property
    def animations(self) -> Iterator[Animation]:
        return iter(self._active)

    @property
    def active(self) -> bool:
        return bool(self._active)

    def is_animating(self, tile: Tile) -> bool:
        return any(a.tile == tile for a in self._active)

    def __len__(self) -> int:
        return len(self._active)
