"""Animation scheduler: step counts, truncating glide, fixed cadence."""

from __future__ import annotations

import math

import pytest

from tilepuzzle.engine.animation.scheduler import STEP_MS, AnimationScheduler
from tilepuzzle.engine.gameplay.engine import MoveEngine
from tilepuzzle.models.grid import Cell, GridState, Tile
from tilepuzzle.models.layout import TileLayout

from helpers import FakeClock

T = Tile(Cell(0, 0))


# -- helpers ------------------------------------------------------------------


def _run_to_completion(scheduler: AnimationScheduler, clock: FakeClock) -> int:
    ticks = 0
    while scheduler.active:
        clock.advance(STEP_MS)
        assert scheduler.due(clock.now)
        scheduler.tick(clock.now)
        ticks += 1
        assert ticks < 1000
    return ticks


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("duration", [1, 50, 120, 499, 500, 1000])
def test_completes_in_ceil_ticks_and_lands_exactly(
    scheduler: AnimationScheduler, clock: FakeClock, duration: int
) -> None:
    anim = scheduler.enqueue(T, Cell(0, 0), Cell(2, 2), duration)
    ticks = _run_to_completion(scheduler, clock)
    assert ticks == math.ceil(duration / STEP_MS)
    assert (anim.x, anim.y) == (201, 201)
    assert not scheduler.is_animating(T)


def test_glide_truncates_toward_zero(scheduler: AnimationScheduler, clock: FakeClock) -> None:
    forward = scheduler.enqueue(T, Cell(0, 0), Cell(1, 0), 300)
    back = scheduler.enqueue(Tile(Cell(1, 0)), Cell(1, 0), Cell(0, 0), 300)
    xs_forward, xs_back = [], []
    while scheduler.active:
        scheduler.tick(clock.advance(STEP_MS))
        xs_forward.append(forward.x)
        xs_back.append(back.x)
    assert xs_forward == [17, 33, 50, 67, 84, 101]
    assert xs_back == [85, 69, 52, 35, 18, 1]
    assert forward.y == back.y == 1


def test_first_tick_scheduled_one_step_after_enqueue(
    scheduler: AnimationScheduler, clock: FakeClock
) -> None:
    assert scheduler.next_tick is None
    assert not scheduler.due(clock.now)
    scheduler.enqueue(T, Cell(0, 0), Cell(1, 0), 500)
    assert scheduler.next_tick == clock.now + STEP_MS
    assert not scheduler.due(clock.now + STEP_MS - 1)
    assert scheduler.due(clock.now + STEP_MS)


def test_second_enqueue_keeps_running_schedule(
    scheduler: AnimationScheduler, clock: FakeClock
) -> None:
    scheduler.enqueue(T, Cell(0, 0), Cell(1, 0), 500)
    first = scheduler.next_tick
    clock.advance(20)
    scheduler.enqueue(Tile(Cell(1, 1)), Cell(1, 1), Cell(1, 2), 500)
    assert scheduler.next_tick == first
    assert len(scheduler) == 2


def test_late_frame_catches_up_instead_of_drifting(
    scheduler: AnimationScheduler, clock: FakeClock
) -> None:
    start = clock.now
    scheduler.enqueue(T, Cell(0, 0), Cell(1, 0), 500)
    # Host wakes up 120ms late for the first tick.
    delay = scheduler.tick(clock.advance(STEP_MS + 120))
    assert scheduler.next_tick == start + 2 * STEP_MS
    assert delay == 0
    delay = scheduler.tick(clock.now)
    assert scheduler.next_tick == start + 3 * STEP_MS
    assert delay == 0
    delay = scheduler.tick(clock.now)
    assert delay == start + 4 * STEP_MS - clock.now


def test_tick_returns_none_when_idle(scheduler: AnimationScheduler, clock: FakeClock) -> None:
    assert scheduler.tick(clock.now) is None
    scheduler.enqueue(T, Cell(0, 0), Cell(1, 0), STEP_MS)
    assert scheduler.tick(clock.advance(STEP_MS)) is None
    assert scheduler.next_tick is None


def test_is_animating_only_for_tiles_in_flight(
    scheduler: AnimationScheduler, clock: FakeClock
) -> None:
    scheduler.enqueue(T, Cell(0, 0), Cell(1, 0), 100)
    assert scheduler.is_animating(T)
    assert not scheduler.is_animating(Tile(Cell(1, 1)))
    _run_to_completion(scheduler, clock)
    assert not scheduler.is_animating(T)


def test_move_engine_feeds_scheduler(scheduler: AnimationScheduler, clock: FakeClock) -> None:
    grid = GridState.solved(3, 3, Cell(2, 0))
    engine = MoveEngine(grid, scheduler, move_duration_ms=200)
    engine.try_move(Cell(0, 0))
    moving = {a.tile for a in scheduler.animations}
    assert moving == {Tile(Cell(0, 0)), Tile(Cell(1, 0))}
    assert _run_to_completion(scheduler, clock) == 4
    assert grid.hole == Cell(0, 0)


def test_relayout_ends_slides_in_flight(scheduler: AnimationScheduler, clock: FakeClock) -> None:
    scheduler.enqueue(T, Cell(0, 0), Cell(1, 0), 300)
    scheduler.tick(clock.advance(STEP_MS))
    bigger = TileLayout(3, 3, 601, 601)
    scheduler.relayout(bigger)
    assert scheduler.layout is bigger
    assert not scheduler.active
    assert not scheduler.is_animating(T)
    assert scheduler.next_tick is None
    # New slides use the new geometry.
    anim = scheduler.enqueue(T, Cell(1, 0), Cell(2, 0), 300)
    assert (anim.x, anim.end_x) == (201, 401)


def test_invalid_step_rejected(layout3) -> None:
    with pytest.raises(ValueError):
        AnimationScheduler(layout3, step_ms=0)
