"""Move engine: validation, line moves, animations and the solved check."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from tilepuzzle.engine.gameplay.engine import MoveEngine, RejectReason
from tilepuzzle.models.grid import EMPTY, Cell, Direction, GridState, Tile


class RecordingAnimator:
    def __init__(self, grid: GridState) -> None:
        self.grid = grid
        self.calls: list[tuple[Tile, Cell, Cell, int]] = []
        self.hole_at_enqueue: list[Cell] = []

    def enqueue(self, tile: Tile, from_cell: Cell, to_cell: Cell, duration_ms: int) -> None:
        self.calls.append((tile, from_cell, to_cell, duration_ms))
        self.hole_at_enqueue.append(self.grid.hole)


# -- helpers ------------------------------------------------------------------


def _assert_permutation(grid: GridState) -> None:
    contents = Counter(grid.get(c) for c in grid.cells())
    assert contents[EMPTY] == 1
    tiles = {c for c in contents if c is not EMPTY}
    assert tiles == {Tile(c) for c in grid.cells() if c != grid.home_hole}
    assert all(n == 1 for n in contents.values())


# -- single and line moves ------------------------------------------------------


def test_adjacent_move(engine3: MoveEngine) -> None:
    result = engine3.try_move(Cell(1, 0))
    assert result.accepted and bool(result)
    assert result.hole == Cell(1, 0)
    assert engine3.grid.get(Cell(2, 0)) == Tile(Cell(1, 0))
    assert [(s.source, s.target) for s in result.slides] == [(Cell(1, 0), Cell(2, 0))]


def test_line_move_along_row(engine3: MoveEngine) -> None:
    """Hole at (2,0), target (0,0): both tiles in the row shift right."""
    grid = engine3.grid
    result = engine3.try_move(Cell(0, 0))
    assert result.accepted
    assert grid.get(Cell(2, 0)) == Tile(Cell(1, 0))
    assert grid.get(Cell(1, 0)) == Tile(Cell(0, 0))
    assert grid.get(Cell(0, 0)) is EMPTY
    assert grid.hole == Cell(0, 0)
    assert [(s.source, s.target) for s in result.slides] == [
        (Cell(1, 0), Cell(2, 0)),
        (Cell(0, 0), Cell(1, 0)),
    ]


def test_line_move_along_column(engine3: MoveEngine) -> None:
    grid = engine3.grid
    result = engine3.try_move(Cell(2, 2))
    assert result.accepted
    assert grid.get(Cell(2, 0)) == Tile(Cell(2, 1))
    assert grid.get(Cell(2, 1)) == Tile(Cell(2, 2))
    assert grid.hole == Cell(2, 2)


# -- rejections -----------------------------------------------------------------


@pytest.mark.parametrize(
    "target, reason",
    [
        (Cell(2, 0), RejectReason.IS_HOLE),
        (Cell(0, 1), RejectReason.DIAGONAL),
        (Cell(1, 2), RejectReason.DIAGONAL),
        (Cell(3, 0), RejectReason.OUT_OF_BOUNDS),
        (Cell(2, -1), RejectReason.OUT_OF_BOUNDS),
    ],
    ids=["hole", "diag-1", "diag-2", "off-right", "off-top"],
)
def test_invalid_target_is_rejected_without_mutation(
    engine3: MoveEngine, target: Cell, reason: RejectReason
) -> None:
    animator = RecordingAnimator(engine3.grid)
    engine3.animator = animator
    before = engine3.grid.arrangement()
    result = engine3.try_move(target)
    assert not result
    assert result.reason is reason
    assert result.slides == ()
    assert engine3.grid.arrangement() == before
    assert animator.calls == []


@pytest.mark.parametrize("width, height", [(2, 2), (3, 5), (6, 4)])
def test_targeting_the_hole_is_always_rejected(width: int, height: int) -> None:
    grid = GridState.solved(width, height, Cell(width - 1, 0))
    engine = MoveEngine(grid)
    rng = random.Random(width * height)
    for _ in range(20):
        engine.try_move(grid.hole.step(rng.choice(list(Direction))))
        before = grid.arrangement()
        assert engine.try_move(grid.hole).reason is RejectReason.IS_HOLE
        assert grid.arrangement() == before


# -- drag -----------------------------------------------------------------------


def test_drag_toward_hole(engine3: MoveEngine) -> None:
    result = engine3.drag(Cell(0, 0), Cell(1, 0))
    assert result.accepted
    assert engine3.grid.hole == Cell(0, 0)


def test_drag_away_from_hole_rejected(engine3: MoveEngine) -> None:
    engine3.try_move(Cell(1, 0))  # hole now (1,0)
    result = engine3.drag(Cell(0, 0), Cell(0, 1))
    assert result.reason is RejectReason.NO_HOLE
    result = engine3.drag(Cell(2, 0), Cell(3, 0))
    assert result.reason is RejectReason.NO_HOLE


def test_drag_diagonal_and_from_hole_rejected(engine3: MoveEngine) -> None:
    assert engine3.drag(Cell(1, 1), Cell(2, 2)).reason is RejectReason.DIAGONAL
    assert engine3.drag(Cell(2, 0), Cell(1, 0)).reason is RejectReason.IS_HOLE
    assert engine3.drag(Cell(1, 1), Cell(1, 1)).reason is RejectReason.IS_HOLE


def test_neighbour_hole_direction(engine3: MoveEngine) -> None:
    assert engine3.neighbour_hole_direction(Cell(1, 0)) is Direction.RIGHT
    assert engine3.neighbour_hole_direction(Cell(2, 1)) is Direction.UP
    assert engine3.neighbour_hole_direction(Cell(0, 0)) is None


# -- animations -----------------------------------------------------------------


def test_animations_enqueued_before_grid_changes(engine3: MoveEngine) -> None:
    animator = RecordingAnimator(engine3.grid)
    engine3.animator = animator
    engine3.move_duration_ms = 300
    engine3.try_move(Cell(0, 0))
    assert [c[:3] for c in animator.calls] == [
        (Tile(Cell(1, 0)), Cell(1, 0), Cell(2, 0)),
        (Tile(Cell(0, 0)), Cell(0, 0), Cell(1, 0)),
    ]
    assert all(c[3] == 300 for c in animator.calls)
    assert animator.hole_at_enqueue == [Cell(2, 0), Cell(2, 0)]


# -- solved check ---------------------------------------------------------------


def test_user_move_back_home_reports_solved(engine3: MoveEngine) -> None:
    assert not engine3.try_move(Cell(0, 0)).solved
    result = engine3.try_move(Cell(2, 0))
    assert result.solved
    assert engine3.grid.is_solved()


def test_non_user_move_never_reports_solved(engine3: MoveEngine) -> None:
    engine3.try_move(Cell(2, 1), user=False)
    assert not engine3.try_move(Cell(2, 0), user=False).solved


def test_hole_home_but_tiles_scrambled_is_not_solved(engine3: MoveEngine) -> None:
    # Cycle the hole around the top-right 2×2 block: tiles rotate.
    for target in (Cell(1, 0), Cell(1, 1), Cell(2, 1), Cell(2, 0)):
        result = engine3.try_move(target)
    assert engine3.grid.hole == Cell(2, 0)
    assert not result.solved


# -- properties -----------------------------------------------------------------


@pytest.mark.parametrize("seed", range(5))
def test_random_valid_moves_keep_a_permutation(seed: int) -> None:
    rng = random.Random(seed)
    grid = GridState.solved(4, 3, Cell(3, 0))
    engine = MoveEngine(grid)
    for _ in range(300):
        target = Cell(rng.randrange(-1, 5), rng.randrange(-1, 4))
        engine.try_move(target)
        _assert_permutation(grid)
