"""Shuffle generator: exact budget, no immediate undo, always solvable."""

from __future__ import annotations

import random

import pytest

from tilepuzzle.engine.gamegenerator.shuffler import ShuffleGenerator
from tilepuzzle.engine.gameplay.engine import MoveEngine, MoveResult
from tilepuzzle.models.grid import Cell, GridState

from helpers import is_solvable


class CountingEngine(MoveEngine):
    def __init__(self, grid: GridState) -> None:
        super().__init__(grid)
        self.results: list[MoveResult] = []
        self.user_flags: list[bool] = []

    def try_move(self, target: Cell, *, user: bool = True) -> MoveResult:
        result = super().try_move(target, user=user)
        self.results.append(result)
        self.user_flags.append(user)
        return result


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize(
    "width, height, budget",
    [(2, 2, 7), (3, 3, 36), (4, 3, 48), (5, 5, 1), (10, 10, 400)],
    ids=lambda v: str(v),
)
def test_shuffle_makes_exactly_budget_moves(width: int, height: int, budget: int) -> None:
    grid = GridState.solved(width, height, Cell(width - 1, 0))
    engine = CountingEngine(grid)
    done = ShuffleGenerator(engine, random.Random(budget)).shuffle(budget)
    assert done == budget
    assert sum(1 for r in engine.results if r.accepted) == budget
    assert not any(engine.user_flags)
    grid.check_invariants()
    assert is_solvable(grid)


def test_zero_budget_is_a_no_op(grid3: GridState) -> None:
    engine = CountingEngine(grid3)
    assert ShuffleGenerator(engine).shuffle(0) == 0
    assert engine.results == []
    assert grid3.is_solved()


def test_default_budget(grid3: GridState) -> None:
    shuffler = ShuffleGenerator(MoveEngine(grid3), random.Random(3))
    assert shuffler.default_budget() == 36
    assert shuffler.shuffle() == 36


@pytest.mark.parametrize("seed", range(4))
def test_shuffle_never_undoes_previous_move(seed: int) -> None:
    grid = GridState.solved(4, 4, Cell(3, 0))
    engine = CountingEngine(grid)
    ShuffleGenerator(engine, random.Random(seed)).shuffle(200)
    holes = [grid.home_hole] + [r.hole for r in engine.results]
    for before, after in zip(holes, holes[2:]):
        assert before != after


def test_same_seed_same_scramble() -> None:
    a = GridState.solved(4, 4, Cell(3, 0))
    b = GridState.solved(4, 4, Cell(3, 0))
    ShuffleGenerator(MoveEngine(a), random.Random(99)).shuffle(64)
    ShuffleGenerator(MoveEngine(b), random.Random(99)).shuffle(64)
    assert a.arrangement() == b.arrangement()


def test_solvability_helper_detects_swapped_pair(grid3: GridState) -> None:
    with grid3.edit():
        grid3.set(Cell(0, 0), grid3.get(Cell(1, 0)))
        grid3.set(Cell(1, 0), grid3.home_content(Cell(0, 0)))
    assert not is_solvable(grid3)
