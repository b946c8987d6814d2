"""Shared fixtures for the puzzle engine tests."""

from __future__ import annotations

import random

import pytest

from tilepuzzle.engine.animation.scheduler import AnimationScheduler
from tilepuzzle.engine.gameplay.engine import MoveEngine
from tilepuzzle.models.grid import Cell, GridState
from tilepuzzle.models.layout import TileLayout

from helpers import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def grid3() -> GridState:
    """Solved 3×3 grid with the hole in the top-right corner."""
    return GridState.solved(3, 3, Cell(2, 0))


@pytest.fixture
def engine3(grid3: GridState) -> MoveEngine:
    return MoveEngine(grid3)


@pytest.fixture
def layout3() -> TileLayout:
    # 3 columns of 100px each, plus the one-pixel closing grid line.
    return TileLayout(3, 3, 301, 301)


@pytest.fixture
def scheduler(layout3: TileLayout, clock: FakeClock) -> AnimationScheduler:
    return AnimationScheduler(layout3, clock=clock)
