"""Test doubles shared across the suite."""

from __future__ import annotations

from tilepuzzle.models.grid import EMPTY, GridState


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


def is_solvable(grid: GridState) -> bool:
    """Permutation parity (hole included) must match the hole's taxicab parity."""
    w = grid.width
    seq = []
    for cell in grid.cells():
        content = grid.get(cell)
        home = grid.home_hole if content is EMPTY else content.home
        seq.append(home.y * w + home.x)
    seen = [False] * len(seq)
    transpositions = 0
    for i in range(len(seq)):
        j, length = i, 0
        while not seen[j]:
            seen[j] = True
            j = seq[j]
            length += 1
        if length:
            transpositions += length - 1
    hole, home = grid.hole, grid.home_hole
    distance = abs(hole.x - home.x) + abs(hole.y - home.y)
    return transpositions % 2 == distance % 2
