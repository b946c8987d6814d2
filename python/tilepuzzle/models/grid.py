"""Grid model for the tile puzzle.

The grid is a ``width × height`` matrix of tiles with exactly one hole.
Each tile remembers the cell it occupies in the solved picture (its *home*),
so the solved check and the saved-state encoding need no extra table.
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import NamedTuple, Union


class GridInvariantError(AssertionError):
    """The grid lost its hole, gained a second one, or duplicated a tile."""


class Direction(StrEnum):
    # Order matters: ``opposite`` and tap resolution rely on it.
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"

    @property
    def dx(self) -> int:
        return _OFFSETS[self][0]

    @property
    def dy(self) -> int:
        return _OFFSETS[self][1]

    @property
    def opposite(self) -> Direction:
        members = list(Direction)
        return members[(members.index(self) + 2) % len(members)]

    @classmethod
    def random(
        cls, rng: random.Random | None = None, exclude: Direction | None = None
    ) -> Direction:
        """Pick a direction uniformly, never returning *exclude*."""
        choices = [d for d in cls if d is not exclude]
        return (rng or random).choice(choices)

    @classmethod
    def between(cls, source: Cell, target: Cell) -> Direction | None:
        """Unit direction from *source* towards *target* along one axis.

        Returns ``None`` when the cells coincide or are not aligned.
        """
        dx, dy = target.x - source.x, target.y - source.y
        if (dx == 0) == (dy == 0):
            return None
        step = ((dx > 0) - (dx < 0), (dy > 0) - (dy < 0))
        for d, off in _OFFSETS.items():
            if off == step:
                return d
        return None


_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


class Cell(NamedTuple):
    x: int
    y: int

    def step(self, direction: Direction, times: int = 1) -> Cell:
        return Cell(self.x + direction.dx * times, self.y + direction.dy * times)


@dataclass(frozen=True)
class Tile:
    """Opaque tile handle: the cell it belongs to in the solved picture."""

    home: Cell

    def index(self, width: int) -> int:
        return self.home.y * width + self.home.x


class _Empty(Enum):
    EMPTY = "empty"

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty.EMPTY

Content = Union[Tile, _Empty]


class GridState:
    """The tile matrix plus the hole position.

    Mutate through :meth:`slide` (one step of a move) or through
    :meth:`set`.  A bare ``set`` is validated on the spot; several ``set``
    calls inside :meth:`edit` are validated together when the block exits.
    """

    def __init__(self, width: int, height: int, home_hole: Cell) -> None:
        if width < 2 or height < 2:
            raise ValueError(f"Grid must be at least 2×2, got {width}×{height}.")
        self.width = width
        self.height = height
        self.home_hole = home_hole
        if not self.contains(home_hole):
            raise ValueError(f"Home hole {home_hole} lies outside the grid.")
        self._cells: list[Content] = [EMPTY] * (width * height)
        self._hole = home_hole
        self._editing = 0

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, width: int, height: int, hole: Cell) -> GridState:
        """Return the home arrangement with the hole at *hole*."""
        grid = cls(width, height, hole)
        for cell in grid.cells():
            if cell != hole:
                grid._cells[grid._index(cell)] = Tile(cell)
        return grid

    def copy(self) -> GridState:
        other = GridState(self.width, self.height, self.home_hole)
        other._cells = self._cells[:]
        other._hole = self._hole
        return other

    # -- queries --------------------------------------------------------------

    @property
    def hole(self) -> Cell:
        return self._hole

    def hole_cell(self) -> Cell:
        return self._hole

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Cell(x, y)

    def get(self, cell: Cell) -> Content:
        return self._cells[self._index(cell)]

    def home_content(self, cell: Cell) -> Content:
        return EMPTY if cell == self.home_hole else Tile(cell)

    def is_solved(self) -> bool:
        """Check if every cell holds its home content."""
        return all(self.get(cell) == self.home_content(cell) for cell in self.cells())

    def arrangement(self) -> tuple[Content, ...]:
        """Row-major snapshot, handy for comparisons."""
        return tuple(self._cells)

    # -- mutation -------------------------------------------------------------

    def set(self, cell: Cell, content: Content) -> None:
        self._cells[self._index(cell)] = content
        if content is EMPTY:
            self._hole = cell
        if not self._editing:
            self.check_invariants()

    @contextmanager
    def edit(self) -> Iterator[GridState]:
        """Group several :meth:`set` calls under one invariant check."""
        self._editing += 1
        try:
            yield self
        finally:
            self._editing -= 1
        if not self._editing:
            self.check_invariants()

    def slide(self, cell: Cell) -> Tile:
        """Move the tile at *cell* into the adjacent hole and return it."""
        tile = self.get(cell)
        if tile is EMPTY:
            raise GridInvariantError(f"{cell} is the hole, nothing to slide.")
        if abs(cell.x - self._hole.x) + abs(cell.y - self._hole.y) != 1:
            raise GridInvariantError(f"{cell} is not next to the hole {self._hole}.")
        self._cells[self._index(self._hole)] = tile
        self._cells[self._index(cell)] = EMPTY
        self._hole = cell
        return tile

    def check_invariants(self) -> None:
        holes = [i for i, c in enumerate(self._cells) if c is EMPTY]
        if len(holes) != 1:
            raise GridInvariantError(f"Expected exactly one hole, found {len(holes)}.")
        tiles = [c for c in self._cells if c is not EMPTY]
        if len(set(tiles)) != len(tiles):
            raise GridInvariantError("A tile appears in more than one cell.")
        for tile in tiles:
            if not self.contains(tile.home) or tile.home == self.home_hole:
                raise GridInvariantError(f"{tile} does not belong to this grid.")
        self._hole = Cell(holes[0] % self.width, holes[0] // self.width)

    # -- helpers --------------------------------------------------------------

    def _index(self, cell: Cell) -> int:
        if not self.contains(cell):
            raise IndexError(f"{cell} is outside the {self.width}×{self.height} grid.")
        return cell.y * self.width + cell.x

    def __repr__(self) -> str:
        return f"GridState({self.width}×{self.height}, hole={self._hole})"
