"""Pixel geometry of the tile panel."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

from tilepuzzle.models.grid import Cell


class Rect(NamedTuple):
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass(frozen=True)
class TileLayout:
    """Maps cells to pixel rectangles inside a ``width_px × height_px`` panel.

    Tiles are square and the tile area is centred.  One pixel is reserved
    on each grid line, so a tile rectangle is ``side - 1`` pixels wide.
    """

    columns: int
    rows: int
    width_px: int
    height_px: int

    @property
    def side(self) -> int:
        return max(1, min((self.width_px - 1) // self.columns, (self.height_px - 1) // self.rows))

    @property
    def origin(self) -> tuple[int, int]:
        side = self.side
        return (
            max(0, (self.width_px - 1 - side * self.columns) // 2),
            max(0, (self.height_px - 1 - side * self.rows) // 2),
        )

    @property
    def bounds(self) -> Rect:
        x0, y0 = self.origin
        return Rect(x0, y0, self.side * self.columns, self.side * self.rows)

    def tile_rect(self, cell: Cell) -> Rect:
        side = self.side
        x0, y0 = self.origin
        return Rect(x0 + cell.x * side + 1, y0 + cell.y * side + 1, side - 1, side - 1)

    def cell_at(self, px: float, py: float) -> Cell | None:
        """Return the cell under a pixel, or ``None`` outside the tile area."""
        b = self.bounds
        if not (b.left <= px < b.right and b.top <= py < b.bottom):
            return None
        side = self.side
        return Cell(int(px - b.left) // side, int(py - b.top) // side)

    def grid_lines(self) -> Iterator[tuple[tuple[int, int], tuple[int, int]]]:
        """Yield ``(start, end)`` segments of the lines between tiles."""
        b = self.bounds
        for i in range(self.columns + 1):
            x = b.left + i * self.side
            yield (x, b.top), (x, b.bottom)
        for j in range(self.rows + 1):
            y = b.top + j * self.side
            yield (b.left, y), (b.right, y)
