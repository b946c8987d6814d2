"""Flat integer encoding of a grid arrangement.

Entry ``y * W + x`` holds the linear home index ``ty * W + tx`` of whatever
occupies cell ``(x, y)``.  The hole is written as the index of its home
cell, so a valid sequence is always a permutation of ``range(W * H)``.
"""

from __future__ import annotations

from collections.abc import Sequence

from tilepuzzle.models.grid import EMPTY, Cell, GridState, Tile


class PersistenceFormatError(ValueError):
    """The saved sequence cannot describe a grid of this size."""


class PersistenceCodec:
    """Stateless codec; all methods are static."""

    @staticmethod
    def encode(grid: GridState) -> list[int]:
        w = grid.width
        out: list[int] = []
        for cell in grid.cells():
            content = grid.get(cell)
            home = grid.home_hole if content is EMPTY else content.home
            out.append(home.y * w + home.x)
        return out

    @staticmethod
    def decode(sequence: Sequence[int], grid: GridState) -> GridState:
        """Load *sequence* into *grid* in place and return it.

        Raises :class:`PersistenceFormatError` without touching *grid* when
        the sequence has the wrong length or is not a permutation.
        """
        w, h = grid.width, grid.height
        if len(sequence) != w * h:
            raise PersistenceFormatError(
                f"Expected {w * h} entries for a {w}×{h} puzzle, got {len(sequence)}."
            )
        if sorted(sequence) != list(range(w * h)):
            raise PersistenceFormatError("Saved state is not a permutation of the tiles.")

        with grid.edit():
            for cell, index in zip(grid.cells(), sequence):
                home = Cell(index % w, index // w)
                grid.set(cell, EMPTY if home == grid.home_hole else Tile(home))
        return grid
