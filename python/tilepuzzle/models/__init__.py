from tilepuzzle.models.grid import (
    EMPTY,
    Cell,
    Content,
    Direction,
    GridInvariantError,
    GridState,
    Tile,
)
from tilepuzzle.models.layout import Rect, TileLayout
from tilepuzzle.models.savedstate import SavedGame, SavedStateStore

__all__ = [
    "EMPTY",
    "Cell",
    "Content",
    "Direction",
    "GridInvariantError",
    "GridState",
    "Rect",
    "SavedGame",
    "SavedStateStore",
    "Tile",
    "TileLayout",
]
