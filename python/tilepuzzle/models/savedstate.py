"""Saved puzzle state persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SavedGame:
    """An encoded arrangement together with the puzzle shape it belongs to.

    The tile sequence only makes sense for the dimensions and home hole it
    was saved with; a restore checks both before decoding.
    """

    width: int
    height: int
    hole_corner: str
    tiles: tuple[int, ...]

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "hole_corner": self.hole_corner,
            "tiles": list(self.tiles),
        }

    @classmethod
    def from_dict(cls, data: object) -> SavedGame | None:
        """Build from parsed JSON, or ``None`` when the shape is wrong."""
        if not isinstance(data, dict):
            return None
        tiles = data.get("tiles")
        if not (
            _is_int(data.get("width"))
            and _is_int(data.get("height"))
            and isinstance(data.get("hole_corner"), str)
            and isinstance(tiles, list)
            and all(_is_int(v) for v in tiles)
        ):
            return None
        return cls(data["width"], data["height"], data["hole_corner"], tuple(tiles))


class SavedStateStore:
    """Loads and saves a :class:`SavedGame` as a JSON object."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath

    # -- persistence ----------------------------------------------------------

    def load(self) -> SavedGame | None:
        """Return the saved game, or ``None`` if there is nothing usable."""
        if not self.filepath.exists():
            return None
        try:
            data = json.loads(self.filepath.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable saved state %s: %s", self.filepath, exc)
            return None
        game = SavedGame.from_dict(data)
        if game is None:
            logger.warning("Ignoring saved state %s: unexpected layout", self.filepath)
        return game

    def save(self, game: SavedGame) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self.filepath.write_text(json.dumps(game.to_dict()) + "\n")
        logger.debug("Saved puzzle state to %s", self.filepath)

    def clear(self) -> None:
        self.filepath.unlink(missing_ok=True)
