"""Pygame image source: one picture cut into a tile per cell."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from tilepuzzle.models.grid import Cell
from tilepuzzle.models.layout import Rect

logger = logging.getLogger(__name__)

IMAGE_SIZE = 1000  # the picture is stretched to this square before slicing

COL_TILE = (137, 180, 250)
COL_TILE_TEXT = (30, 30, 46)
COL_SELECT = (249, 226, 175)


class PygameTileSource:
    """Supplies the visual for each home cell and draws it into a rectangle.

    Scaled copies are cached per tile size, so redrawing every frame is
    cheap as long as the window keeps its size.
    """

    def __init__(self, pieces: dict[Cell, pygame.Surface]) -> None:
        self._pieces = pieces
        self._scaled: dict[tuple[Cell, int, int], pygame.Surface] = {}

    @classmethod
    def from_image(cls, path: Path, columns: int, rows: int) -> PygameTileSource:
        picture = pygame.image.load(str(path)).convert()
        canvas = pygame.Surface((IMAGE_SIZE, IMAGE_SIZE))
        canvas.fill((255, 255, 255))  # backdrop for transparent pictures
        canvas.blit(pygame.transform.smoothscale(picture, (IMAGE_SIZE, IMAGE_SIZE)), (0, 0))
        tw, th = IMAGE_SIZE // columns, IMAGE_SIZE // rows
        pieces = {
            Cell(x, y): canvas.subsurface(pygame.Rect(x * tw, y * th, tw, th)).copy()
            for y in range(rows)
            for x in range(columns)
        }
        logger.info("Sliced %s into %d×%d tiles", path.name, columns, rows)
        return cls(pieces)

    @classmethod
    def numbered(cls, columns: int, rows: int, side: int = 96) -> PygameTileSource:
        """Plain numbered tiles, used when no picture is available."""
        font = pygame.font.SysFont("Helvetica", max(14, side // 3), bold=True)
        pieces: dict[Cell, pygame.Surface] = {}
        for y in range(rows):
            for x in range(columns):
                surf = pygame.Surface((side, side))
                surf.fill(COL_TILE)
                lbl = font.render(str(y * columns + x + 1), True, COL_TILE_TEXT)
                surf.blit(lbl, ((side - lbl.get_width()) // 2, (side - lbl.get_height()) // 2))
                pieces[Cell(x, y)] = surf
        return cls(pieces)

    # -- image source contract -------------------------------------------------

    def cell_content(self, x: int, y: int) -> Cell:
        return Cell(x, y)

    def clear_cache(self) -> None:
        self._scaled.clear()

    def draw(
        self,
        visual: Cell,
        surface: pygame.Surface,
        rect: Rect,
        highlighted: bool = False,
    ) -> None:
        key = (visual, rect.width, rect.height)
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.smoothscale(self._pieces[visual], (rect.width, rect.height))
            self._scaled[key] = scaled
        surface.blit(scaled, (rect.left, rect.top))
        if highlighted:
            pygame.draw.rect(surface, COL_SELECT, pygame.Rect(rect), width=3)
