"""Pygame GUI frontend.

Draws the tile panel, feeds mouse and touch events to the session, runs
the slide animations and shows the "solved" overlay.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path

import pygame

from tilepuzzle.config import PuzzleConfig
from tilepuzzle.engine.animation import AnimationScheduler
from tilepuzzle.engine.input import PointerEvent, PointerPhase
from tilepuzzle.engine.session import Decision, PuzzleSession
from tilepuzzle.models.grid import EMPTY, Direction
from tilepuzzle.models.layout import Rect, TileLayout
from tilepuzzle.models.savedstate import SavedStateStore
from tilepuzzle_ui.assets import pick_image
from tilepuzzle_ui.gui.pygame.tiles import PygameTileSource

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_GREEN = (166, 227, 161)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 560, 640
HEADER_H = 64
FOOTER_H = 28
MARGIN = 16

MOUSE_POINTER = -1  # finger ids are non-negative


class _Screen(enum.Enum):
    PLAYING = "playing"
    SOLVED = "solved"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        pygame.draw.rect(surf, self.hover if self._hot else self.bg, self.rect, border_radius=8)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(
        self,
        config: PuzzleConfig,
        store: SavedStateStore,
        image: Path | None,
        *,
        fresh: bool = False,
    ) -> None:
        self._config = config
        self._store = store

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H), pygame.RESIZABLE)
        pygame.display.set_caption("Tile Puzzle")
        self._clock = pygame.time.Clock()

        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)
        self._f_big = pygame.font.SysFont("Helvetica", 34, bold=True)
        self._f_btn = pygame.font.SysFont("Helvetica", 16, bold=True)

        if image is not None:
            self._tiles = PygameTileSource.from_image(image, config.width, config.height)
        else:
            self._tiles = PygameTileSource.numbered(config.width, config.height)

        self._layout = self._board_layout(*self._surf.get_size())
        self._animator = AnimationScheduler(
            self._layout, clock=pygame.time.get_ticks, step_ms=config.step_ms
        )
        self._session = PuzzleSession(config, self._animator, clock=pygame.time.get_ticks)
        self._session.on_solved(self._on_solved)
        self._session.start(None if fresh else store.load())

        self._screen = _Screen.PLAYING
        self._build_solved_btns()

    # ── geometry ────────────────────────────────────────────────────────────

    def _board_layout(self, w: int, h: int) -> TileLayout:
        return TileLayout(
            self._config.width,
            self._config.height,
            max(2, w - 2 * MARGIN),
            max(2, h - HEADER_H - FOOTER_H),
        )

    def _to_screen(self, rect: Rect) -> Rect:
        return Rect(rect.left + MARGIN, rect.top + HEADER_H, rect.width, rect.height)

    def _pointer(self, phase: PointerPhase, pos: tuple[float, float], pointer_id: int) -> None:
        cell = self._layout.cell_at(pos[0] - MARGIN, pos[1] - HEADER_H)
        self._session.handle_pointer(PointerEvent(phase, cell, pointer_id))

    def _resize(self, w: int, h: int) -> None:
        self._layout = self._board_layout(w, h)
        self._animator.relayout(self._layout)
        self._tiles.clear_cache()
        self._build_solved_btns()

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        self._surf.fill(COL_BASE)
        w = self._surf.get_width()
        cfg = self._config

        title = self._f_title.render(f"Tile Puzzle  {cfg.width}×{cfg.height}", True, COL_TEXT)
        self._surf.blit(title, ((w - title.get_width()) // 2, 12))
        status = "Get ready…" if self._session.shuffle_pending else "Tap or drag tiles into the hole"
        lbl = self._f_small.render(status, True, COL_SUBTEXT)
        self._surf.blit(lbl, ((w - lbl.get_width()) // 2, 40))

        layout = self._layout
        pygame.draw.rect(self._surf, COL_MANTLE, pygame.Rect(self._to_screen(layout.bounds)))

        grid = self._session.grid
        selected = self._session.resolver.selected
        for cell in grid.cells():
            content = grid.get(cell)
            if content is EMPTY or self._animator.is_animating(content):
                continue
            visual = self._tiles.cell_content(*content.home)
            self._tiles.draw(
                visual, self._surf, self._to_screen(layout.tile_rect(cell)), cell == selected
            )

        for start, end in layout.grid_lines():
            pygame.draw.line(
                self._surf,
                COL_SURFACE1,
                (start[0] + MARGIN, start[1] + HEADER_H),
                (end[0] + MARGIN, end[1] + HEADER_H),
            )

        side = layout.side - 1
        for anim in self._animator.animations:
            visual = self._tiles.cell_content(*anim.tile.home)
            self._tiles.draw(visual, self._surf, self._to_screen(Rect(anim.x, anim.y, side, side)))

        hint = self._f_small.render("R  reshuffle     Esc  quit", True, COL_OVERLAY0)
        self._surf.blit(hint, ((w - hint.get_width()) // 2, self._surf.get_height() - FOOTER_H + 6))

    def _draw_solved(self) -> None:
        veil = pygame.Surface(self._surf.get_size(), pygame.SRCALPHA)
        veil.fill((0, 0, 0, 170))
        self._surf.blit(veil, (0, 0))
        w, h = self._surf.get_size()
        msg = self._f_big.render("★  S O L V E D  ★", True, COL_GREEN)
        self._surf.blit(msg, ((w - msg.get_width()) // 2, h // 2 - 90))
        self._again_btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

    def _build_solved_btns(self) -> None:
        w, h = self._surf.get_size()
        bw = 220
        self._again_btn = _Btn(
            ((w - bw) // 2, h // 2 - 20, bw, 48),
            "SHUFFLE AGAIN",
            self._f_btn,
            bg=COL_GREEN,
            hover=(190, 240, 190),
            fg=COL_BASE,
        )
        self._quit_btn = _Btn(
            ((w - bw) // 2, h // 2 + 40, bw, 44),
            "Q U I T",
            self._f_btn,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )

    # ── event handling ──────────────────────────────────────────────────────

    _KEY_DIRS = {
        pygame.K_UP: Direction.UP,
        pygame.K_w: Direction.UP,
        pygame.K_DOWN: Direction.DOWN,
        pygame.K_s: Direction.DOWN,
        pygame.K_LEFT: Direction.LEFT,
        pygame.K_a: Direction.LEFT,
        pygame.K_RIGHT: Direction.RIGHT,
        pygame.K_d: Direction.RIGHT,
    }

    def _ev_playing(self, ev: pygame.event.Event) -> bool:
        size = self._surf.get_size()
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1 and not getattr(ev, "touch", False):
            self._pointer(PointerPhase.DOWN, ev.pos, MOUSE_POINTER)
        elif ev.type == pygame.MOUSEMOTION and ev.buttons[0] and not getattr(ev, "touch", False):
            self._pointer(PointerPhase.MOVE, ev.pos, MOUSE_POINTER)
        elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1 and not getattr(ev, "touch", False):
            self._pointer(PointerPhase.UP, ev.pos, MOUSE_POINTER)
        elif ev.type in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
            phase = {
                pygame.FINGERDOWN: PointerPhase.DOWN,
                pygame.FINGERMOTION: PointerPhase.MOVE,
                pygame.FINGERUP: PointerPhase.UP,
            }[ev.type]
            self._pointer(phase, (ev.x * size[0], ev.y * size[1]), ev.finger_id)
        elif ev.type == pygame.KEYDOWN:
            if ev.key in self._KEY_DIRS:
                self._session.move_toward(self._KEY_DIRS[ev.key])
            elif ev.key == pygame.K_r:
                self._session.shuffle()
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_solved(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._again_btn.motion(ev.pos)
            self._quit_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._again_btn.hit(ev.pos):
                self._decide(Decision.SHUFFLE)
            elif self._quit_btn.hit(ev.pos):
                self._decide(Decision.TERMINATE)
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._decide(Decision.SHUFFLE)
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                self._decide(Decision.TERMINATE)
        return not self._session.terminated

    def _on_solved(self) -> None:
        self._screen = _Screen.SOLVED

    def _decide(self, decision: Decision) -> None:
        self._session.resolve(decision)
        self._screen = _Screen.PLAYING

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.PLAYING: self._ev_playing,
            _Screen.SOLVED: self._ev_solved,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                if ev.type == pygame.VIDEORESIZE:
                    self._resize(ev.w, ev.h)
                    continue
                if not _dispatch[self._screen](ev):
                    running = False
                    break

            self._session.update(pygame.time.get_ticks())
            self._draw_board()
            if self._screen == _Screen.SOLVED:
                self._draw_solved()
            pygame.display.flip()
            self._clock.tick(60)

        self._save()
        pygame.quit()

    def _save(self) -> None:
        if self._session.terminated:
            self._store.clear()
        else:
            self._store.save(self._session.saved_game())


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    config: PuzzleConfig,
    data_dir: Path = Path("data"),
    assets_dir: Path = Path("assets"),
    image: Path | None = None,
    fresh: bool = False,
) -> None:
    """Launch the Pygame GUI."""
    store = SavedStateStore(data_dir / "puzzle.json")
    app = PygameApp(config, store, image or pick_image(assets_dir / "images"), fresh=fresh)
    app.run_loop()
