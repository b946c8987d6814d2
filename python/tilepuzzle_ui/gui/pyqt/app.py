"""PyQt6 GUI frontend.

A single window holding a custom-painted tile panel.  Mouse presses, drags
and releases become pointer events; a QTimer drives the session clock so
the delayed shuffle and slide animations run on the Qt event loop.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PyQt6.QtCore import QElapsedTimer, QRect, Qt, QTimer
from PyQt6.QtGui import QColor, QFont, QKeyEvent, QMouseEvent, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from tilepuzzle.config import PuzzleConfig
from tilepuzzle.engine.animation import AnimationScheduler
from tilepuzzle.engine.input import PointerEvent, PointerPhase
from tilepuzzle.engine.session import Decision, PuzzleSession
from tilepuzzle.models.grid import EMPTY, Cell, Direction
from tilepuzzle.models.layout import Rect, TileLayout
from tilepuzzle.models.savedstate import SavedStateStore
from tilepuzzle_ui.assets import pick_image

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_YELLOW = "#f9e2af"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

IMAGE_SIZE = 1000
FRAME_MS = 16
_HINT = "Tap or drag tiles     Arrows / WASD  move     R  reshuffle     Esc  quit"


# ═══════════════════════════════════════════════════════════════════════════
# Tile pictures
# ═══════════════════════════════════════════════════════════════════════════


class QtTileSource:
    """One pixmap per home cell, cut from a picture or drawn as a number."""

    def __init__(self, pieces: dict[Cell, QPixmap]) -> None:
        self._pieces = pieces

    @classmethod
    def from_image(cls, path: Path, columns: int, rows: int) -> QtTileSource:
        picture = QPixmap(str(path))
        if picture.isNull():
            raise ValueError(f"cannot load image {path}")
        canvas = QPixmap(IMAGE_SIZE, IMAGE_SIZE)
        canvas.fill(QColor("white"))
        painter = QPainter(canvas)
        painter.drawPixmap(QRect(0, 0, IMAGE_SIZE, IMAGE_SIZE), picture)
        painter.end()
        tw, th = IMAGE_SIZE // columns, IMAGE_SIZE // rows
        pieces = {
            Cell(x, y): canvas.copy(x * tw, y * th, tw, th)
            for y in range(rows)
            for x in range(columns)
        }
        logger.info("Sliced %s into %d×%d tiles", path.name, columns, rows)
        return cls(pieces)

    @classmethod
    def numbered(cls, columns: int, rows: int, side: int = 96) -> QtTileSource:
        pieces: dict[Cell, QPixmap] = {}
        font = QFont("Helvetica", max(10, side // 4), QFont.Weight.Bold)
        for y in range(rows):
            for x in range(columns):
                pix = QPixmap(side, side)
                pix.fill(QColor(_BLUE))
                painter = QPainter(pix)
                painter.setFont(font)
                painter.setPen(QColor(_BASE))
                painter.drawText(
                    QRect(0, 0, side, side),
                    Qt.AlignmentFlag.AlignCenter,
                    str(y * columns + x + 1),
                )
                painter.end()
                pieces[Cell(x, y)] = pix
        return cls(pieces)

    def cell_content(self, x: int, y: int) -> Cell:
        return Cell(x, y)

    def draw(self, visual: Cell, painter: QPainter, rect: Rect, highlighted: bool = False) -> None:
        target = QRect(rect.left, rect.top, rect.width, rect.height)
        painter.drawPixmap(target, self._pieces[visual])
        if highlighted:
            painter.setPen(QPen(QColor(_YELLOW), 3))
            painter.drawRect(target.adjusted(1, 1, -2, -2))


# ═══════════════════════════════════════════════════════════════════════════
# Tile panel
# ═══════════════════════════════════════════════════════════════════════════


class _TilePanel(QWidget):
    """Paints the grid and turns mouse input into pointer events."""

    def __init__(self, config: PuzzleConfig, tiles: QtTileSource) -> None:
        super().__init__()
        self.setObjectName("page")
        self.setMinimumSize(240, 240)
        self.setMouseTracking(False)
        self._tiles = tiles

        self._elapsed = QElapsedTimer()
        self._elapsed.start()
        self.layout_ = TileLayout(config.width, config.height, 400, 400)
        self.animator = AnimationScheduler(
            self.layout_, clock=self._elapsed.elapsed, step_ms=config.step_ms
        )
        self.session = PuzzleSession(config, self.animator, clock=self._elapsed.elapsed)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(FRAME_MS)

    # -- clock --

    def _tick(self) -> None:
        self.session.update()
        self.update()

    # -- geometry --

    def resizeEvent(self, ev) -> None:  # noqa: N802
        super().resizeEvent(ev)
        cfg = self.session.config
        self.layout_ = TileLayout(cfg.width, cfg.height, max(2, self.width()), max(2, self.height()))
        self.animator.relayout(self.layout_)

    # -- painting --

    def paintEvent(self, ev) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(_BASE))
        layout = self.layout_
        b = layout.bounds
        painter.fillRect(QRect(b.left, b.top, b.width, b.height), QColor(_MANTLE))

        grid = self.session.grid
        selected = self.session.resolver.selected
        for cell in grid.cells():
            content = grid.get(cell)
            if content is EMPTY or self.animator.is_animating(content):
                continue
            visual = self._tiles.cell_content(*content.home)
            self._tiles.draw(visual, painter, layout.tile_rect(cell), cell == selected)

        painter.setPen(QPen(QColor(_SURFACE1), 1))
        for (x1, y1), (x2, y2) in layout.grid_lines():
            painter.drawLine(x1, y1, x2, y2)

        side = layout.side - 1
        for anim in self.animator.animations:
            visual = self._tiles.cell_content(*anim.tile.home)
            self._tiles.draw(visual, painter, Rect(anim.x, anim.y, side, side))
        painter.end()

    # -- pointer input --

    def _pointer(self, phase: PointerPhase, ev: QMouseEvent) -> None:
        pos = ev.position()
        cell = self.layout_.cell_at(pos.x(), pos.y())
        self.session.handle_pointer(PointerEvent(phase, cell))
        self.update()

    def mousePressEvent(self, ev: QMouseEvent) -> None:  # noqa: N802
        if ev.button() == Qt.MouseButton.LeftButton:
            self._pointer(PointerPhase.DOWN, ev)

    def mouseMoveEvent(self, ev: QMouseEvent) -> None:  # noqa: N802
        if ev.buttons() & Qt.MouseButton.LeftButton:
            self._pointer(PointerPhase.MOVE, ev)

    def mouseReleaseEvent(self, ev: QMouseEvent) -> None:  # noqa: N802
        if ev.button() == Qt.MouseButton.LeftButton:
            self._pointer(PointerPhase.UP, ev)


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════


class _MainWindow(QMainWindow):
    def __init__(
        self,
        config: PuzzleConfig,
        store: SavedStateStore,
        tiles: QtTileSource,
        *,
        fresh: bool = False,
    ) -> None:
        super().__init__()
        self._store = store
        self.setWindowTitle("Tile Puzzle")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(420, 500)

        page = QWidget()
        page.setObjectName("page")
        root = QVBoxLayout(page)
        root.setSpacing(6)
        root.setContentsMargins(16, 10, 16, 10)

        title = QLabel(f"Tile Puzzle  {config.width}×{config.height}")
        title.setFont(QFont("Helvetica", 17, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)

        self._status = QLabel()
        self._status.setFont(QFont("Helvetica", 12))
        self._status.setStyleSheet(f"color:{_SUBTEXT};")
        self._status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._status)

        self._panel = _TilePanel(config, tiles)
        root.addWidget(self._panel, stretch=1)

        hint = QLabel(_HINT)
        hint.setFont(QFont("Helvetica", 11))
        hint.setStyleSheet(f"color:{_OVERLAY0};")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(hint)

        self.setCentralWidget(page)
        self.resize(560, 660)

        session = self._panel.session
        session.on_solved(self._on_solved)
        session.start(None if fresh else store.load())

        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._refresh_status)
        self._status_timer.start(200)
        self._refresh_status()

    @property
    def session(self) -> PuzzleSession:
        return self._panel.session

    def _refresh_status(self) -> None:
        if self.session.shuffle_pending:
            self._status.setText("Get ready…")
        else:
            self._status.setText("Put the picture back together")

    # -- completion ---

    def _on_solved(self) -> None:
        # Let the final slide land before the dialog blocks the loop.
        QTimer.singleShot(self.session.config.move_duration_ms + FRAME_MS, self._ask_decision)

    def _ask_decision(self) -> None:
        box = QMessageBox(self)
        box.setWindowTitle("Solved")
        box.setText("★  S O L V E D  ★\n\nShuffle again?")
        again = box.addButton("Shuffle", QMessageBox.ButtonRole.AcceptRole)
        box.addButton("Quit", QMessageBox.ButtonRole.RejectRole)
        box.exec()
        if box.clickedButton() is again:
            self.session.resolve(Decision.SHUFFLE)
        else:
            self.session.resolve(Decision.TERMINATE)
            self.close()

    # -- keyboard ---

    _DIRS = {
        Qt.Key.Key_Up: Direction.UP,
        Qt.Key.Key_W: Direction.UP,
        Qt.Key.Key_Down: Direction.DOWN,
        Qt.Key.Key_S: Direction.DOWN,
        Qt.Key.Key_Left: Direction.LEFT,
        Qt.Key.Key_A: Direction.LEFT,
        Qt.Key.Key_Right: Direction.RIGHT,
        Qt.Key.Key_D: Direction.RIGHT,
    }

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        key = event.key()
        if key in self._DIRS:
            self.session.move_toward(self._DIRS[key])
        elif key == Qt.Key.Key_R:
            if not self.session.awaiting_decision:
                self.session.shuffle()
        elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
            self.close()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, ev) -> None:  # noqa: N802
        if self.session.terminated:
            self._store.clear()
        else:
            self._store.save(self.session.saved_game())
        super().closeEvent(ev)


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
    """Launch the PyQt6 GUI."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    image = image or pick_image(assets_dir / "images")
    if image is not None:
        tiles = QtTileSource.from_image(image, config.width, config.height)
    else:
        tiles = QtTileSource.numbered(config.width, config.height)
    window = _MainWindow(config, SavedStateStore(data_dir / "puzzle.json"), tiles, fresh=fresh)
    window.show()
    qapp.exec()
