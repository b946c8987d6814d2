#!/usr/bin/env python3
"""Tile Puzzle.

Usage::

    python main.py                     # interactive menu
    python main.py -f pygame           # Pygame GUI, 10×10 picture puzzle
    python main.py -f pyqt -W 4 -H 3   # PyQt GUI, 4 columns × 3 rows
    python main.py -f rich -W 3        # Rich terminal, 3×3
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"
ASSETS_DIR = PROJECT_ROOT / "assets"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tilepuzzle.config import (  # noqa: E402
    DEFAULT_MOVE_DURATION_MS,
    Corner,
    PuzzleConfig,
)

logger = logging.getLogger("tilepuzzle")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.rich: "tilepuzzle_ui.cli.rich.app",
    Frontend.pygame: "tilepuzzle_ui.gui.pygame.app",
    Frontend.pyqt: "tilepuzzle_ui.gui.pyqt.app",
}


# -- helpers ------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


def _launch(frontend: Frontend, config: PuzzleConfig, image: Optional[Path], fresh: bool) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    logger.info("Launching %s frontend with %d×%d grid", frontend, config.width, config.height)
    mod.run(config, data_dir=DATA_DIR, assets_dir=ASSETS_DIR, image=image, fresh=fresh)


def _ask_dimension(prompt: str, default: int) -> int:
    raw = input(f"  {prompt} (≥2, default {default}): ").strip()
    if not raw:
        return default
    try:
        value = int(raw)
        if value < 2:
            raise ValueError
    except ValueError:
        print(f"  Invalid value, using {default}.")
        value = default
    return value


def _menu_loop(config: PuzzleConfig, image: Optional[Path], fresh: bool) -> None:
    choices = {"1": Frontend.pygame, "2": Frontend.pyqt, "3": Frontend.rich}
    while True:
        print()
        print("  ====================================")
        print("          T I L E   P U Z Z L E       ")
        print("  ====================================")
        print()
        print("  1.  Play  (Pygame GUI)")
        print("  2.  Play  (PyQt GUI)")
        print("  3.  Play  (Rich Terminal)")
        print(f"  4.  Grid size  (now {config.width}×{config.height})")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in choices:
            _launch(choices[choice], config, image, fresh)
        elif choice == "4":
            width = _ask_dimension("Columns", config.width)
            height = _ask_dimension("Rows", config.height)
            config = PuzzleConfig(
                width=width,
                height=height,
                move_duration_ms=config.move_duration_ms,
                shuffle_moves=config.shuffle_moves,
                hole_corner=config.hole_corner,
            )
            # A saved game for other dimensions would be discarded anyway.
            fresh = True
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    width: Optional[int] = typer.Option(
        None, "-W", "--width",
        min=2,
        help="Columns (defaults to the height, or 10).",
    ),
    height: Optional[int] = typer.Option(
        None, "-H", "--height",
        min=2,
        help="Rows (defaults to the width, or 10).",
    ),
    duration: int = typer.Option(
        DEFAULT_MOVE_DURATION_MS, "-d", "--duration",
        min=1,
        help="Slide animation length in milliseconds.",
    ),
    shuffle_moves: Optional[int] = typer.Option(
        None, "--shuffle-moves",
        min=0,
        help="Random moves per shuffle (default: 4 × columns × rows).",
    ),
    hole_corner: Corner = typer.Option(
        Corner.TOP_RIGHT, "--hole-corner",
        help="Corner that stays empty in the solved picture.",
    ),
    image: Optional[Path] = typer.Option(
        None, "-i", "--image",
        exists=True, dir_okay=False,
        help="Picture to cut into tiles (GUI frontends).",
    ),
    fresh: bool = typer.Option(
        False, "--fresh",
        help="Ignore any saved game and start a new shuffle.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log debug output.",
    ),
) -> None:
    """Tile Puzzle."""
    _setup_logging(verbose)
    config = PuzzleConfig.from_dimensions(
        width,
        height,
        move_duration_ms=duration,
        shuffle_moves=shuffle_moves,
        hole_corner=hole_corner,
    )

    if frontend is None:
        _menu_loop(config, image, fresh)
        return

    _launch(frontend, config, image, fresh)


if __name__ == "__main__":
    app()
