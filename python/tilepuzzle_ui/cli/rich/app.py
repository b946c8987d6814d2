"""Rich terminal frontend: styled board table, keyboard play.

The terminal has no pointer, so tiles move with the arrow keys / WASD:
the key names the direction the tile next to the hole slides in.
"""

from __future__ import annotations

from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tilepuzzle.config import PuzzleConfig
from tilepuzzle.engine.session import Decision, PuzzleSession
from tilepuzzle.models.grid import EMPTY, Cell, Direction, GridState
from tilepuzzle.models.savedstate import SavedStateStore
from tilepuzzle_ui.cli.input_handler import get_key_timeout

console = Console()

POLL_S = 0.1

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- board rendering ----------------------------------------------------------


def render_board(grid: GridState) -> Table:
    """Return a Rich Table representing the puzzle grid.

    Tiles show their home position as a 1-based row-major number; tiles
    sitting on their home cell are green.
    """
    width = len(str(grid.width * grid.height))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(grid.width):
        table.add_column(width=width + 1, justify="center")

    for y in range(grid.height):
        cells: list[str] = []
        for x in range(grid.width):
            cell = Cell(x, y)
            content = grid.get(cell)
            if content is EMPTY:
                cells.append("[dim]·[/dim]")
                continue
            label = content.index(grid.width) + 1
            if content.home == cell:
                cells.append(f"[bold green]{label:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{label:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def _draw_game(session: PuzzleSession, status: str = "") -> None:
    console.clear()
    grid = session.grid

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reshuffle   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    panel = Panel(
        Align.center(render_board(grid)),
        title=f"[bold cyan]Tile Puzzle  {grid.width}×{grid.height}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    if session.shuffle_pending:
        console.print(Align.center(Text("  Get ready…", style="yellow")))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_solved(session: PuzzleSession) -> None:
    console.clear()
    grid = session.grid

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("SOLVED!", style="bold green")
    congrats.append("  ", style="green")
    congrats.append("★\n", style="bold yellow")

    prompt = Text()
    prompt.append("  R", style="bold cyan")
    prompt.append("  shuffle again   ", style="dim")
    prompt.append("Q", style="bold cyan")
    prompt.append("  quit", style="dim")

    panel = Panel(
        Group(Align.center(render_board(grid)), Align.center(congrats), Align.center(prompt)),
        title=f"[bold green]Tile Puzzle  {grid.width}×{grid.height}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


# -- game loop ----------------------------------------------------------------


def _ask_decision(session: PuzzleSession) -> Decision:
    _draw_solved(session)
    while True:
        key = get_key_timeout(POLL_S)
        if key in ("shuffle", "enter"):
            return Decision.SHUFFLE
        if key == "quit":
            return Decision.TERMINATE


def _play(session: PuzzleSession) -> None:
    status = ""
    dirty = True
    while not session.terminated:
        if dirty:
            _draw_game(session, status)
            status = ""
            dirty = False

        key = get_key_timeout(POLL_S)
        pending = session.shuffle_pending
        session.update()
        if pending != session.shuffle_pending:
            dirty = True
        if key is None:
            continue

        if key in _DIRECTIONS:
            result = session.move_toward(_DIRECTIONS[key])
            if result is not None and not result.accepted:
                status = "[dim]No tile can slide that way.[/dim]"
            dirty = True
        elif key == "shuffle":
            session.shuffle()
            dirty = True
        elif key == "quit":
            return

        if session.awaiting_decision:
            session.resolve(_ask_decision(session))
            dirty = True


# -- public entry point ----------------------------------------------------------


def run(
    config: PuzzleConfig,
    data_dir: Path = Path("data"),
    assets_dir: Path = Path("assets"),
    image: Path | None = None,
    fresh: bool = False,
) -> None:
    """Launch the Rich terminal frontend.

    *assets_dir* and *image* are accepted for a uniform launcher signature;
    the terminal draws numbered tiles only.
    """
    store = SavedStateStore(data_dir / "puzzle.json")
    session = PuzzleSession(config)
    session.start(None if fresh else store.load())
    try:
        _play(session)
    finally:
        if session.terminated:
            store.clear()
        else:
            store.save(session.saved_game())
    console.clear()
    console.print(Align.center(Text("\n  Goodbye!\n", style="bold cyan")))
