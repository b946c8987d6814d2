"""Single-keypress reader for the terminal frontend.

Handles arrow keys, WASD and a few command keys without requiring Enter.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "W": "up",
    "s": "down",
    "S": "down",
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "shuffle",
    "R": "shuffle",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _read_windows(timeout: float) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time

    end = time.monotonic() + timeout
    while time.monotonic() < end:
        if msvcrt.kbhit():
            ch = msvcrt.getwch()
            if ch in ("\x00", "\xe0"):
                return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(msvcrt.getwch(), "")
            if ch == "\x1b":
                return "quit"
            return _resolve(ch)
        time.sleep(0.02)
    return None


def get_key_timeout(timeout: float) -> str | None:
    """Read one keypress, waiting at most *timeout* seconds.

    Returns a normalised action string (``"up"``, ``"down"``, ``"left"``,
    ``"right"``, ``"quit"``, ``"shuffle"``, ``"enter"``, or the raw
    printable character), ``""`` for unrecognised keys, and ``None`` when
    nothing was pressed in time.
    """
    if os.name == "nt":
        return _read_windows(timeout)

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        # os.read is unbuffered, so select still sees the rest of an escape sequence.
        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch != "\x1b":
            return _resolve(ch)

        r2, _, _ = select.select([fd], [], [], 0.1)
        if not r2:
            return "quit"  # bare Escape
        if os.read(fd, 1).decode("utf-8", errors="ignore") != "[":
            return "quit"
        r3, _, _ = select.select([fd], [], [], 0.1)
        if not r3:
            return ""
        return _ARROW_MAP.get(os.read(fd, 1).decode("utf-8", errors="ignore"), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
