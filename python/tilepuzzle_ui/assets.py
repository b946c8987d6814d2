"""Picture lookup shared by the GUI frontends."""

from __future__ import annotations

import random
from pathlib import Path


def pick_image(images_dir: Path, rng: random.Random | None = None) -> Path | None:
    """Pick a random PNG from *images_dir*, if there is any."""
    if not images_dir.is_dir():
        return None
    images = sorted(images_dir.glob("*.png"))
    if not images:
        return None
    return (rng or random).choice(images)
