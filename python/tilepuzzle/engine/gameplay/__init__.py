from tilepuzzle.engine.gameplay.engine import (
    Animator,
    MoveEngine,
    MoveResult,
    RejectReason,
    Slide,
)

__all__ = ["Animator", "MoveEngine", "MoveResult", "RejectReason", "Slide"]
