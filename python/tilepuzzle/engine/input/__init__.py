from tilepuzzle.engine.input.resolver import InputResolver, PointerEvent, PointerPhase

__all__ = ["InputResolver", "PointerEvent", "PointerPhase"]
