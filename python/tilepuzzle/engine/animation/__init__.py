from tilepuzzle.engine.animation.scheduler import STEP_MS, Animation, AnimationScheduler

__all__ = ["STEP_MS", "Animation", "AnimationScheduler"]
