from tilepuzzle.engine.gamegenerator.shuffler import ShuffleGenerator

__all__ = ["ShuffleGenerator"]
