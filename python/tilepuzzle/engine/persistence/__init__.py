from tilepuzzle.engine.persistence.codec import PersistenceCodec, PersistenceFormatError

__all__ = ["PersistenceCodec", "PersistenceFormatError"]
