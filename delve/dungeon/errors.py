class DungeonConfigError(ValueError):
    """Raised before generation when a DungeonConfig cannot produce valid geometry."""

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = tuple(fields or ())


class DungeonGenerationError(RuntimeError):
    """Raised when a generation run breaks one of its structural invariants."""


__all__ = ["DungeonConfigError", "DungeonGenerationError"]
