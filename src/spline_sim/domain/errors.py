# spline_sim/domain/errors.py


class PathEngineError(Exception):
    """Base class for recoverable path engine failures."""


class InvalidPathError(PathEngineError, ValueError):
    """Anchor set cannot be smoothed (fewer than 3 anchors, duplicates)."""


class EmptyPathError(PathEngineError, ValueError):
    """Polyline too short to traverse."""


class DegenerateBoundsError(PathEngineError, RuntimeError):
    def __init__(self, msg: str, *, count: int | None = None, restarts: int | None = None):
        super().__init__(msg)
        self.count = count
        self.restarts = restarts
