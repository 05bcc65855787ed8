from spline_sim.app.protocols import PointSampler
from spline_sim.domain.entities.geometry import Bounds, Point


class UniformPointSampler(PointSampler):
    def __init__(self, *, rng):
        self.rng = rng

    def sample(self, bounds: Bounds) -> Point:
        return Point(
            float(self.rng.uniform(bounds.x_min, bounds.x_max)),
            float(self.rng.uniform(bounds.y_min, bounds.y_max)),
        )


class SequencePointSampler(PointSampler):
    """Replays fixed points in order, ignoring bounds. Handy for scripted runs and tests."""

    def __init__(self, points):
        self._points = [Point(float(x), float(y)) for x, y in points]
        self._i = 0

    def sample(self, bounds: Bounds) -> Point:
        if self._i >= len(self._points):
            raise IndexError("SequencePointSampler exhausted")
        p = self._points[self._i]
        self._i += 1
        return p
