from typing import Protocol, runtime_checkable

from spline_sim.domain.entities.geometry import Bounds, Path, Point, Polyline, TangentPair


# ------------- Mechanics --------------------
@runtime_checkable
class CurveSmoother(Protocol):
    """
    Responsibilities:
      • Derive per-anchor tangent pairs from neighbouring anchors.
      • Sample the piecewise cubic curve into a dense polyline.
    Deterministic: identical (anchors, loop) always yields an identical polyline.
    """

    def control_points(self, path: Path) -> tuple[TangentPair, ...]: ...
    def smooth(self, path: Path) -> Polyline: ...


@runtime_checkable
class IntersectionTester(Protocol):
    """Pure predicate over a polyline; no state."""

    def has_self_intersection(self, polyline: Polyline) -> bool: ...


@runtime_checkable
class PointSampler(Protocol):
    """Draw uniformly random points inside a rectangle."""

    def sample(self, bounds: Bounds) -> Point: ...


@runtime_checkable
class AnchorGenerator(Protocol):
    def generate(self, count: int, loop: bool, non_crossing: bool, bounds: Bounds) -> Path: ...


@runtime_checkable
class Mechanics(Protocol):
    """
    Convenience façade bundling the core mechanics components.
    Provides common helpers so call sites don’t need to juggle pieces.
    """

    smoother: CurveSmoother
    tester: IntersectionTester
    generator: AnchorGenerator

    def generate(self, count: int, loop: bool, non_crossing: bool, bounds: Bounds) -> Path:
        return self.generator.generate(count, loop, non_crossing, bounds)

    def smooth(self, path: Path) -> Polyline:
        return self.smoother.smooth(path)

    def has_self_intersection(self, polyline: Polyline) -> bool:
        return self.tester.has_self_intersection(polyline)
