# spline_sim/domain/mechanics/mechanics_core.py
from dataclasses import dataclass

from spline_sim.app.protocols import (
    AnchorGenerator,
    CurveSmoother,
    IntersectionTester,
    Mechanics,
)
from spline_sim.domain.entities.geometry import Bounds, Path, Polyline


@dataclass
class Mechanics(Mechanics):
    smoother: CurveSmoother
    tester: IntersectionTester
    generator: AnchorGenerator

    def generate(self, count: int, loop: bool, non_crossing: bool, bounds: Bounds) -> Path:
        return self.generator.generate(count, loop, non_crossing, bounds)

    def smooth(self, path: Path) -> Polyline:
        return self.smoother.smooth(path)

    def has_self_intersection(self, polyline: Polyline) -> bool:
        return self.tester.has_self_intersection(polyline)
