# spline_sim/domain/mechanics/mechanics_anchor_generators.py
from spline_sim.app.protocols import AnchorGenerator, CurveSmoother, IntersectionTester, PointSampler
from spline_sim.domain.entities.geometry import Bounds, Path, Point
from spline_sim.domain.errors import DegenerateBoundsError, InvalidPathError
from spline_sim.domain.mechanics.mechanics_smoothers import MIN_ANCHORS
from spline_sim.sim.hooks import NoopHooks, SimHooks


class RejectionAnchorGenerator(AnchorGenerator):
    """
    Free mode: `count` uniform draws, exact duplicates redrawn.
    Non-crossing mode: grow the path one anchor at a time, smoothing and testing
    after each append; a crossing candidate is dropped and redrawn. More than
    `max_local_attempts` rejections abandon the path and start over, at most
    `max_restarts` times, after which DegenerateBoundsError is raised.
    """

    def __init__(
        self,
        *,
        sampler: PointSampler,
        smoother: CurveSmoother,
        tester: IntersectionTester,
        max_duplicate_draws: int = 1000,
        max_local_attempts: int = 100,
        max_restarts: int = 10,
        hooks: SimHooks | None = None,
    ):
        self.sampler, self.smoother, self.tester = sampler, smoother, tester
        self.max_duplicate_draws = max(1, max_duplicate_draws)
        self.max_local_attempts = max_local_attempts
        self.max_restarts = max_restarts
        self.hooks = hooks or NoopHooks()
        self.last_restarts = 0
        self.last_rejected = 0

    def generate(self, count: int, loop: bool, non_crossing: bool, bounds: Bounds) -> Path:
        self._check(count, bounds)
        self.hooks.generation_start(count=count, loop=loop, non_crossing=non_crossing)
        self.last_restarts = self.last_rejected = 0
        if non_crossing:
            path = self._generate_non_crossing(count, loop, bounds)
        else:
            taken: set[Point] = set()
            path = Path(tuple(self._draw_distinct(taken, bounds) for _ in range(count)), loop)
        self.hooks.generation_end(
            count=count, loop=loop, restarts=self.last_restarts, rejected=self.last_rejected
        )
        return path

    # ---------------- helpers ----------------

    @staticmethod
    def _check(count: int, bounds: Bounds) -> None:
        if count < MIN_ANCHORS:
            raise InvalidPathError(f"need at least {MIN_ANCHORS} anchors, got {count}")
        if bounds.width < 0 or bounds.height < 0:
            raise DegenerateBoundsError(f"inverted bounds {bounds}", count=count)
        if bounds.width == 0 or bounds.height == 0:
            raise DegenerateBoundsError(
                f"bounds {bounds} have no area for {count} distinct anchors", count=count
            )

    def _draw_distinct(self, taken: set[Point], bounds: Bounds) -> Point:
        for _ in range(self.max_duplicate_draws):
            p = self.sampler.sample(bounds)
            if p not in taken:
                taken.add(p)
                return p
        raise DegenerateBoundsError(
            f"no distinct point after {self.max_duplicate_draws} draws in {bounds}",
            count=len(taken) + 1,
        )

    def _generate_non_crossing(self, count: int, loop: bool, bounds: Bounds) -> Path:
        for restart in range(self.max_restarts + 1):
            if restart:
                self.last_restarts = restart
                self.hooks.generation_restart(
                    restart=restart, count=count, attempts=self.max_local_attempts
                )
            path = self._attempt(count, loop, bounds)
            if path is not None:
                return path
        raise DegenerateBoundsError(
            f"no non-crossing path of {count} anchors after {self.max_restarts} restarts",
            count=count,
            restarts=self.max_restarts,
        )

    def _attempt(self, count: int, loop: bool, bounds: Bounds) -> Path | None:
        anchors: list[Point] = []
        taken: set[Point] = set()
        attempts = 0
        while len(anchors) < count:
            p = self._draw_distinct(taken, bounds)
            if len(anchors) + 1 < MIN_ANCHORS:
                anchors.append(p)
                continue
            candidate = Path((*anchors, p), loop)
            if self.tester.has_self_intersection(self.smoother.smooth(candidate)):
                taken.discard(p)
                attempts += 1
                self.last_rejected += 1
                if attempts > self.max_local_attempts:
                    return None
                continue
            anchors.append(p)
        return Path(tuple(anchors), loop)
