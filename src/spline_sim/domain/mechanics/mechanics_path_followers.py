# spline_sim/domain/mechanics/mechanics_path_followers.py
import math
from collections.abc import Callable
from dataclasses import replace

from spline_sim.app.events import LapCompleted, TraversalFinished, TraversalStarted
from spline_sim.domain.entities.geometry import Point, Polyline
from spline_sim.domain.entities.motion import FollowerState, MotionState, heading
from spline_sim.domain.errors import EmptyPathError
from spline_sim.sim.event import BaseEvent
from spline_sim.sim.hooks import NoopHooks, SimHooks


def passage_time(polyline: Polyline, speed: float) -> float:
    """Seconds to cover the whole polyline (closing segment included when looped)."""
    if speed <= 0:
        raise ValueError(f"speed must be > 0, got {speed}")
    return polyline.length / speed


def _toward(src: Point, dst: Point, dist: float, remaining: float) -> Point:
    f = dist / remaining
    return Point(src.x + f * (dst.x - src.x), src.y + f * (dst.y - src.y))


class PathFollower:
    """
    Constant-speed agent on a polyline snapshot.

    Idle -> Moving on start(); Moving -> Idle at the end of an open polyline or
    on stop(). Each tick spends exactly speed*dt of arc length, walking across
    as many segments as the budget covers; a looped polyline wraps from its
    last sample back to the first.
    """

    def __init__(
        self,
        *,
        on_event: Callable[[BaseEvent], None] | None = None,
        hooks: SimHooks | None = None,
        snap_eps: float = 1e-9,
    ):
        self.on_event = on_event
        self.hooks = hooks or NoopHooks()
        self.snap_eps = snap_eps
        self._polyline: Polyline | None = None
        self._motion: MotionState | None = None
        self.distance_travelled = 0.0
        self.elapsed = 0.0
        self.laps = 0

    # ------------- state -------------------

    @property
    def polyline(self) -> Polyline | None:
        return self._polyline

    @property
    def motion(self) -> MotionState | None:
        return self._motion

    @property
    def state(self) -> FollowerState:
        return self._motion.state if self._motion else FollowerState.IDLE

    @property
    def moving(self) -> bool:
        return self.state is FollowerState.MOVING

    @property
    def position(self) -> Point | None:
        return self._motion.position if self._motion else None

    def _emit(self, ev: BaseEvent) -> None:
        if self.on_event is not None:
            self.on_event(ev)

    # ------------- transitions -------------------

    def reset_to_start(self, polyline: Polyline) -> MotionState:
        if len(polyline) < 2:
            raise EmptyPathError(f"polyline needs at least 2 points, got {len(polyline)}")
        if polyline.loop and polyline.length == 0:
            raise EmptyPathError("looped polyline has zero length")
        first, target = polyline.point(0), polyline.point(1)
        self._polyline = polyline
        self._motion = MotionState(
            position=first,
            orientation=heading(first, target),
            segment_index=0,
            target=target,
        )
        self.distance_travelled = 0.0
        self.elapsed = 0.0
        self.laps = 0
        return self._motion

    def start(self, polyline: Polyline | None = None, speed: float = 0.0) -> MotionState:
        """Reset to the first sample and begin moving. Calling again restarts."""
        if polyline is None:
            polyline = self._polyline
        if polyline is None:
            raise EmptyPathError("no polyline to traverse")
        self.reset_to_start(polyline)
        self._motion = replace(self._motion, moving=True, speed=speed)
        self.hooks.traversal_start(length=polyline.length, speed=speed, loop=polyline.loop)
        self._emit(
            TraversalStarted(t=0.0, length=polyline.length, speed=speed, loop=polyline.loop)
        )
        return self._motion

    def stop(self) -> None:
        if self._motion is not None:
            self._motion = replace(self._motion, moving=False)

    # ------------- integration -------------------

    def _advance_target(self, m: MotionState) -> MotionState | None:
        """Next target after arriving at m.target; None when an open polyline is done."""
        pl = self._polyline
        n = len(pl)
        nxt = m.segment_index + 1
        if nxt + 1 < n:
            return m.aimed_at(pl.point(nxt + 1), nxt)
        if not pl.loop:
            return None
        if nxt == n - 1:
            # closing segment: last sample -> first sample
            return m.aimed_at(pl.point(0), nxt)
        self.laps += 1
        self.hooks.lap(laps=self.laps, sim_t=self.elapsed)
        self._emit(LapCompleted(t=self.elapsed, laps=self.laps))
        return m.aimed_at(pl.point(1), 0)

    def _skip_laps(self, budget: float, moved: float) -> tuple[float, float]:
        """Back at the first sample: consume whole laps at once instead of walking them."""
        length = self._polyline.length
        whole = math.floor(budget / length)
        if whole < 1:
            return budget, moved
        self.laps += whole
        self.hooks.lap(laps=self.laps, sim_t=self.elapsed)
        self._emit(LapCompleted(t=self.elapsed, laps=self.laps))
        return budget - whole * length, moved + whole * length

    def tick(self, dt: float, speed: float) -> float:
        """Advance by speed*dt of arc length; returns the distance actually covered."""
        if dt < 0 or speed < 0:
            raise ValueError(f"dt and speed must be >= 0, got dt={dt}, speed={speed}")
        budget = speed * dt
        if not (math.isfinite(dt) and math.isfinite(speed) and math.isfinite(budget)):
            raise ValueError(f"dt and speed must be finite, got dt={dt}, speed={speed}")
        if self._polyline is None:
            raise EmptyPathError("tick before any polyline was set")
        if not self.moving:
            return 0.0

        self.elapsed += dt
        m = replace(self._motion, speed=speed)
        moved = 0.0
        while True:
            remaining = m.position.dist(m.target)
            # zero-length segments (the closing sample of a loop) are always consumed
            reachable = remaining == 0 or (budget > 0 and remaining <= budget + self.snap_eps)
            if not reachable:
                if budget > 0:
                    m = replace(m, position=_toward(m.position, m.target, budget, remaining))
                    moved += budget
                break
            m = replace(m, position=m.target)
            budget -= remaining
            moved += remaining
            laps = self.laps
            nxt = self._advance_target(m)
            if nxt is None:
                m = replace(m, moving=False)
                break
            m = nxt
            if self.laps > laps:
                budget, moved = self._skip_laps(budget, moved)

        self._motion = m
        self.distance_travelled += moved
        if not m.moving:
            self.hooks.traversal_end(distance=self.distance_travelled, sim_t=self.elapsed)
            self._emit(TraversalFinished(t=self.elapsed, distance=self.distance_travelled))
        return moved
