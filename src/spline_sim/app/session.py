# spline_sim/app/session.py
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path as FsPath

from spline_sim.app.events import FallbackReason, PathFallback, PathGenerated, PathLoaded
from spline_sim.config.models import FallbackModel, GeneratorModel
from spline_sim.domain.entities.geometry import Bounds, Path, Polyline
from spline_sim.domain.errors import DegenerateBoundsError, EmptyPathError, InvalidPathError
from spline_sim.domain.mechanics.mechanics_core import Mechanics
from spline_sim.domain.mechanics.mechanics_path_followers import PathFollower, passage_time
from spline_sim.io.store import PathRecord, load_record, save_record
from spline_sim.sim.event import BaseEvent
from spline_sim.sim.hooks import NoopHooks, SimHooks

RECOVERABLE = (InvalidPathError, EmptyPathError, DegenerateBoundsError)


class PathSession:
    """
    Owns the current Path, its Polyline, the speed and the follower.

    Every path change goes through `_install`, which re-smooths and resets the
    follower, so a traversal never runs on a stale polyline. Generation and load
    failures fall back to the configured default path.
    """

    def __init__(
        self,
        *,
        mechanics: Mechanics,
        bounds: Bounds,
        generator: GeneratorModel,
        fallback: FallbackModel,
        speed: float,
        follower: PathFollower | None = None,
        hooks: SimHooks | None = None,
        on_event: Callable[[BaseEvent], None] | None = None,
    ):
        self.mechanics = mechanics
        self.bounds = bounds
        self.generator_cfg = generator
        self.fallback_cfg = fallback
        self.hooks = hooks or NoopHooks()
        self.on_event = on_event
        self.follower = follower or PathFollower(hooks=self.hooks)
        self.follower.on_event = self._on_follower_event
        self.speed = self._check_speed(speed)
        self.t = 0.0
        self.path: Path | None = None
        self.polyline: Polyline | None = None
        self.passage_time = 0.0

    # ------------- helpers -------------------

    @staticmethod
    def _check_speed(speed: float) -> float:
        if speed <= 0:
            raise ValueError(f"speed must be > 0, got {speed}")
        return float(speed)

    def _emit(self, ev: BaseEvent) -> None:
        if self.on_event is not None:
            self.on_event(ev)

    def _on_follower_event(self, ev: BaseEvent) -> None:
        # follower stamps traversal time; re-stamp with session time
        self._emit(replace(ev, t=self.t))

    def _install(self, path: Path) -> Polyline:
        polyline = self.mechanics.smooth(path)
        self.hooks.smooth(anchors=len(path), loop=path.loop, samples=len(polyline))
        self.follower.reset_to_start(polyline)
        self.path, self.polyline = path, polyline
        self.passage_time = passage_time(polyline, self.speed)
        return polyline

    def _fallback(self, reason: FallbackReason, exc: Exception) -> Path:
        self.hooks.fallback(reason=reason, error=str(exc))
        self._emit(PathFallback(t=self.t, reason=reason, error=str(exc)))
        fb = self.fallback_cfg
        self.speed = fb.speed
        path = self.mechanics.generate(fb.count, fb.loop, False, self.bounds)
        self._install(path)
        return path

    # ------------- path lifecycle -------------------

    def regenerate(
        self,
        count: int | None = None,
        loop: bool | None = None,
        non_crossing: bool | None = None,
    ) -> Path:
        g = self.generator_cfg
        count = g.count if count is None else count
        loop = g.loop if loop is None else loop
        non_crossing = g.non_crossing if non_crossing is None else non_crossing
        try:
            path = self.mechanics.generate(count, loop, non_crossing, self.bounds)
            self._install(path)
        except RECOVERABLE as exc:
            return self._fallback("generate", exc)
        restarts = getattr(self.mechanics.generator, "last_restarts", 0)
        self._emit(
            PathGenerated(
                t=self.t, anchors=count, loop=loop, non_crossing=non_crossing, restarts=restarts
            )
        )
        return path

    def set_loop(self, loop: bool) -> Polyline:
        if self.path is None:
            raise EmptyPathError("no path to re-loop")
        return self._install(self.path.with_loop(loop))

    def set_speed(self, speed: float) -> float:
        self.speed = self._check_speed(speed)
        if self.polyline is not None:
            self.passage_time = passage_time(self.polyline, self.speed)
        return self.passage_time

    def load_path(self, path: Path, speed: float | None = None) -> Polyline:
        if speed is not None:
            self.speed = self._check_speed(speed)
        return self._install(path)

    # ------------- persistence -------------------

    def to_record(self) -> PathRecord:
        if self.path is None:
            raise EmptyPathError("no path to save")
        return PathRecord.from_path(self.path, self.speed, self.passage_time)

    def apply_record(self, record: PathRecord) -> Path:
        try:
            self.load_path(record.to_path(), record.speed)
        except RECOVERABLE as exc:
            return self._fallback("load", exc)
        stale = record.is_stale(self.passage_time)
        if stale:
            self.hooks.error(
                reason="stale_passage_time", stored=record.passage_time, actual=self.passage_time
            )
        self._emit(
            PathLoaded(
                t=self.t,
                anchors=len(self.path),
                loop=self.path.loop,
                speed=self.speed,
                stale_passage_time=stale,
            )
        )
        return self.path

    def save(self, file: str | FsPath) -> FsPath:
        return save_record(self.to_record(), file)

    def load(self, file: str | FsPath) -> Path:
        return self.apply_record(load_record(file))

    # ------------- traversal -------------------

    @property
    def moving(self) -> bool:
        return self.follower.moving

    def start(self):
        if self.polyline is None:
            raise EmptyPathError("generate or load a path before starting")
        return self.follower.start(self.polyline, self.speed)

    def stop(self) -> None:
        self.follower.stop()

    def tick(self, dt: float) -> float:
        self.t += dt
        return self.follower.tick(dt, self.speed)
