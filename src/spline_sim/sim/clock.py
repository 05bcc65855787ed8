# sim/clock.py
from __future__ import annotations

import time
from collections.abc import Callable


def fps(x: float) -> float:
    """Frame delta for x frames per second."""
    return 1.0 / x


class FrameClock:
    """
    Delta-time source for the tick loop.

    "fixed": every frame lasts `dt`.
    "wall":  frames last the real time since the previous call, clamped to
             `max_dt` so a stalled process cannot dump a huge step.
    """

    def __init__(
        self,
        *,
        kind: str = "fixed",
        dt: float = fps(60),
        max_dt: float = 0.25,
        timer: Callable[[], float] = time.perf_counter,
    ):
        if kind not in ("fixed", "wall"):
            raise ValueError(f"Unknown clock kind {kind!r}")
        self.kind, self.dt, self.max_dt, self._timer = kind, dt, max_dt, timer
        self._last: float | None = None
        self._t = 0.0
        self.frames = 0

    @classmethod
    def fixed(cls, dt: float) -> FrameClock:
        return cls(kind="fixed", dt=dt)

    @property
    def now(self) -> float:
        return self._t

    def reset(self) -> None:
        self._last = None
        self._t = 0.0
        self.frames = 0

    def next_dt(self) -> float:
        if self.kind == "fixed":
            step = self.dt
        else:
            wall = self._timer()
            step = 0.0 if self._last is None else min(max(wall - self._last, 0.0), self.max_dt)
            self._last = wall
        self._t += step
        self.frames += 1
        return step
