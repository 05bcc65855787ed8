# sim/runner.py

import time
from typing import Protocol

from .clock import FrameClock
from .hooks import NoopHooks, SimHooks


class Tickable(Protocol):
    @property
    def moving(self) -> bool: ...
    def tick(self, dt: float) -> float: ...


class TickRunner:
    """Pumps one `tick(dt)` per frame until the target stops moving or a frame cap is hit."""

    def __init__(self, target: Tickable, clock: FrameClock, hooks: SimHooks | None = None):
        self.target = target
        self.clock = clock
        self._hooks = hooks or NoopHooks()

    def run(self, max_ticks: int | None = None, until_idle: bool = True) -> int:
        if max_ticks is None and not until_idle:
            raise ValueError("run() needs max_ticks when until_idle is False")
        t0 = time.perf_counter()
        self._hooks.run_start(max_ticks=max_ticks, dt=self.clock.dt)
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            if until_idle and not self.target.moving:
                break
            self.target.tick(self.clock.next_dt())
            ticks += 1
        self._hooks.run_end(
            ticks=ticks, sim_t=self.clock.now, wall_ms=(time.perf_counter() - t0) * 1000
        )
        return ticks
