# sim/hooks.py
from typing import Protocol


class SimHooks(Protocol):
    def run_start(self, *, max_ticks, dt): ...
    def run_end(self, *, ticks, sim_t, wall_ms): ...
    def generation_start(self, *, count, loop, non_crossing): ...
    def generation_restart(self, *, restart, count, attempts): ...
    def generation_end(self, *, count, loop, restarts, rejected): ...
    def smooth(self, *, anchors, loop, samples): ...
    def traversal_start(self, *, length, speed, loop): ...
    def traversal_end(self, *, distance, sim_t): ...
    def lap(self, *, laps, sim_t): ...
    def fallback(self, *, reason: str, error: str): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def generation_start(self, **_):
        pass

    def generation_restart(self, **_):
        pass

    def generation_end(self, **_):
        pass

    def smooth(self, **_):
        pass

    def traversal_start(self, **_):
        pass

    def traversal_end(self, **_):
        pass

    def lap(self, **_):
        pass

    def fallback(self, **_):
        pass

    def error(self, **_):
        pass
