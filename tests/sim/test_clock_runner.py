import pytest

from spline_sim.sim.clock import FrameClock, fps
from spline_sim.sim.hooks import NoopHooks
from spline_sim.sim.runner import TickRunner


class _Countdown:
    def __init__(self, n: int):
        self.n, self.dts = n, []

    @property
    def moving(self) -> bool:
        return self.n > 0

    def tick(self, dt: float) -> float:
        self.dts.append(dt)
        self.n -= 1
        return dt


class _TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def run_start(self, *, max_ticks, dt):
        self.trace.append(("start", max_ticks))

    def run_end(self, *, ticks, sim_t, wall_ms):
        self.trace.append(("end", ticks, sim_t))


def test_fixed_clock():
    clock = FrameClock.fixed(0.25)
    assert [clock.next_dt() for _ in range(3)] == [0.25, 0.25, 0.25]
    assert clock.now == pytest.approx(0.75)
    assert clock.frames == 3
    clock.reset()
    assert clock.now == 0.0


def test_wall_clock_clamps_stalls():
    times = iter([10.0, 10.016, 13.0, 12.0])
    clock = FrameClock(kind="wall", max_dt=0.1, timer=lambda: next(times))
    assert clock.next_dt() == 0.0
    assert clock.next_dt() == pytest.approx(0.016)
    assert clock.next_dt() == pytest.approx(0.1)
    assert clock.next_dt() == 0.0  # timer went backwards


def test_fps_helper():
    assert fps(50) == pytest.approx(0.02)


def test_unknown_clock_kind():
    with pytest.raises(ValueError):
        FrameClock(kind="vsync")


def test_runner_stops_when_idle():
    hooks = _TraceHooks()
    target = _Countdown(4)
    runner = TickRunner(target, FrameClock.fixed(0.5), hooks=hooks)
    assert runner.run() == 4
    assert target.dts == [0.5] * 4
    assert hooks.trace == [("start", None), ("end", 4, 2.0)]


def test_runner_tick_cap():
    target = _Countdown(100)
    assert TickRunner(target, FrameClock.fixed(0.1)).run(max_ticks=7) == 7
    assert target.n == 93


def test_runner_without_stop_condition():
    with pytest.raises(ValueError):
        TickRunner(_Countdown(1), FrameClock.fixed(0.1)).run(until_idle=False)
