import pytest

from spline_sim.app.build import build
from spline_sim.app.events import PathFallback, PathGenerated, PathLoaded, TraversalFinished
from spline_sim.domain.entities.geometry import Path, Point
from spline_sim.domain.entities.motion import FollowerState
from spline_sim.domain.errors import EmptyPathError
from spline_sim.io.store import PathRecord, PointRecord


def _cfg(**over):
    cfg = {
        "name": "test",
        "run_id": "t-1",
        "seed": 11,
        "generator": {"count": 6, "loop": False, "non_crossing": True},
        "follower": {"speed": 2.0},
        "clock": {"kind": "fixed", "dt": 0.05},
        "fallback": {"count": 4, "loop": True, "speed": 0.5},
    }
    cfg.update(over)
    return cfg


@pytest.fixture
def app():
    return build(_cfg(), use_logging=False)


def _events(app, etype):
    return app.recorder.sinks[0].of_type(etype)


def test_regenerate_installs_path_and_resets_follower(app):
    s = app.session
    path = s.regenerate()
    assert len(path) == 6 and not path.loop
    assert len(s.polyline) == 10 * 5 + 1
    assert s.follower.state is FollowerState.IDLE
    assert s.follower.position == path.anchors[0]
    assert s.passage_time == pytest.approx(s.polyline.length / 2.0)
    assert not app.mechanics.has_self_intersection(s.polyline)
    assert _events(app, PathGenerated)[-1].anchors == 6


def test_regenerate_overrides(app):
    path = app.session.regenerate(count=3, loop=True, non_crossing=False)
    assert len(path) == 3 and path.loop
    assert len(app.session.polyline) == 31


def test_same_seed_same_path():
    a = build(_cfg(), use_logging=False).session.regenerate()
    b = build(_cfg(), use_logging=False).session.regenerate()
    assert a == b


def test_set_loop_resmooths_and_resets(app):
    s = app.session
    s.regenerate()
    s.start()
    s.tick(0.5)
    s.set_loop(True)
    assert s.path.loop and s.polyline.loop
    assert len(s.polyline) == 10 * 6 + 1
    assert not s.moving
    assert s.follower.position == s.path.anchors[0]


def test_set_speed_recomputes_passage_time(app):
    s = app.session
    s.regenerate()
    before = s.passage_time
    assert s.set_speed(4.0) == pytest.approx(before / 2)
    with pytest.raises(ValueError):
        s.set_speed(0.0)


def test_start_requires_a_path(app):
    with pytest.raises(EmptyPathError):
        app.session.start()


def test_generation_failure_falls_back(app):
    s = app.session
    path = s.regenerate(count=2)
    assert len(path) == 4 and path.loop
    assert s.speed == 0.5
    ev = _events(app, PathFallback)
    assert len(ev) == 1 and ev[0].reason == "generate"


def test_load_failure_falls_back(app):
    s = app.session
    bad = PathRecord(points=[PointRecord(x=0, y=0), PointRecord(x=0, y=0), PointRecord(x=1, y=1)], speed=1.0)
    path = s.apply_record(bad)
    assert len(path) == 4
    assert _events(app, PathFallback)[-1].reason == "load"


def test_apply_record_recomputes_stale_passage_time(app):
    s = app.session
    rec = PathRecord(
        points=[PointRecord(x=x, y=y) for x, y in [(0, 0), (4, 0), (4, 4)]],
        loop=False,
        speed=2.0,
        passage_time=999.0,
    )
    s.apply_record(rec)
    assert s.passage_time == pytest.approx(s.polyline.length / 2.0)
    loaded = _events(app, PathLoaded)[-1]
    assert loaded.stale_passage_time


def test_runner_drives_open_path_to_the_end(app):
    s = app.session
    s.load_path(Path.of([(0, 0), (4, 0), (4, 4)]), speed=2.0)
    s.start()
    ticks = app.runner.run()
    assert ticks == pytest.approx(s.passage_time / 0.05, abs=1)
    assert not s.moving
    assert s.follower.position == Point(4.0, 4.0)
    assert len(_events(app, TraversalFinished)) == 1


def test_runner_on_loop_needs_a_tick_cap(app):
    s = app.session
    s.regenerate(loop=True)
    s.start()
    assert app.runner.run(max_ticks=50) == 50
    assert s.moving


def test_sim_logging_emits_structured_records(caplog):
    import logging

    from spline_sim.io.recorder import MemorySink, Recorder
    from spline_sim.io.sim_logging import SimLogging

    logger = logging.getLogger("spline_sim.test")
    logger.setLevel(logging.DEBUG)
    sink = MemorySink()
    hooks = SimLogging(run_id="r-7", debug=True, logger=logger, recorder=Recorder(sink))

    with caplog.at_level(logging.DEBUG, logger="spline_sim.test"):
        hooks.fallback(reason="load", error="boom")
        hooks.lap(laps=2, sim_t=1.5)
        hooks.biz(PathFallback(t=0.0, reason="load", error="boom"))

    msgs = [r.getMessage() for r in caplog.records]
    assert msgs == ["fallback", "lap", "PathFallback"]
    assert caplog.records[0].levelname == "WARNING"
    assert all(r.extra["run_id"] == "r-7" for r in caplog.records)
    assert len(sink.of_type(PathFallback)) == 1


def test_logging_build_routes_events_through_biz(caplog):
    import logging

    app = build(_cfg(log={"debug": True}))
    with caplog.at_level(logging.DEBUG, logger="spline_sim"):
        app.session.regenerate(count=2)

    assert len(_events(app, PathFallback)) == 1
    msgs = [r.getMessage() for r in caplog.records]
    assert "fallback" in msgs and "PathFallback" in msgs
