# spline_sim/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from spline_sim.app.session import PathSession
from spline_sim.config.models import ScenarioModel
from spline_sim.domain.entities.geometry import Bounds
from spline_sim.domain.mechanics.mechanics_core import Mechanics
from spline_sim.domain.mechanics.mechanics_factory import build_mechanics
from spline_sim.domain.mechanics.mechanics_path_followers import PathFollower
from spline_sim.io.recorder import JsonlSink, MemorySink, Recorder
from spline_sim.io.sim_logging import SimLogging
from spline_sim.sim.clock import FrameClock
from spline_sim.sim.hooks import NoopHooks
from spline_sim.sim.rng import RNGRegistry
from spline_sim.sim.runner import TickRunner


@dataclass
class App:
    config: ScenarioModel
    rng: RNGRegistry
    mechanics: Mechanics
    session: PathSession
    clock: FrameClock
    runner: TickRunner
    recorder: Recorder


def build(cfg: ScenarioModel | Mapping, *, use_logging: bool = True) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) RNG & event sinks
    rng_registry = RNGRegistry(model.seed, scenario=model.name)
    recorder = Recorder(JsonlSink()) if model.log.record_events else Recorder(MemorySink())

    if use_logging:
        hooks = SimLogging(
            run_id=model.run_id, level=model.log.level, debug=model.log.debug, recorder=recorder
        )
        on_event = hooks.biz
    else:
        hooks, on_event = NoopHooks(), recorder.emit

    # 2) Mechanics (smoother, tester, generator)
    mechanics = build_mechanics(
        model.mechanics, rng_registry, generator=model.generator, hooks=hooks
    )

    # 3) Session owns path + follower; business events reach the recorder via on_event
    b = model.bounds
    session = PathSession(
        mechanics=mechanics,
        bounds=Bounds(b.x_min, b.x_max, b.y_min, b.y_max),
        generator=model.generator,
        fallback=model.fallback,
        speed=model.follower.speed,
        follower=PathFollower(hooks=hooks, snap_eps=model.follower.snap_eps),
        hooks=hooks,
        on_event=on_event,
    )

    # 4) Frame clock & runner
    clock = FrameClock(kind=model.clock.kind, dt=model.clock.dt, max_dt=model.clock.max_dt)
    runner = TickRunner(session, clock, hooks=hooks)

    return App(model, rng_registry, mechanics, session, clock, runner, recorder)
