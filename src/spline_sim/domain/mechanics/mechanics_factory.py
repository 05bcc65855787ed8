# spline_sim/domain/mechanics/mechanics_factory.py

from spline_sim.config.models import GeneratorModel, MechanicsModel
from spline_sim.domain.mechanics.mechanics_anchor_generators import RejectionAnchorGenerator
from spline_sim.domain.mechanics.mechanics_core import Mechanics
from spline_sim.runtime.registries import make_intersection, make_sampler, make_smoother
from spline_sim.sim.hooks import SimHooks
from spline_sim.sim.rng import RNGRegistry


def build_mechanics(
    cfg: MechanicsModel,
    rng_registry: RNGRegistry,
    *,
    generator: GeneratorModel | None = None,
    hooks: SimHooks | None = None,
) -> Mechanics:
    gen_cfg = generator or GeneratorModel()
    smoother = make_smoother(cfg.smoother)
    tester = make_intersection(cfg.intersection)
    sampler = make_sampler(cfg.sampler, rng=rng_registry.stream("anchors"))

    return Mechanics(
        smoother=smoother,
        tester=tester,
        generator=RejectionAnchorGenerator(
            sampler=sampler,
            smoother=smoother,
            tester=tester,
            max_duplicate_draws=gen_cfg.max_duplicate_draws,
            max_local_attempts=gen_cfg.max_local_attempts,
            max_restarts=gen_cfg.max_restarts,
            hooks=hooks,
        ),
    )
