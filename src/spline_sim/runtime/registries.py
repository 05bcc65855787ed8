# runtime/registries.py
from collections.abc import Callable
from typing import Any

from spline_sim.app.protocols import CurveSmoother, IntersectionTester, PointSampler
from spline_sim.config.models import (
    IntersectionSweepModel,
    IntersectionUnion,
    SamplerSequenceModel,
    SamplerUniformModel,
    SamplerUnion,
    SmootherBezierModel,
    SmootherUnion,
)
from spline_sim.domain.mechanics.mechanics_intersections import SegmentSweepTester
from spline_sim.domain.mechanics.mechanics_point_samplers import (
    SequencePointSampler,
    UniformPointSampler,
)
from spline_sim.domain.mechanics.mechanics_smoothers import BezierSmoother

SamplerFactory = Callable[[SamplerUnion, dict], PointSampler]
SmootherFactory = Callable[[SmootherUnion, dict], CurveSmoother]
IntersectionFactory = Callable[[IntersectionUnion, dict], IntersectionTester]

_sampler_registry: dict[str, SamplerFactory] = {}
_smoother_registry: dict[str, SmootherFactory] = {}
_intersection_registry: dict[str, IntersectionFactory] = {}


def _lookup(registry: dict[str, Any], kind: str, what: str):
    try:
        return registry[kind]
    except KeyError:
        raise ValueError(f"Unknown {what} kind {kind!r}") from None


# ------------------- Point samplers ---------------------------


def register_sampler(kind: str):
    def deco(fn: SamplerFactory):
        _sampler_registry[kind] = fn
        return fn

    return deco


def make_sampler(cfg: SamplerUnion, *, rng) -> PointSampler:
    return _lookup(_sampler_registry, cfg.kind, "sampler")(cfg, {"rng": rng})


@register_sampler("uniform")
def _make_uniform(cfg: SamplerUniformModel, deps):
    return UniformPointSampler(rng=deps["rng"])


@register_sampler("sequence")
def _make_sequence(cfg: SamplerSequenceModel, deps):
    return SequencePointSampler(cfg.points)


# ------------------- Curve smoothers ---------------------------


def register_smoother(kind: str):
    def deco(fn: SmootherFactory):
        _smoother_registry[kind] = fn
        return fn

    return deco


def make_smoother(cfg: SmootherUnion, *, deps: dict | None = None) -> CurveSmoother:
    return _lookup(_smoother_registry, cfg.kind, "smoother")(cfg, deps or {})


@register_smoother("bezier")
def _make_bezier(cfg: SmootherBezierModel, deps):
    return BezierSmoother(
        samples_per_segment=cfg.samples_per_segment, end_tangents=cfg.end_tangents
    )


# ------------------- Intersection testers ---------------------------


def register_intersection(kind: str):
    def deco(fn: IntersectionFactory):
        _intersection_registry[kind] = fn
        return fn

    return deco


def make_intersection(cfg: IntersectionUnion, *, deps: dict | None = None) -> IntersectionTester:
    return _lookup(_intersection_registry, cfg.kind, "intersection")(cfg, deps or {})


@register_intersection("sweep")
def _make_sweep(cfg: IntersectionSweepModel, deps):
    return SegmentSweepTester(parallel_eps=cfg.parallel_eps, colinear_eps=cfg.colinear_eps)
