from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from spline_sim.config.models import BoundsModel, GeneratorModel, ScenarioModel
from spline_sim.runtime.registries import make_intersection, make_sampler, make_smoother


def test_defaults_validate():
    m = ScenarioModel.model_validate({})
    assert m.generator.max_local_attempts == 100
    assert (m.bounds.x_min, m.bounds.x_max) == (-3.5, 7.5)
    assert m.mechanics.smoother.samples_per_segment == 10


def test_bounds_must_have_area():
    with pytest.raises(ValidationError):
        BoundsModel(x_min=1.0, x_max=1.0)
    with pytest.raises(ValidationError):
        BoundsModel(y_min=3.0, y_max=-3.0)


def test_generator_needs_three_anchors():
    with pytest.raises(ValidationError):
        GeneratorModel(count=2)


def test_unknown_keys_are_rejected():
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate({"generator": {"count": 5, "crossing": True}})


def test_discriminated_mechanics():
    m = ScenarioModel.model_validate(
        {
            "mechanics": {
                "sampler": {"kind": "sequence", "points": [[0, 0], [1, 0], [1, 1]]},
                "smoother": {"kind": "bezier", "end_tangents": "cyclic"},
            }
        }
    )
    assert m.mechanics.sampler.kind == "sequence"
    assert make_smoother(m.mechanics.smoother).end_tangents == "cyclic"
    assert make_intersection(m.mechanics.intersection).parallel_eps == 1e-12
    assert make_sampler(m.mechanics.sampler, rng=None).sample(None).x == 0.0


def test_unknown_kind_raises_value_error():
    with pytest.raises(ValueError):
        make_smoother(SimpleNamespace(kind="catmull"))
