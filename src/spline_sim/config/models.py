from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    record_events: bool = False


class BoundsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    x_min: float = -3.5
    x_max: float = 7.5
    y_min: float = -4.0
    y_max: float = 3.0

    @model_validator(mode="after")
    def _check_order(self):
        if not self.x_min < self.x_max:
            raise ValueError(f"x_min must be < x_max, got {self.x_min} >= {self.x_max}")
        if not self.y_min < self.y_max:
            raise ValueError(f"y_min must be < y_max, got {self.y_min} >= {self.y_max}")
        return self


class GeneratorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    count: int = Field(default=10, ge=3)
    loop: bool = False
    non_crossing: bool = False
    max_duplicate_draws: int = Field(default=1000, ge=1)
    max_local_attempts: int = Field(default=100, ge=0)
    max_restarts: int = Field(default=10, ge=0)


# ----------------- MECHANICS ---------------------


class SmootherBezierModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["bezier"] = "bezier"
    samples_per_segment: int = Field(default=10, ge=1)
    end_tangents: Literal["clamped", "cyclic"] = "clamped"


SmootherUnion = Annotated[SmootherBezierModel, Field(discriminator="kind")]


class IntersectionSweepModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["sweep"] = "sweep"
    parallel_eps: float = 1e-12
    colinear_eps: float = 1e-9

    @field_validator("parallel_eps", "colinear_eps")
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


IntersectionUnion = Annotated[IntersectionSweepModel, Field(discriminator="kind")]


class SamplerUniformModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["uniform"] = "uniform"


class SamplerSequenceModel(BaseModel):
    """Scripted anchors, replayed in order."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["sequence"] = "sequence"
    points: list[tuple[float, float]]


SamplerUnion = Annotated[SamplerUniformModel | SamplerSequenceModel, Field(discriminator="kind")]


class MechanicsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sampler: SamplerUnion = Field(default_factory=SamplerUniformModel)
    smoother: SmootherUnion = Field(default_factory=SmootherBezierModel)
    intersection: IntersectionUnion = Field(default_factory=IntersectionSweepModel)


# ------------------ MOTION -----------------------------


class FollowerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    speed: float = Field(default=1.0, gt=0)
    snap_eps: float = Field(default=1e-9, ge=0)


class ClockModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["fixed", "wall"] = "fixed"
    dt: float = Field(default=1 / 60, gt=0)
    max_dt: float = Field(default=0.25, gt=0)


class FallbackModel(BaseModel):
    """Path used when generation or loading fails."""

    model_config = ConfigDict(extra="forbid")
    count: int = Field(default=5, ge=3)
    loop: bool = False
    speed: float = Field(default=1.0, gt=0)


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    run_id: str = "local"
    seed: int = 123
    log: LogModel = LogModel()
    bounds: BoundsModel = BoundsModel()
    generator: GeneratorModel = GeneratorModel()
    mechanics: MechanicsModel = Field(default_factory=MechanicsModel)
    follower: FollowerModel = FollowerModel()
    clock: ClockModel = ClockModel()
    fallback: FallbackModel = FallbackModel()
