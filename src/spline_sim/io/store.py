# io/store.py
import math
from pathlib import Path as FsPath

from pydantic import BaseModel, ConfigDict, Field, field_validator

from spline_sim.domain.entities.geometry import Path, Point


class PointRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")
    x: float
    y: float


class PathRecord(BaseModel):
    """Saved path: anchors (not the sampled polyline), loop flag, speed, passage time."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    points: list[PointRecord]
    loop: bool = False
    speed: float = Field(gt=0)
    passage_time: float = Field(default=0.0, alias="passageTime", ge=0)

    @field_validator("points")
    @classmethod
    def _finite(cls, v: list[PointRecord]) -> list[PointRecord]:
        if any(not (math.isfinite(p.x) and math.isfinite(p.y)) for p in v):
            raise ValueError("points must be finite")
        return v

    @classmethod
    def from_path(cls, path: Path, speed: float, passage_time: float) -> "PathRecord":
        return cls(
            points=[PointRecord(x=p.x, y=p.y) for p in path.anchors],
            loop=path.loop,
            speed=speed,
            passage_time=passage_time,
        )

    def to_path(self) -> Path:
        return Path(tuple(Point(p.x, p.y) for p in self.points), self.loop)

    def is_stale(self, passage_time: float, rel_tol: float = 1e-6) -> bool:
        return not math.isclose(self.passage_time, passage_time, rel_tol=rel_tol, abs_tol=1e-9)


def save_record(record: PathRecord, file: str | FsPath) -> FsPath:
    out = FsPath(file)
    out.write_text(record.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    return out


def load_record(file: str | FsPath) -> PathRecord:
    src = FsPath(file)
    if not src.exists():
        raise FileNotFoundError(f"path record {src} does not exist")
    return PathRecord.model_validate_json(src.read_text(encoding="utf-8"))
