import json

import pytest
from pydantic import ValidationError

from spline_sim.domain.entities.geometry import Path
from spline_sim.io.store import PathRecord, PointRecord, load_record, save_record

ANCHORS = [(0.1, -2.75), (3.3333333333333335, 1.0e-7), (-1.5, 2.25), (7.4, -3.9)]


def test_roundtrip_preserves_anchors_loop_and_speed(tmp_path):
    path = Path.of(ANCHORS, loop=True)
    rec = PathRecord.from_path(path, speed=1.75, passage_time=12.5)
    out = save_record(rec, tmp_path / "data.json")

    back = load_record(out)
    assert back.to_path() == path
    assert back.to_path().anchors == path.anchors
    assert back.loop is True
    assert back.speed == 1.75
    assert back.passage_time == 12.5


def test_file_uses_passage_time_alias(tmp_path):
    rec = PathRecord.from_path(Path.of(ANCHORS[:3]), speed=1.0, passage_time=3.0)
    raw = json.loads(save_record(rec, tmp_path / "p.json").read_text())
    assert set(raw) == {"points", "loop", "speed", "passageTime"}
    assert raw["points"][0] == {"x": 0.1, "y": -2.75}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_record(tmp_path / "nope.json")


def test_invalid_content(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"points": [], "loop": False, "speed": -1.0}))
    with pytest.raises(ValidationError):
        load_record(bad)


def test_stale_check():
    rec = PathRecord(points=[PointRecord(x=0, y=0)], speed=1.0, passageTime=2.0)
    assert not rec.is_stale(2.0)
    assert rec.is_stale(2.5)
