import json

from main import main, run


def test_run_generates_and_traverses():
    summary = run({"seed": 5, "generator": {"count": 4}, "follower": {"speed": 3.0}})
    assert summary["anchors"] == 4
    assert summary["samples"] == 31
    assert summary["state"] == "idle"


def test_save_then_load_roundtrip(tmp_path, capsys):
    out = tmp_path / "path.json"
    first = run({"seed": 9, "generator": {"count": 5, "loop": False}}, save=str(out))
    second = run({"seed": 1}, load=str(out))
    assert second["anchors"] == first["anchors"]
    assert second["length"] == first["length"]

    main(["--load", str(out)])
    printed = capsys.readouterr().out.strip().splitlines()
    # last JSON document on stdout is the summary
    start = max(i for i, line in enumerate(printed) if line == "{")
    assert json.loads("\n".join(printed[start:]))["anchors"] == 5
