# main.py
import argparse
import json
from pathlib import Path

from spline_sim.app.build import build


def run(config: dict, *, load: str | None = None, save: str | None = None, max_ticks: int = 100_000):
    app = build(config)
    session = app.session

    if load:
        session.load(load)
    else:
        session.regenerate()

    session.start()
    ticks = app.runner.run(max_ticks=max_ticks, until_idle=True)

    if save:
        session.save(save)

    pos = session.follower.position
    return {
        "anchors": len(session.path),
        "loop": session.path.loop,
        "samples": len(session.polyline),
        "length": session.polyline.length,
        "speed": session.speed,
        "passage_time": session.passage_time,
        "ticks": ticks,
        "position": [pos.x, pos.y],
        "state": session.follower.state.value,
    }


def main(argv=None):
    ap = argparse.ArgumentParser(description="Generate a smooth path and run one traversal.")
    ap.add_argument("--config", help="scenario JSON file")
    ap.add_argument("--load", help="path record to load instead of generating")
    ap.add_argument("--save", help="write the path record here after the run")
    ap.add_argument("--max-ticks", type=int, default=100_000)
    args = ap.parse_args(argv)

    config = json.loads(Path(args.config).read_text()) if args.config else {}
    summary = run(config, load=args.load, save=args.save, max_ticks=args.max_ticks)
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
