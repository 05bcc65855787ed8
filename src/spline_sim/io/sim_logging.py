# io/sim_logging.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass

from spline_sim.io.recorder import Recorder
from spline_sim.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="spline_sim", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SimLogging(NoopHooks):
    """
    One place to shape and emit structured logs for engine lifecycle and
    business events.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(
            getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}}
        )

    # engine lifecycle

    def run_start(self, *, max_ticks, dt):
        self._emit("INFO", "run_start", max_ticks=max_ticks, dt=dt)

    def run_end(self, *, ticks, sim_t, wall_ms):
        self._emit("INFO", "run_end", ticks=ticks, sim_t=sim_t, wall_ms=round(wall_ms, 3))

    # generation

    def generation_start(self, *, count, loop, non_crossing):
        self._emit("INFO", "generation_start", count=count, loop=loop, non_crossing=non_crossing)

    def generation_restart(self, *, restart, count, attempts):
        self._emit("WARNING", "generation_restart", restart=restart, count=count, attempts=attempts)

    def generation_end(self, *, count, loop, restarts, rejected):
        self._emit(
            "INFO", "generation_end", count=count, loop=loop, restarts=restarts, rejected=rejected
        )

    def smooth(self, *, anchors, loop, samples):
        if self.debug:
            self._emit("DEBUG", "smooth", anchors=anchors, loop=loop, samples=samples)

    # traversal

    def traversal_start(self, *, length, speed, loop):
        self._emit("INFO", "traversal_start", length=length, speed=speed, loop=loop)

    def traversal_end(self, *, distance, sim_t):
        self._emit("INFO", "traversal_end", distance=distance, sim_t=sim_t)

    def lap(self, *, laps, sim_t):
        if self.debug:
            self._emit("DEBUG", "lap", laps=laps, sim_t=sim_t)

    # failures

    def fallback(self, *, reason: str, error: str):
        self._emit("WARNING", "fallback", reason=reason, error=error)

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "sim_error", reason=reason, **kw)

    # ------------- Business Event Reporting --------------------------

    def biz(self, ev):
        if self.debug and is_dataclass(ev):
            self._emit("DEBUG", type(ev).__name__, **asdict(ev))
        if self.recorder:
            self.recorder.emit(ev)
