# spline_sim/domain/mechanics/mechanics_smoothers.py
from typing import Literal

import numpy as np

from spline_sim.app.protocols import CurveSmoother
from spline_sim.domain.entities.geometry import Path, Point, Polyline, TangentPair
from spline_sim.domain.errors import InvalidPathError

EndTangents = Literal["clamped", "cyclic"]

MIN_ANCHORS = 3


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    # (1-t)*a + t*b lands exactly on b at t=1
    return (1.0 - t) * a + t * b


def quadratic_lerp(a, b, c, t):
    return _lerp(_lerp(a, b, t), _lerp(b, c, t), t)


def cubic_lerp(a, b, c, d, t):
    """de Casteljau: two quadratic lerps blended by a final linear one."""
    return _lerp(quadratic_lerp(a, b, c, t), quadratic_lerp(b, c, d, t), t)


class BezierSmoother(CurveSmoother):
    """
    Cubic Bezier through every anchor, Catmull-Rom style tangents:
    tangent_i = (anchor_{i+1} - anchor_{i-1}) / 3, controls = anchor_i -/+ tangent_i.

    Closed paths index neighbours cyclically. Open path endpoints have no
    neighbour on one side; with end_tangents="clamped" both controls sit on the
    anchor, with "cyclic" the wraparound neighbour is borrowed anyway. The
    default is "clamped"; pass "cyclic" to get the legacy generator's curve
    shape, which wraps endpoint tangents even on open paths.
    """

    def __init__(self, samples_per_segment: int = 10, end_tangents: EndTangents = "clamped"):
        if samples_per_segment < 1:
            raise ValueError("samples_per_segment must be >= 1")
        if end_tangents not in ("clamped", "cyclic"):
            raise ValueError(f"Unknown end_tangents {end_tangents!r}")
        self.samples_per_segment = samples_per_segment
        self.end_tangents = end_tangents
        self._t = (np.arange(1, samples_per_segment + 1, dtype=float) / samples_per_segment)[
            None, :, None
        ]

    def expected_len(self, n_anchors: int, loop: bool) -> int:
        segments = n_anchors if loop else n_anchors - 1
        return self.samples_per_segment * segments + 1

    def _controls(self, path: Path) -> np.ndarray:
        """(N, 2, 2) array: [i, 0] = control_in, [i, 1] = control_out."""
        n = len(path)
        if n < MIN_ANCHORS:
            raise InvalidPathError(f"need at least {MIN_ANCHORS} anchors, got {n}")
        pts = np.array([(p.x, p.y) for p in path.anchors], dtype=float)
        tangent = (np.roll(pts, -1, axis=0) - np.roll(pts, 1, axis=0)) / 3.0
        if not path.loop and self.end_tangents == "clamped":
            tangent[0] = 0.0
            tangent[-1] = 0.0
        return np.stack([pts - tangent, pts + tangent], axis=1)

    def control_points(self, path: Path) -> tuple[TangentPair, ...]:
        ctrl = self._controls(path)
        return tuple(
            TangentPair(Point(float(ci[0]), float(ci[1])), Point(float(co[0]), float(co[1])))
            for ci, co in ctrl
        )

    def smooth(self, path: Path) -> Polyline:
        ctrl = self._controls(path)
        pts = np.array([(p.x, p.y) for p in path.anchors], dtype=float)

        start = np.arange(len(pts) if path.loop else len(pts) - 1)
        end = (start + 1) % len(pts)
        a, b = pts[start][:, None, :], pts[end][:, None, :]
        a_out, b_in = ctrl[start, 1][:, None, :], ctrl[end, 0][:, None, :]

        samples = cubic_lerp(a, a_out, b_in, b, self._t).reshape(-1, 2)
        return Polyline(np.vstack([pts[:1], samples]), loop=path.loop)
