# spline_sim/domain/mechanics/mechanics_intersections.py
import numpy as np

from spline_sim.app.protocols import IntersectionTester
from spline_sim.domain.entities.geometry import Polyline, Pt


def _cross(u: np.ndarray, v: np.ndarray) -> np.ndarray:
    return u[..., 0] * v[..., 1] - u[..., 1] * v[..., 0]


def crossing_mask(
    a0: np.ndarray,
    a1: np.ndarray,
    b0: np.ndarray,
    b1: np.ndarray,
    *,
    parallel_eps: float = 1e-12,
    colinear_eps: float = 1e-9,
) -> np.ndarray:
    """
    Segment a0-a1 against each of the segments b0[k]-b1[k] (shape (n, 2)).

    Non-parallel pairs use the orientation test: each segment's endpoints must
    lie strictly on opposite sides of the other's line, so touching endpoints
    do not count. Parallel pairs that share a line are flagged when their
    midpoints are closer than half their summed lengths. That last rule is an
    approximation of colinear overlap, not an exact interval test.
    """
    da = a1 - a0
    db = b1 - b0
    len_a = float(np.hypot(*da))
    len_b = np.hypot(db[:, 0], db[:, 1])

    s1 = _cross(da, b0 - a0)
    s2 = _cross(da, b1 - a0)
    s3 = _cross(db, a0 - b0)
    s4 = _cross(db, a1 - b0)
    proper = (s1 * s2 < 0) & (s3 * s4 < 0)

    parallel = np.abs(_cross(da, db)) <= parallel_eps * len_a * len_b
    colinear = np.abs(s1) <= colinear_eps * max(len_a, 1e-300)
    gap = np.hypot(*((b0 + b1) / 2 - (a0 + a1) / 2).T)
    overlap = colinear & (gap < (len_a + len_b) / 2)

    return np.where(parallel, overlap, proper)


def segments_cross(a0: Pt, a1: Pt, b0: Pt, b1: Pt) -> bool:
    arr = [np.asarray(tuple(p), dtype=float) for p in (a0, a1, b0, b1)]
    return bool(crossing_mask(arr[0], arr[1], arr[2][None, :], arr[3][None, :])[0])


class SegmentSweepTester(IntersectionTester):
    """
    O(K^2) pairwise sweep over the polyline's segments, one numpy row per
    segment. Adjacent segments share an endpoint and are never compared; on a
    closed polyline neither are the first and last segments. A loop whose last
    sample differs from its first gets the last -> first segment swept too.
    """

    def __init__(self, parallel_eps: float = 1e-12, colinear_eps: float = 1e-9):
        self.parallel_eps = parallel_eps
        self.colinear_eps = colinear_eps

    def has_self_intersection(self, polyline: Polyline) -> bool:
        return self.first_crossing(polyline) is not None

    def first_crossing(self, polyline: Polyline) -> tuple[int, int] | None:
        """Index pair (i, j) of the first crossing segments, or None."""
        pts = polyline.points
        if polyline.loop and len(pts) > 1 and not np.array_equal(pts[0], pts[-1]):
            # hand-built loop: close it explicitly
            pts = np.vstack([pts, pts[:1]])
        k = len(pts) - 1
        if k < 3:
            return None
        starts, ends = pts[:-1], pts[1:]
        lengths = np.hypot(*(ends - starts).T)
        valid = lengths > 0  # duplicate samples make zero-length segments

        for i in range(k - 2):
            if not valid[i]:
                continue
            j = np.arange(i + 2, k)
            if polyline.loop and i == 0:
                j = j[j != k - 1]
            j = j[valid[j]]
            if j.size == 0:
                continue
            hits = crossing_mask(
                starts[i],
                ends[i],
                starts[j],
                ends[j],
                parallel_eps=self.parallel_eps,
                colinear_eps=self.colinear_eps,
            )
            if hits.any():
                return i, int(j[np.argmax(hits)])
        return None
