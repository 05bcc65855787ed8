import math
from dataclasses import dataclass, replace
from enum import Enum

from spline_sim.domain.entities.geometry import Point


class FollowerState(Enum):
    IDLE = "idle"
    MOVING = "moving"


def heading(src: Point, dst: Point) -> float:
    """Angle (radians) of the vector src -> dst."""
    return math.atan2(dst.y - src.y, dst.x - src.x)


@dataclass(frozen=True)
class MotionState:
    position: Point
    orientation: float
    segment_index: int
    target: Point
    speed: float = 0.0
    moving: bool = False

    @property
    def state(self) -> FollowerState:
        return FollowerState.MOVING if self.moving else FollowerState.IDLE

    def aimed_at(self, target: Point, segment_index: int) -> "MotionState":
        # rotation snap, never an interpolated turn
        return replace(
            self,
            target=target,
            segment_index=segment_index,
            orientation=heading(self.position, target)
            if target != self.position
            else self.orientation,
        )
