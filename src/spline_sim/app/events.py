# app/events.py
from dataclasses import dataclass
from typing import Literal

from spline_sim.sim.event import BaseEvent

FallbackReason = Literal["generate", "load"]


# Path lifecycle
@dataclass(order=True)
class PathGenerated(BaseEvent):
    anchors: int
    loop: bool
    non_crossing: bool
    restarts: int = 0


@dataclass(order=True)
class PathLoaded(BaseEvent):
    anchors: int
    loop: bool
    speed: float
    stale_passage_time: bool = False


@dataclass(order=True)
class PathFallback(BaseEvent):
    reason: FallbackReason
    error: str


# Traversal
@dataclass(order=True)
class TraversalStarted(BaseEvent):
    length: float
    speed: float
    loop: bool


@dataclass(order=True)
class TraversalFinished(BaseEvent):
    distance: float


@dataclass(order=True)
class LapCompleted(BaseEvent):
    laps: int
