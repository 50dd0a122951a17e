"""Domain layer - core business logic and models."""

from commute_timing.domain.models import (
    AlternativeMapping,
    Arrival,
    Checkpoint,
    DelaySegment,
    DepartureSnapshot,
    Route,
)
from commute_timing.domain.ports import (
    ArrivalRepository,
    DepartureSnapshotRepository,
    RouteRepository,
)

__all__ = [
    "AlternativeMapping",
    "Arrival",
    "ArrivalRepository",
    "Checkpoint",
    "DelaySegment",
    "DepartureSnapshot",
    "DepartureSnapshotRepository",
    "Route",
    "RouteRepository",
]
