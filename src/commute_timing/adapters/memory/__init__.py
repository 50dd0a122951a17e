"""In-memory repository adapters."""

from commute_timing.adapters.memory.alternative_mapping_store import (
    InMemoryAlternativeMappingRepository,
)
from commute_timing.adapters.memory.commute_history_store import (
    InMemoryCommuteRecordRepository,
    InMemoryCommuteSessionRepository,
)
from commute_timing.adapters.memory.departure_store import (
    InMemoryDepartureSettingRepository,
    InMemoryDepartureSnapshotRepository,
)
from commute_timing.adapters.memory.route_store import InMemoryRouteRepository

__all__ = [
    "InMemoryAlternativeMappingRepository",
    "InMemoryCommuteRecordRepository",
    "InMemoryCommuteSessionRepository",
    "InMemoryDepartureSettingRepository",
    "InMemoryDepartureSnapshotRepository",
    "InMemoryRouteRepository",
]
