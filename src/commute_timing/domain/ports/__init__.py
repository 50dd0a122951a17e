"""Ports (interfaces) for the ports-and-adapters architecture."""

from commute_timing.domain.ports.alternative_mapping_repository import (
    AlternativeMappingRepository,
)
from commute_timing.domain.ports.arrival_repository import ArrivalRepository
from commute_timing.domain.ports.commute_record_repository import CommuteRecordRepository
from commute_timing.domain.ports.commute_session_repository import CommuteSessionRepository
from commute_timing.domain.ports.departure_notifier import DepartureNotifier
from commute_timing.domain.ports.departure_setting_repository import DepartureSettingRepository
from commute_timing.domain.ports.departure_snapshot_repository import (
    DepartureSnapshotRepository,
)
from commute_timing.domain.ports.realtime_adjustment_provider import RealtimeAdjustmentProvider
from commute_timing.domain.ports.route_repository import RouteRepository

__all__ = [
    "AlternativeMappingRepository",
    "ArrivalRepository",
    "CommuteRecordRepository",
    "CommuteSessionRepository",
    "DepartureNotifier",
    "DepartureSettingRepository",
    "DepartureSnapshotRepository",
    "RealtimeAdjustmentProvider",
    "RouteRepository",
]
