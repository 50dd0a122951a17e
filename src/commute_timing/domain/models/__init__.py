"""Domain models for commute timing."""

from commute_timing.domain.models.alternative import (
    AlternativeCandidate,
    AlternativeConfidence,
    AlternativeMapping,
    AlternativeStep,
    AlternativeSuggestion,
    DelayStatusReport,
    StepAction,
)
from commute_timing.domain.models.arrival import Arrival
from commute_timing.domain.models.commute_record import (
    CommuteRecord,
    CommuteSession,
    CommuteType,
    SessionStatus,
)
from commute_timing.domain.models.delay import (
    DataSource,
    DelayCheckResult,
    DelaySegment,
    OverallDelayStatus,
    SegmentStatus,
)
from commute_timing.domain.models.delay_policy import DelayPolicy
from commute_timing.domain.models.departure_pattern import ConfidenceLevel, DeparturePattern
from commute_timing.domain.models.departure_setting import DepartureSetting, DepartureType
from commute_timing.domain.models.departure_snapshot import (
    DepartureAlert,
    DepartureSnapshot,
    DepartureUpdate,
    NextDeparture,
    SnapshotStatus,
    TodayDepartures,
)
from commute_timing.domain.models.route import Checkpoint, CheckpointType, Route, RouteType

__all__ = [
    "AlternativeCandidate",
    "AlternativeConfidence",
    "AlternativeMapping",
    "AlternativeStep",
    "AlternativeSuggestion",
    "Arrival",
    "Checkpoint",
    "CheckpointType",
    "CommuteRecord",
    "CommuteSession",
    "CommuteType",
    "ConfidenceLevel",
    "DataSource",
    "DelayCheckResult",
    "DelayPolicy",
    "DelaySegment",
    "DelayStatusReport",
    "DepartureAlert",
    "DeparturePattern",
    "DepartureSetting",
    "DepartureSnapshot",
    "DepartureType",
    "DepartureUpdate",
    "NextDeparture",
    "OverallDelayStatus",
    "Route",
    "RouteType",
    "SegmentStatus",
    "SessionStatus",
    "SnapshotStatus",
    "StepAction",
    "TodayDepartures",
]
