"""Delay status domain models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from commute_timing.domain.models.route import CheckpointType


class SegmentStatus(StrEnum):
    """Delay classification of a single checkpoint."""

    NORMAL = "normal"
    DELAYED = "delayed"
    SEVERE_DELAY = "severe_delay"
    UNAVAILABLE = "unavailable"


class OverallDelayStatus(StrEnum):
    """Delay classification of a whole route."""

    NORMAL = "normal"
    MINOR_DELAY = "minor_delay"
    DELAYED = "delayed"
    SEVERE_DELAY = "severe_delay"
    UNAVAILABLE = "unavailable"


class DataSource(StrEnum):
    """Where a segment's wait estimate came from."""

    REALTIME_API = "realtime_api"
    ESTIMATED = "estimated"


class DelaySegment(BaseModel):
    """Computed delay status of one checkpoint at one point in time."""

    model_config = ConfigDict(frozen=True)

    checkpoint_id: str
    checkpoint_name: str
    checkpoint_type: CheckpointType
    line_info: str = ""
    status: SegmentStatus
    expected_wait_minutes: int
    estimated_wait_minutes: int
    delay_minutes: int = Field(ge=0)
    source: DataSource
    last_updated: datetime


class DelayCheckResult(BaseModel):
    """Per-segment delays of a route plus the aggregated status."""

    model_config = ConfigDict(frozen=True)

    segments: list[DelaySegment]
    overall_status: OverallDelayStatus
    total_expected_duration: int
    total_estimated_duration: int
    total_delay_minutes: int
