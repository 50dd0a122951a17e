"""Commute history domain models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from commute_timing.domain.models.civil_time import to_civil


class CommuteType(StrEnum):
    """Direction of a commute."""

    MORNING = "morning"
    EVENING = "evening"


class SessionStatus(StrEnum):
    """Lifecycle state of a tracked commute session."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class CommuteRecord:
    """One commute a user made on a given day."""

    user_id: str
    commute_date: date
    commute_type: CommuteType
    actual_departure: datetime | None = None
    id: str = ""

    @property
    def is_weekday(self) -> bool:
        """Monday to Friday."""
        return self.commute_date.isoweekday() <= 5

    @property
    def departure_minutes(self) -> int | None:
        """Actual departure as minutes since midnight."""
        if self.actual_departure is None:
            return None
        local = to_civil(self.actual_departure)
        return local.hour * 60 + local.minute


@dataclass(frozen=True)
class CommuteSession:
    """A tracked trip along a route, used for travel-time history."""

    user_id: str
    route_id: str
    started_at: datetime
    status: SessionStatus = SessionStatus.IN_PROGRESS
    total_duration_minutes: int | None = None
    id: str = ""

    @property
    def has_duration(self) -> bool:
        """Completed with a recorded total duration."""
        return self.status == SessionStatus.COMPLETED and self.total_duration_minutes is not None
