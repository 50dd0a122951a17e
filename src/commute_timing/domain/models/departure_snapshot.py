"""Daily departure snapshot domain model."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import StrEnum

from commute_timing.domain.models.departure_setting import DepartureType


class SnapshotStatus(StrEnum):
    """Lifecycle of a day's departure decision.

    scheduled -> notified -> departed. Cancelled and expired are terminal side states.
    """

    SCHEDULED = "scheduled"
    NOTIFIED = "notified"
    DEPARTED = "departed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class DepartureSnapshot:
    """The persisted, recalculable departure decision for one setting on one date."""

    user_id: str
    setting_id: str
    departure_date: str  # "YYYY-MM-DD" civil date
    departure_type: DepartureType
    arrival_target: str  # "HH:MM" civil time
    estimated_travel_min: int
    prep_time_minutes: int
    optimal_departure_at: datetime
    baseline_travel_min: int | None = None
    history_avg_travel_min: int | None = None
    realtime_adjustment_min: int = 0
    status: SnapshotStatus = SnapshotStatus.SCHEDULED
    alerts_sent: tuple[int, ...] = ()
    departed_at: datetime | None = None
    id: str = ""
    calculated_at: datetime = field(default_factory=_utcnow)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_departed(self) -> bool:
        return self.status == SnapshotStatus.DEPARTED

    @property
    def alerts_sent_count(self) -> int:
        return len(self.alerts_sent)

    @property
    def has_traffic_delay(self) -> bool:
        return self.realtime_adjustment_min > 0

    def minutes_until_departure(self, now: datetime | None = None) -> int:
        """Minutes from now until the optimal departure, negative once it has passed."""
        now = now or _utcnow()
        return round((self.optimal_departure_at - now).total_seconds() / 60)

    def with_updated_calculation(
        self,
        *,
        estimated_travel_min: int,
        optimal_departure_at: datetime,
        baseline_travel_min: int | None,
        history_avg_travel_min: int | None,
        realtime_adjustment_min: int,
        now: datetime | None = None,
    ) -> "DepartureSnapshot":
        """Recalculated copy; identity, status and alert history are kept."""
        now = now or _utcnow()
        return replace(
            self,
            estimated_travel_min=estimated_travel_min,
            optimal_departure_at=optimal_departure_at,
            baseline_travel_min=baseline_travel_min,
            history_avg_travel_min=history_avg_travel_min,
            realtime_adjustment_min=realtime_adjustment_min,
            calculated_at=now,
            updated_at=now,
        )

    def with_alert_sent(self, alert_minutes: int, now: datetime | None = None) -> "DepartureSnapshot":
        """Record a pre-alert and move to notified."""
        return replace(
            self,
            status=SnapshotStatus.NOTIFIED,
            alerts_sent=(*self.alerts_sent, alert_minutes),
            updated_at=now or _utcnow(),
        )

    def with_status(self, status: SnapshotStatus, now: datetime | None = None) -> "DepartureSnapshot":
        """Copy with a new status; departing stamps departed_at."""
        now = now or _utcnow()
        return replace(
            self,
            status=status,
            departed_at=now if status == SnapshotStatus.DEPARTED else self.departed_at,
            updated_at=now,
        )


@dataclass(frozen=True)
class DepartureUpdate:
    """Push-style content published when a recalculation moves the travel time."""

    user_id: str
    setting_id: str
    departure_type: DepartureType
    estimated_travel_min: int
    previous_travel_min: int
    optimal_departure_at: datetime
    is_delay: bool  # True when travel time went up
    message: str


@dataclass(frozen=True)
class DepartureAlert:
    """A pre-alert still to be delivered for a snapshot."""

    alert_minutes: int  # Minutes before the optimal departure
    alert_at: datetime


@dataclass(frozen=True)
class TodayDepartures:
    """Today's snapshots of a user, one slot per departure type."""

    commute: DepartureSnapshot | None = None
    return_trip: DepartureSnapshot | None = None


@dataclass(frozen=True)
class NextDeparture:
    """The departure a user should act on next."""

    snapshot: DepartureSnapshot
    minutes_until_departure: int
    has_traffic_delay: bool
