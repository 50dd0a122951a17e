"""Smart departure setting domain model."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from commute_timing.domain.models.civil_time import parse_time_of_day

MIN_PREP_MINUTES = 10
MAX_PREP_MINUTES = 60


class DepartureType(StrEnum):
    """Whether a departure goes to work or back home."""

    COMMUTE = "commute"
    RETURN = "return"


@dataclass(frozen=True)
class DepartureSetting:
    """A user's wish to arrive somewhere by a given time on a route."""

    id: str
    user_id: str
    route_id: str
    departure_type: DepartureType
    arrival_target: str  # "HH:MM" civil time
    prep_time_minutes: int = 30
    is_enabled: bool = True
    active_days: tuple[int, ...] = (1, 2, 3, 4, 5)  # 0=Sun, 1=Mon, ..., 6=Sat
    pre_alerts: tuple[int, ...] = (30, 10, 0)  # Minutes before departure

    def __post_init__(self) -> None:
        parse_time_of_day(self.arrival_target)
        if not MIN_PREP_MINUTES <= self.prep_time_minutes <= MAX_PREP_MINUTES:
            raise ValueError(
                f"Invalid prep_time_minutes: {self.prep_time_minutes}. "
                f"Must be {MIN_PREP_MINUTES}-{MAX_PREP_MINUTES}"
            )
        if not self.active_days or not all(0 <= d <= 6 for d in self.active_days):
            raise ValueError(f"Invalid active_days: {list(self.active_days)}. Values must be 0-6")

    def is_active_on(self, on_date: date) -> bool:
        """Whether this setting applies on the given civil date."""
        # isoweekday: Mon=1..Sun=7, active_days uses Sun=0
        return self.is_enabled and on_date.isoweekday() % 7 in self.active_days
