"""Historical departure pattern estimation."""

import logging
import math
from typing import TYPE_CHECKING

from commute_timing.application.services.departure_time_calculator import round_half_up
from commute_timing.domain.models.civil_time import minutes_to_time, time_to_minutes
from commute_timing.domain.models.commute_record import CommuteRecord, CommuteType
from commute_timing.domain.models.departure_pattern import ConfidenceLevel, DeparturePattern

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_timing.domain.ports import CommuteRecordRepository

DECAY_FACTOR = 0.9  # Weight of record i (0 = most recent) is DECAY_FACTOR**i
RECORD_LOOKBACK = 30
MIN_SAMPLES = 5
COLD_START_STD_DEV_MINUTES = 15

# (commute_type, is_weekday) -> "HH:MM"
DEFAULT_DEPARTURE_TIMES: dict[tuple[CommuteType, bool], str] = {
    (CommuteType.MORNING, True): "08:00",
    (CommuteType.MORNING, False): "10:00",
    (CommuteType.EVENING, True): "18:30",
    (CommuteType.EVENING, False): "18:30",
}


def weighted_average(values: list[float], decay: float = DECAY_FACTOR) -> float:
    """Exponentially decayed mean; values[0] weighs the most."""
    if not values:
        return 0.0
    weights = [decay**i for i in range(len(values))]
    return sum(v * w for v, w in zip(values, weights, strict=True)) / sum(weights)


def std_dev_around(values: list[float], mean: float) -> float:
    """Population standard deviation of values around a given mean."""
    if len(values) < 2:
        return float(COLD_START_STD_DEV_MINUTES)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


class HistoricalPatternEstimator:
    """Learns a user's typical departure time from their commute records."""

    def __init__(
        self,
        record_repository: "CommuteRecordRepository",
        default_times: dict[tuple[CommuteType, bool], str] | None = None,
    ) -> None:
        """Initialize with a record repository and optional cold-start defaults."""
        self._record_repository = record_repository
        self._default_times = {**DEFAULT_DEPARTURE_TIMES, **(default_times or {})}

    async def analyze_departure_pattern(
        self, user_id: str, commute_type: CommuteType, is_weekday: bool
    ) -> DeparturePattern:
        """Estimate the departure pattern for a commute type on weekdays or weekends.

        With fewer than five usable records the configured default time is
        returned at cold-start confidence.
        """
        records = await self._get_qualifying_records(user_id, commute_type, is_weekday)

        if len(records) < MIN_SAMPLES:
            logger.debug(
                f"Cold start for user {user_id} ({commute_type}, weekday={is_weekday}): "
                f"{len(records)} record(s)"
            )
            return self._build_pattern(
                time_to_minutes(self._default_times[(commute_type, is_weekday)]),
                COLD_START_STD_DEV_MINUTES,
                ConfidenceLevel.COLD_START,
                len(records),
            )

        minutes = [float(r.departure_minutes) for r in records if r.departure_minutes is not None]
        mean = weighted_average(minutes)
        std_dev = round_half_up(std_dev_around(minutes, mean))

        return self._build_pattern(
            round_half_up(mean),
            std_dev,
            ConfidenceLevel.for_sample_count(len(records)),
            len(records),
        )

    async def _get_qualifying_records(
        self, user_id: str, commute_type: CommuteType, is_weekday: bool
    ) -> list[CommuteRecord]:
        records = await self._record_repository.find_recent(
            user_id, commute_type, limit=RECORD_LOOKBACK
        )
        qualifying = [
            r for r in records if r.is_weekday == is_weekday and r.actual_departure is not None
        ]
        # Most recent first, whatever order the store returned
        qualifying.sort(key=lambda r: (r.commute_date, r.departure_minutes), reverse=True)
        return qualifying

    @staticmethod
    def _build_pattern(
        average_minutes: int, std_dev: int, confidence: float, sample_count: int
    ) -> DeparturePattern:
        return DeparturePattern(
            average_time=minutes_to_time(average_minutes),
            std_dev_minutes=std_dev,
            confidence=confidence,
            sample_count=sample_count,
            earliest_time=minutes_to_time(average_minutes - 2 * std_dev),
            latest_time=minutes_to_time(average_minutes + 2 * std_dev),
        )
