"""Real-time delay monitoring of a route's transit checkpoints."""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from commute_timing.domain.models.arrival import shortest_wait_minutes
from commute_timing.domain.models.delay import (
    DataSource,
    DelayCheckResult,
    DelaySegment,
    OverallDelayStatus,
    SegmentStatus,
)
from commute_timing.domain.models.delay_policy import DelayPolicy

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_timing.domain.models.route import Checkpoint, Route
    from commute_timing.domain.ports import ArrivalRepository


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CheckpointDelayMonitor:
    """Classifies how late each transit leg of a route is running."""

    def __init__(
        self,
        arrival_repository: "ArrivalRepository",
        policy: DelayPolicy | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize with a live arrival source.

        Args:
            arrival_repository: Source of live arrivals per station.
            policy: Delay thresholds; defaults apply when omitted.
            clock: Returns the current time, used to stamp segments.
        """
        self._arrival_repository = arrival_repository
        self._policy = policy or DelayPolicy()
        self._clock = clock

    async def check_route_delays(
        self, route: "Route", timeout_seconds: float | None = None
    ) -> DelayCheckResult:
        """Check every transit checkpoint of a route concurrently.

        A checkpoint whose lookup fails or exceeds timeout_seconds is reported
        as unavailable; the other checkpoints are unaffected.
        """
        transit_checkpoints = route.transit_checkpoints
        expected_duration = route.expected_duration

        if not transit_checkpoints:
            return DelayCheckResult(
                segments=[],
                overall_status=OverallDelayStatus.NORMAL,
                total_expected_duration=expected_duration,
                total_estimated_duration=expected_duration,
                total_delay_minutes=0,
            )

        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(self._check_checkpoint(cp, timeout_seconds))
                for cp in transit_checkpoints
            ]
        segments = [task.result() for task in tasks]

        total_delay = sum(max(0, s.delay_minutes) for s in segments)
        overall_status = self.calculate_overall_status(segments)
        logger.debug(
            f"Route {route.id}: {len(segments)} segment(s), status={overall_status}, "
            f"total delay={total_delay}m"
        )

        return DelayCheckResult(
            segments=segments,
            overall_status=overall_status,
            total_expected_duration=expected_duration,
            total_estimated_duration=expected_duration + total_delay,
            total_delay_minutes=total_delay,
        )

    async def _check_checkpoint(
        self, checkpoint: "Checkpoint", timeout_seconds: float | None
    ) -> DelaySegment:
        now = self._clock()
        expected_wait = checkpoint.expected_wait_minutes

        try:
            async with asyncio.timeout(timeout_seconds):
                arrivals = await self._arrival_repository.get_arrivals(checkpoint.station_name)
        except Exception as e:
            # Isolate the failure to this checkpoint
            logger.warning(f"Failed to fetch arrival data for {checkpoint.name}: {e!r}")
            return self._segment(
                checkpoint, SegmentStatus.UNAVAILABLE, expected_wait, 0, DataSource.ESTIMATED, now
            )

        matching = [a for a in arrivals if a.matches_line(checkpoint.line_info)]
        estimated_wait = shortest_wait_minutes(matching)

        if estimated_wait is None:
            return self._segment(
                checkpoint, SegmentStatus.NORMAL, expected_wait, 0, DataSource.ESTIMATED, now
            )

        delay = max(0, estimated_wait - expected_wait)
        return self._segment(
            checkpoint,
            self.classify_segment_delay(delay),
            estimated_wait,
            delay,
            DataSource.REALTIME_API,
            now,
        )

    @staticmethod
    def _segment(
        checkpoint: "Checkpoint",
        status: SegmentStatus,
        estimated_wait: int,
        delay: int,
        source: DataSource,
        now: datetime,
    ) -> DelaySegment:
        return DelaySegment(
            checkpoint_id=checkpoint.id,
            checkpoint_name=checkpoint.name,
            checkpoint_type=checkpoint.checkpoint_type,
            line_info=checkpoint.line_info or "",
            status=status,
            expected_wait_minutes=checkpoint.expected_wait_minutes,
            estimated_wait_minutes=estimated_wait,
            delay_minutes=delay,
            source=source,
            last_updated=now,
        )

    def classify_segment_delay(self, delay_minutes: int) -> SegmentStatus:
        """Classify the delay of a single checkpoint."""
        if delay_minutes < self._policy.segment_delayed_minutes:
            return SegmentStatus.NORMAL
        if delay_minutes < self._policy.segment_severe_minutes:
            return SegmentStatus.DELAYED
        return SegmentStatus.SEVERE_DELAY

    def calculate_overall_status(self, segments: list[DelaySegment]) -> OverallDelayStatus:
        """Aggregate segment results into one route status."""
        if not segments:
            return OverallDelayStatus.NORMAL

        statuses = [s.status for s in segments]
        if all(status == SegmentStatus.UNAVAILABLE for status in statuses):
            return OverallDelayStatus.UNAVAILABLE

        has_unavailable = SegmentStatus.UNAVAILABLE in statuses
        max_delay = max(s.delay_minutes for s in segments)

        if max_delay >= self._policy.route_severe_minutes:
            return OverallDelayStatus.SEVERE_DELAY
        if max_delay >= self._policy.route_delayed_minutes:
            return OverallDelayStatus.DELAYED
        if max_delay >= self._policy.route_minor_minutes or has_unavailable:
            return OverallDelayStatus.MINOR_DELAY
        return OverallDelayStatus.NORMAL
