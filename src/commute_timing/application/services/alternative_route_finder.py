"""Alternative route suggestions for delayed segments."""

import asyncio
import logging
from typing import TYPE_CHECKING

from commute_timing.domain.models.alternative import (
    AlternativeCandidate,
    AlternativeConfidence,
    AlternativeStep,
    AlternativeSuggestion,
    StepAction,
)
from commute_timing.domain.models.arrival import shortest_wait_minutes
from commute_timing.domain.models.delay_policy import DelayPolicy
from commute_timing.domain.models.route import STATION_SUFFIX, strip_station_suffix

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_timing.domain.models.delay import DelaySegment
    from commute_timing.domain.ports import AlternativeMappingRepository, ArrivalRepository


class AlternativeRouteFinder:
    """Proposes walk-and-ride substitutes for legs that are running late.

    Only static mappings are considered: a delayed station is swapped for a
    nearby station reachable on foot. No network search is performed.
    """

    def __init__(
        self,
        mapping_repository: "AlternativeMappingRepository",
        arrival_repository: "ArrivalRepository",
        policy: DelayPolicy | None = None,
    ) -> None:
        """Initialize the finder.

        Args:
            mapping_repository: Static station substitution map.
            arrival_repository: Live arrivals used to estimate the alternative's wait.
            policy: Thresholds; defaults apply when omitted.
        """
        self._mapping_repository = mapping_repository
        self._arrival_repository = arrival_repository
        self._policy = policy or DelayPolicy()

    async def find_alternatives(
        self, segments: list["DelaySegment"], timeout_seconds: float | None = None
    ) -> list[AlternativeSuggestion]:
        """Find alternatives for every sufficiently delayed segment.

        Suggestions are returned in segment order, then mapping order, and
        only when they actually save time.
        """
        delayed = [
            s for s in segments if s.delay_minutes >= self._policy.alternative_threshold_minutes
        ]
        if not delayed:
            return []

        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(self._find_for_segment(segment, timeout_seconds))
                for segment in delayed
            ]

        return [suggestion for task in tasks for suggestion in task.result()]

    async def _find_for_segment(
        self, segment: "DelaySegment", timeout_seconds: float | None
    ) -> list[AlternativeSuggestion]:
        station_name = strip_station_suffix(segment.checkpoint_name)

        try:
            async with asyncio.timeout(timeout_seconds):
                mappings = await self._mapping_repository.find_for_station(
                    station_name, segment.line_info
                )
        except Exception as e:
            logger.warning(f"Failed to load alternative mappings for {station_name}: {e!r}")
            return []

        resolved = [
            (mapping.id, candidate)
            for mapping in mappings
            if (candidate := mapping.alternative_for(station_name, segment.line_info)) is not None
        ]
        if not resolved:
            return []

        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(
                    self._evaluate_candidate(segment, mapping_id, candidate, timeout_seconds)
                )
                for mapping_id, candidate in resolved
            ]

        return [result for task in tasks if (result := task.result()) is not None]

    async def _evaluate_candidate(
        self,
        segment: "DelaySegment",
        mapping_id: str,
        candidate: AlternativeCandidate,
        timeout_seconds: float | None,
    ) -> AlternativeSuggestion | None:
        wait_minutes, confidence = await self._estimate_candidate_wait(
            candidate, timeout_seconds
        )

        total_minutes = candidate.walking_minutes + wait_minutes
        original_minutes = segment.estimated_wait_minutes
        savings = original_minutes - total_minutes
        if savings <= 0:
            return None

        alternative_station = f"{candidate.station_name}{STATION_SUFFIX}"
        steps = [
            AlternativeStep(
                action=StepAction.WALK,
                from_=segment.checkpoint_name,
                to=alternative_station,
                duration_minutes=candidate.walking_minutes,
            ),
            AlternativeStep(
                action=StepAction.SUBWAY,
                from_=alternative_station,
                line=candidate.line,
                duration_minutes=wait_minutes,
            ),
        ]

        return AlternativeSuggestion(
            id=mapping_id,
            trigger_segment=segment.checkpoint_id,
            trigger_reason=(
                f"{segment.line_info} {segment.checkpoint_name} {segment.delay_minutes}분 지연"
            ),
            description=f"{candidate.line} {alternative_station} 경유",
            steps=steps,
            total_duration_minutes=total_minutes,
            original_duration_minutes=original_minutes,
            savings_minutes=savings,
            walking_distance_meters=candidate.walking_distance_meters,
            confidence=confidence,
        )

    async def _estimate_candidate_wait(
        self, candidate: AlternativeCandidate, timeout_seconds: float | None
    ) -> tuple[int, AlternativeConfidence]:
        default_wait = self._policy.default_alternative_wait_minutes
        try:
            async with asyncio.timeout(timeout_seconds):
                arrivals = await self._arrival_repository.get_arrivals(
                    strip_station_suffix(candidate.station_name)
                )
        except Exception as e:
            logger.warning(f"Failed to fetch arrivals for {candidate.station_name}: {e!r}")
            return default_wait, AlternativeConfidence.LOW

        wait = shortest_wait_minutes([a for a in arrivals if a.matches_line(candidate.line)])
        if wait is None:
            return default_wait, AlternativeConfidence.MEDIUM
        return wait, AlternativeConfidence.HIGH
