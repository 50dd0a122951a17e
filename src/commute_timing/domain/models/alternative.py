"""Alternative route domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from commute_timing.domain.models.delay import DelayCheckResult, DelaySegment, OverallDelayStatus


@dataclass(frozen=True)
class AlternativeCandidate:
    """The far side of an alternative mapping, seen from one station."""

    station_name: str
    line: str
    walking_minutes: int
    walking_distance_meters: int | None = None
    description: str | None = None


@dataclass(frozen=True)
class AlternativeMapping:
    """A walkable substitution between two (station, line) endpoints.

    Bidirectional mappings can be used from either endpoint.
    """

    from_station_name: str
    from_line: str
    to_station_name: str
    to_line: str
    walking_minutes: int
    walking_distance_meters: int | None = None
    description: str | None = None
    is_bidirectional: bool = True
    is_active: bool = True
    id: str = ""

    def alternative_for(self, station_name: str, line: str) -> AlternativeCandidate | None:
        """Resolve the opposite endpoint of the mapping for a source station."""
        if self.from_station_name == station_name and self.from_line == line:
            return self._candidate(self.to_station_name, self.to_line)
        if (
            self.is_bidirectional
            and self.to_station_name == station_name
            and self.to_line == line
        ):
            return self._candidate(self.from_station_name, self.from_line)
        return None

    def _candidate(self, station_name: str, line: str) -> AlternativeCandidate:
        return AlternativeCandidate(
            station_name=station_name,
            line=line,
            walking_minutes=self.walking_minutes,
            walking_distance_meters=self.walking_distance_meters,
            description=self.description,
        )


class StepAction(StrEnum):
    """What the commuter does in one step of an alternative."""

    WALK = "walk"
    SUBWAY = "subway"
    BUS = "bus"


class AlternativeConfidence(StrEnum):
    """How much live data backs an alternative's wait estimate."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AlternativeStep(BaseModel):
    """One leg of an alternative suggestion."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    action: StepAction
    from_: str = Field(alias="from")  # "from" is reserved in Python
    to: str | None = None
    line: str | None = None
    duration_minutes: int


class AlternativeSuggestion(BaseModel):
    """A faster substitute for a delayed leg."""

    model_config = ConfigDict(frozen=True)

    id: str
    trigger_segment: str  # Checkpoint id of the delayed segment
    trigger_reason: str
    description: str
    steps: list[AlternativeStep]
    total_duration_minutes: int
    original_duration_minutes: int
    savings_minutes: int = Field(gt=0)
    walking_distance_meters: int | None = None
    confidence: AlternativeConfidence


class DelayStatusReport(BaseModel):
    """Delay check of a route together with the alternatives it triggered."""

    model_config = ConfigDict(frozen=True)

    route_id: str
    route_name: str
    checked_at: datetime
    overall_status: OverallDelayStatus
    total_expected_duration: int
    total_estimated_duration: int
    total_delay_minutes: int
    segments: list[DelaySegment]
    alternatives: list[AlternativeSuggestion]

    @classmethod
    def from_check(
        cls,
        route_id: str,
        route_name: str,
        checked_at: datetime,
        check: DelayCheckResult,
        alternatives: list[AlternativeSuggestion],
    ) -> "DelayStatusReport":
        """Combine a delay check with its alternatives."""
        return cls(
            route_id=route_id,
            route_name=route_name,
            checked_at=checked_at,
            overall_status=check.overall_status,
            total_expected_duration=check.total_expected_duration,
            total_estimated_duration=check.total_estimated_duration,
            total_delay_minutes=check.total_delay_minutes,
            segments=check.segments,
            alternatives=alternatives,
        )
