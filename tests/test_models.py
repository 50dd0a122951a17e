"""Tests for domain models."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from commute_timing.domain.models import (
    AlternativeConfidence,
    AlternativeMapping,
    AlternativeStep,
    AlternativeSuggestion,
    Arrival,
    Checkpoint,
    CheckpointType,
    DataSource,
    DelayPolicy,
    DelaySegment,
    DepartureSetting,
    DepartureSnapshot,
    DepartureType,
    Route,
    SegmentStatus,
    SnapshotStatus,
    StepAction,
)
from commute_timing.domain.models.arrival import line_matches, shortest_wait_minutes
from commute_timing.domain.models.civil_time import (
    civil_date,
    civil_instant,
    minutes_to_time,
    parse_time_of_day,
)
from commute_timing.domain.models.route import strip_station_suffix

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)


def _checkpoint(order: int, name: str = "강남역", **kwargs: object) -> Checkpoint:
    return Checkpoint(
        id=f"cp-{order}",
        sequence_order=order,
        name=name,
        checkpoint_type=kwargs.pop("checkpoint_type", CheckpointType.SUBWAY),  # type: ignore[arg-type]
        **kwargs,  # type: ignore[arg-type]
    )


def test_route_checkpoints_are_kept_in_sequence_order() -> None:
    """Given checkpoints out of order, when creating a Route, then they are sorted."""
    route = Route(
        id="r",
        user_id="u",
        name="출근",
        checkpoints=(
            _checkpoint(3, "회사", checkpoint_type=CheckpointType.WORK),
            _checkpoint(1, "집", checkpoint_type=CheckpointType.HOME),
            _checkpoint(2),
        ),
    )

    assert [cp.sequence_order for cp in route.checkpoints] == [1, 2, 3]
    assert [cp.name for cp in route.transit_checkpoints] == ["강남역"]
    assert route.expected_duration == 0


@pytest.mark.parametrize("orders", [(1, 1), (1, 3)])
def test_route_rejects_duplicate_or_gapped_sequence(orders: tuple[int, int]) -> None:
    """Given duplicate or gapped orders, when creating a Route, then ValueError."""
    with pytest.raises(ValueError, match="unique and contiguous"):
        Route(id="r", user_id="u", name="x", checkpoints=tuple(_checkpoint(o) for o in orders))


def test_transfer_points_count_as_transit() -> None:
    """Given a transfer point, when checking transit, then it is included."""
    assert _checkpoint(1, checkpoint_type=CheckpointType.TRANSFER_POINT).is_transit
    assert not _checkpoint(1, checkpoint_type=CheckpointType.BUS_STOP).is_transit


def test_station_suffix_is_stripped_only_at_the_end() -> None:
    """Given station names, when stripping the suffix, then only a trailing one is removed."""
    assert strip_station_suffix("강남역") == "강남"
    assert strip_station_suffix("역삼역") == "역삼"
    assert strip_station_suffix("역삼") == "역삼"
    assert _checkpoint(1, "잠실역").station_name == "잠실"


@pytest.mark.parametrize(
    ("line_id", "line_info", "expected"),
    [
        ("1002", "2호선", True),
        ("1009", "9호선", True),
        ("1002", "9호선", False),
        ("1065", "공항철도", False),
        ("1077", "7호선", True),
    ],
)
def test_line_id_matching(line_id: str, line_info: str, expected: bool) -> None:
    """Given an API line id and a label, when matching, then digits decide."""
    assert line_matches(line_id, line_info) is expected


def test_arrival_without_line_label_matches_anything() -> None:
    """Given a checkpoint without a line, when matching, then every arrival counts."""
    arrival = Arrival(line_id="1002", direction="상행", arrival_seconds=61, destination="성수")

    assert arrival.matches_line(None)
    assert arrival.matches_line("")


def test_shortest_wait_rounds_seconds_up() -> None:
    """Given arrivals in 61s and 180s, when taking the shortest wait, then 2 minutes."""
    arrivals = [
        Arrival(line_id="1002", direction="상행", arrival_seconds=180, destination="성수"),
        Arrival(line_id="1002", direction="하행", arrival_seconds=61, destination="성수"),
    ]

    assert shortest_wait_minutes(arrivals) == 2
    assert shortest_wait_minutes([]) is None


def test_civil_time_uses_seoul_offset() -> None:
    """Given 16:00 UTC, when converting, then it is the next civil day."""
    assert civil_date(datetime(2026, 10, 18, 16, 0, tzinfo=UTC)) == date(2026, 10, 19)
    assert civil_instant(date(2026, 10, 19), "09:00") == datetime(2026, 10, 19, 0, 0, tzinfo=UTC)


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "noon", "12:00:00"])
def test_invalid_time_of_day_rejected(value: str) -> None:
    """Given a malformed time, when parsing, then ValueError."""
    with pytest.raises(ValueError, match="Invalid time of day"):
        parse_time_of_day(value)


def test_minutes_to_time_wraps_around_midnight() -> None:
    """Given negative or overflowing minutes, when formatting, then the clock wraps."""
    assert minutes_to_time(-20) == "23:40"
    assert minutes_to_time(24 * 60 + 5) == "00:05"


def test_departure_setting_validates_fields() -> None:
    """Given invalid prep time or days, when creating a setting, then ValueError."""
    base = {
        "id": "s",
        "user_id": "u",
        "route_id": "r",
        "departure_type": DepartureType.COMMUTE,
        "arrival_target": "09:00",
    }
    with pytest.raises(ValueError, match="prep_time_minutes"):
        DepartureSetting(**base, prep_time_minutes=5)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="active_days"):
        DepartureSetting(**base, active_days=(7,))  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="Invalid time of day"):
        DepartureSetting(**{**base, "arrival_target": "25:00"})  # type: ignore[arg-type]


def test_departure_setting_active_days_use_sunday_zero() -> None:
    """Given a Sunday-only setting, when checking days, then only Sunday is active."""
    setting = DepartureSetting(
        id="s",
        user_id="u",
        route_id="r",
        departure_type=DepartureType.RETURN,
        arrival_target="18:00",
        active_days=(0,),
    )

    assert setting.is_active_on(date(2026, 10, 18))  # Sunday
    assert not setting.is_active_on(date(2026, 10, 19))  # Monday


def test_snapshot_recalculation_keeps_identity_and_alerts() -> None:
    """Given a notified snapshot, when recalculating, then id, status and alerts are kept."""
    snapshot = DepartureSnapshot(
        user_id="u",
        setting_id="s",
        departure_date="2026-10-19",
        departure_type=DepartureType.COMMUTE,
        arrival_target="09:00",
        estimated_travel_min=40,
        prep_time_minutes=30,
        optimal_departure_at=NOW,
        id="snap-1",
    ).with_alert_sent(30, now=NOW)

    updated = snapshot.with_updated_calculation(
        estimated_travel_min=45,
        optimal_departure_at=NOW,
        baseline_travel_min=45,
        history_avg_travel_min=None,
        realtime_adjustment_min=3,
        now=NOW,
    )

    assert updated.id == "snap-1"
    assert updated.status == SnapshotStatus.NOTIFIED
    assert updated.alerts_sent == (30,)
    assert updated.estimated_travel_min == 45
    assert updated.has_traffic_delay


def test_delay_policy_rejects_unordered_thresholds() -> None:
    """Given thresholds out of order, when creating a DelayPolicy, then ValueError."""
    with pytest.raises(ValueError, match="Segment thresholds"):
        DelayPolicy(segment_delayed_minutes=10, segment_severe_minutes=5)
    with pytest.raises(ValueError, match="Route thresholds"):
        DelayPolicy(route_delayed_minutes=20)


def test_alternative_mapping_resolves_both_ends_when_bidirectional() -> None:
    """Given a bidirectional mapping, when resolving either end, then the other is returned."""
    mapping = AlternativeMapping(
        from_station_name="강남",
        from_line="2호선",
        to_station_name="신논현",
        to_line="9호선",
        walking_minutes=5,
    )

    forward = mapping.alternative_for("강남", "2호선")
    backward = mapping.alternative_for("신논현", "9호선")

    assert forward is not None and forward.station_name == "신논현"
    assert backward is not None and backward.station_name == "강남"
    assert mapping.alternative_for("강남", "9호선") is None


def test_delay_segment_rejects_negative_delay() -> None:
    """Given a negative delay, when creating a DelaySegment, then validation fails."""
    with pytest.raises(ValidationError):
        DelaySegment(
            checkpoint_id="cp",
            checkpoint_name="강남역",
            checkpoint_type=CheckpointType.SUBWAY,
            status=SegmentStatus.NORMAL,
            expected_wait_minutes=3,
            estimated_wait_minutes=1,
            delay_minutes=-2,
            source=DataSource.REALTIME_API,
            last_updated=NOW,
        )


def test_delay_segment_survives_json_round_trip() -> None:
    """Given a delayed segment, when serialized and validated back, then every field is kept."""
    segment = DelaySegment(
        checkpoint_id="cp-gangnam",
        checkpoint_name="강남역",
        checkpoint_type=CheckpointType.SUBWAY,
        line_info="2호선",
        status=SegmentStatus.DELAYED,
        expected_wait_minutes=3,
        estimated_wait_minutes=8,
        delay_minutes=5,
        source=DataSource.REALTIME_API,
        last_updated=datetime(2026, 10, 19, 1, 2, 3, 456789, tzinfo=UTC),
    )

    assert DelaySegment.model_validate_json(segment.model_dump_json()) == segment
    assert DelaySegment.model_validate(segment.model_dump(mode="json")) == segment


def test_alternative_suggestion_survives_json_round_trip() -> None:
    """Given a suggestion, when dumped by alias and validated back, then it is equal."""
    suggestion = AlternativeSuggestion(
        id="gangnam-sinnonhyeon",
        trigger_segment="cp-gangnam",
        trigger_reason="2호선 강남역 8분 지연",
        description="9호선 신논현역 경유",
        steps=[
            AlternativeStep(action=StepAction.WALK, from_="강남역", to="신논현역", duration_minutes=5),
            AlternativeStep(action=StepAction.SUBWAY, from_="신논현역", line="9호선", duration_minutes=2),
        ],
        total_duration_minutes=7,
        original_duration_minutes=11,
        savings_minutes=4,
        confidence=AlternativeConfidence.HIGH,
    )

    data = suggestion.model_dump(mode="json", by_alias=True)

    assert data["steps"][0]["from"] == "강남역"
    assert AlternativeSuggestion.model_validate(data) == suggestion


def test_alternative_suggestion_requires_positive_savings() -> None:
    """Given zero savings, when creating a suggestion, then validation fails."""
    with pytest.raises(ValidationError):
        AlternativeSuggestion(
            id="x",
            trigger_segment="cp",
            trigger_reason="r",
            description="d",
            steps=[],
            total_duration_minutes=11,
            original_duration_minutes=11,
            savings_minutes=0,
            confidence=AlternativeConfidence.LOW,
        )
