"""Tests for ReferenceDataLoader."""

import logging
from pathlib import Path
from typing import Any

import pytest

from commute_timing.adapters.config import AppConfig, ReferenceDataLoader
from commute_timing.domain.models import CheckpointType, DepartureType, RouteType

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "config.example.toml"


def _route(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": "morning",
        "user_id": "user-1",
        "name": "출근",
        "total_expected_duration": 45,
        "checkpoints": [
            {"id": "home", "sequence_order": 1, "name": "집", "type": "home"},
            {
                "id": "gangnam",
                "sequence_order": 2,
                "name": "강남역",
                "type": "SUBWAY",
                "line": "2호선",
                "expected_wait_minutes": 3,
            },
        ],
    }
    data.update(overrides)
    return data


class TestRoutes:
    """Tests for route loading."""

    def test_when_route_complete_then_checkpoints_loaded(self) -> None:
        """Given a route table, when loading, then the route and checkpoints are built."""
        route = ReferenceDataLoader.load_route(_route())

        assert route.id == "morning"
        assert route.route_type == RouteType.MORNING
        assert route.total_expected_duration == 45
        home, gangnam = route.checkpoints
        assert home.line_info is None
        assert gangnam.checkpoint_type == CheckpointType.SUBWAY
        assert gangnam.line_info == "2호선"
        assert gangnam.expected_wait_minutes == 3

    def test_when_checkpoint_type_unknown_then_error_names_route(self) -> None:
        """Given an unknown checkpoint type, when loading, then ValueError mentions the route."""
        data = _route(checkpoints=[{"id": "x", "sequence_order": 1, "name": "x", "type": "ferry"}])

        with pytest.raises(ValueError, match="route morning has unknown type 'ferry'"):
            ReferenceDataLoader.load_route(data)

    def test_when_required_field_missing_then_error(self) -> None:
        """Given a route without user, when loading, then ValueError names the field."""
        data = _route()
        del data["user_id"]

        with pytest.raises(ValueError, match="missing required field 'user_id'"):
            ReferenceDataLoader.load_route(data)

    def test_when_route_ids_repeat_then_error(self) -> None:
        """Given two routes with one id, when loading, then ValueError lists the duplicate."""
        with pytest.raises(ValueError, match="Duplicate ids found"):
            ReferenceDataLoader.load_from_data({"routes": [_route(), _route()]})


class TestAlternativesAndSettings:
    """Tests for alternative mappings and departure settings."""

    def test_when_alternative_loaded_then_defaults_apply(self) -> None:
        """Given a minimal alternative, when loading, then it is active and bidirectional."""
        mapping = ReferenceDataLoader.load_alternative(
            {
                "id": "gangnam-sinnonhyeon",
                "from_station": "강남",
                "from_line": "2호선",
                "to_station": "신논현",
                "to_line": "9호선",
                "walking_minutes": 8,
            }
        )

        assert mapping.id == "gangnam-sinnonhyeon"
        assert mapping.is_bidirectional
        assert mapping.is_active
        assert mapping.walking_distance_meters is None

    def test_when_setting_loaded_then_optional_fields_mapped(self) -> None:
        """Given a setting with optional fields, when loading, then they are carried over."""
        setting = ReferenceDataLoader.load_departure_setting(
            {
                "id": "evening",
                "user_id": "user-1",
                "route_id": "morning",
                "departure_type": "RETURN",
                "arrival_target": "19:00",
                "prep_time_minutes": 15,
                "enabled": False,
                "active_days": [1, 3, 5],
                "pre_alerts": [15],
            }
        )

        assert setting.departure_type == DepartureType.RETURN
        assert setting.prep_time_minutes == 15
        assert setting.is_enabled is False
        assert setting.active_days == (1, 3, 5)
        assert setting.pre_alerts == (15,)

    def test_when_setting_references_unknown_route_then_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Given a setting on a missing route, when loading, then it is kept with a warning."""
        data = {
            "routes": [_route()],
            "departure_settings": [
                {"id": "s", "user_id": "u", "route_id": "nowhere", "arrival_target": "09:00"}
            ],
        }

        with caplog.at_level(logging.WARNING):
            reference = ReferenceDataLoader.load_from_data(data)

        assert len(reference.departure_settings) == 1
        assert "references unknown route nowhere" in caplog.text


class TestExampleFile:
    """Tests for the shipped example configuration."""

    def test_when_example_loaded_then_it_is_consistent(self) -> None:
        """Given config.example.toml, when loading, then routes, alternatives and settings exist."""
        reference = ReferenceDataLoader.load(AppConfig(reference_data_file=str(EXAMPLE_CONFIG)))

        assert [r.id for r in reference.routes] == ["morning-commute"]
        assert {a.id for a in reference.alternatives} == {"gangnam-sinnonhyeon", "jamsil-seokchon"}
        assert reference.departure_settings[0].route_id == "morning-commute"
