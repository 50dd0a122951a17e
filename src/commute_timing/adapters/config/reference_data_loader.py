"""Reference data loader.

Builds routes, alternative mappings and departure settings from the TOML
reference file:

    [[routes]]
    id = "morning"
    user_id = "user-1"
    name = "출근"
    total_expected_duration = 45

    [[routes.checkpoints]]
    id = "gangnam"
    sequence_order = 2
    name = "강남역"
    type = "subway"
    line = "2호선"
    expected_wait_minutes = 3

    [[alternatives]]
    id = "gangnam-sinnonhyeon"
    from_station = "강남"
    from_line = "2호선"
    to_station = "신논현"
    to_line = "9호선"
    walking_minutes = 8

    [[departure_settings]]
    id = "weekday-commute"
    user_id = "user-1"
    route_id = "morning"
    departure_type = "commute"
    arrival_target = "09:00"
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from commute_timing.adapters.config.app_config import AppConfig
from commute_timing.domain.models.alternative import AlternativeMapping
from commute_timing.domain.models.departure_setting import DepartureSetting, DepartureType
from commute_timing.domain.models.route import Checkpoint, CheckpointType, Route, RouteType

logger = logging.getLogger(__name__)


@dataclass
class ReferenceData:
    """Everything loaded from the reference file."""

    routes: list[Route] = field(default_factory=list)
    alternatives: list[AlternativeMapping] = field(default_factory=list)
    departure_settings: list[DepartureSetting] = field(default_factory=list)


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise ValueError(f"{context} is missing required field '{key}'")
    return value


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


class ReferenceDataLoader:
    """Loads static reference data from app config."""

    @staticmethod
    def load_checkpoint(checkpoint_data: dict[str, Any], route_id: str) -> Checkpoint:
        """Build one checkpoint of a route."""
        context = f"Checkpoint of route {route_id}"
        checkpoint_type = _require(checkpoint_data, "type", context)
        try:
            parsed_type = CheckpointType(str(checkpoint_type).lower())
        except ValueError as e:
            raise ValueError(f"{context} has unknown type '{checkpoint_type}'") from e

        return Checkpoint(
            id=str(_require(checkpoint_data, "id", context)),
            sequence_order=int(_require(checkpoint_data, "sequence_order", context)),
            name=str(_require(checkpoint_data, "name", context)),
            checkpoint_type=parsed_type,
            line_info=checkpoint_data.get("line") or None,
            expected_wait_minutes=int(checkpoint_data.get("expected_wait_minutes", 0)),
            expected_duration_to_next=_optional_int(
                checkpoint_data.get("expected_duration_to_next")
            ),
            linked_station_id=checkpoint_data.get("linked_station_id"),
            linked_bus_stop_id=checkpoint_data.get("linked_bus_stop_id"),
        )

    @staticmethod
    def load_route(route_data: dict[str, Any]) -> Route:
        """Build a route with its checkpoints."""
        route_id = str(_require(route_data, "id", "Route"))
        checkpoints_data = route_data.get("checkpoints", [])
        if not isinstance(checkpoints_data, list):
            raise ValueError(f"Checkpoints of route {route_id} must be a list")

        return Route(
            id=route_id,
            user_id=str(_require(route_data, "user_id", f"Route {route_id}")),
            name=str(route_data.get("name", route_id)),
            route_type=RouteType(str(route_data.get("route_type", RouteType.MORNING)).lower()),
            checkpoints=tuple(
                ReferenceDataLoader.load_checkpoint(cp, route_id)
                for cp in checkpoints_data
                if isinstance(cp, dict)
            ),
            total_expected_duration=_optional_int(route_data.get("total_expected_duration")),
        )

    @staticmethod
    def load_alternative(mapping_data: dict[str, Any]) -> AlternativeMapping:
        """Build an alternative mapping."""
        mapping_id = str(_require(mapping_data, "id", "Alternative"))
        context = f"Alternative {mapping_id}"
        return AlternativeMapping(
            id=mapping_id,
            from_station_name=str(_require(mapping_data, "from_station", context)),
            from_line=str(_require(mapping_data, "from_line", context)),
            to_station_name=str(_require(mapping_data, "to_station", context)),
            to_line=str(_require(mapping_data, "to_line", context)),
            walking_minutes=int(_require(mapping_data, "walking_minutes", context)),
            walking_distance_meters=_optional_int(mapping_data.get("walking_distance_meters")),
            description=mapping_data.get("description"),
            is_bidirectional=bool(mapping_data.get("bidirectional", True)),
            is_active=bool(mapping_data.get("active", True)),
        )

    @staticmethod
    def load_departure_setting(setting_data: dict[str, Any]) -> DepartureSetting:
        """Build a departure setting."""
        setting_id = str(_require(setting_data, "id", "Departure setting"))
        context = f"Departure setting {setting_id}"
        kwargs: dict[str, Any] = {}
        if "prep_time_minutes" in setting_data:
            kwargs["prep_time_minutes"] = int(setting_data["prep_time_minutes"])
        if "enabled" in setting_data:
            kwargs["is_enabled"] = bool(setting_data["enabled"])
        if "active_days" in setting_data:
            kwargs["active_days"] = tuple(int(d) for d in setting_data["active_days"])
        if "pre_alerts" in setting_data:
            kwargs["pre_alerts"] = tuple(int(m) for m in setting_data["pre_alerts"])

        return DepartureSetting(
            id=setting_id,
            user_id=str(_require(setting_data, "user_id", context)),
            route_id=str(_require(setting_data, "route_id", context)),
            departure_type=DepartureType(
                str(setting_data.get("departure_type", DepartureType.COMMUTE)).lower()
            ),
            arrival_target=str(_require(setting_data, "arrival_target", context)),
            **kwargs,
        )

    @staticmethod
    def load_from_data(toml_data: dict[str, Any]) -> ReferenceData:
        """Build reference data from parsed TOML.

        Raises:
            ValueError: If an entry is incomplete or violates a model invariant.
        """
        routes = [
            ReferenceDataLoader.load_route(r)
            for r in toml_data.get("routes", [])
            if isinstance(r, dict)
        ]
        route_ids = [r.id for r in routes]
        if len(route_ids) != len(set(route_ids)):
            duplicates = {i for i in route_ids if route_ids.count(i) > 1}
            raise ValueError(f"Route ids must be unique. Duplicate ids found: {duplicates}")

        alternatives = [
            ReferenceDataLoader.load_alternative(a)
            for a in toml_data.get("alternatives", [])
            if isinstance(a, dict)
        ]
        settings = [
            ReferenceDataLoader.load_departure_setting(s)
            for s in toml_data.get("departure_settings", [])
            if isinstance(s, dict)
        ]

        for setting in settings:
            if setting.route_id not in route_ids:
                logger.warning(
                    f"Departure setting {setting.id} references unknown route {setting.route_id}"
                )

        return ReferenceData(routes=routes, alternatives=alternatives, departure_settings=settings)

    @staticmethod
    def load(config: AppConfig) -> ReferenceData:
        """Load reference data from the file configured in app config."""
        data = ReferenceDataLoader.load_from_data(config.load_reference_data())
        logger.info(
            f"Loaded {len(data.routes)} route(s), {len(data.alternatives)} alternative(s) and "
            f"{len(data.departure_settings)} departure setting(s) from {config.reference_data_file}"
        )
        return data
