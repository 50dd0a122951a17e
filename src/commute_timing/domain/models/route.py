"""Route and checkpoint domain models."""

import re
from dataclasses import dataclass, field
from enum import StrEnum

STATION_SUFFIX = "역"

_STATION_SUFFIX_RE = re.compile(f"{STATION_SUFFIX}$")


class RouteType(StrEnum):
    """When a route is normally travelled."""

    MORNING = "morning"
    EVENING = "evening"
    CUSTOM = "custom"


class CheckpointType(StrEnum):
    """Kind of waypoint a checkpoint represents."""

    HOME = "home"
    SUBWAY = "subway"
    BUS_STOP = "bus_stop"
    TRANSFER_POINT = "transfer_point"
    WORK = "work"
    CUSTOM = "custom"


# Checkpoint types that have live arrival data behind them
TRANSIT_CHECKPOINT_TYPES = frozenset({CheckpointType.SUBWAY, CheckpointType.TRANSFER_POINT})


def strip_station_suffix(name: str) -> str:
    """Remove a trailing station suffix ("강남역" -> "강남")."""
    return _STATION_SUFFIX_RE.sub("", name)


@dataclass(frozen=True)
class Checkpoint:
    """One stop or waypoint on a commute route."""

    id: str
    sequence_order: int
    name: str
    checkpoint_type: CheckpointType
    line_info: str | None = None  # Line label as shown to users (e.g., "2호선")
    expected_wait_minutes: int = 0
    expected_duration_to_next: int | None = None
    linked_station_id: str | None = None
    linked_bus_stop_id: str | None = None

    @property
    def is_transit(self) -> bool:
        """Whether live arrivals can be fetched for this checkpoint."""
        return self.checkpoint_type in TRANSIT_CHECKPOINT_TYPES

    @property
    def station_name(self) -> str:
        """Checkpoint name without the station suffix, as used for arrival lookups."""
        return strip_station_suffix(self.name)


@dataclass(frozen=True)
class Route:
    """A user's commute route: an ordered sequence of checkpoints."""

    id: str
    user_id: str
    name: str
    route_type: RouteType = RouteType.MORNING
    checkpoints: tuple[Checkpoint, ...] = field(default_factory=tuple)
    total_expected_duration: int | None = None  # Declared baseline in minutes

    def __post_init__(self) -> None:
        orders = sorted(cp.sequence_order for cp in self.checkpoints)
        if orders and orders != list(range(orders[0], orders[0] + len(orders))):
            raise ValueError(
                f"Checkpoint sequence orders of route {self.id} must be unique and contiguous: "
                f"{orders}"
            )
        # Keep checkpoints in travel order regardless of input order
        object.__setattr__(
            self, "checkpoints", tuple(sorted(self.checkpoints, key=lambda cp: cp.sequence_order))
        )

    @property
    def transit_checkpoints(self) -> list[Checkpoint]:
        """Checkpoints that carry live transit data, in travel order."""
        return [cp for cp in self.checkpoints if cp.is_transit]

    @property
    def expected_duration(self) -> int:
        """Declared expected duration, 0 when the route has none."""
        return self.total_expected_duration or 0
