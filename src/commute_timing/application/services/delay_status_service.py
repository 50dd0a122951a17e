"""Delay status of a route, with alternatives."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from commute_timing.domain.errors import RouteNotFoundError
from commute_timing.domain.models.alternative import DelayStatusReport

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_timing.application.services.alternative_route_finder import (
        AlternativeRouteFinder,
    )
    from commute_timing.application.services.checkpoint_delay_monitor import (
        CheckpointDelayMonitor,
    )
    from commute_timing.domain.ports import RouteRepository


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DelayStatusService:
    """Checks a stored route for delays and proposes alternatives."""

    def __init__(
        self,
        route_repository: "RouteRepository",
        monitor: "CheckpointDelayMonitor",
        finder: "AlternativeRouteFinder",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._route_repository = route_repository
        self._monitor = monitor
        self._finder = finder
        self._clock = clock

    async def get_delay_status(
        self, route_id: str, timeout_seconds: float | None = None
    ) -> DelayStatusReport:
        """Build the current delay report of a route.

        Raises:
            RouteNotFoundError: If the route does not exist.
        """
        route = await self._route_repository.find_by_id(route_id)
        if route is None:
            raise RouteNotFoundError(route_id)

        check = await self._monitor.check_route_delays(route, timeout_seconds)
        alternatives = await self._finder.find_alternatives(check.segments, timeout_seconds)

        if alternatives:
            logger.info(
                f"Route {route_id} is {check.overall_status}: "
                f"{len(alternatives)} alternative(s) found"
            )

        return DelayStatusReport.from_check(
            route_id=route.id,
            route_name=route.name,
            checked_at=self._clock(),
            check=check,
            alternatives=alternatives,
        )
