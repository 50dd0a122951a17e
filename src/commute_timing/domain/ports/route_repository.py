"""Route repository port."""

from typing import Protocol

from commute_timing.domain.models.route import Route


class RouteRepository(Protocol):
    """Port for reading commute routes."""

    async def find_by_id(self, route_id: str) -> Route | None:
        """Find a route with its checkpoints, or None if it does not exist."""
        ...
