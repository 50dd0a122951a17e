"""In-memory route repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from commute_timing.domain.ports.route_repository import RouteRepository

if TYPE_CHECKING:
    from commute_timing.domain.models.route import Route


class InMemoryRouteRepository(RouteRepository):
    """Routes held in a dict keyed by route id."""

    def __init__(self, routes: list[Route] | None = None) -> None:
        self._routes: dict[str, Route] = {}
        for route in routes or []:
            self.add(route)

    def add(self, route: Route) -> None:
        """Add or replace a route."""
        self._routes[route.id] = route

    def all(self) -> list[Route]:
        return list(self._routes.values())

    async def find_by_id(self, route_id: str) -> Route | None:
        return self._routes.get(route_id)
