"""Realtime adjustment provider port."""

from typing import Protocol

from commute_timing.domain.models.route import Route


class RealtimeAdjustmentProvider(Protocol):
    """Port for the current traffic/transit offset of a route."""

    async def get_adjustment_minutes(self, route: Route) -> int:
        """Minutes to add to (or subtract from) the expected travel time right now."""
        ...
