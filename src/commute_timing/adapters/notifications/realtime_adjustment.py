"""Realtime adjustment adapters."""

from commute_timing.domain.models.route import Route
from commute_timing.domain.ports.realtime_adjustment_provider import RealtimeAdjustmentProvider


class NullRealtimeAdjustmentProvider(RealtimeAdjustmentProvider):
    """Reports no live adjustment; travel estimates rely on baseline and history."""

    async def get_adjustment_minutes(self, route: Route) -> int:
        return 0
