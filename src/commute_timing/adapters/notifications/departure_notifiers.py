"""Departure notifier adapters."""

import logging

from commute_timing.domain.models.civil_time import to_civil
from commute_timing.domain.models.departure_snapshot import DepartureUpdate
from commute_timing.domain.ports.departure_notifier import DepartureNotifier

logger = logging.getLogger(__name__)


class LoggingDepartureNotifier(DepartureNotifier):
    """Writes departure updates to the log instead of delivering them.

    Stands in for a push channel until one is configured.
    """

    async def publish(self, update: DepartureUpdate) -> None:
        departure = to_civil(update.optimal_departure_at).strftime("%H:%M")
        trend = "delay" if update.is_delay else "earlier"
        logger.info(
            f"Departure update for user {update.user_id}, setting {update.setting_id} "
            f"({trend}): travel {update.previous_travel_min} -> {update.estimated_travel_min} min, "
            f"leave at {departure}. {update.message}"
        )


class NullDepartureNotifier(DepartureNotifier):
    """Discards departure updates."""

    async def publish(self, update: DepartureUpdate) -> None:
        return None
