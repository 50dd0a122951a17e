"""Departure notifier port."""

from typing import Protocol

from commute_timing.domain.models.departure_snapshot import DepartureUpdate


class DepartureNotifier(Protocol):
    """Port for handing departure updates to a delivery channel.

    Fire-and-forget: the core logs and ignores failures.
    """

    async def publish(self, update: DepartureUpdate) -> None:
        """Publish a departure update."""
        ...
