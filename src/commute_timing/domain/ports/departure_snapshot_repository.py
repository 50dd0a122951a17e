"""Departure snapshot repository port."""

from typing import Protocol

from commute_timing.domain.models.departure_snapshot import DepartureSnapshot


class DepartureSnapshotRepository(Protocol):
    """Port for persisting daily departure snapshots.

    (setting_id, departure_date) is unique; create raises DuplicateSnapshotError
    when it is violated.
    """

    async def find_by_setting_and_date(
        self, setting_id: str, departure_date: str
    ) -> DepartureSnapshot | None:
        """Find the snapshot of a setting for a civil date."""
        ...

    async def find_by_user_and_date(
        self, user_id: str, departure_date: str
    ) -> list[DepartureSnapshot]:
        """Find every snapshot of a user for a civil date."""
        ...

    async def create(self, snapshot: DepartureSnapshot) -> DepartureSnapshot:
        """Persist a new snapshot and return it with its id assigned."""
        ...

    async def update(self, snapshot: DepartureSnapshot) -> None:
        """Replace an existing snapshot."""
        ...
