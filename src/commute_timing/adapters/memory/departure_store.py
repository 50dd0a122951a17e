"""In-memory departure setting and snapshot repositories."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING

from commute_timing.domain.errors import DuplicateSnapshotError
from commute_timing.domain.ports.departure_setting_repository import DepartureSettingRepository
from commute_timing.domain.ports.departure_snapshot_repository import (
    DepartureSnapshotRepository,
)

if TYPE_CHECKING:
    from commute_timing.domain.models.departure_setting import DepartureSetting
    from commute_timing.domain.models.departure_snapshot import DepartureSnapshot

logger = logging.getLogger(__name__)


class InMemoryDepartureSettingRepository(DepartureSettingRepository):
    """Departure settings keyed by id."""

    def __init__(self, settings: list[DepartureSetting] | None = None) -> None:
        self._settings: dict[str, DepartureSetting] = {}
        for setting in settings or []:
            self.add(setting)

    def add(self, setting: DepartureSetting) -> None:
        self._settings[setting.id] = setting

    def user_ids(self) -> set[str]:
        return {s.user_id for s in self._settings.values()}

    async def find_by_id(self, setting_id: str) -> DepartureSetting | None:
        return self._settings.get(setting_id)

    async def find_active_by_user(self, user_id: str) -> list[DepartureSetting]:
        return [s for s in self._settings.values() if s.user_id == user_id and s.is_enabled]


class InMemoryDepartureSnapshotRepository(DepartureSnapshotRepository):
    """Snapshots keyed by (setting id, departure date)."""

    def __init__(self) -> None:
        self._snapshots: dict[tuple[str, str], DepartureSnapshot] = {}

    async def find_by_setting_and_date(
        self, setting_id: str, departure_date: str
    ) -> DepartureSnapshot | None:
        return self._snapshots.get((setting_id, departure_date))

    async def find_by_user_and_date(
        self, user_id: str, departure_date: str
    ) -> list[DepartureSnapshot]:
        return [
            s
            for (_, on_date), s in self._snapshots.items()
            if on_date == departure_date and s.user_id == user_id
        ]

    async def create(self, snapshot: DepartureSnapshot) -> DepartureSnapshot:
        """Store a new snapshot, assigning an id when it has none.

        Raises:
            DuplicateSnapshotError: If the setting already has a snapshot for the date.
        """
        key = (snapshot.setting_id, snapshot.departure_date)
        if key in self._snapshots:
            raise DuplicateSnapshotError(snapshot.setting_id, snapshot.departure_date)

        saved = snapshot if snapshot.id else replace(snapshot, id=str(uuid.uuid4()))
        self._snapshots[key] = saved
        logger.debug(
            f"Stored snapshot {saved.id} for setting {saved.setting_id} on {saved.departure_date}"
        )
        return saved

    async def update(self, snapshot: DepartureSnapshot) -> None:
        """Replace a stored snapshot.

        Raises:
            KeyError: If the snapshot was never created.
        """
        key = (snapshot.setting_id, snapshot.departure_date)
        if key not in self._snapshots:
            raise KeyError(f"No snapshot for setting {snapshot.setting_id} on {snapshot.departure_date}")
        self._snapshots[key] = snapshot
