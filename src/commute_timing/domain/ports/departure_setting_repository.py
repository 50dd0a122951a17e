"""Departure setting repository port."""

from typing import Protocol

from commute_timing.domain.models.departure_setting import DepartureSetting


class DepartureSettingRepository(Protocol):
    """Port for reading smart departure settings."""

    async def find_by_id(self, setting_id: str) -> DepartureSetting | None:
        """Find a setting by id."""
        ...

    async def find_active_by_user(self, user_id: str) -> list[DepartureSetting]:
        """Get a user's enabled settings."""
        ...
