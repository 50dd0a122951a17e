"""Commute record repository port."""

from typing import Protocol

from commute_timing.domain.models.commute_record import CommuteRecord, CommuteType


class CommuteRecordRepository(Protocol):
    """Port for reading a user's commute history."""

    async def find_recent(
        self, user_id: str, commute_type: CommuteType, limit: int = 30
    ) -> list[CommuteRecord]:
        """Get the most recent records of a type, newest first."""
        ...
