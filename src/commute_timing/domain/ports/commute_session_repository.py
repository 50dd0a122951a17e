"""Commute session repository port."""

from datetime import datetime
from typing import Protocol

from commute_timing.domain.models.commute_record import CommuteSession


class CommuteSessionRepository(Protocol):
    """Port for reading tracked commute sessions."""

    async def find_by_user_in_range(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[CommuteSession]:
        """Get a user's sessions started within [start, end]."""
        ...
