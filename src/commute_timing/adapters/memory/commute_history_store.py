"""In-memory commute record and session repositories."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import TYPE_CHECKING

from commute_timing.domain.ports.commute_record_repository import CommuteRecordRepository
from commute_timing.domain.ports.commute_session_repository import CommuteSessionRepository

if TYPE_CHECKING:
    from commute_timing.domain.models.commute_record import (
        CommuteRecord,
        CommuteSession,
        CommuteType,
    )


class InMemoryCommuteRecordRepository(CommuteRecordRepository):
    """Commute records grouped by user."""

    def __init__(self, records: list[CommuteRecord] | None = None) -> None:
        self._records: dict[str, list[CommuteRecord]] = defaultdict(list)
        for record in records or []:
            self.add(record)

    def add(self, record: CommuteRecord) -> None:
        self._records[record.user_id].append(record)

    async def find_recent(
        self, user_id: str, commute_type: CommuteType, limit: int = 30
    ) -> list[CommuteRecord]:
        """Get the newest records of a type, by commute date."""
        matching = [r for r in self._records.get(user_id, []) if r.commute_type == commute_type]
        matching.sort(key=lambda r: r.commute_date, reverse=True)
        return matching[:limit]


class InMemoryCommuteSessionRepository(CommuteSessionRepository):
    """Commute sessions grouped by user."""

    def __init__(self, sessions: list[CommuteSession] | None = None) -> None:
        self._sessions: dict[str, list[CommuteSession]] = defaultdict(list)
        for session in sessions or []:
            self.add(session)

    def add(self, session: CommuteSession) -> None:
        self._sessions[session.user_id].append(session)

    async def find_by_user_in_range(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[CommuteSession]:
        return [s for s in self._sessions.get(user_id, []) if start <= s.started_at <= end]
