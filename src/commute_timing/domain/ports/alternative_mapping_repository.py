"""Alternative mapping repository port."""

from typing import Protocol

from commute_timing.domain.models.alternative import AlternativeMapping


class AlternativeMappingRepository(Protocol):
    """Port for the static station substitution map."""

    async def find_for_station(self, station_name: str, line: str) -> list[AlternativeMapping]:
        """Get active mappings usable from (station, line), on either endpoint."""
        ...
