"""In-memory alternative mapping repository."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from commute_timing.domain.ports.alternative_mapping_repository import (
    AlternativeMappingRepository,
)

if TYPE_CHECKING:
    from commute_timing.domain.models.alternative import AlternativeMapping


class InMemoryAlternativeMappingRepository(AlternativeMappingRepository):
    """Station substitutions indexed by both endpoints.

    A mapping is an undirected edge when bidirectional; it is reachable
    through the index of its "to" endpoint only in that case.
    """

    def __init__(self, mappings: list[AlternativeMapping] | None = None) -> None:
        self._by_from: dict[tuple[str, str], list[AlternativeMapping]] = defaultdict(list)
        self._by_to: dict[tuple[str, str], list[AlternativeMapping]] = defaultdict(list)
        for mapping in mappings or []:
            self.add(mapping)

    def add(self, mapping: AlternativeMapping) -> None:
        self._by_from[(mapping.from_station_name, mapping.from_line)].append(mapping)
        if mapping.is_bidirectional:
            self._by_to[(mapping.to_station_name, mapping.to_line)].append(mapping)

    async def find_for_station(self, station_name: str, line: str) -> list[AlternativeMapping]:
        """Get active mappings that can start from (station, line), forward ones first."""
        key = (station_name, line)
        result: list[AlternativeMapping] = []
        for mapping in [*self._by_from.get(key, []), *self._by_to.get(key, [])]:
            if mapping.is_active and mapping not in result:
                result.append(mapping)
        return result
