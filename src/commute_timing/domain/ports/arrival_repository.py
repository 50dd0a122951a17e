"""Live arrival repository port."""

from typing import Protocol

from commute_timing.domain.models.arrival import Arrival


class ArrivalRepository(Protocol):
    """Port for retrieving live train arrivals."""

    async def get_arrivals(self, station_name: str) -> list[Arrival]:
        """Get upcoming arrivals at a station.

        Unknown stations yield an empty list. Failures to reach the live
        source raise ArrivalFetchError.
        """
        ...
