"""Arrival repository backed by the Seoul real-time subway API."""

import logging

from commute_timing.adapters.seoul_subway_api.arrival_parser import ArrivalParser
from commute_timing.adapters.seoul_subway_api.http_client import SeoulSubwayHttpClient
from commute_timing.domain.models.arrival import Arrival
from commute_timing.domain.models.route import strip_station_suffix
from commute_timing.domain.ports.arrival_repository import ArrivalRepository

logger = logging.getLogger(__name__)


class SeoulSubwayArrivalRepository(ArrivalRepository):
    """Adapter serving live arrivals from the Seoul open data API."""

    def __init__(self, http_client: SeoulSubwayHttpClient) -> None:
        self._http_client = http_client

    async def get_arrivals(self, station_name: str) -> list[Arrival]:
        """Get upcoming arrivals at a station.

        Args:
            station_name: Station name, with or without the "역" suffix.

        Returns:
            Arrivals in response order; empty for unknown stations.

        Raises:
            ArrivalFetchError: If the API could not be queried.
        """
        name = strip_station_suffix(station_name.strip())
        if not name:
            return []

        items = await self._http_client.fetch_arrivals(name)
        arrivals = ArrivalParser.parse_arrivals(items)
        logger.debug(f"{len(arrivals)} arrival(s) at {name}")
        return arrivals
