"""Seoul real-time subway arrival API adapters."""

from commute_timing.adapters.seoul_subway_api.http_client import SeoulSubwayHttpClient
from commute_timing.adapters.seoul_subway_api.subway_arrival_repository import (
    SeoulSubwayArrivalRepository,
)

__all__ = ["SeoulSubwayArrivalRepository", "SeoulSubwayHttpClient"]
