"""Adapters layer - external system integrations."""

from commute_timing.adapters.config import AppConfig, ReferenceDataLoader
from commute_timing.adapters.seoul_subway_api import (
    SeoulSubwayArrivalRepository,
    SeoulSubwayHttpClient,
)

__all__ = [
    "AppConfig",
    "ReferenceDataLoader",
    "SeoulSubwayArrivalRepository",
    "SeoulSubwayHttpClient",
]
