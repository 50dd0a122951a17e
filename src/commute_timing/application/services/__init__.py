"""Application services."""

from commute_timing.application.services.alternative_route_finder import AlternativeRouteFinder
from commute_timing.application.services.checkpoint_delay_monitor import CheckpointDelayMonitor
from commute_timing.application.services.delay_status_service import DelayStatusService
from commute_timing.application.services.departure_time_calculator import (
    DepartureTimeCalculator,
)
from commute_timing.application.services.historical_pattern_estimator import (
    HistoricalPatternEstimator,
)

__all__ = [
    "AlternativeRouteFinder",
    "CheckpointDelayMonitor",
    "DelayStatusService",
    "DepartureTimeCalculator",
    "HistoricalPatternEstimator",
]
