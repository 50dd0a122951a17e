"""Notification and live signal adapters."""

from commute_timing.adapters.notifications.departure_notifiers import (
    LoggingDepartureNotifier,
    NullDepartureNotifier,
)
from commute_timing.adapters.notifications.realtime_adjustment import (
    NullRealtimeAdjustmentProvider,
)

__all__ = [
    "LoggingDepartureNotifier",
    "NullDepartureNotifier",
    "NullRealtimeAdjustmentProvider",
]
