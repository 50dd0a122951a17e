"""Delay classification thresholds."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DelayPolicy:
    """Minute thresholds used to classify delays and trigger reactions.

    Defaults are the values commuters are used to; deployments may tune them.
    """

    segment_delayed_minutes: int = 2  # Segment delay >= this is "delayed"
    segment_severe_minutes: int = 10  # Segment delay >= this is "severe_delay"
    route_minor_minutes: int = 2
    route_delayed_minutes: int = 5
    route_severe_minutes: int = 15
    alternative_threshold_minutes: int = 5  # Segment delay that triggers alternative search
    default_alternative_wait_minutes: int = 3  # Used when no live wait is known
    travel_change_notify_minutes: int = 2  # Travel-time change that triggers an update push

    def __post_init__(self) -> None:
        if not 0 < self.segment_delayed_minutes < self.segment_severe_minutes:
            raise ValueError("Segment thresholds must satisfy 0 < delayed < severe")
        if not 0 < self.route_minor_minutes < self.route_delayed_minutes < self.route_severe_minutes:
            raise ValueError("Route thresholds must satisfy 0 < minor < delayed < severe")
