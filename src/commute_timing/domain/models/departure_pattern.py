"""Learned departure pattern domain model."""

from dataclasses import dataclass


class ConfidenceLevel:
    """Confidence of a learned pattern, by number of samples behind it."""

    COLD_START = 0.3  # 0-4 samples
    LEARNING = 0.5  # 5-9 samples
    CONFIDENT = 0.7  # 10-19 samples
    HIGH_CONFIDENCE = 0.85  # 20+ samples

    @classmethod
    def for_sample_count(cls, sample_count: int) -> float:
        """Monotonic confidence tier for a sample count."""
        if sample_count < 5:
            return cls.COLD_START
        if sample_count < 10:
            return cls.LEARNING
        if sample_count < 20:
            return cls.CONFIDENT
        return cls.HIGH_CONFIDENCE


@dataclass(frozen=True)
class DeparturePattern:
    """A user's typical departure time for one commute type and day kind."""

    average_time: str  # "HH:MM"
    std_dev_minutes: int
    confidence: float
    sample_count: int
    earliest_time: str  # average - 2 stddev, "HH:MM"
    latest_time: str  # average + 2 stddev, "HH:MM"

    @property
    def is_cold_start(self) -> bool:
        return self.confidence == ConfidenceLevel.COLD_START
