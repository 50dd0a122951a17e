"""12-factor configuration adapter using environment variables and a TOML reference file."""

from pathlib import Path
from typing import Any

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]  # Fallback for older Python

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from commute_timing.adapters.seoul_subway_api.constants import (
    DEFAULT_MIN_INTERVAL_SECONDS,
    SEOUL_SUBWAY_BASE_URL,
)
from commute_timing.domain.models.civil_time import parse_time_of_day
from commute_timing.domain.models.commute_record import CommuteType
from commute_timing.domain.models.delay_policy import DelayPolicy


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Seoul real-time subway API
    seoul_api_key: str = Field(
        default="sample",
        description="Seoul open data API key ('sample' only returns a handful of results)",
    )
    seoul_api_base_url: str = Field(
        default=SEOUL_SUBWAY_BASE_URL, description="Base URL of the Seoul subway API"
    )
    seoul_api_timeout: float = Field(
        default=5.0, description="Timeout for a single Seoul API request in seconds"
    )
    seoul_api_min_interval_seconds: float = Field(
        default=DEFAULT_MIN_INTERVAL_SECONDS,
        description="Minimum time between two Seoul API requests in seconds",
    )

    # Calculations
    calculation_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound for gathering the inputs of one calculation or delay check",
    )

    # Reference data (routes, alternative mappings, departure settings)
    reference_data_file: str | None = Field(
        default=None,
        description="Path to the TOML file with routes, alternatives and departure settings",
    )

    # Delay thresholds in minutes
    segment_delayed_minutes: int = Field(
        default=2, description="Checkpoint delay from which a segment counts as delayed"
    )
    segment_severe_minutes: int = Field(
        default=10, description="Checkpoint delay from which a segment counts as severely delayed"
    )
    route_minor_delay_minutes: int = Field(
        default=2, description="Largest segment delay from which a route has a minor delay"
    )
    route_delayed_minutes: int = Field(
        default=5, description="Largest segment delay from which a route is delayed"
    )
    route_severe_minutes: int = Field(
        default=15, description="Largest segment delay from which a route is severely delayed"
    )
    alternative_threshold_minutes: int = Field(
        default=5, description="Segment delay from which alternatives are searched"
    )
    default_alternative_wait_minutes: int = Field(
        default=3, description="Assumed wait at an alternative station without live data"
    )
    travel_change_notify_minutes: int = Field(
        default=2, description="Travel time change that publishes a departure update"
    )

    # Cold-start departure times ("HH:MM")
    default_morning_weekday_departure: str = Field(
        default="08:00", description="Assumed weekday morning departure without history"
    )
    default_morning_weekend_departure: str = Field(
        default="10:00", description="Assumed weekend morning departure without history"
    )
    default_evening_departure: str = Field(
        default="18:30", description="Assumed evening departure without history"
    )

    @field_validator(
        "default_morning_weekday_departure",
        "default_morning_weekend_departure",
        "default_evening_departure",
    )
    @classmethod
    def validate_time_of_day(cls, v: str) -> str:
        """Validate cold-start defaults are HH:MM."""
        parse_time_of_day(v)
        return v

    @field_validator("seoul_api_timeout", "calculation_timeout_seconds")
    @classmethod
    def validate_positive_timeout(cls, v: float) -> float:
        """Validate timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("seoul_api_min_interval_seconds")
    @classmethod
    def validate_min_interval(cls, v: float) -> float:
        if v < 0:
            raise ValueError("seoul_api_min_interval_seconds must not be negative")
        return v

    @field_validator("alternative_threshold_minutes", "default_alternative_wait_minutes")
    @classmethod
    def validate_non_negative_minutes(cls, v: int) -> int:
        if v < 0:
            raise ValueError("minutes must not be negative")
        return v

    @field_validator("travel_change_notify_minutes")
    @classmethod
    def validate_notify_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError("travel_change_notify_minutes must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_delay_thresholds(self) -> "AppConfig":
        """Reject delay cut-offs that are out of order."""
        self.delay_policy()
        return self

    def delay_policy(self) -> DelayPolicy:
        """Delay thresholds as a domain policy."""
        return DelayPolicy(
            segment_delayed_minutes=self.segment_delayed_minutes,
            segment_severe_minutes=self.segment_severe_minutes,
            route_minor_minutes=self.route_minor_delay_minutes,
            route_delayed_minutes=self.route_delayed_minutes,
            route_severe_minutes=self.route_severe_minutes,
            alternative_threshold_minutes=self.alternative_threshold_minutes,
            default_alternative_wait_minutes=self.default_alternative_wait_minutes,
            travel_change_notify_minutes=self.travel_change_notify_minutes,
        )

    def cold_start_departure_times(self) -> dict[tuple[CommuteType, bool], str]:
        """Cold-start departure times keyed by (commute type, is weekday)."""
        return {
            (CommuteType.MORNING, True): self.default_morning_weekday_departure,
            (CommuteType.MORNING, False): self.default_morning_weekend_departure,
            (CommuteType.EVENING, True): self.default_evening_departure,
            (CommuteType.EVENING, False): self.default_evening_departure,
        }

    def load_reference_data(self) -> dict[str, Any]:
        """Load and parse the reference data TOML file.

        Missing optional sections come back as empty lists.

        Raises:
            ValueError: If no reference data file is configured.
            FileNotFoundError: If the configured file does not exist.
        """
        if not self.reference_data_file:
            raise ValueError("reference_data_file must be set to load reference data")

        path = Path(self.reference_data_file)
        if not path.exists():
            raise FileNotFoundError(f"Reference data file not found: {path}")

        with open(path, "rb") as f:
            toml_data = tomllib.load(f)

        for section in ("routes", "alternatives", "departure_settings"):
            value = toml_data.setdefault(section, [])
            if not isinstance(value, list):
                raise ValueError(f"TOML reference data '{section}' must be a list")
        return toml_data
