"""Tests for configuration adapter."""

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest

from commute_timing.adapters.config import AppConfig
from commute_timing.domain.models import CommuteType, DelayPolicy


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig()

    assert config.seoul_api_key == "sample"
    assert config.seoul_api_timeout == 5.0
    assert config.calculation_timeout_seconds == 10.0
    assert config.reference_data_file is None
    assert config.delay_policy() == DelayPolicy()


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("SEOUL_API_KEY", "secret-key")
    monkeypatch.setenv("ALTERNATIVE_THRESHOLD_MINUTES", "7")
    monkeypatch.setenv("DEFAULT_EVENING_DEPARTURE", "19:15")

    config = AppConfig()

    assert config.seoul_api_key == "secret-key"
    assert config.delay_policy().alternative_threshold_minutes == 7
    assert config.cold_start_departure_times()[(CommuteType.EVENING, False)] == "19:15"


def test_config_maps_thresholds_onto_policy() -> None:
    """Given custom cut-offs, when building the policy, then every field is carried over."""
    config = AppConfig(
        segment_delayed_minutes=3,
        segment_severe_minutes=12,
        route_minor_delay_minutes=3,
        route_delayed_minutes=6,
        route_severe_minutes=20,
        default_alternative_wait_minutes=4,
        travel_change_notify_minutes=5,
    )

    assert config.delay_policy() == DelayPolicy(
        segment_delayed_minutes=3,
        segment_severe_minutes=12,
        route_minor_minutes=3,
        route_delayed_minutes=6,
        route_severe_minutes=20,
        default_alternative_wait_minutes=4,
        travel_change_notify_minutes=5,
    )


def test_config_validates_time_of_day(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a malformed cold-start time, when loading config, then validation error is raised."""
    monkeypatch.setenv("DEFAULT_MORNING_WEEKDAY_DEPARTURE", "8am")

    with pytest.raises(ValueError, match="Invalid time of day"):
        AppConfig()


def test_config_validates_timeouts() -> None:
    """Given a zero timeout, when loading config, then validation error is raised."""
    with pytest.raises(ValueError, match="timeouts must be positive"):
        AppConfig(calculation_timeout_seconds=0)


def test_config_validates_threshold_order() -> None:
    """Given delayed above severe, when loading config, then validation error is raised."""
    with pytest.raises(ValueError, match="Route thresholds"):
        AppConfig(route_delayed_minutes=30)


def test_config_validates_notify_threshold() -> None:
    """Given a zero notify threshold, when loading config, then validation error is raised."""
    with pytest.raises(ValueError, match="at least 1"):
        AppConfig(travel_change_notify_minutes=0)


def test_config_parses_reference_data_from_toml() -> None:
    """Given a TOML file with routes only, when loading, then missing sections are empty."""
    toml_content = """
[[routes]]
id = "morning"
user_id = "user-1"
name = "출근"
"""
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False, encoding="utf-8") as f:
        f.write(toml_content)
        temp_path = f.name

    try:
        config = AppConfig(reference_data_file=temp_path)
        parsed = config.load_reference_data()
        assert parsed["routes"][0]["id"] == "morning"
        assert parsed["routes"][0]["name"] == "출근"
        assert parsed["alternatives"] == []
        assert parsed["departure_settings"] == []
    finally:
        Path(temp_path).unlink()


def test_config_rejects_non_list_section() -> None:
    """Given a section that is a table, when loading, then ValueError is raised."""
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False, encoding="utf-8") as f:
        f.write('[alternatives]\nid = "x"\n')
        temp_path = f.name

    try:
        config = AppConfig(reference_data_file=temp_path)
        with pytest.raises(ValueError, match="'alternatives' must be a list"):
            config.load_reference_data()
    finally:
        Path(temp_path).unlink()


def test_config_raises_error_when_file_not_found() -> None:
    """Given a non-existent file, when loading reference data, then FileNotFoundError is raised."""
    config = AppConfig(reference_data_file="nonexistent.toml")

    with pytest.raises(FileNotFoundError, match="Reference data file not found"):
        config.load_reference_data()


def test_config_raises_error_when_file_not_set() -> None:
    """Given no reference file, when loading reference data, then ValueError is raised."""
    config = AppConfig(reference_data_file=None)

    with pytest.raises(ValueError, match="reference_data_file must be set"):
        config.load_reference_data()
