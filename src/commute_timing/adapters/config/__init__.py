"""Configuration adapters."""

from commute_timing.adapters.config.app_config import AppConfig
from commute_timing.adapters.config.reference_data_loader import (
    ReferenceData,
    ReferenceDataLoader,
)

__all__ = ["AppConfig", "ReferenceData", "ReferenceDataLoader"]
