"""Configuration adapters."""

from mobilitybox.adapters.config.app_config import MobilityboxSettings

__all__ = ["MobilityboxSettings"]
