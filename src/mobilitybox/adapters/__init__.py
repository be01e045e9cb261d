"""Adapters layer - external system integrations."""

from mobilitybox.adapters.config import MobilityboxSettings
from mobilitybox.adapters.mobilitybox_api import Mobilitybox, MobilityboxHttpClient

__all__ = [
    "Mobilitybox",
    "MobilityboxHttpClient",
    "MobilityboxSettings",
]
