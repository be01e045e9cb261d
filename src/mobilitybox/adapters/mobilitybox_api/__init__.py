"""Mobilitybox API adapter."""

from mobilitybox.adapters.mobilitybox_api.client import Mobilitybox
from mobilitybox.adapters.mobilitybox_api.http_client import MobilityboxHttpClient

__all__ = ["Mobilitybox", "MobilityboxHttpClient"]
