"""Python client for the Mobilitybox transit API.

Usage::

    from mobilitybox import Mobilitybox

    async with Mobilitybox("your-access-token") as mobilitybox:
        stations = await mobilitybox.find_stations_by_name("Hamburg-Dammtor")
"""

from mobilitybox.adapters import Mobilitybox, MobilityboxSettings
from mobilitybox.domain import (
    CancellableCall,
    Departure,
    EmptyTripError,
    EventTime,
    HttpStatusError,
    MalformedResponseError,
    MobilityboxError,
    Station,
    Stop,
    TransportError,
    Trip,
)
from mobilitybox.domain.models import DepartureType, Position

__all__ = [
    "CancellableCall",
    "Departure",
    "DepartureType",
    "EmptyTripError",
    "EventTime",
    "HttpStatusError",
    "MalformedResponseError",
    "Mobilitybox",
    "MobilityboxError",
    "MobilityboxSettings",
    "Position",
    "Station",
    "Stop",
    "TransportError",
    "Trip",
]
