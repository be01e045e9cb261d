"""Domain models for the Mobilitybox API."""

from mobilitybox.domain.models.departure import Departure, DepartureType
from mobilitybox.domain.models.event_time import EventTime
from mobilitybox.domain.models.map_sources import Attributions, VectorTileSource
from mobilitybox.domain.models.station import Position, Station
from mobilitybox.domain.models.stop import Stop
from mobilitybox.domain.models.trip import Trip

__all__ = [
    "Attributions",
    "Departure",
    "DepartureType",
    "EventTime",
    "Position",
    "Station",
    "Stop",
    "Trip",
    "VectorTileSource",
]
