"""Domain layer - models, errors and call handles."""

from mobilitybox.domain.cancellation import CancellableCall, CancellationToken
from mobilitybox.domain.errors import (
    EmptyTripError,
    HttpStatusError,
    MalformedResponseError,
    MobilityboxError,
    TransportError,
)
from mobilitybox.domain.models import (
    Departure,
    EventTime,
    Station,
    Stop,
    Trip,
)
from mobilitybox.domain.ports import DepartureGateway

__all__ = [
    "CancellableCall",
    "CancellationToken",
    "Departure",
    "DepartureGateway",
    "EmptyTripError",
    "EventTime",
    "HttpStatusError",
    "MalformedResponseError",
    "MobilityboxError",
    "Station",
    "Stop",
    "Trip",
    "TransportError",
]
