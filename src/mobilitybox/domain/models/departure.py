"""Departure domain model."""

from dataclasses import dataclass, field
from typing import Any

from mobilitybox.domain.errors import MalformedResponseError
from mobilitybox.domain.models.event_time import EventTime


def _object(data: Any, what: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected {what} object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class DepartureType:
    """Kind of vehicle and product of a departing trip."""

    kind: str | None = None
    product: str | None = None


@dataclass(frozen=True)
class Departure:
    """Represents a single upcoming departure from a station."""

    id: str | None
    departure_time: EventTime
    platform: str | None = None
    headsign: str | None = None
    line_name: str | None = None
    type: DepartureType = field(default_factory=DepartureType)
    provider: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Departure":
        """Build a Departure from an API payload.

        Args:
            data: Object with nested ``trip`` and ``departure`` objects.

        Returns:
            Departure with absent fields set to None.
        """
        data = _object(data, "departure")
        trip = _object(data.get("trip"), "trip")
        departure = _object(data.get("departure"), "departure time")
        trip_type = _object(trip.get("type"), "trip type")

        return cls(
            id=trip.get("id"),
            departure_time=EventTime.from_api(data.get("departure")),
            platform=departure.get("platform"),
            headsign=trip.get("headsign"),
            line_name=trip.get("line_name"),
            type=DepartureType(kind=trip_type.get("kind"), product=trip_type.get("product")),
            provider=trip.get("provider"),
        )
