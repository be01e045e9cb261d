"""Stop domain model."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mobilitybox.domain.errors import MalformedResponseError
from mobilitybox.domain.models.event_time import EventTime
from mobilitybox.domain.models.station import Station

if TYPE_CHECKING:
    from mobilitybox.domain.ports.departure_gateway import DepartureGateway


@dataclass(frozen=True)
class Stop:
    """One station visit within a trip."""

    station: Station | None = None
    status: str | None = None
    arrival: EventTime = field(default_factory=EventTime)
    departure: EventTime = field(default_factory=EventTime)

    @classmethod
    def from_api(cls, data: dict[str, Any], client: "DepartureGateway | None" = None) -> "Stop":
        """Build a Stop from an API payload, binding its station to ``client``."""
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected stop object, got {type(data).__name__}")
        station_data = data.get("station")
        return cls(
            station=Station.from_api(station_data, client) if station_data is not None else None,
            status=data.get("status"),
            arrival=EventTime.from_api(data.get("arrival")),
            departure=EventTime.from_api(data.get("departure")),
        )
