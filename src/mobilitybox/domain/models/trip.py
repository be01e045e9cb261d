"""Trip domain model."""

import warnings
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import TYPE_CHECKING, Any

from mobilitybox.domain.errors import EmptyTripError, MalformedResponseError
from mobilitybox.domain.models.station import Station
from mobilitybox.domain.models.stop import Stop

if TYPE_CHECKING:
    from mobilitybox.domain.ports.departure_gateway import DepartureGateway


@dataclass(frozen=True)
class Trip:
    """A single scheduled vehicle run, modeled as its ordered stops."""

    id: str | None = None
    name: str | None = None
    stops: list[Stop] = field(default_factory=list)
    geojson: Any = None

    @classmethod
    def from_api(cls, data: dict[str, Any], client: "DepartureGateway | None" = None) -> "Trip":
        """Build a Trip from an API payload.

        Args:
            data: Trip object with ``id``, ``name``, ``stops`` and optional ``geojson``.
            client: Gateway the stop stations are bound to.

        Returns:
            Trip domain object; ``stops`` is empty if the payload has none.
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected trip object, got {type(data).__name__}")
        stops_data = data.get("stops") or []
        if not isinstance(stops_data, list):
            raise MalformedResponseError(f"Expected list of stops, got {type(stops_data).__name__}")
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            stops=[Stop.from_api(stop_data, client) for stop_data in stops_data],
            geojson=data.get("geojson"),
        )

    def date_formatted(self, tz: tzinfo | None = None) -> str | None:
        """Date range of the trip as ``D.M.YYYY`` or ``D.M.YYYY - D.M.YYYY``.

        Uses the scheduled departure of the first stop and the scheduled
        arrival of the last stop. Returns None for a trip without stops.
        """
        if not self.stops:
            return None
        start = self.stops[0].departure.scheduled_at_date_formatted(tz)
        end = self.stops[-1].arrival.scheduled_at_date_formatted(tz)
        if start == end or end is None:
            return start
        if start is None:
            return end
        return f"{start} - {end}"

    def origins_from(self) -> Station | None:
        """Station of the first stop.

        Raises:
            EmptyTripError: If the trip has no stops.
        """
        if not self.stops:
            raise EmptyTripError(f"Trip {self.id} has no stops")
        return self.stops[0].station

    def destination(self) -> Station | None:
        """Station of the last stop.

        Raises:
            EmptyTripError: If the trip has no stops.
        """
        if not self.stops:
            raise EmptyTripError(f"Trip {self.id} has no stops")
        return self.stops[-1].station

    def from_station(self) -> Station | None:
        """Deprecated alias of ``origins_from``."""
        warnings.warn(
            "Trip.from_station() is deprecated, use Trip.origins_from()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.origins_from()

    def to_station(self) -> Station | None:
        """Deprecated alias of ``destination``."""
        warnings.warn(
            "Trip.to_station() is deprecated, use Trip.destination()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.destination()
