"""Station domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from mobilitybox.domain.errors import MalformedResponseError

if TYPE_CHECKING:
    from mobilitybox.domain.cancellation import CancellableCall
    from mobilitybox.domain.models.departure import Departure
    from mobilitybox.domain.ports.departure_gateway import DepartureGateway


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


@dataclass(frozen=True)
class Position:
    """Geographic coordinate of a station."""

    latitude: float
    longitude: float

    @classmethod
    def from_api(cls, data: Any) -> "Position | None":
        """Build a Position only if both coordinates are numbers."""
        if not isinstance(data, dict):
            return None
        latitude = data.get("latitude")
        longitude = data.get("longitude")
        if not (_is_number(latitude) and _is_number(longitude)):
            return None
        return cls(latitude=latitude, longitude=longitude)


@dataclass(frozen=True)
class Station:
    """Represents a public transport station.

    ``client`` is the gateway the station was built by; it is used for
    follow-up requests and takes no part in equality.
    """

    id: str
    name: str | None = None
    position: Position | None = None
    client: "DepartureGateway | None" = field(default=None, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any], client: "DepartureGateway | None" = None) -> "Station":
        """Build a Station from an API payload.

        Args:
            data: Station object with ``id``, ``name`` and optional ``position``.
            client: Gateway used for follow-up requests.

        Returns:
            Station domain object.

        Raises:
            MalformedResponseError: If the payload is not an object.
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected station object, got {type(data).__name__}")
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            position=Position.from_api(data.get("position")),
            client=client,
        )

    def get_next_departures(
        self,
        time: datetime | int | float | None = None,
        max_departures: int | None = None,
    ) -> "CancellableCall[list[Departure]]":
        """Fetch departures at this station at or after ``time``.

        Args:
            time: Earliest departure time, as datetime or epoch milliseconds. Defaults to now.
            max_departures: Upper bound on the number of departures requested from the API.

        Returns:
            Cancellable call resolving to a list of departures.
        """
        if self.client is None:
            raise RuntimeError(f"Station {self.id} is not bound to a Mobilitybox client")
        return self.client.find_departures(self.id, time=time, max_departures=max_departures)
