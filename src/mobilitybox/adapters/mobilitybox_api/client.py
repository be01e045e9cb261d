"""Mobilitybox API gateway.

``Mobilitybox`` is the only component that talks to the network. It maps
responses into domain entities, and the stations it builds keep a reference
to it for follow-up requests such as departures.

Example::

    async with Mobilitybox("access-token") as mobilitybox:
        stations = await mobilitybox.find_stations_by_name("Hamburg-Dammtor")
        departures = await stations[0].get_next_departures()
"""

import logging
import warnings
from collections.abc import Callable
from datetime import UTC, datetime
from types import TracebackType
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

from mobilitybox.adapters.mobilitybox_api.constants import (
    ATTRIBUTIONS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_ID_TYPE,
    DEPARTURES_PATH,
    STATION_MAP_TILES_PATH,
    STATIONS_SEARCH_BY_ID_PATH,
    STATIONS_SEARCH_BY_NAME_PATH,
    STATIONS_SEARCH_BY_POSITION_PATH,
    TRANSIT_MAP_TILES_PATH,
    TRIP_PATH_TEMPLATE,
    TRIPS_SEARCH_BY_CHARACTERISTICS_PATH,
)
from mobilitybox.adapters.mobilitybox_api.http_client import MobilityboxHttpClient
from mobilitybox.domain.cancellation import CancellableCall, CancellationToken
from mobilitybox.domain.errors import MalformedResponseError
from mobilitybox.domain.models.departure import Departure
from mobilitybox.domain.models.event_time import EventTime, to_epoch_ms
from mobilitybox.domain.models.map_sources import Attributions, VectorTileSource
from mobilitybox.domain.models.station import Station
from mobilitybox.domain.models.trip import Trip

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from mobilitybox.adapters.config.app_config import MobilityboxSettings

T = TypeVar("T")

StationRef = str | Station
TimeRef = int | float | EventTime


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _station_id(station: StationRef, argument: str) -> str:
    """Extract a station id from a raw id or a Station."""
    if isinstance(station, Station):
        return station.id
    if isinstance(station, str):
        return station
    raise TypeError(f"{argument} must be a station id or a Station, got {type(station).__name__}")


def _epoch_ms(time: TimeRef, argument: str) -> int:
    """Extract epoch milliseconds from a raw number or an EventTime's scheduled time."""
    if isinstance(time, EventTime):
        epoch_ms = time.scheduled_at_epoch_ms()
        if epoch_ms is None:
            raise ValueError(f"{argument} has no scheduled time")
        return epoch_ms
    if _is_number(time):
        return int(time)
    raise TypeError(
        f"{argument} must be epoch milliseconds or an EventTime, got {type(time).__name__}"
    )


def _departure_time_ms(time: datetime | int | float | None) -> int:
    if time is None:
        return to_epoch_ms(datetime.now(UTC))
    if isinstance(time, datetime):
        return to_epoch_ms(time)
    if _is_number(time):
        return int(time)
    raise TypeError(f"time must be a datetime or epoch milliseconds, got {type(time).__name__}")


def _expect_list(data: Any, what: str) -> list[Any]:
    if not isinstance(data, list):
        raise MalformedResponseError(f"Expected list of {what}, got {type(data).__name__}")
    return data


class Mobilitybox:
    """Client for the Mobilitybox transit API.

    Holds the access token and the session token of one consumer. Every
    network operation returns a ``CancellableCall`` and must be invoked
    inside a running event loop.
    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        session: "ClientSession | None" = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: Optional API access token.
            base_url: API base URL.
            session: Optional aiohttp session to issue requests with.
        """
        self._http_client = MobilityboxHttpClient(
            access_token=access_token, base_url=base_url, session=session
        )

    @classmethod
    def from_settings(
        cls, settings: "MobilityboxSettings | None" = None, session: "ClientSession | None" = None
    ) -> "Mobilitybox":
        """Create a client from settings (environment variables by default)."""
        if settings is None:
            from mobilitybox.adapters.config.app_config import MobilityboxSettings

            settings = MobilityboxSettings()
        return cls(access_token=settings.access_token, base_url=settings.base_url, session=session)

    @property
    def access_token(self) -> str | None:
        return self._http_client.access_token

    @property
    def base_url(self) -> str:
        return self._http_client.base_url

    @property
    def session_token(self) -> str | None:
        """Session token received with the most recent response that carried one."""
        return self._http_client.session_token

    @session_token.setter
    def session_token(self, value: str | None) -> None:
        self._http_client.session_token = value

    async def close(self) -> None:
        """Release the HTTP session if the client created it."""
        await self._http_client.close()

    async def __aenter__(self) -> "Mobilitybox":
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _fetch(
        self, path: str, params: dict[str, Any] | None, build: Callable[[Any], T]
    ) -> CancellableCall[T]:
        """Start a GET request whose decoded body is turned into a result by ``build``."""

        async def operation(token: CancellationToken) -> T:
            data = await self._http_client.get_json(path, params, token)
            token.raise_if_cancelled()
            return build(data)

        logger.debug(f"Requesting {path} with {params}")
        return CancellableCall(operation)

    def _build_stations(self, data: Any) -> list[Station]:
        return [self.build_station(station_data) for station_data in _expect_list(data, "stations")]

    def build_station(self, raw_data: dict[str, Any]) -> Station:
        """Build a Station bound to this client from already available data.

        Args:
            raw_data: Station object with ``id``, ``name`` and optional ``position``.

        Returns:
            Station domain object.
        """
        return Station.from_api(raw_data, self)

    def find_stations_by_name(
        self,
        query: str,
        longitude: float | None = None,
        latitude: float | None = None,
    ) -> CancellableCall[list[Station]]:
        """Search stations by name, optionally biased towards a location.

        Args:
            query: Search text.
            longitude: Longitude of the location bias.
            latitude: Latitude of the location bias.

        Returns:
            Cancellable call resolving to the matching stations. The location
            bias is only sent if both coordinates are numbers.
        """
        params: dict[str, Any] = {"query": query}
        if _is_number(longitude) and _is_number(latitude):
            params["longitude"] = longitude
            params["latitude"] = latitude
        return self._fetch(STATIONS_SEARCH_BY_NAME_PATH, params, self._build_stations)

    def find_stations_by_position(
        self, latitude: float, longitude: float
    ) -> CancellableCall[list[Station]]:
        """Find stations near a coordinate."""
        params = {"latitude": latitude, "longitude": longitude}
        return self._fetch(STATIONS_SEARCH_BY_POSITION_PATH, params, self._build_stations)

    def find_stations_by_id(
        self, id: str, id_type: str = DEFAULT_ID_TYPE
    ) -> CancellableCall[Station]:
        """Look up a station by identifier.

        Args:
            id: Station identifier.
            id_type: Identifier namespace, e.g. an alternate authority scheme.

        Returns:
            Cancellable call resolving to the station.
        """

        def build(data: Any) -> Station:
            if isinstance(data, list):
                if not data:
                    raise MalformedResponseError(f"No station found for {id_type} id {id}")
                data = data[0]
            return self.build_station(data)

        params = {"query": id, "id_type": id_type}
        return self._fetch(STATIONS_SEARCH_BY_ID_PATH, params, build)

    def get_attributions(self) -> CancellableCall[Attributions]:
        """Fetch the data source attributions (``html``, ``text``, ``url``)."""

        def build(data: Any) -> Attributions:
            if not isinstance(data, dict):
                raise MalformedResponseError(
                    f"Expected attributions object, got {type(data).__name__}"
                )
            return data  # type: ignore[return-value]

        return self._fetch(ATTRIBUTIONS_PATH, None, build)

    def get_trip(self, id: str) -> CancellableCall[Trip]:
        """Fetch a trip with its stops."""
        path = TRIP_PATH_TEMPLATE.format(trip_id=quote(str(id), safe=""))
        return self._fetch(path, None, lambda data: Trip.from_api(data, self))

    def find_trip_by_characteristics(
        self,
        origin_station: StationRef,
        destination_station: StationRef,
        origin_departure_time: TimeRef,
        destination_arrival_time: TimeRef,
        line_name: str | None = None,
    ) -> CancellableCall[Trip]:
        """Find a trip by where and when it starts and ends.

        Args:
            origin_station: Station id or Station the trip departs from.
            destination_station: Station id or Station the trip arrives at.
            origin_departure_time: Departure at the origin, as epoch
                milliseconds or an EventTime (its scheduled time is used).
            destination_arrival_time: Arrival at the destination, same forms.
            line_name: Optional line name; omitted from the request if None.

        Returns:
            Cancellable call resolving to the trip.

        Raises:
            TypeError: If an argument has an unsupported type.
            ValueError: If an EventTime argument has no scheduled time.
        """
        params = {
            "origins_from_station_id": _station_id(origin_station, "origin_station"),
            "origins_from_departure_time": _epoch_ms(
                origin_departure_time, "origin_departure_time"
            ),
            "destination_station_id": _station_id(destination_station, "destination_station"),
            "destination_arrival_time": _epoch_ms(
                destination_arrival_time, "destination_arrival_time"
            ),
            "line_name": line_name,
        }
        return self._fetch(
            TRIPS_SEARCH_BY_CHARACTERISTICS_PATH, params, lambda data: Trip.from_api(data, self)
        )

    def find_departures(
        self,
        station_id: str,
        time: datetime | int | float | None = None,
        max_departures: int | None = None,
    ) -> CancellableCall[list[Departure]]:
        """Find departures at a station at or after ``time``.

        Args:
            station_id: Station identifier.
            time: Earliest departure, as datetime or epoch milliseconds. Defaults to now.
            max_departures: Forwarded to the API; the result is not truncated locally.

        Returns:
            Cancellable call resolving to the departures.
        """
        params = {
            "station_id": station_id,
            "time": _departure_time_ms(time),
            "max_departures": max_departures,
        }
        return self._fetch(
            DEPARTURES_PATH,
            params,
            lambda data: [Departure.from_api(d) for d in _expect_list(data, "departures")],
        )

    def _vector_tile_source(self, tiles_path: str) -> VectorTileSource:
        url = f"{self.base_url}{tiles_path}"
        if self.access_token:
            url = f"{url}?api_key={quote(self.access_token, safe='')}"
        return {"type": "vector", "tiles": [url]}

    def station_map_vector_tile_source(self) -> VectorTileSource:
        """Vector tile source of the station map."""
        return self._vector_tile_source(STATION_MAP_TILES_PATH)

    def transit_map_vector_tile_source(self) -> VectorTileSource:
        """Vector tile source of the transit map."""
        return self._vector_tile_source(TRANSIT_MAP_TILES_PATH)

    def vector_tile_source(self) -> VectorTileSource:
        """Deprecated alias of ``station_map_vector_tile_source``."""
        warnings.warn(
            "vector_tile_source() is deprecated, use station_map_vector_tile_source()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.station_map_vector_tile_source()

    def relevant_routes_vector_tile_source(self) -> VectorTileSource:
        """Deprecated alias of ``transit_map_vector_tile_source``."""
        warnings.warn(
            "relevant_routes_vector_tile_source() is deprecated, "
            "use transit_map_vector_tile_source()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.transit_map_vector_tile_source()
