"""Departure gateway port."""

from datetime import datetime
from typing import Protocol

from mobilitybox.domain.cancellation import CancellableCall
from mobilitybox.domain.models.departure import Departure


class DepartureGateway(Protocol):
    """Port through which stations request their departures."""

    def find_departures(
        self,
        station_id: str,
        time: datetime | int | float | None = None,
        max_departures: int | None = None,
    ) -> CancellableCall[list[Departure]]:
        """Find departures at a station at or after a given time."""
        ...
