"""Shared fixtures: an in-memory stand-in for aiohttp.ClientSession."""

import asyncio
import json
from typing import Any

import pytest

from mobilitybox import Mobilitybox


class FakeResponse:
    """Minimal aiohttp response used as async context manager."""

    def __init__(
        self,
        payload: Any = None,
        status: int = 200,
        headers: dict[str, str] | None = None,
        body: str | bytes | None = None,
        delay: float = 0.0,
        error: BaseException | None = None,
    ) -> None:
        self.payload = payload
        self.status = status
        self.headers = headers or {}
        self.body = body
        self.delay = delay
        self.error = error

    async def __aenter__(self) -> "FakeResponse":
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, *_args: object) -> None:
        return None

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        if isinstance(self.body, bytes):
            return self.body.decode(encoding, errors)
        if self.body is not None:
            return self.body
        return json.dumps(self.payload)

    async def json(self, content_type: str | None = "application/json") -> Any:  # noqa: ARG002
        if self.body is not None:
            return json.loads(self.body)
        return self.payload


class FakeSession:
    """Records GET requests and answers them with queued responses."""

    def __init__(self) -> None:
        self.responses: list[FakeResponse] = []
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def respond(self, payload: Any = None, **kwargs: Any) -> FakeResponse:
        """Queue a response built from ``payload`` and FakeResponse keyword arguments."""
        response = FakeResponse(payload, **kwargs)
        self.responses.append(response)
        return response

    def get(
        self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None
    ) -> FakeResponse:
        self.requests.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {})})
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        return self.responses.pop(0)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session() -> FakeSession:
    """Fake aiohttp session with no queued responses."""
    return FakeSession()


@pytest.fixture
def mobilitybox(fake_session: FakeSession) -> Mobilitybox:
    """Client with an access token, issuing requests through the fake session."""
    return Mobilitybox("abc", base_url="https://api.example.test/v1", session=fake_session)


@pytest.fixture
def station_data() -> dict[str, Any]:
    """Station payload as returned by the API."""
    return {
        "id": "vesputi-station-abc",
        "name": "Hamburg Dammtor",
        "position": {"latitude": 53.560751, "longitude": 9.989566},
    }


@pytest.fixture
def trip_data(station_data: dict[str, Any]) -> dict[str, Any]:
    """Trip payload spanning a single day (1.1.2021, UTC)."""
    return {
        "id": "trip-1",
        "name": "S21",
        "geojson": {"type": "LineString", "coordinates": [[9.98, 53.56], [10.0, 53.55]]},
        "stops": [
            {
                "station": station_data,
                "status": "scheduled",
                "arrival": None,
                "departure": {"scheduled_at": 1609460622000, "predicted_at": 1609460682000},
            },
            {
                "station": {"id": "vesputi-station-def", "name": "Hamburg Hbf"},
                "status": "scheduled",
                "arrival": {"scheduled_at": 1609461000000, "predicted_at": None},
                "departure": None,
            },
        ],
    }
