"""Errors raised by the Mobilitybox client."""

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """Details about a failed API call, including HTTP status code if applicable."""

    model_config = ConfigDict(frozen=True)

    status_code: int | None = None
    reason: str


class MobilityboxError(Exception):
    """Base class for all Mobilitybox client errors."""


class TransportError(MobilityboxError):
    """The request could not be delivered or the connection failed."""


class HttpStatusError(MobilityboxError):
    """The API answered with a non-2xx status code."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        """Initialize with the response status and a short reason.

        Args:
            status_code: HTTP status code of the response.
            reason: Truncated response body or status text.
        """
        self.status_code = status_code
        self.details = ErrorDetails(status_code=status_code, reason=reason)
        super().__init__(f"Mobilitybox API returned status {status_code}: {reason}")


class MalformedResponseError(MobilityboxError):
    """The response body does not have the expected shape."""


class EmptyTripError(MobilityboxError, IndexError):
    """A trip without stops has no origin or destination."""
