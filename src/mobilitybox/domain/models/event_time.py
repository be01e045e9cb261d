"""Event time domain model."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Any

from mobilitybox.domain.errors import MalformedResponseError

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an API timestamp into an aware UTC datetime.

    Args:
        value: Epoch milliseconds, an ISO-8601 string, or None.

    Returns:
        The instant in UTC, or None if the value is absent.

    Raises:
        MalformedResponseError: If the value is neither a number nor a valid ISO-8601 string.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedResponseError(f"Invalid timestamp: {value!r}")
    if isinstance(value, int | float):
        try:
            return EPOCH + timedelta(milliseconds=value)
        except (OverflowError, ValueError) as e:
            raise MalformedResponseError(f"Timestamp out of range: {value!r}") from e
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=UTC)
            return parsed.astimezone(UTC)
        except (OverflowError, ValueError) as e:
            raise MalformedResponseError(f"Invalid timestamp: {value!r}") from e
    raise MalformedResponseError(f"Invalid timestamp: {value!r}")


def to_epoch_ms(moment: datetime) -> int:
    """Convert a datetime to integer epoch milliseconds (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def _format_time(moment: datetime | None, tz: tzinfo | None) -> str | None:
    if moment is None:
        return None
    local = moment.astimezone(tz)
    return f"{local.hour}:{local.minute:02d}"


def _format_date(moment: datetime | None, tz: tzinfo | None) -> str | None:
    if moment is None:
        return None
    local = moment.astimezone(tz)
    return f"{local.day}.{local.month}.{local.year}"


@dataclass(frozen=True)
class EventTime:
    """Scheduled and predicted time of an arrival or departure.

    Both instants are independently optional. Formatting accessors take an
    optional time zone; without one they render in the local time zone.
    """

    scheduled_at: datetime | None = None
    predicted_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "EventTime":
        """Build an EventTime from an API payload.

        Args:
            data: Object with optional ``scheduled_at``/``predicted_at`` keys, or None.

        Returns:
            EventTime with absent fields set to None.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected event time object, got {type(data).__name__}")
        return cls(
            scheduled_at=parse_timestamp(data.get("scheduled_at")),
            predicted_at=parse_timestamp(data.get("predicted_at")),
        )

    @property
    def delay(self) -> timedelta | None:
        """Predicted minus scheduled time, if both are known."""
        if self.scheduled_at is None or self.predicted_at is None:
            return None
        return self.predicted_at - self.scheduled_at

    def scheduled_at_epoch_ms(self) -> int | None:
        """Scheduled time as epoch milliseconds."""
        if self.scheduled_at is None:
            return None
        return to_epoch_ms(self.scheduled_at)

    def scheduled_at_formatted(self, tz: tzinfo | None = None) -> str | None:
        """Scheduled time as ``H:MM``."""
        return _format_time(self.scheduled_at, tz)

    def predicted_at_formatted(self, tz: tzinfo | None = None) -> str | None:
        """Predicted time as ``H:MM``."""
        return _format_time(self.predicted_at, tz)

    def scheduled_at_date_formatted(self, tz: tzinfo | None = None) -> str | None:
        """Scheduled date as ``D.M.YYYY``."""
        return _format_date(self.scheduled_at, tz)

    def predicted_at_date_formatted(self, tz: tzinfo | None = None) -> str | None:
        """Predicted date as ``D.M.YYYY``."""
        return _format_date(self.predicted_at, tz)
