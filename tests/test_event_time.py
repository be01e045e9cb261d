"""Tests for the EventTime model."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from mobilitybox import EventTime, MalformedResponseError


def test_when_input_missing_then_both_fields_are_none() -> None:
    """Given no payload, when building an EventTime, then both fields are None."""
    event_time = EventTime.from_api(None)

    assert event_time.scheduled_at is None
    assert event_time.predicted_at is None


def test_when_field_missing_then_only_that_field_is_none() -> None:
    """Given a payload with only scheduled_at, when building, then predicted_at is None."""
    event_time = EventTime.from_api({"scheduled_at": 1609460622000})

    assert event_time.scheduled_at == datetime(2021, 1, 1, 0, 23, 42, tzinfo=UTC)
    assert event_time.predicted_at is None


def test_when_field_is_null_then_it_is_none() -> None:
    """Given explicit nulls, when building, then fields are None like missing ones."""
    event_time = EventTime.from_api({"scheduled_at": None, "predicted_at": 1609460622000})

    assert event_time.scheduled_at is None
    assert event_time.predicted_at == datetime(2021, 1, 1, 0, 23, 42, tzinfo=UTC)


def test_epoch_milliseconds_round_trip_to_the_same_instant() -> None:
    """Given epoch milliseconds, when building, then the instant is exact to the millisecond."""
    event_time = EventTime.from_api({"scheduled_at": 1609460622123})

    assert event_time.scheduled_at_epoch_ms() == 1609460622123


def test_iso_strings_are_parsed_as_utc() -> None:
    """Given ISO-8601 strings, when building, then aware UTC datetimes are produced."""
    event_time = EventTime.from_api(
        {"scheduled_at": "2021-01-01T00:23:42Z", "predicted_at": "2021-01-01T01:24:42+01:00"}
    )

    assert event_time.scheduled_at == datetime(2021, 1, 1, 0, 23, 42, tzinfo=UTC)
    assert event_time.predicted_at == datetime(2021, 1, 1, 0, 24, 42, tzinfo=UTC)


def test_invalid_timestamp_raises_malformed_response_error() -> None:
    """Given an unparsable timestamp, when building, then MalformedResponseError is raised."""
    with pytest.raises(MalformedResponseError):
        EventTime.from_api({"scheduled_at": "yesterday"})


@pytest.mark.parametrize("value", [1e20, float("nan"), float("inf"), -(10**18)])
def test_out_of_range_timestamp_raises_malformed_response_error(value: float) -> None:
    """Given a non-finite or out-of-range number, when building, then MalformedResponseError is raised."""
    with pytest.raises(MalformedResponseError):
        EventTime.from_api({"predicted_at": value})


def test_iso_string_outside_utc_range_raises_malformed_response_error() -> None:
    """Given an ISO string that cannot be shifted to UTC, when building, then MalformedResponseError."""
    with pytest.raises(MalformedResponseError):
        EventTime.from_api({"scheduled_at": "0001-01-01T00:00:00+01:00"})


def test_scheduled_at_formatted_renders_hours_without_padding() -> None:
    """Given 01:23:42 UTC, when formatting in UTC, then '1:23' is returned."""
    event_time = EventTime.from_api({"scheduled_at": 1609464222000})

    assert event_time.scheduled_at_formatted(ZoneInfo("UTC")) == "1:23"


def test_formatting_uses_the_given_time_zone() -> None:
    """Given 00:23:42 UTC, when formatting in Berlin time (UTC+1), then '1:23' is returned."""
    event_time = EventTime.from_api({"scheduled_at": 1609460622000})

    assert event_time.scheduled_at_formatted(ZoneInfo("Europe/Berlin")) == "1:23"
    assert event_time.scheduled_at_formatted(ZoneInfo("UTC")) == "0:23"


def test_formatting_absent_time_returns_none() -> None:
    """Given no times, when formatting, then every accessor returns None."""
    event_time = EventTime.from_api(None)

    assert event_time.scheduled_at_formatted() is None
    assert event_time.predicted_at_formatted() is None
    assert event_time.scheduled_at_date_formatted() is None
    assert event_time.predicted_at_date_formatted() is None
    assert event_time.scheduled_at_epoch_ms() is None


def test_date_formatted_renders_day_month_year() -> None:
    """Given a timestamp on 1 January 2021, when formatting the date, then '1.1.2021'."""
    event_time = EventTime.from_api({"scheduled_at": 1609460622000, "predicted_at": 1609460622000})

    assert event_time.scheduled_at_date_formatted(ZoneInfo("UTC")) == "1.1.2021"
    assert event_time.predicted_at_date_formatted(ZoneInfo("UTC")) == "1.1.2021"


def test_formatting_without_zone_uses_local_time() -> None:
    """Given no zone, when formatting, then the local time zone is used."""
    event_time = EventTime.from_api({"scheduled_at": 1609460622000})
    local = datetime(2021, 1, 1, 0, 23, 42, tzinfo=UTC).astimezone()

    assert event_time.scheduled_at_formatted() == f"{local.hour}:{local.minute:02d}"


def test_delay_is_difference_of_predicted_and_scheduled() -> None:
    """Given both times, when reading delay, then predicted minus scheduled is returned."""
    event_time = EventTime.from_api({"scheduled_at": 1609460622000, "predicted_at": 1609460742000})

    assert event_time.delay == timedelta(minutes=2)
    assert EventTime.from_api({"scheduled_at": 1609460622000}).delay is None
