"""Tests for configuration adapter."""

from zoneinfo import ZoneInfo

import pytest

from mobilitybox.adapters.config import MobilityboxSettings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove Mobilitybox variables so defaults are observable."""
    for name in ("MOBILITYBOX_ACCESS_TOKEN", "MOBILITYBOX_BASE_URL", "MOBILITYBOX_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    settings = MobilityboxSettings(_env_file=None)

    assert settings.access_token is None
    assert settings.base_url == "https://api.themobilitybox.com/v1"
    assert settings.timezone is None
    assert settings.zone() is None


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("MOBILITYBOX_ACCESS_TOKEN", "hallo_welt123")
    monkeypatch.setenv("MOBILITYBOX_BASE_URL", "https://foobar.lol/v42/")
    monkeypatch.setenv("MOBILITYBOX_TIMEZONE", "Europe/Berlin")

    settings = MobilityboxSettings(_env_file=None)

    assert settings.access_token == "hallo_welt123"
    assert settings.base_url == "https://foobar.lol/v42"
    assert settings.zone() == ZoneInfo("Europe/Berlin")


def test_config_treats_empty_token_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an empty token, when loading config, then no token is configured."""
    monkeypatch.setenv("MOBILITYBOX_ACCESS_TOKEN", "  ")

    settings = MobilityboxSettings(_env_file=None)

    assert settings.access_token is None


def test_config_validates_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a base URL without scheme, when loading config, then validation error is raised."""
    monkeypatch.setenv("MOBILITYBOX_BASE_URL", "api.themobilitybox.com/v1")

    with pytest.raises(ValueError, match="base_url must start with"):
        MobilityboxSettings(_env_file=None)


def test_config_validates_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown timezone, when loading config, then validation error is raised."""
    monkeypatch.setenv("MOBILITYBOX_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValueError, match="timezone must be an IANA timezone name"):
        MobilityboxSettings(_env_file=None)
