"""12-factor configuration adapter using environment variables."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mobilitybox.adapters.mobilitybox_api.constants import DEFAULT_BASE_URL


class MobilityboxSettings(BaseSettings):
    """Client configuration following 12-factor principles.

    Values are read from ``MOBILITYBOX_``-prefixed environment variables or a
    ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MOBILITYBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    access_token: str | None = Field(
        default=None, description="Access token sent as bearer token and tile api_key"
    )
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Mobilitybox API base URL")
    timezone: str | None = Field(
        default=None,
        description="IANA timezone for displaying times (e.g., 'Europe/Berlin'); local time if unset",
    )

    @field_validator("access_token")
    @classmethod
    def validate_access_token(cls, v: str | None) -> str | None:
        """Treat an empty token as no token."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL is an http(s) URL and strip the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Validate timezone is a known IANA timezone name."""
        if v is None:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be an IANA timezone name, got {v!r}") from e
        return v

    def zone(self) -> ZoneInfo | None:
        """Configured display timezone, or None for local time."""
        return ZoneInfo(self.timezone) if self.timezone else None
