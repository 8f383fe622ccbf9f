"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from commuter_sync.domain.models.station import DEFAULT_STATIONS, MAX_FAVORITE_STATIONS, Station


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Channel configuration
    companion_url: str = Field(
        default="ws://127.0.0.1:8765/channel",
        description="WebSocket URL of the companion process",
    )
    inbox_size: int = Field(default=2048, description="Maximum inbound message size in bytes")
    outbox_size: int = Field(default=2048, description="Maximum outbound message size in bytes")
    outbox_queue_length: int = Field(
        default=8, description="Number of outbound messages that may wait for the transport"
    )
    simulate: bool = Field(
        default=False,
        description="Use an in-process fixture companion instead of the WebSocket channel",
    )

    # Protocol timeouts
    loading_timeout_ms: int = Field(
        default=10_000, description="Timeout for a schedule fetch in milliseconds"
    )
    config_timeout_ms: int = Field(
        default=3_000,
        description="Time to wait for the favorite stations before using the defaults",
    )

    # Background updates
    background_updates_enabled: bool = Field(
        default=False, description="Periodically fetch the schedule in the background"
    )
    background_interval_minutes: int = Field(
        default=10, description="Minutes between background schedule fetches"
    )
    summary_slice_limit: int = Field(
        default=11, description="Maximum number of departures in the summary"
    )

    log_level: str = Field(default="INFO", description="Root log level")

    # Optional TOML file overriding the default stations
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with [[default_stations]] entries",
    )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a config that ignores any .env file."""
        return cls(_env_file=None, **overrides)  # type: ignore[call-arg]

    @field_validator(
        "inbox_size",
        "outbox_size",
        "outbox_queue_length",
        "loading_timeout_ms",
        "config_timeout_ms",
        "background_interval_minutes",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate sizes, lengths and timeouts are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load the TOML configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_default_stations(self) -> tuple[Station, ...]:
        """Return the fallback station list.

        Uses [[default_stations]] entries (``name`` and ``station_id``) from the
        TOML file when one is configured, otherwise the built-in list.
        """
        if not self.config_file:
            return DEFAULT_STATIONS

        entries = self._load_toml_data().get("default_stations", [])
        if not isinstance(entries, list):
            raise ValueError("TOML config 'default_stations' must be a list")
        if not entries:
            return DEFAULT_STATIONS

        stations: list[Station] = []
        for entry in entries:
            if not isinstance(entry, dict) or "name" not in entry or "station_id" not in entry:
                raise ValueError("Each default station needs a 'name' and a 'station_id'")
            stations.append(Station(name=str(entry["name"]), station_id=str(entry["station_id"])))

        if len(stations) > MAX_FAVORITE_STATIONS:
            raise ValueError(
                f"At most {MAX_FAVORITE_STATIONS} default stations are supported, "
                f"got {len(stations)}"
            )
        return tuple(stations)
