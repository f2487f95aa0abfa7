"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

# Load environment variables from .env file(s)
load_dotenv()

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User settings for the dashboard.

    Every field has a default, so the dashboard runs without a config file;
    values in config.yaml override them.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/meteodash/config.yaml").expanduser(),
        Path("/etc/meteodash/config.yaml"),
    ]

    # Storage
    storage_path: Path = Field(
        Path("~/.local/share/meteodash/storage.json").expanduser(),
        description="JSON file holding favorites, recents and preferences",
    )
    preview_dir: Path = Field(Path("preview"), description="Output directory for HTML previews")

    # Endpoints
    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    air_quality_url: str = AIR_QUALITY_URL
    request_timeout: float | None = Field(
        None, gt=0, description="Seconds to wait for API responses (None waits indefinitely)"
    )
    geolocation_timeout: float = Field(10.0, gt=0, description="Seconds to wait for a location fix")

    # Forecast slices
    hourly_preview_count: int = Field(6, ge=1, le=48, description="Hours in the inline preview")
    chart_points: int = Field(12, ge=1, le=48, description="Hours plotted on the chart")
    daily_count: int = Field(5, ge=1, le=16, description="Days to show in forecast slice")
    suggestion_count: int = Field(5, ge=1, le=20, description="Autocomplete matches to show")

    # Stored lists
    favorites_capacity: int = Field(8, ge=1, description="Maximum number of favorites")
    recents_capacity: int = Field(6, ge=1, description="Maximum number of recent searches")

    # Chart
    chart_width: int = Field(600, ge=80, description="Chart width in pixels")
    chart_height: int = Field(200, ge=60, description="Chart height in pixels")

    # Time formatting
    time_format_general: str = Field("%H:%M", description="Sunrise/sunset format (e.g. 06:04)")
    time_format_hourly: str = Field("%H", description="Hourly label format (e.g. 14)")
    time_format_daily: str = Field("%a", description="Daily forecast format (e.g. Mon)")

    # Geolocation stand-in
    home_lat: float | None = Field(None, ge=-90, le=90, description="Latitude for 'here'")
    home_lon: float | None = Field(None, ge=-180, le=180, description="Longitude for 'here'")

    @model_validator(mode="after")
    def check_home_pair(self) -> UserSettings:
        if (self.home_lat is None) != (self.home_lon is None):
            raise ValueError("home_lat and home_lon must be set together")
        return self

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("METEODASH_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from METEODASH_CONFIG not found: {path}")
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create config.yaml or set METEODASH_CONFIG."
                    )

        # Load and parse config
        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> UserSettings:
        """Like :meth:`load`, but fall back to defaults when no file exists.

        An explicitly given *path* (or METEODASH_CONFIG) that is missing is
        still an error.
        """
        if path is not None or os.environ.get("METEODASH_CONFIG"):
            return cls.load(path)
        try:
            return cls.load()
        except FileNotFoundError:
            return cls()
