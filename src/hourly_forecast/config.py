"""Configuration settings for the hourly forecast dashboard."""

import os
from typing import Final, List

from dotenv import load_dotenv

load_dotenv()

VERSION: Final[str] = "0.1.0"

# API Configuration
GEOCODING_API_URL: Final[str] = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_API_URL: Final[str] = "https://api.open-meteo.com/v1/forecast"
USER_AGENT: str = os.getenv("USER_AGENT", f"hourly-forecast/{VERSION} (+https://open-meteo.com)")
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Fields requested from the forecast API in a single round trip
CURRENT_FIELDS: Final[List[str]] = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "rain",
    "snowfall",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
]
HOURLY_FIELDS: Final[List[str]] = [
    "temperature_2m",
    "precipitation_probability",
    "weather_code",
    "rain",
    "snowfall",
]
DAILY_FIELDS: Final[List[str]] = [
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
]

# Default location loaded on startup
DEFAULT_LOCATION: str = os.getenv("DEFAULT_LOCATION", "Rajshahi")

# Session timers
REFRESH_INTERVAL_SECONDS: float = float(os.getenv("REFRESH_INTERVAL_SECONDS", "60"))
CLOCK_TICK_SECONDS: float = float(os.getenv("CLOCK_TICK_SECONDS", "1"))

# Search box behaviour
SUGGESTION_LIMIT: Final[int] = 5
SUGGESTION_HIDE_DELAY_SECONDS: Final[float] = 0.2  # lets a click land before blur hides the panel

# Forecast views
DAILY_WINDOW_DAYS: Final[int] = 8

# Server configuration
HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
