"""WMO weather code lookups for icons and condition text.

The forecast API reports sky/precipitation state as a WMO interpretation
code. Codes missing from a table fall back to a neutral value.
"""

from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_ICON = "🌤️"
DEFAULT_CONDITION = "Unknown weather condition"

WEATHER_ICONS: Mapping[int, str] = MappingProxyType({
    0: "☀️", 1: "🌤️", 2: "⛅", 3: "☁️",
    45: "🌫️", 48: "🌫️", 51: "🌦️", 53: "🌦️",
    55: "🌧️", 61: "🌧️", 63: "🌧️", 65: "🌧️",
    71: "❄️", 73: "❄️", 75: "❄️", 77: "❄️",
    80: "🌦️", 81: "🌧️", 82: "🌧️", 85: "❄️",
    86: "❄️", 95: "⛈️", 96: "⛈️", 99: "⛈️",
})

WEATHER_CONDITIONS: Mapping[int, str] = MappingProxyType({
    0: "Clear sky", 1: "Mainly clear", 2: "Partly cloudy", 3: "Overcast",
    45: "Fog", 48: "Fog", 51: "Light drizzle", 53: "Moderate drizzle",
    55: "Heavy drizzle", 56: "Light freezing drizzle", 57: "Heavy freezing drizzle",
    61: "Light rain", 63: "Moderate rain", 65: "Heavy rain",
    66: "Light freezing rain", 67: "Heavy freezing rain",
    71: "Light snow", 73: "Moderate snow", 75: "Heavy snow", 77: "Snow grains",
    80: "Light rain showers", 81: "Moderate rain showers", 82: "Heavy rain showers",
    85: "Light snow showers", 86: "Heavy snow showers",
    95: "Thunderstorm", 96: "Thunderstorm with hail", 99: "Thunderstorm with heavy hail",
})


def weather_icon(code: Optional[int]) -> str:
    """Return the display icon for a weather code."""
    if code is None:
        return DEFAULT_ICON
    return WEATHER_ICONS.get(code, DEFAULT_ICON)


def weather_condition(code: Optional[int]) -> str:
    """Return the human-readable condition for a weather code."""
    if code is None:
        return DEFAULT_CONDITION
    return WEATHER_CONDITIONS.get(code, DEFAULT_CONDITION)
