"""Error kinds raised by the geocoding and forecast clients."""

from typing import Optional


class WeatherError(Exception):
    """Base class for failures of a single fetch operation.

    ``message`` is the text shown to the user.
    """

    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message if not detail else f"{self.message}: {detail}")


class LookupFailed(WeatherError):
    """Raised when the geocoding service cannot be reached or answers garbage."""
    default_message = "Failed to look up location"


class LocationNotFound(WeatherError):
    """Raised when resolving exactly one place returns no candidates."""
    default_message = "Location not found"


class FetchFailed(WeatherError):
    """Raised when the forecast request fails at the network or HTTP level."""
    default_message = "Failed to fetch weather data"


class MalformedResponse(WeatherError):
    """Raised when a forecast payload lacks the expected fields."""
    default_message = "Unexpected response from weather service"
