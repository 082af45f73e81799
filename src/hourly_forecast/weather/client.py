"""HTTP client for the Open-Meteo forecast API."""

import logging
from typing import Any, Dict, Optional

import httpx

from hourly_forecast.config import (
    FORECAST_API_URL, USER_AGENT, HTTP_TIMEOUT_SECONDS,
    CURRENT_FIELDS, HOURLY_FIELDS, DAILY_FIELDS
)
from hourly_forecast.weather.errors import FetchFailed, MalformedResponse

logger = logging.getLogger(__name__)


class OpenMeteoForecastClient:
    """Async client for fetching forecast data from Open-Meteo."""

    def __init__(
        self,
        base_url: str = FORECAST_API_URL,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the forecast client.

        Args:
            base_url: Forecast endpoint
            http_client: Shared HTTP client. If None, the forecast client creates and owns one.
        """
        self.base_url = base_url
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=HTTP_TIMEOUT_SECONDS
        )

    @staticmethod
    def build_params(lat: float, lon: float, timezone: Optional[str] = "auto") -> Dict[str, Any]:
        """Build query parameters for current, hourly and daily fields in one request."""
        return {
            "latitude": lat,
            "longitude": lon,
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "timezone": timezone or "auto",
        }

    async def fetch_forecast(self, lat: float, lon: float, timezone: Optional[str] = "auto") -> Dict[str, Any]:
        """Fetch the forecast for given coordinates.

        Field-level validation is left to the caller, so a structurally
        successful response is returned even if fields are missing.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            timezone: IANA timezone, or "auto" to let the service infer it

        Returns:
            Raw forecast data

        Raises:
            ValueError: If coordinates are invalid
            FetchFailed: If the request fails or returns a non-success status
            MalformedResponse: If the body is not a JSON object
        """
        if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
            raise ValueError(f"Invalid coordinates: lat={lat}, lon={lon}")

        params = self.build_params(lat, lon, timezone)
        logger.info(f"Fetching forecast for lat={lat}, lon={lon}, timezone={params['timezone']}")

        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from forecast API: {e.response.status_code} - {e.response.text}")
            raise FetchFailed(detail=f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Request error to forecast API: {e}")
            raise FetchFailed(detail=str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Forecast response is not JSON: {e}")
            raise MalformedResponse(detail="response body is not JSON") from e

        if not isinstance(data, dict):
            raise MalformedResponse(detail="response body is not an object")

        logger.info(f"Fetched forecast for lat={lat}, lon={lon} ({response.status_code})")
        return data

    async def aclose(self):
        """Close the HTTP client if this forecast client created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
