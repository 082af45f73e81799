"""Weather service: resolve a place, fetch its forecast, assemble a snapshot."""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from hourly_forecast.config import SUGGESTION_LIMIT
from hourly_forecast.weather.client import OpenMeteoForecastClient
from hourly_forecast.weather.geocoding import GeocodingClient
from hourly_forecast.weather.models import ForecastSnapshot, Place
from hourly_forecast.weather.views import build_snapshot

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeatherService:
    """Service combining geocoding and forecast retrieval."""

    def __init__(
        self,
        client: Optional[OpenMeteoForecastClient] = None,
        geocoder: Optional[GeocodingClient] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        """Initialize the weather service.

        Args:
            client: Forecast client instance (creates default if None)
            geocoder: Geocoding client instance (creates default if None)
            clock: Source of the fetch timestamp
        """
        self.client = client or OpenMeteoForecastClient()
        self.geocoder = geocoder or GeocodingClient()
        self.clock = clock

    async def suggest(self, text: str, limit: int = SUGGESTION_LIMIT) -> List[Place]:
        """Candidate places for the search box.

        Raises:
            LookupFailed: If the geocoding request fails
        """
        return await self.geocoder.resolve(text, limit)

    async def get_forecast(self, query: str) -> ForecastSnapshot:
        """Resolve ``query`` to one place and fetch its forecast.

        Args:
            query: Free-text place name

        Returns:
            ForecastSnapshot for the best-matching place

        Raises:
            LocationNotFound: If the geocoder has no match
            LookupFailed: If the geocoding request fails
            FetchFailed: If the forecast request fails
            MalformedResponse: If the forecast payload is missing fields
        """
        place = await self.geocoder.resolve_one(query)
        logger.info(
            f"Resolved '{query}' to {place.display_name} ({place.country_code}) "
            f"at lat={place.latitude}, lon={place.longitude}, timezone={place.timezone or 'auto'}"
        )

        raw_data = await self.client.fetch_forecast(
            place.latitude,
            place.longitude,
            place.timezone or "auto"
        )
        snapshot = build_snapshot(raw_data, place, self.clock())

        logger.info(
            f"Forecast for {place.display_name}: {len(snapshot.hourly.time)} hours, "
            f"{len(snapshot.daily.time)} days"
        )
        return snapshot

    async def aclose(self):
        """Close the underlying clients."""
        for closable in (self.client, self.geocoder):
            try:
                await closable.aclose()
            except Exception as e:
                logger.error(f"Error closing {type(closable).__name__}: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
