"""Geocoding client for resolving place names."""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from hourly_forecast.config import GEOCODING_API_URL, HTTP_TIMEOUT_SECONDS, USER_AGENT
from hourly_forecast.weather.errors import LocationNotFound, LookupFailed
from hourly_forecast.weather.models import GeocodingResponse, Place

logger = logging.getLogger(__name__)


class GeocodingClient:
    """Async client for the Open-Meteo geocoding API."""

    def __init__(
        self,
        base_url: str = GEOCODING_API_URL,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the geocoding client.

        Args:
            base_url: Geocoding search endpoint
            http_client: Shared HTTP client. If None, the geocoder creates and owns one.
        """
        self.base_url = base_url
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=HTTP_TIMEOUT_SECONDS
        )

    async def resolve(self, query: str, limit: int) -> List[Place]:
        """Look up candidate places for free text.

        Candidates keep the service's relevance order. A blank query
        returns no candidates without touching the network.

        Args:
            query: Free-text place name
            limit: Maximum number of candidates (at least 1)

        Returns:
            Up to ``limit`` places, possibly empty

        Raises:
            ValueError: If limit is below 1
            LookupFailed: If the request fails or the response is malformed
        """
        if limit < 1:
            raise ValueError(f"Invalid candidate limit: {limit}")

        name = (query or "").strip()
        if not name:
            logger.debug("Skipping geocoding for blank query")
            return []

        logger.info(f"Geocoding '{name}' (limit={limit})")

        try:
            response = await self.client.get(self.base_url, params={"name": name, "count": limit})
            response.raise_for_status()
            payload = GeocodingResponse.model_validate(response.json())
            places = [result.to_place() for result in payload.results[:limit]]

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from geocoding API: {e.response.status_code} - {e.response.text}")
            raise LookupFailed(detail=str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"Request error to geocoding API: {e}")
            raise LookupFailed(detail=str(e)) from e
        except (ValueError, ValidationError) as e:
            logger.error(f"Invalid geocoding response for '{name}': {e}")
            raise LookupFailed(detail=str(e)) from e

        logger.info(f"Geocoded '{name}' to {len(places)} candidate(s)")
        return places

    async def resolve_one(self, query: str) -> Place:
        """Resolve free text to the single best-matching place.

        Raises:
            LocationNotFound: If the geocoder has no match
            LookupFailed: If the request fails
        """
        places = await self.resolve(query, 1)
        if not places:
            logger.warning(f"No location found for '{query}'")
            raise LocationNotFound()
        return places[0]

    async def aclose(self):
        """Close the HTTP client if this geocoder created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
