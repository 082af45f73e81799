"""Shared fixtures: a fake Open-Meteo backend served through httpx.MockTransport."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest

from hourly_forecast.weather.client import OpenMeteoForecastClient
from hourly_forecast.weather.geocoding import GeocodingClient
from hourly_forecast.weather.service import WeatherService

GEOCODING_HOST = "geocoding-api.open-meteo.com"
FORECAST_HOST = "api.open-meteo.com"

RAJSHAHI = {
    "id": 1185128,
    "name": "Rajshahi",
    "latitude": 24.37,
    "longitude": 88.6,
    "country_code": "BD",
    "timezone": "Asia/Dhaka",
    "country": "Bangladesh",
}

PLACES = [
    RAJSHAHI,
    {"name": "Rajkot", "latitude": 22.29, "longitude": 70.79, "country_code": "IN", "timezone": "Asia/Kolkata"},
    {"name": "Rajpur", "latitude": 30.4, "longitude": 78.1, "country_code": "IN", "timezone": "Asia/Kolkata"},
    {"name": "Rajgarh", "latitude": 24.0, "longitude": 76.7, "country_code": "IN", "timezone": "Asia/Kolkata"},
    {"name": "Rajapur", "latitude": 16.6, "longitude": 73.5, "country_code": "IN", "timezone": "Asia/Kolkata"},
    {"name": "Rajbiraj", "latitude": 26.5, "longitude": 86.7, "country_code": "NP", "timezone": "Asia/Kathmandu"},
    {"name": "Nowhere Island", "latitude": -60.0, "longitude": 10.0},
]


def forecast_payload(
    start: str = "2026-10-19",
    hours: int = 48,
    days: int = 10,
    utc_offset_seconds: int = 6 * 3600,
    tz: str = "Asia/Dhaka",
) -> dict[str, Any]:
    """Forecast response shaped like the Open-Meteo forecast API."""
    base = datetime.fromisoformat(f"{start}T00:00")
    first_day = base.date()
    return {
        "latitude": 24.375,
        "longitude": 88.625,
        "generationtime_ms": 0.1,
        "utc_offset_seconds": utc_offset_seconds,
        "timezone": tz,
        "timezone_abbreviation": "GMT+6",
        "current": {
            "time": f"{start}T13:30",
            "interval": 900,
            "temperature_2m": 27.4,
            "relative_humidity_2m": 78,
            "apparent_temperature": 31.6,
            "precipitation": 0.2,
            "rain": 0.2,
            "snowfall": 0.0,
            "weather_code": 61,
            "wind_speed_10m": 8.3,
            "wind_direction_10m": 135,
        },
        "hourly": {
            "time": [(base + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)],
            "temperature_2m": [20.0 + (i % 24) * 0.5 for i in range(hours)],
            "precipitation_probability": [i % 100 for i in range(hours)],
            "weather_code": [(0, 1, 2, 3, 61)[i % 5] for i in range(hours)],
            "rain": [round(0.1 * (i % 3), 1) for i in range(hours)],
            "snowfall": [0.0] * hours,
        },
        "daily": {
            "time": [(first_day + timedelta(days=d)).isoformat() for d in range(days)],
            "weather_code": [(61, 3, 0)[d % 3] for d in range(days)],
            "temperature_2m_max": [30.0 + d for d in range(days)],
            "temperature_2m_min": [20.0 + d for d in range(days)],
        },
    }


class FakeOpenMeteo:
    """Routes geocoding and forecast requests to canned responses and records them."""

    def __init__(self, places: list[dict[str, Any]] | None = None, forecast: dict[str, Any] | None = None):
        self.places = PLACES if places is None else places
        self.forecast = forecast_payload() if forecast is None else forecast
        self.geocoding_status = 200
        self.forecast_status = 200
        self.geocoding_down = False
        self.forecast_down = False
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == GEOCODING_HOST:
            return self._geocode(request)
        if request.url.host == FORECAST_HOST:
            return self._forecast(request)
        return httpx.Response(404)

    def _geocode(self, request: httpx.Request) -> httpx.Response:
        if self.geocoding_down:
            raise httpx.ConnectError("connection refused", request=request)
        if self.geocoding_status != 200:
            return httpx.Response(self.geocoding_status, json={"error": True, "reason": "boom"})
        name = request.url.params["name"].lower()
        count = int(request.url.params["count"])
        results = [p for p in self.places if p["name"].lower().startswith(name)][:count]
        if not results:
            return httpx.Response(200, json={"generationtime_ms": 0.4})
        return httpx.Response(200, json={"results": results, "generationtime_ms": 0.4})

    def _forecast(self, request: httpx.Request) -> httpx.Response:
        if self.forecast_down:
            raise httpx.ReadTimeout("timed out", request=request)
        if self.forecast_status != 200:
            return httpx.Response(self.forecast_status, json={"error": True, "reason": "boom"})
        return httpx.Response(200, json=self.forecast)

    @property
    def geocoding_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == GEOCODING_HOST]

    @property
    def forecast_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == FORECAST_HOST]


class FakeClock:
    """Controllable clock returning timezone-aware UTC datetimes."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 10, 19, 7, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


def mock_http_client(fake: FakeOpenMeteo) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake))


def build_service(fake: FakeOpenMeteo, clock: FakeClock) -> WeatherService:
    http_client = mock_http_client(fake)
    return WeatherService(
        client=OpenMeteoForecastClient(http_client=http_client),
        geocoder=GeocodingClient(http_client=http_client),
        clock=clock,
    )


@pytest.fixture
def fake_api() -> FakeOpenMeteo:
    return FakeOpenMeteo()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(fake_api: FakeOpenMeteo, clock: FakeClock) -> WeatherService:
    return build_service(fake_api, clock)
