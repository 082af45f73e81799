"""Derived forecast views: current hour, hourly window, 8-day window.

All functions are pure. The reference time is always passed in, never read
from the system clock, and empty series give empty or zero results.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from hourly_forecast.config import DAILY_WINDOW_DAYS
from hourly_forecast.weather.errors import MalformedResponse
from hourly_forecast.weather.models import (
    DailySeries, DayPoint, ForecastResponse, ForecastSnapshot,
    HourlySeries, HourPoint, Place
)

logger = logging.getLogger(__name__)


def current_hour_index(hourly: HourlySeries, now: datetime) -> int:
    """Index of the first hourly entry whose hour-of-day equals ``now``'s.

    A linear scan: the series is short and not guaranteed strictly sorted
    around DST changes. Returns 0 when nothing matches.
    """
    for index, timestamp in enumerate(hourly.time):
        if timestamp.hour == now.hour:
            return index
    return 0


def hourly_window(hourly: HourlySeries, now: datetime) -> List[HourPoint]:
    """Hourly rows from the current hour onwards.

    Hour values never exceed 23, so the end-of-day cut-off never fires and
    the window runs to the end of the series.
    """
    # TODO: confirm with product whether the window should stop at local midnight
    if not hourly.time:
        return []

    points = []
    for index in range(current_hour_index(hourly, now), len(hourly.time)):
        points.append(HourPoint(
            time=hourly.time[index],
            temperature=hourly.temperature[index],
            weather_code=hourly.weather_code[index],
            precipitation_probability=hourly.precipitation_probability[index],
            rain=hourly.rain[index],
        ))
    return points


def daily_window(daily: DailySeries, days: int = DAILY_WINDOW_DAYS) -> List[DayPoint]:
    """First ``days`` daily rows in original order."""
    return [
        DayPoint(
            date=daily.time[index],
            weather_code=daily.weather_code[index],
            temperature_max=daily.temperature_max[index],
            temperature_min=daily.temperature_min[index],
        )
        for index in range(min(days, len(daily.time)))
    ]


def current_precipitation_probability(hourly: HourlySeries, now: datetime) -> Optional[int]:
    """Chance of rain for the current hour, or None for an empty series."""
    if not hourly.time:
        return None
    return hourly.precipitation_probability[current_hour_index(hourly, now)]


def local_now(snapshot: ForecastSnapshot, now: datetime) -> datetime:
    """Express ``now`` in the forecast's local time.

    Naive datetimes are taken as already local.
    """
    if now.tzinfo is None:
        return now
    return now.astimezone(timezone(timedelta(seconds=snapshot.utc_offset_seconds)))


def build_snapshot(raw: Dict[str, Any], place: Place, fetched_at: datetime) -> ForecastSnapshot:
    """Validate a raw forecast payload and assemble a snapshot.

    Args:
        raw: Forecast API response body
        place: The place the forecast was requested for
        fetched_at: When the response was received

    Returns:
        ForecastSnapshot for the place

    Raises:
        MalformedResponse: If expected fields are missing or inconsistent
    """
    try:
        response = ForecastResponse.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Invalid forecast data format: {e}")
        raise MalformedResponse(detail=str(e)) from e

    return ForecastSnapshot(
        place=place,
        current=response.current,
        hourly=response.hourly,
        daily=response.daily,
        timezone=response.timezone,
        utc_offset_seconds=response.utc_offset_seconds,
        fetched_at=fetched_at,
    )
