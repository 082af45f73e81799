"""Dashboard view assembled from the session state for the browser page."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from hourly_forecast.weather.codes import weather_condition, weather_icon
from hourly_forecast.weather.formatting import (
    format_amount, format_clock, format_day, format_hour, round_half_up
)
from hourly_forecast.weather.models import (
    ErrorKind, ForecastSnapshot, ForecastTab, SessionState, SessionStatus
)
from hourly_forecast.weather.views import (
    current_precipitation_probability, daily_window, hourly_window, local_now
)


class LocationHeader(BaseModel):
    name: str
    country_code: str = Field(..., description="Upper-case country code for display")
    flag_code: str = Field(..., description="Lower-case country code for the flag icon")
    title: str


class CurrentView(BaseModel):
    temperature: Optional[int]
    icon: str
    condition: str
    feels_like: Optional[int]
    humidity: int
    precipitation: str
    chance_of_rain: Optional[int]
    wind_speed: float
    wind_direction: int


class HourRow(BaseModel):
    time: datetime
    label: str
    icon: str
    temperature: Optional[int]
    precipitation_probability: Optional[int]
    rain: Optional[float]


class DayRow(BaseModel):
    date: str
    label: str
    icon: str
    condition: str
    high: Optional[int]
    low: Optional[int]


class SuggestionItem(BaseModel):
    name: str
    label: str


class DashboardView(BaseModel):
    """Everything the page renders, already formatted."""
    status: SessionStatus
    loading: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    clock: Optional[str] = None
    active_tab: ForecastTab
    search_query: str = ""
    show_suggestions: bool = False
    suggestions: List[SuggestionItem] = Field(default_factory=list)
    location: Optional[LocationHeader] = None
    current: Optional[CurrentView] = None
    hourly: List[HourRow] = Field(default_factory=list)
    daily: List[DayRow] = Field(default_factory=list)
    fetched_at: Optional[datetime] = None


def _location_header(snapshot: ForecastSnapshot) -> LocationHeader:
    place = snapshot.place
    upper = place.country_code.upper()
    title = f"Hour-by-Hour Forecast for {place.display_name}"
    if upper:
        title = f"{title}, {upper}"
    return LocationHeader(
        name=place.display_name,
        country_code=upper,
        flag_code=place.country_code,
        title=title,
    )


def _current_view(snapshot: ForecastSnapshot, now: datetime) -> CurrentView:
    current = snapshot.current
    return CurrentView(
        temperature=round_half_up(current.temperature),
        icon=weather_icon(current.weather_code),
        condition=weather_condition(current.weather_code),
        feels_like=round_half_up(current.apparent_temperature),
        humidity=current.relative_humidity,
        precipitation=f"Rain: {format_amount(current.rain)}mm • Snow: {format_amount(current.snowfall)}mm",
        chance_of_rain=current_precipitation_probability(snapshot.hourly, now),
        wind_speed=current.wind_speed,
        wind_direction=current.wind_direction,
    )


def build_dashboard(state: SessionState, now: Optional[datetime] = None) -> DashboardView:
    """Build the dashboard view for ``state`` at reference time ``now``.

    Args:
        state: Current session state
        now: Reference time (defaults to the session's clock value)

    Returns:
        DashboardView ready to serialize
    """
    now = now or state.current_time
    view = DashboardView(
        status=state.status,
        loading=state.status == SessionStatus.LOADING,
        error=state.error,
        error_kind=state.error_kind,
        active_tab=state.active_tab,
        search_query=state.search_query,
        show_suggestions=state.show_suggestions and bool(state.suggestions),
        suggestions=[SuggestionItem(name=p.display_name, label=p.label) for p in state.suggestions],
    )

    snapshot = state.snapshot
    if snapshot is None:
        if now is not None:
            view.clock = format_clock(now)
        return view

    if now is None:
        now = snapshot.fetched_at
    now = local_now(snapshot, now)

    view.clock = format_clock(now)
    view.fetched_at = snapshot.fetched_at
    view.location = _location_header(snapshot)
    view.current = _current_view(snapshot, now)
    view.hourly = [
        HourRow(
            time=point.time,
            label=format_hour(point.time),
            icon=weather_icon(point.weather_code),
            temperature=round_half_up(point.temperature),
            precipitation_probability=point.precipitation_probability,
            rain=point.rain,
        )
        for point in hourly_window(snapshot.hourly, now)
    ]
    view.daily = [
        DayRow(
            date=point.date.isoformat(),
            label=format_day(point.date),
            icon=weather_icon(point.weather_code),
            condition=weather_condition(point.weather_code),
            high=round_half_up(point.temperature_max),
            low=round_half_up(point.temperature_min),
        )
        for point in daily_window(snapshot.daily)
    ]
    return view
