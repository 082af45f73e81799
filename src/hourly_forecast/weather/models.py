"""Data models for the hourly forecast dashboard."""

import datetime as dt
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Place(BaseModel):
    """Resolved geocoding result."""
    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., description="Place name as returned by the geocoder")
    country_code: str = Field("", description="ISO-3166 alpha-2 country code, lower case")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    timezone: Optional[str] = Field(None, description="IANA timezone identifier if known")

    @field_validator("country_code", mode="before")
    @classmethod
    def normalize_country_code(cls, value: Any) -> str:
        return (value or "").lower()

    @property
    def label(self) -> str:
        """Suggestion label, e.g. ``Rajshahi, BD``."""
        if not self.country_code:
            return self.display_name
        return f"{self.display_name}, {self.country_code.upper()}"


class CurrentConditions(BaseModel):
    """Current conditions block of a forecast response."""
    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(..., alias="temperature_2m", description="Air temperature in °C")
    apparent_temperature: float = Field(..., description="Feels-like temperature in °C")
    relative_humidity: int = Field(..., alias="relative_humidity_2m", description="Relative humidity in percent")
    precipitation: float = Field(0.0, description="Precipitation in mm")
    rain: float = Field(0.0, description="Rain in mm")
    snowfall: float = Field(0.0, description="Snowfall in mm")
    weather_code: int = Field(..., description="WMO weather code")
    wind_speed: float = Field(..., alias="wind_speed_10m", description="Wind speed at 10 m")
    wind_direction: int = Field(..., alias="wind_direction_10m", description="Wind direction in degrees")

    @field_validator("precipitation", "rain", "snowfall", mode="before")
    @classmethod
    def missing_amount_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value


def _check_parallel(series: BaseModel, names: List[str]) -> None:
    lengths = {name: len(getattr(series, name)) for name in names}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"Parallel sequences differ in length: {lengths}")


class HourlySeries(BaseModel):
    """Parallel hourly sequences sharing one ``time`` axis."""
    model_config = ConfigDict(populate_by_name=True)

    time: List[dt.datetime] = Field(..., description="Local timestamps, one per hour")
    temperature: List[Optional[float]] = Field(..., alias="temperature_2m")
    precipitation_probability: List[Optional[int]] = Field(...)
    weather_code: List[Optional[int]] = Field(...)
    rain: List[Optional[float]] = Field(...)
    snowfall: List[Optional[float]] = Field(...)

    @model_validator(mode="after")
    def check_equal_lengths(self) -> "HourlySeries":
        _check_parallel(self, ["time", "temperature", "precipitation_probability",
                               "weather_code", "rain", "snowfall"])
        return self


class DailySeries(BaseModel):
    """Parallel daily sequences sharing one ``time`` axis."""
    model_config = ConfigDict(populate_by_name=True)

    time: List[dt.date] = Field(..., description="Local dates, one per day")
    weather_code: List[Optional[int]] = Field(...)
    temperature_max: List[Optional[float]] = Field(..., alias="temperature_2m_max")
    temperature_min: List[Optional[float]] = Field(..., alias="temperature_2m_min")

    @model_validator(mode="after")
    def check_equal_lengths(self) -> "DailySeries":
        _check_parallel(self, ["time", "weather_code", "temperature_max", "temperature_min"])
        return self


class ForecastSnapshot(BaseModel):
    """One consistent set of current/hourly/daily data from a single fetch."""
    model_config = ConfigDict(frozen=True)

    place: Place
    current: CurrentConditions
    hourly: HourlySeries
    daily: DailySeries
    timezone: str = Field("GMT", description="Timezone the forecast times are expressed in")
    utc_offset_seconds: int = Field(0, description="UTC offset of the forecast times")
    fetched_at: dt.datetime = Field(..., description="When the forecast was received")


class HourPoint(BaseModel):
    """One row of the hourly view."""
    time: dt.datetime
    temperature: Optional[float] = None
    weather_code: Optional[int] = None
    precipitation_probability: Optional[int] = None
    rain: Optional[float] = None


class DayPoint(BaseModel):
    """One row of the 8-day view."""
    date: dt.date
    weather_code: Optional[int] = None
    temperature_max: Optional[float] = None
    temperature_min: Optional[float] = None


class GeocodingResult(BaseModel):
    """Raw result entry from the geocoding API."""
    name: str
    country_code: Optional[str] = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    timezone: Optional[str] = None

    def to_place(self) -> Place:
        return Place(
            display_name=self.name,
            country_code=self.country_code,
            latitude=self.latitude,
            longitude=self.longitude,
            timezone=self.timezone,
        )


class GeocodingResponse(BaseModel):
    """Raw response from the geocoding API. No match means no ``results`` key."""
    results: List[GeocodingResult] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def absent_is_empty(cls, value: Any) -> Any:
        return value or []


class ForecastResponse(BaseModel):
    """Raw response from the forecast API."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: str = "GMT"
    utc_offset_seconds: int = 0
    current: CurrentConditions
    hourly: HourlySeries
    daily: DailySeries


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ErrorKind(str, Enum):
    LOCATION_NOT_FOUND = "LocationNotFound"
    LOOKUP_FAILED = "LookupFailed"
    FETCH_FAILED = "FetchFailed"
    MALFORMED_RESPONSE = "MalformedResponse"


class ForecastTab(str, Enum):
    HOURLY = "hourly"
    EIGHT_DAY = "8day"


class SessionState(BaseModel):
    """Everything the dashboard session owns.

    Mutated only by the session controller. ``snapshot`` is always replaced
    as a whole.
    """
    status: SessionStatus = SessionStatus.IDLE
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    snapshot: Optional[ForecastSnapshot] = None
    search_query: str = ""
    suggestions: List[Place] = Field(default_factory=list)
    show_suggestions: bool = False
    active_tab: ForecastTab = ForecastTab.HOURLY
    current_time: Optional[dt.datetime] = None
