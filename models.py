"""
Data models for locations, weather snapshots, and the view state.

Open-Meteo responses are validated with pydantic: absent fields fall back to
``None`` or empty series, while a value of the wrong shape (or a non-finite
number) raises ``pydantic.ValidationError`` so the caller can report it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class ResolvedLocation(ResponseModel):
    name: str = ""
    latitude: float
    longitude: float
    country: str = ""
    timezone: str = ""

    @field_validator("name", "country", "timezone", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_response(cls, result: Any) -> ResolvedLocation:
        """Build from one element of the geocoding ``results`` array."""
        return cls.model_validate(result)


class LocationInfo(ResponseModel):
    name: str = ""
    country: str = ""
    timezone: str = ""

    @classmethod
    def from_location(cls, location: ResolvedLocation) -> LocationInfo:
        return cls(name=location.name, country=location.country, timezone=location.timezone)

    @property
    def label(self) -> str:
        return ", ".join(part for part in (self.name, self.country) if part)


class CurrentConditions(ResponseModel):
    time: str = ""
    temperature: Optional[float] = Field(default=None, alias="temperature_2m")
    apparent_temperature: Optional[float] = None
    relative_humidity: Optional[float] = Field(default=None, alias="relative_humidity_2m")
    wind_speed: Optional[float] = Field(default=None, alias="wind_speed_10m")
    visibility: Optional[float] = None  # meters
    weather_code: Optional[int] = None

    @field_validator("time", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class DailyForecast(ResponseModel):
    dates: list[str] = Field(default_factory=list, alias="time")
    weather_codes: list[Optional[int]] = Field(default_factory=list, alias="weather_code")
    max_temperatures: list[Optional[float]] = Field(default_factory=list, alias="temperature_2m_max")
    min_temperatures: list[Optional[float]] = Field(default_factory=list, alias="temperature_2m_min")

    @field_validator(
        "dates", "weather_codes", "max_temperatures", "min_temperatures", mode="before"
    )
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class HourlyForecast(ResponseModel):
    times: list[str] = Field(default_factory=list, alias="time")
    weather_codes: list[Optional[int]] = Field(default_factory=list, alias="weather_code")
    temperatures: list[Optional[float]] = Field(default_factory=list, alias="temperature_2m")

    @field_validator(
        "times", "weather_codes", "temperatures", mode="before"
    )
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ForecastResponse(ResponseModel):
    current: CurrentConditions = Field(default_factory=CurrentConditions)
    daily: DailyForecast = Field(default_factory=DailyForecast)
    hourly: HourlyForecast = Field(default_factory=HourlyForecast)


class WeatherSnapshot(ResponseModel):
    location: LocationInfo
    current: CurrentConditions
    daily: DailyForecast
    hourly: HourlyForecast

    @classmethod
    def from_response(cls, location: ResolvedLocation, payload: Any) -> WeatherSnapshot:
        forecast = ForecastResponse.model_validate(payload)
        return cls(
            location=LocationInfo.from_location(location),
            current=forecast.current,
            daily=forecast.daily,
            hourly=forecast.hourly,
        )


@dataclass
class ViewState:
    query: str = ""
    snapshot: Optional[WeatherSnapshot] = None
    is_loading: bool = False
    error_message: Optional[str] = None

    @property
    def status(self) -> str:
        """idle, loading, failed, or success"""
        if self.is_loading:
            return "loading"
        if self.error_message:
            return "failed"
        if self.snapshot is not None:
            return "success"
        return "idle"
