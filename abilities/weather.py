"""
Weather ability — free, no API key required.

Uses Open-Meteo geocoding + forecast APIs. Both calls are blocking;
the orchestrator runs them off the event loop.
"""

import logging

import requests
from pydantic import ValidationError

from config import FORECAST_URL, GEOCODING_URL, REQUEST_TIMEOUT
from models import ResolvedLocation, WeatherSnapshot

log = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,"
    "weather_code,wind_speed_10m,visibility"
)
HOURLY_FIELDS = "temperature_2m,weather_code"
DAILY_FIELDS = "temperature_2m_max,temperature_2m_min,weather_code"


class WeatherError(Exception):
    """Base for failures shown to the user. ``message`` is display-safe."""

    default_message = "Something went wrong"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(WeatherError):
    default_message = "City not found"


class ResolutionError(WeatherError):
    default_message = "Unable to find city coordinates"


class FetchError(WeatherError):
    default_message = "Unable to fetch weather data"


def _get_json(url: str, params: dict):
    resp = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def resolve(place: str) -> ResolvedLocation:
    """Look up a place name and return the first geocoding match."""
    try:
        data = _get_json(
            GEOCODING_URL,
            {"name": place, "count": 1, "language": "en", "format": "json"},
        )
    except (requests.RequestException, ValueError) as e:
        log.warning(f"Geocoding request failed for {place!r}: {e}")
        raise ResolutionError() from e

    if not isinstance(data, dict):
        log.warning(f"Unexpected geocoding response for {place!r}: {type(data).__name__}")
        raise ResolutionError()
    results = data.get("results")
    if not results:
        raise NotFoundError()

    try:
        if not isinstance(results, list):
            raise ValueError("results is not a list")
        location = ResolvedLocation.from_response(results[0])
    except (ValidationError, ValueError) as e:
        log.warning(f"Malformed geocoding result for {place!r}: {e}")
        raise ResolutionError() from e

    log.info(
        f"Resolved {place!r} to {location.name}, {location.country} "
        f"({location.latitude}, {location.longitude})"
    )
    return location


def fetch_forecast(location: ResolvedLocation) -> WeatherSnapshot:
    """Fetch current, hourly and daily weather for a resolved location."""
    params = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "current": CURRENT_FIELDS,
        "hourly": HOURLY_FIELDS,
        "daily": DAILY_FIELDS,
        "timezone": "auto",
    }
    try:
        payload = _get_json(FORECAST_URL, params)
        snapshot = WeatherSnapshot.from_response(location, payload)
    except (requests.RequestException, ValidationError, ValueError) as e:
        log.warning(f"Forecast fetch failed for {location.name}: {e}")
        raise FetchError() from e

    log.info(
        f"Fetched forecast for {location.name}: "
        f"{len(snapshot.daily.dates)} days, {len(snapshot.hourly.times)} hours"
    )
    return snapshot
