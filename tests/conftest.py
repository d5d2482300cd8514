"""
Shared fixtures: canned Open-Meteo payloads and a fake ``requests.get``.
"""

import pytest
import requests

from abilities import weather
from models import ResolvedLocation


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._json_error:
            raise requests.JSONDecodeError("Expecting value", "", 0)
        return self._payload


def geocoding_payload(name="Tokyo", country="Japan", timezone="Asia/Tokyo",
                      latitude=35.6895, longitude=139.69171):
    return {
        "results": [
            {
                "id": 1850147,
                "name": name,
                "latitude": latitude,
                "longitude": longitude,
                "country": country,
                "timezone": timezone,
            }
        ]
    }


def forecast_payload(days=7, hours=24):
    return {
        "latitude": 35.7,
        "longitude": 139.7,
        "timezone": "Asia/Tokyo",
        "current": {
            "time": "2026-10-19T14:00",
            "temperature_2m": 21.5,
            "relative_humidity_2m": 60,
            "apparent_temperature": 20.4,
            "weather_code": 61,
            "wind_speed_10m": 12.3,
            "visibility": 24140.0,
        },
        "hourly": {
            "time": [f"2026-10-19T{h:02d}:00" for h in range(hours)],
            "temperature_2m": [15.0 + h * 0.5 for h in range(hours)],
            "weather_code": [0 if h < 12 else 3 for h in range(hours)],
        },
        "daily": {
            "time": [f"2026-10-{19 + d:02d}" for d in range(days)],
            "temperature_2m_max": [22.4 + d for d in range(days)],
            "temperature_2m_min": [14.6 + d for d in range(days)],
            "weather_code": [0, 3, 45, 61, 73, 95, 2, 1, 80, 99][:days],
        },
    }


class FakeHTTP:
    """Routes requests.get by URL to queued responses and records calls."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, url, response):
        self.routes.setdefault(url, []).append(response)

    def __call__(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        queue = self.routes.get(url)
        if not queue:
            raise AssertionError(f"unexpected request to {url}")
        response = queue[0] if len(queue) == 1 else queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def calls_to(self, url):
        return [params for called, params in self.calls if called == url]


@pytest.fixture
def http(monkeypatch):
    fake = FakeHTTP()
    monkeypatch.setattr(weather.requests, "get", fake)
    return fake


@pytest.fixture
def tokyo():
    return ResolvedLocation(
        name="Tokyo", latitude=35.6895, longitude=139.69171,
        country="Japan", timezone="Asia/Tokyo",
    )
