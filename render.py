"""
Rendering — turns the view state into text and display rows.

Pure functions of the state passed in. While a search is loading or an
error is set, the snapshot is never shown.
"""

from __future__ import annotations
import math
from datetime import date, datetime
from typing import Optional

from abilities.weather_codes import classify_icon, describe, icon_for
from models import ViewState, WeatherSnapshot

DAYS_SHOWN = 7
HOURS_SHOWN = 24
LOADING_TEXT = "Loading weather data..."
EMPTY_TEXT = "Send a city name to get the weather."


def round_half_up(value: Optional[float]) -> Optional[int]:
    if value is None:
        return None
    return math.floor(value + 0.5)


def _day_label(index: int, value: str) -> str:
    if index == 0:
        return "Today"
    try:
        return date.fromisoformat(value[:10]).strftime("%a")
    except ValueError:
        return value


def _hour_label(index: int, value: str) -> str:
    if index == 0:
        return "Now"
    try:
        return datetime.fromisoformat(value).strftime("%I %p")
    except ValueError:
        return value


def _clock(value: str) -> str:
    try:
        return datetime.fromisoformat(value).strftime("%H:%M")
    except ValueError:
        return value


def forecast_rows(snapshot: WeatherSnapshot) -> dict:
    """Daily and hourly rows, labelled and cut to the display window."""
    daily = snapshot.daily
    hourly = snapshot.hourly
    days = [
        {
            "label": _day_label(i, day),
            "date": day,
            "icon": icon_for(code),
            "category": classify_icon(code),
            "high": round_half_up(high),
            "low": round_half_up(low),
        }
        for i, (day, code, high, low) in enumerate(
            zip(daily.dates, daily.weather_codes, daily.max_temperatures, daily.min_temperatures)
        )
        if i < DAYS_SHOWN
    ]
    hours = [
        {
            "label": _hour_label(i, ts),
            "time": ts,
            "icon": icon_for(code),
            "category": classify_icon(code),
            "temperature": round_half_up(temp),
        }
        for i, (ts, code, temp) in enumerate(
            zip(hourly.times, hourly.weather_codes, hourly.temperatures)
        )
        if i < HOURS_SHOWN
    ]
    return {"days": days, "hours": hours}


def current_summary(snapshot: WeatherSnapshot) -> dict:
    cur = snapshot.current
    visibility_km = None if cur.visibility is None else cur.visibility / 1000
    return {
        "location": snapshot.location.label,
        "timezone": snapshot.location.timezone,
        "temperature": round_half_up(cur.temperature),
        "feels_like": round_half_up(cur.apparent_temperature),
        "humidity": round_half_up(cur.relative_humidity),
        "wind_speed": round_half_up(cur.wind_speed),
        "visibility_km": round_half_up(visibility_km),
        "description": describe(cur.weather_code),
        "icon": icon_for(cur.weather_code),
        "category": classify_icon(cur.weather_code),
        "time": _clock(cur.time) if cur.time else "",
    }


def _value(value, unit: str) -> str:
    return "–" if value is None else f"{value}{unit}"


def render_snapshot(snapshot: WeatherSnapshot) -> str:
    cur = current_summary(snapshot)
    rows = forecast_rows(snapshot)
    feels = f"Feels like {_value(cur['feels_like'], '°C')}"
    if cur["time"]:
        feels += f" • {cur['time']}"

    lines = [
        f"📍 {cur['location']}",
        f"{cur['icon']} {_value(cur['temperature'], '°C')}  {cur['description']}",
        feels,
        "",
        f"Humidity: {_value(cur['humidity'], '%')}",
        f"Wind: {_value(cur['wind_speed'], ' km/h')}",
        f"Visibility: {_value(cur['visibility_km'], ' km')}",
    ]
    if rows["days"]:
        lines += ["", f"{DAYS_SHOWN}-Day Forecast"]
        for d in rows["days"]:
            lines.append(
                f"{d['label']:<6} {d['icon']} {_value(d['high'], '°')} / {_value(d['low'], '°')}"
            )
    if rows["hours"]:
        lines += ["", f"{HOURS_SHOWN}-Hour Forecast"]
        for h in rows["hours"]:
            lines.append(f"{h['label']:<6} {h['icon']} {_value(h['temperature'], '°')}")
    return "\n".join(lines)


def render_text(state: ViewState) -> str:
    """Formatted state for Telegram replies."""
    if state.is_loading:
        return LOADING_TEXT
    if state.error_message:
        return f"⚠️ {state.error_message}"
    if state.snapshot is None:
        return EMPTY_TEXT
    return render_snapshot(state.snapshot)


def state_payload(state: ViewState) -> dict:
    """JSON-ready view of the state for the dashboard API."""
    payload = {
        "status": state.status,
        "query": state.query,
        "is_loading": state.is_loading,
        "error": state.error_message,
        "current": None,
        "days": [],
        "hours": [],
    }
    if state.status == "success":
        payload["current"] = current_summary(state.snapshot)
        payload.update(forecast_rows(state.snapshot))
    return payload
