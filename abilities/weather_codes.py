"""
WMO weather codes — icon categories and short descriptions.

Both lookups are total: unknown codes get a fallback, never an error.
"""

from typing import Optional

CLEAR = "clear"
CLOUDY = "cloudy"
FOG = "fog"
RAIN = "rain"
SNOW = "snow"
STORM = "storm"

CATEGORIES = (CLEAR, CLOUDY, FOG, RAIN, SNOW, STORM)

# Checked in order; first match wins.
ICON_RANGES = (
    (0, 1, CLEAR),
    (2, 3, CLOUDY),
    (45, 48, FOG),
    (51, 67, RAIN),
    (71, 86, SNOW),
    (95, 99, STORM),
)

ICONS = {
    CLEAR: "☀️",
    CLOUDY: "☁️",
    FOG: "🌫️",
    RAIN: "🌧️",
    SNOW: "❄️",
    STORM: "⛈️",
}

DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def classify_icon(code: Optional[int]) -> str:
    """Map a weather code to an icon category. Unmatched codes are cloudy."""
    if code is None:
        return CLOUDY
    for low, high, category in ICON_RANGES:
        if low <= code <= high:
            return category
    return CLOUDY


def describe(code: Optional[int]) -> str:
    return DESCRIPTIONS.get(code, "Unknown")


def icon_for(code: Optional[int]) -> str:
    return ICONS[classify_icon(code)]
