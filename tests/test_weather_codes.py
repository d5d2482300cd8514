"""
Tests for abilities/weather_codes.py
"""

import pytest

from abilities.weather_codes import (
    CATEGORIES,
    CLEAR,
    CLOUDY,
    DESCRIPTIONS,
    FOG,
    ICONS,
    RAIN,
    SNOW,
    STORM,
    classify_icon,
    describe,
    icon_for,
)


@pytest.mark.parametrize("code, category", [
    (0, CLEAR), (1, CLEAR),
    (2, CLOUDY), (3, CLOUDY),
    (45, FOG), (48, FOG),
    (51, RAIN), (61, RAIN), (67, RAIN),
    (71, SNOW), (77, SNOW), (80, SNOW), (86, SNOW),
    (95, STORM), (96, STORM), (99, STORM),
])
def test_classify_icon_ranges(code, category):
    assert classify_icon(code) == category


@pytest.mark.parametrize("code", [-100, -1, 4, 10, 44, 49, 50, 68, 70, 87, 94, 100, 200])
def test_classify_icon_falls_back_to_cloudy(code):
    assert classify_icon(code) == CLOUDY


def test_classify_icon_is_total():
    for code in range(-100, 201):
        assert classify_icon(code) in CATEGORIES


def test_classify_icon_none():
    assert classify_icon(None) == CLOUDY


def test_describe_known_codes():
    assert describe(0) == "Clear sky"
    assert describe(48) == "Depositing rime fog"
    assert describe(61) == "Slight rain"
    assert describe(82) == "Violent rain showers"
    assert describe(99) == "Thunderstorm with heavy hail"


@pytest.mark.parametrize("code", [200, -1, 4, 47, 60, 98, None])
def test_describe_unknown(code):
    assert describe(code) == "Unknown"


def test_describe_is_exact_match_only():
    for code in range(-100, 201):
        assert describe(code) == DESCRIPTIONS.get(code, "Unknown")


def test_every_category_has_an_icon():
    assert set(ICONS) == set(CATEGORIES)
    assert icon_for(0) == ICONS[CLEAR]
    assert icon_for(1000) == ICONS[CLOUDY]
