"""Shared fixtures: reference locations used across the test modules."""

import pytest

from ibirkat.models import GeoContext


@pytest.fixture
def jerusalem():
    """Jerusalem at sea level."""
    return GeoContext(
        latitude=31.778,
        longitude=35.235,
        time_zone="Asia/Jerusalem",
        elevation_m=0.0,
        display_name="ירושלים",
    )


@pytest.fixture
def jerusalem_800():
    """Jerusalem at its real elevation, so visible and sea-level times differ."""
    return GeoContext(
        latitude=31.778,
        longitude=35.235,
        time_zone="Asia/Jerusalem",
        elevation_m=800.0,
        display_name="ירושלים",
    )


@pytest.fixture
def tromso():
    """Arctic location: midnight sun in June, polar night in December."""
    return GeoContext(
        latitude=69.65,
        longitude=18.96,
        time_zone="Europe/Oslo",
        display_name="Tromsø",
    )


@pytest.fixture
def london():
    """51.5°N: the sun never reaches 16.1° below the horizon around midsummer."""
    return GeoContext(
        latitude=51.5074,
        longitude=-0.1278,
        time_zone="Europe/London",
        display_name="London",
    )


@pytest.fixture
def paris():
    """48.85°N: in June the evening 16.1° crossing falls after local midnight."""
    return GeoContext(
        latitude=48.8566,
        longitude=2.3522,
        time_zone="Europe/Paris",
        display_name="Paris",
    )
