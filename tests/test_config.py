"""Unit tests for environment-driven settings."""

import pytest

from ibirkat.config import Settings
from ibirkat.solar import PolarFallback

_VARS = (
    "IBIRKAT_PREFERENCES_PATH",
    "IBIRKAT_LANG",
    "IBIRKAT_LOG_LEVEL",
    "IBIRKAT_FALLBACK_ELEVATION",
    "IBIRKAT_POLAR_FALLBACK",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without IBIRKAT_* variables."""
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    """With nothing set, preferences live in memory and output is Hebrew."""
    settings = Settings.from_env()
    assert settings == Settings()
    assert settings.preferences_path is None
    assert settings.lang == "he"
    assert settings.polar_fallback is PolarFallback.PROPAGATE


def test_values_from_env(monkeypatch, tmp_path):
    """Every variable is read."""
    monkeypatch.setenv("IBIRKAT_PREFERENCES_PATH", str(tmp_path / "prefs.json"))
    monkeypatch.setenv("IBIRKAT_LANG", "EN")
    monkeypatch.setenv("IBIRKAT_LOG_LEVEL", "debug")
    monkeypatch.setenv("IBIRKAT_FALLBACK_ELEVATION", "754")
    monkeypatch.setenv("IBIRKAT_POLAR_FALLBACK", "fixed_clock")
    settings = Settings.from_env()
    assert settings.preferences_path == str(tmp_path / "prefs.json")
    assert settings.lang == "en"
    assert settings.log_level == "DEBUG"
    assert settings.fallback_elevation == 754.0
    assert settings.polar_fallback is PolarFallback.FIXED_CLOCK


def test_invalid_values_fall_back(monkeypatch):
    """Unsupported values are ignored in favour of the defaults."""
    monkeypatch.setenv("IBIRKAT_LANG", "fr")
    monkeypatch.setenv("IBIRKAT_FALLBACK_ELEVATION", "high")
    monkeypatch.setenv("IBIRKAT_POLAR_FALLBACK", "midnight")
    settings = Settings.from_env()
    assert settings.lang == "he"
    assert settings.fallback_elevation == 0.0
    assert settings.polar_fallback is PolarFallback.PROPAGATE
