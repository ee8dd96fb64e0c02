"""Runtime settings read from the environment (optionally a .env file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from ibirkat.solar import PolarFallback

_LOGGER = logging.getLogger(__name__)

LANGUAGES = ("he", "en")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        _LOGGER.warning("Ignoring %s=%r: not a number", name, raw)
        return default


@dataclass(frozen=True)
class Settings:
    preferences_path: str | None = None  # JSON preferences file; None = in-memory
    lang: str = "he"
    log_level: str = "WARNING"
    fallback_elevation: float = 0.0  # Metres, applied to the Jerusalem fallback
    polar_fallback: PolarFallback = PolarFallback.PROPAGATE

    @classmethod
    def from_env(cls) -> Settings:
        """Build Settings from IBIRKAT_* environment variables.

        Unknown languages and polar policies fall back to the defaults.
        """
        lang = os.environ.get("IBIRKAT_LANG", "he").strip().lower()
        if lang not in LANGUAGES:
            _LOGGER.warning("Unsupported IBIRKAT_LANG=%r, using he", lang)
            lang = "he"

        raw_polar = os.environ.get("IBIRKAT_POLAR_FALLBACK", PolarFallback.PROPAGATE.value)
        try:
            polar = PolarFallback(raw_polar.strip().lower())
        except ValueError:
            _LOGGER.warning("Unsupported IBIRKAT_POLAR_FALLBACK=%r", raw_polar)
            polar = PolarFallback.PROPAGATE

        return cls(
            preferences_path=os.environ.get("IBIRKAT_PREFERENCES_PATH") or None,
            lang=lang,
            log_level=os.environ.get("IBIRKAT_LOG_LEVEL", "WARNING").upper(),
            fallback_elevation=_float_env("IBIRKAT_FALLBACK_ELEVATION", 0.0),
            polar_fallback=polar,
        )
