"""Profile resolution and preference persistence.

A profile decides which opinion of each marker is shown. Under the Custom
profile the user's per-marker picks override the defaults; the pick map is
persisted under the same keys the mobile app used.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

from ibirkat.catalog import order_for_profile
from ibirkat.models import MarkerDefinition, OpinionDefinition, Profile

_LOGGER = logging.getLogger(__name__)

KEY_PROFILE = "halachicProfile"
KEY_CANDLE_OFFSET = "candleLightingOffset"
KEY_HAVDALAH_OFFSET = "havdalahOffset"
KEY_CUSTOM_MAP = "customOpinionMap"

CANDLE_OFFSETS = (18, 24, 30, 40)
HAVDALAH_OFFSETS = (34, 36, 40, 72)
DEFAULT_CANDLE_OFFSET = 18
DEFAULT_HAVDALAH_OFFSET = 40


class PreferenceStore(Protocol):
    """String key/value store. Missing keys read as None."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryPreferenceStore:
    """In-process store, for tests and one-shot CLI runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFilePreferenceStore:
    """Preferences in a single JSON object on disk.

    Writes go to a temp file in the same directory and are moved into place
    with os.replace, so readers see either the old or the new file. A lock
    serialises writers within the process.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            _LOGGER.warning("Unreadable preferences file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            _LOGGER.warning("Preferences file %s is not a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._save(data)


def effective_opinion(
    marker_id: str,
    profile: Profile,
    overrides: dict[str, str],
    marker: MarkerDefinition,
) -> OpinionDefinition:
    """Pick the opinion shown for a marker.

    Args:
        marker_id: Marker being resolved.
        profile: Active profile.
        overrides: Custom picks, marker id → opinion id. Only read under Custom.
        marker: Catalog entry; its own ordering is not trusted, the profile's is applied.

    Returns:
        The override when profile is Custom and it names an existing opinion,
        otherwise the profile's preferred opinion. Never raises.
    """
    if profile is Profile.CUSTOM:
        chosen = overrides.get(marker_id)
        if chosen is not None:
            opinion = marker.opinion(chosen)
            if opinion is not None:
                return opinion
            _LOGGER.debug("Ignoring stale override %s for %s", chosen, marker_id)
    return order_for_profile(marker_id, marker.opinions, profile)[0]


def _parse_offset(raw: str | None, allowed: tuple[int, ...], default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value in allowed else default


class ProfileResolver:
    """Profile, Custom picks and Shabbat offsets on top of a PreferenceStore."""

    def __init__(self, store: PreferenceStore) -> None:
        self.store = store

    @property
    def profile(self) -> Profile:
        return Profile.parse(self.store.get(KEY_PROFILE))

    @profile.setter
    def profile(self, value: Profile) -> None:
        # Switching profile leaves the Custom map untouched
        self.store.set(KEY_PROFILE, Profile(value).value)

    def overrides(self) -> dict[str, str]:
        raw = self.store.get(KEY_CUSTOM_MAP)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            _LOGGER.warning("Discarding unreadable custom opinion map: %s", e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def pick_opinion(self, marker_id: str, opinion_id: str) -> bool:
        """Record a Custom pick. Returns False (and writes nothing) outside Custom."""
        if self.profile is not Profile.CUSTOM:
            return False
        overrides = self.overrides()
        overrides[marker_id] = opinion_id
        self.store.set(KEY_CUSTOM_MAP, json.dumps(overrides, ensure_ascii=False))
        return True

    def reset_to_defaults(self) -> None:
        """Forget every Custom pick; Custom then shows the Sephardi defaults."""
        self.store.delete(KEY_CUSTOM_MAP)

    @property
    def candle_offset(self) -> int:
        return _parse_offset(
            self.store.get(KEY_CANDLE_OFFSET), CANDLE_OFFSETS, DEFAULT_CANDLE_OFFSET
        )

    @candle_offset.setter
    def candle_offset(self, minutes: int) -> None:
        if minutes not in CANDLE_OFFSETS:
            raise ValueError(f"Candle lighting offset must be one of {CANDLE_OFFSETS}")
        self.store.set(KEY_CANDLE_OFFSET, str(minutes))

    @property
    def havdalah_offset(self) -> int:
        return _parse_offset(
            self.store.get(KEY_HAVDALAH_OFFSET),
            HAVDALAH_OFFSETS,
            DEFAULT_HAVDALAH_OFFSET,
        )

    @havdalah_offset.setter
    def havdalah_offset(self, minutes: int) -> None:
        if minutes not in HAVDALAH_OFFSETS:
            raise ValueError(f"Havdalah offset must be one of {HAVDALAH_OFFSETS}")
        self.store.set(KEY_HAVDALAH_OFFSET, str(minutes))
