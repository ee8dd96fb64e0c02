"""Unit tests for profile resolution and the preference stores.

Verifies Custom overrides, stale-id fallback, offset validation and the
atomic JSON file store."""

import json
import logging

import pytest

from ibirkat.catalog import build_catalog
from ibirkat.models import Profile
from ibirkat.profiles import (
    KEY_CANDLE_OFFSET,
    KEY_CUSTOM_MAP,
    KEY_PROFILE,
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    ProfileResolver,
    effective_opinion,
)


@pytest.fixture
def alos():
    """The dawn marker as the Sephardi catalog orders it."""
    return {m.id: m for m in build_catalog(Profile.SEPHARDI)}["alos"]


@pytest.fixture
def resolver():
    """Resolver over an empty in-memory store."""
    return ProfileResolver(MemoryPreferenceStore())


# pylint: disable=redefined-outer-name
def test_profile_default_ignores_overrides(alos):
    """Non-Custom profiles never read the override map."""
    overrides = {"alos": "alos-16.1"}
    assert effective_opinion("alos", Profile.SEPHARDI, overrides, alos).id == (
        "alos-72-fixed"
    )
    assert effective_opinion("alos", Profile.ASHKENAZI, overrides, alos).id == (
        "alos-72-zmaniyot"
    )


def test_custom_override(alos):
    """Custom shows the user's pick when it exists."""
    chosen = effective_opinion("alos", Profile.CUSTOM, {"alos": "alos-16.1"}, alos)
    assert chosen.id == "alos-16.1"


def test_stale_override_falls_back(alos):
    """An override naming no opinion yields the default, never an error."""
    chosen = effective_opinion("alos", Profile.CUSTOM, {"alos": "gone"}, alos)
    assert chosen.id == "alos-72-fixed"


def test_profile_round_trip(resolver):
    """The profile is stored under the app's key."""
    assert resolver.profile is Profile.SEPHARDI
    resolver.profile = Profile.CHABAD
    assert resolver.profile is Profile.CHABAD
    assert resolver.store.get(KEY_PROFILE) == "chabad"


def test_unknown_stored_profile():
    """An unknown selector string reads as Sephardi."""
    store = MemoryPreferenceStore({KEY_PROFILE: "karaite"})
    assert ProfileResolver(store).profile is Profile.SEPHARDI


def test_pick_requires_custom(resolver):
    """Picks outside Custom are refused and nothing is written."""
    assert resolver.pick_opinion("alos", "alos-16.1") is False
    assert resolver.store.get(KEY_CUSTOM_MAP) is None


def test_pick_and_profile_switch(resolver):
    """Switching profile keeps the Custom map untouched."""
    resolver.profile = Profile.CUSTOM
    assert resolver.pick_opinion("alos", "alos-16.1")
    resolver.pick_opinion("tzeit-3-stars", "tzeit-36")
    resolver.profile = Profile.ASHKENAZI
    resolver.profile = Profile.CUSTOM
    assert resolver.overrides() == {"alos": "alos-16.1", "tzeit-3-stars": "tzeit-36"}


def test_reset_to_defaults(resolver):
    """Reset clears every pick."""
    resolver.profile = Profile.CUSTOM
    resolver.pick_opinion("alos", "alos-16.1")
    resolver.reset_to_defaults()
    assert resolver.overrides() == {}


def test_unreadable_override_map():
    """A corrupt stored map reads as empty."""
    store = MemoryPreferenceStore({KEY_CUSTOM_MAP: "{not json"})
    assert ProfileResolver(store).overrides() == {}


def test_offsets(resolver):
    """Offsets default to 18 / 40 and only accept the listed values."""
    assert resolver.candle_offset == 18
    assert resolver.havdalah_offset == 40
    resolver.candle_offset = 40
    resolver.havdalah_offset = 72
    assert resolver.candle_offset == 40
    assert resolver.havdalah_offset == 72
    with pytest.raises(ValueError):
        resolver.candle_offset = 20
    with pytest.raises(ValueError):
        resolver.havdalah_offset = 50


def test_stored_offset_garbage():
    """Stored values outside the allowed sets read as the default."""
    store = MemoryPreferenceStore({KEY_CANDLE_OFFSET: "abc"})
    assert ProfileResolver(store).candle_offset == 18
    store.set(KEY_CANDLE_OFFSET, "25")
    assert ProfileResolver(store).candle_offset == 18


def test_json_store_round_trip(tmp_path):
    """Values written by one store instance are read by another."""
    path = tmp_path / "prefs" / "settings.json"
    first = ProfileResolver(JsonFilePreferenceStore(path))
    first.profile = Profile.CUSTOM
    first.pick_opinion("alos", "alos-19.75")

    second = ProfileResolver(JsonFilePreferenceStore(path))
    assert second.profile is Profile.CUSTOM
    assert second.overrides() == {"alos": "alos-19.75"}
    assert json.loads(path.read_text(encoding="utf-8"))[KEY_PROFILE] == "custom"


def test_json_store_leaves_no_temp_files(tmp_path):
    """Atomic writes leave only the target file behind."""
    store = JsonFilePreferenceStore(tmp_path / "settings.json")
    store.set("a", "1")
    store.set("b", "2")
    store.delete("a")
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]
    assert store.get("a") is None
    assert store.get("b") == "2"


def test_json_store_missing_file(tmp_path):
    """A missing file reads as empty."""
    assert JsonFilePreferenceStore(tmp_path / "none.json").get("x") is None


def test_json_store_corrupt_file(tmp_path, caplog):
    """A corrupt file reads as empty and is reported as a warning."""
    path = tmp_path / "settings.json"
    path.write_text("{broken", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="ibirkat.profiles"):
        assert JsonFilePreferenceStore(path).get(KEY_PROFILE) is None
    assert "Unreadable preferences file" in caplog.text
