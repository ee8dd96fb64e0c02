"""Unit tests for the marker catalog and its profile orderings."""

import pytest

from ibirkat.catalog import build_catalog, marker_ids, order_for_profile
from ibirkat.models import MarkerDefinition, Profile

EXPECTED_IDS = (
    "alos",
    "tzitzitTefillin",
    "netz",
    "sofShma-MA",
    "sofShma-GRA",
    "sofTfila-MA",
    "sofTfila-GRA",
    "chatzot",
    "minchaGedola",
    "minchaKetana",
    "plagHamincha",
    "candleLighting",
    "shekiya",
    "night-GRA-3-4-mil",
    "taaniyot-end",
    "tzeit-3-stars",
    "night-RabbeinuTam",
    "chatzotLayla",
)


def _by_id(profile):
    return {marker.id: marker for marker in build_catalog(profile)}


def _ids(marker):
    return [opinion.id for opinion in marker.opinions]


def test_marker_order():
    """Markers are listed in chronological display order."""
    assert marker_ids() == EXPECTED_IDS
    assert tuple(m.id for m in build_catalog()) == EXPECTED_IDS


def test_opinion_ids_are_unique():
    """No opinion id is shared between markers."""
    ids = [opinion.id for marker in build_catalog() for opinion in marker.opinions]
    assert len(ids) == len(set(ids))


@pytest.mark.parametrize("profile", list(Profile))
def test_profiles_only_reorder(profile):
    """Every profile sees the same opinions, only in a different order."""
    base = _by_id(Profile.SEPHARDI)
    for marker_id, marker in _by_id(profile).items():
        assert sorted(_ids(marker)) == sorted(_ids(base[marker_id]))


def test_alos_defaults():
    """Sephardi defaults to 72 fixed minutes, Ashkenazi and Chabad to 72 proportional."""
    assert _by_id(Profile.SEPHARDI)["alos"].default_opinion.id == "alos-72-fixed"
    assert _by_id(Profile.ASHKENAZI)["alos"].default_opinion.id == "alos-72-zmaniyot"
    assert _by_id(Profile.CHABAD)["alos"].default_opinion.id == "alos-72-zmaniyot"
    assert _ids(_by_id(Profile.ASHKENAZI)["alos"]) == [
        "alos-72-zmaniyot",
        "alos-72-fixed",
        "alos-90-zmaniyot",
        "alos-16.1",
        "alos-19.75",
    ]


def test_tzitzit_order():
    """11° leads for Sephardim, 11.5° for Ashkenazim."""
    assert _ids(_by_id(Profile.SEPHARDI)["tzitzitTefillin"]) == [
        "tzitzit-11",
        "tzitzit-11.5",
        "tzitzit-10.2",
    ]
    assert _ids(_by_id(Profile.ASHKENAZI)["tzitzitTefillin"]) == [
        "tzitzit-11.5",
        "tzitzit-11",
        "tzitzit-10.2",
    ]


def test_chabad_night():
    """Chabad takes 24 minutes for the Gra's nightfall."""
    marker = _by_id(Profile.CHABAD)["night-GRA-3-4-mil"]
    assert marker.default_opinion.id == "night-GRA-24"
    assert _by_id(Profile.SEPHARDI)["night-GRA-3-4-mil"].default_opinion.id == (
        "night-GRA-13.5"
    )


def test_custom_starts_from_sephardi():
    """The Custom ordering is the Sephardi one."""
    sephardi = _by_id(Profile.SEPHARDI)
    for marker_id, marker in _by_id(Profile.CUSTOM).items():
        assert _ids(marker) == _ids(sephardi[marker_id])


def test_magen_avraham_markers():
    """Magen Avraham markers carry four days and a subtitle."""
    marker = _by_id(Profile.SEPHARDI)["sofShma-MA"]
    assert marker.default_opinion.id == "sofShma-MA-72-fixed"
    assert len(marker.opinions) == 4
    assert marker.subtitle == "סוף ג׳ שעות זמניות"
    assert _by_id(Profile.SEPHARDI)["sofShma-GRA"].subtitle is None


def test_single_opinion_markers():
    """Gra Shema, Gra Tefila and midday have exactly one opinion."""
    catalog = _by_id(Profile.SEPHARDI)
    for marker_id in ("sofShma-GRA", "sofTfila-GRA", "chatzot"):
        assert len(catalog[marker_id].opinions) == 1


def test_english_titles():
    """Titles follow the requested language."""
    catalog = {m.id: m for m in build_catalog(Profile.SEPHARDI, "en")}
    assert catalog["shekiya"].title == "Sunset"


def test_order_for_profile_keeps_unknown_ids():
    """Preferred ids missing from the list are skipped without error."""
    marker = _by_id(Profile.SEPHARDI)["netz"]
    assert order_for_profile("netz", marker.opinions, Profile.CHABAD) == marker.opinions


def test_empty_marker_gets_placeholder():
    """A marker without opinions still has one selectable placeholder."""
    marker = MarkerDefinition(id="empty", title="Empty", opinions=())
    assert len(marker.opinions) == 1
    assert marker.default_opinion.label == "—"
    assert marker.default_opinion.rule is None
