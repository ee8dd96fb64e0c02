"""Zmanim computation layer — one civil day at one place, fully resolved.

compute() is pure: location, date, profile and offsets in, ZmanimResult out.
run() is the top-level entry point that also resolves the address and reads
the stored preferences.
"""

import logging
from datetime import date, datetime, time, timedelta

from pytz import timezone

from ibirkat.catalog import GRA_DAY, build_catalog
from ibirkat.config import Settings
from ibirkat.evaluator import DayAnchors, evaluate, format_time, proportional_hour
from ibirkat.hebrew import DayRollover, civil_weekday, hebrew_date
from ibirkat.location import GeocodingError, fallback_location, resolve_location
from ibirkat.models import (
    GeoContext,
    HebrewDateInfo,
    MarkerResult,
    Profile,
    QueryInput,
    ReferenceEvent,
    SpecialDayKind,
    SpecialTimes,
    ZmanimResult,
)
from ibirkat.profiles import (
    CANDLE_OFFSETS,
    DEFAULT_CANDLE_OFFSET,
    DEFAULT_HAVDALAH_OFFSET,
    HAVDALAH_OFFSETS,
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    ProfileResolver,
    effective_opinion,
)
from ibirkat.solar import PolarFallback, SolarPositionCalculator
from ibirkat.special_days import hebrew_date_info

_LOGGER = logging.getLogger(__name__)


def annotate(
    instant: datetime,
    geo: GeoContext,
    rollover: DayRollover = DayRollover.FIXED_SHIFT,
    calculator: SolarPositionCalculator | None = None,
    lang: str = "he",
) -> HebrewDateInfo:
    """Hebrew date, special-day tags and Shabbat flags in force at an instant.

    Args:
        instant: Moment to annotate. Naive values are read as local time at geo.
        geo: Location; supplies the zone and, for DayRollover.SUNSET, the sunset.
        rollover: Evening rollover rule.
        calculator: Solar calculator for DayRollover.SUNSET.
        lang: Language for names and tags.

    Returns:
        HebrewDateInfo. Degrades to the "—" month text when the date cannot be resolved.
    """
    tz = timezone(geo.time_zone)
    local = tz.localize(instant) if instant.tzinfo is None else instant.astimezone(tz)
    try:
        resolved = hebrew_date(local, geo.time_zone, rollover, geo, calculator)
    except (ValueError, OverflowError) as e:
        _LOGGER.warning("Cannot resolve the Hebrew date of %s: %s", local, e)
        return hebrew_date_info(None, local.weekday(), lang)
    # Weekday of the rolled-over day, not of the instant
    return hebrew_date_info(resolved, civil_weekday(resolved), lang)


def special_times(
    day: date,
    geo: GeoContext,
    hebrew: HebrewDateInfo,
    candle_offset: int,
    havdalah_offset: int,
    anchors: DayAnchors,
) -> SpecialTimes | None:
    """Candle lighting and end time, only on Erev Shabbat or Erev Yom Tov.

    Candle lighting is the day's visible sunset minus candle_offset; the end
    time is the next civil day's visible sunset plus havdalah_offset.
    """
    if not (hebrew.is_erev_shabbat or hebrew.is_erev_yom_tov):
        return None

    kind = SpecialDayKind.SHABBAT if hebrew.is_erev_shabbat else SpecialDayKind.YOM_TOV
    sunset = anchors.get(ReferenceEvent.SUNSET)
    next_sunset = anchors.calculator.sunset(day + timedelta(days=1), geo)

    candle = sunset - timedelta(minutes=candle_offset) if sunset else None
    end = next_sunset + timedelta(minutes=havdalah_offset) if next_sunset else None
    return SpecialTimes(
        kind=kind,
        candle_lighting=candle,
        end_time=end,
        candle_offset=candle_offset,
        havdalah_offset=havdalah_offset,
        candle_lighting_text=format_time(candle, geo.time_zone),
        end_time_text=format_time(end, geo.time_zone),
    )


def compute(
    day: date,
    geo: GeoContext,
    profile: Profile = Profile.SEPHARDI,
    overrides: dict[str, str] | None = None,
    candle_offset: int = DEFAULT_CANDLE_OFFSET,
    havdalah_offset: int = DEFAULT_HAVDALAH_OFFSET,
    polar_fallback: PolarFallback = PolarFallback.PROPAGATE,
    lang: str = "he",
) -> ZmanimResult:
    """Compute every marker, the Hebrew date and the Shabbat block for one day.

    Args:
        day: Local civil date.
        geo: Resolved location.
        profile: Community profile.
        overrides: Custom picks (marker id → opinion id); read only under Custom.
        candle_offset: Minutes before sunset, one of CANDLE_OFFSETS.
        havdalah_offset: Minutes after sunset, one of HAVDALAH_OFFSETS.
        polar_fallback: What to do when the sun does not rise or set.
        lang: Language for titles, names and tags.

    Returns:
        Fully computed ZmanimResult.

    Raises:
        ValueError: If an offset is not one of the allowed values.
    """
    if candle_offset not in CANDLE_OFFSETS:
        raise ValueError(f"Candle lighting offset must be one of {CANDLE_OFFSETS}")
    if havdalah_offset not in HAVDALAH_OFFSETS:
        raise ValueError(f"Havdalah offset must be one of {HAVDALAH_OFFSETS}")

    calculator = SolarPositionCalculator(polar_fallback=polar_fallback)
    anchors = DayAnchors(day, geo, calculator)
    overrides = overrides or {}

    markers = []
    for marker in build_catalog(profile, lang):
        chosen = effective_opinion(marker.id, profile, overrides, marker)
        markers.append(
            MarkerResult(
                id=marker.id,
                title=marker.title,
                subtitle=marker.subtitle,
                opinions=evaluate(marker, geo, day, anchors=anchors),
                effective_opinion_id=chosen.id,
            )
        )

    # Civil-date query: annotate at local noon, so the evening rollover never applies
    noon = timezone(geo.time_zone).localize(datetime.combine(day, time(12, 0)))
    hebrew = annotate(noon, geo, calculator=calculator, lang=lang)

    return ZmanimResult(
        context=geo,
        day=day,
        profile=profile,
        markers=tuple(markers),
        hebrew=hebrew,
        special_times=special_times(
            day, geo, hebrew, candle_offset, havdalah_offset, anchors
        ),
        proportional_hour=proportional_hour(GRA_DAY, anchors),
    )


def open_store(settings: Settings) -> PreferenceStore:
    if settings.preferences_path:
        return JsonFilePreferenceStore(settings.preferences_path)
    return MemoryPreferenceStore()


def run(
    query: QueryInput,
    store: PreferenceStore | None = None,
    settings: Settings | None = None,
    elevation_m: float | None = None,
) -> ZmanimResult:
    """Top-level entry point: takes a QueryInput and returns a ZmanimResult.

    Args:
        query: User input (address, "YYYY-MM-DD" date).
        store: Preference store; opened from settings if None.
        settings: Runtime settings; read from the environment if None.
        elevation_m: Observer elevation; settings.fallback_elevation if None.

    Returns:
        Fully computed ZmanimResult. A failed lookup falls back to Jerusalem.
    """
    settings = settings or Settings.from_env()
    store = store if store is not None else open_store(settings)
    elevation = settings.fallback_elevation if elevation_m is None else elevation_m

    geo = fallback_location(elevation)
    if query.address:
        try:
            geo = resolve_location(query.address, elevation)
        except GeocodingError as e:
            _LOGGER.warning("Using the fallback location: %s", e)

    day = datetime.strptime(query.when, "%Y-%m-%d").date()
    resolver = ProfileResolver(store)
    return compute(
        day,
        geo,
        profile=resolver.profile,
        overrides=resolver.overrides(),
        candle_offset=resolver.candle_offset,
        havdalah_offset=resolver.havdalah_offset,
        polar_fallback=settings.polar_fallback,
        lang=settings.lang,
    )
