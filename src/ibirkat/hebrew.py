"""Hebrew calendar conversion — Gregorian instant to Hebrew date, numerals and names.

pyluach numbers months from Nisan (1) with Adar I / Adar II as 12 / 13. This
module exposes the Tishrei-first numbering instead, where Adar (Adar I in a
leap year) is 6, Adar II is 7 and Nisan is always 8, so special-day rules do
not depend on the year type.
"""

import logging
from datetime import date, datetime, timedelta
from enum import Enum

from pyluach.dates import HebrewDate as PHebrewDate
from pyluach.hebrewcal import Year as PYear
from pytz import timezone

from ibirkat.models import GeoContext, HebrewDate
from ibirkat.solar import SolarPositionCalculator

_LOGGER = logging.getLogger(__name__)

TISHREI = 1
KISLEV = 3
TEVET = 4
ADAR = 6  # Adar I in a leap year
ADAR_II = 7
NISAN = 8
SIVAN = 10

EVENING_SHIFT = timedelta(hours=6)

_UNITS = ("", "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט")
_TENS = ("", "י", "כ", "ל", "מ", "נ", "ס", "ע", "פ", "צ")
_GERESH = "׳"
_GERSHAYIM = "״"

_MONTH_NAMES: dict[str, dict[int, str]] = {
    "he": {
        1: "תשרי",
        2: "חשוון",
        3: "כסלו",
        4: "טבת",
        5: "שבט",
        6: "אדר",
        7: "אדר ב׳",
        8: "ניסן",
        9: "אייר",
        10: "סיוון",
        11: "תמוז",
        12: "אב",
        13: "אלול",
    },
    "en": {
        1: "Tishrei",
        2: "Cheshvan",
        3: "Kislev",
        4: "Tevet",
        5: "Shevat",
        6: "Adar",
        7: "Adar II",
        8: "Nisan",
        9: "Iyar",
        10: "Sivan",
        11: "Tammuz",
        12: "Av",
        13: "Elul",
    },
}
_ADAR_I = {"he": "אדר א׳", "en": "Adar I"}

_WEEKDAY_NAMES: dict[str, tuple[str, ...]] = {
    "he": (
        "יום ראשון",
        "יום שני",
        "יום שלישי",
        "יום רביעי",
        "יום חמישי",
        "יום שישי",
        "שבת",
    ),
    "en": (
        "Sunday",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Shabbat",
    ),
}


class DayRollover(str, Enum):
    """Rule deciding when the evening already belongs to the next Hebrew day."""

    # Add 6 hours before converting: after ~18:00 local the next day has begun.
    # An approximation; the default.
    FIXED_SHIFT = "fixed_shift"
    # Next day from the computed visible sunset of the given location.
    SUNSET = "sunset"


def _to_civil_month(pyluach_month: int) -> int:
    return pyluach_month - 6 if pyluach_month >= 7 else pyluach_month + 7


def _to_pyluach_month(civil_month: int) -> int:
    return civil_month + 6 if civil_month <= 7 else civil_month - 7


def is_leap_year(year: int) -> bool:
    """True when the Hebrew year has 13 months."""
    return bool(PYear(year).leap)


def _from_pyluach(hd: PHebrewDate) -> HebrewDate:
    return HebrewDate(
        year=hd.year,
        month=_to_civil_month(hd.month),
        day=hd.day,
        is_leap_year=is_leap_year(hd.year),
        weekday=hd.weekday(),
    )


def from_civil_date(day: date) -> HebrewDate:
    """Hebrew date whose daytime falls on the civil date `day`."""
    return _from_pyluach(PHebrewDate.from_pydate(day))


def make_hebrew_date(year: int, month: int, day: int) -> HebrewDate:
    """Build a HebrewDate from Tishrei-first components. Raises ValueError if invalid."""
    if month == ADAR_II and not is_leap_year(year):
        raise ValueError(f"Adar II does not exist in {year}")
    return _from_pyluach(PHebrewDate(year, _to_pyluach_month(month), day))


def to_civil_date(hebrew_date: HebrewDate) -> date:
    hd = PHebrewDate(
        hebrew_date.year, _to_pyluach_month(hebrew_date.month), hebrew_date.day
    )
    return hd.to_pydate()


def following_day(hebrew_date: HebrewDate) -> HebrewDate:
    """The next Hebrew calendar day."""
    hd = PHebrewDate(
        hebrew_date.year, _to_pyluach_month(hebrew_date.month), hebrew_date.day
    )
    return _from_pyluach(hd + 1)


def _civil_day_of(
    instant: datetime,
    time_zone: str,
    rollover: DayRollover,
    geo: GeoContext | None,
    calculator: SolarPositionCalculator | None,
) -> date:
    tz = timezone(time_zone)
    local = tz.localize(instant) if instant.tzinfo is None else instant.astimezone(tz)

    if rollover is DayRollover.SUNSET and geo is not None:
        calc = calculator or SolarPositionCalculator()
        sunset = calc.sunset(local.date(), geo)
        if sunset is not None:
            return local.date() + timedelta(days=1) if local >= sunset else local.date()
        _LOGGER.debug("No sunset on %s, using the fixed evening shift", local.date())

    return (local + EVENING_SHIFT).date()


def hebrew_date(
    instant: datetime,
    time_zone: str,
    rollover: DayRollover = DayRollover.FIXED_SHIFT,
    geo: GeoContext | None = None,
    calculator: SolarPositionCalculator | None = None,
) -> HebrewDate:
    """Convert an instant to the Hebrew date in force at that moment.

    The evening rollover follows `rollover`. With the default fixed shift the
    instant is moved forward 6 hours before conversion, so 18:00 local and
    later counts as the next Hebrew day. DayRollover.SUNSET uses the visible
    sunset of `geo` instead and needs a location.

    Args:
        instant: Moment to convert. Naive values are read as local time in time_zone.
        time_zone: IANA zone used to find the local civil day.
        rollover: Evening rollover rule.
        geo: Location for DayRollover.SUNSET; ignored otherwise.
        calculator: Calculator for DayRollover.SUNSET; a default one is used if None.

    Returns:
        HebrewDate in Tishrei-first numbering.
    """
    return from_civil_date(_civil_day_of(instant, time_zone, rollover, geo, calculator))


def day_numeral(n: int) -> str:
    """Hebrew letter numeral for a day of month (1..30): א׳, י״ד, ט״ו, כ״ט."""
    if n == 15:
        return "ט" + _GERSHAYIM + "ו"
    if n == 16:
        return "ט" + _GERSHAYIM + "ז"

    letters = [
        letter for letter in (_TENS[(n // 10) % 10], _UNITS[n % 10]) if letter
    ]
    if not letters:
        return ""
    if len(letters) == 1:
        return letters[0] + _GERESH
    return "".join(letters[:-1]) + _GERSHAYIM + letters[-1]


def month_name(month: int, leap_year: bool, lang: str = "he") -> str:
    """Month name in Tishrei-first numbering; month 6 reads "Adar I" in leap years."""
    lang = lang if lang in _MONTH_NAMES else "he"
    if month == ADAR and leap_year:
        return _ADAR_I[lang]
    return _MONTH_NAMES[lang].get(month, "")


def civil_weekday(hebrew_date: HebrewDate) -> int:
    """Python weekday (Monday=0) of the civil day the Hebrew date was read from."""
    return (hebrew_date.weekday - 2) % 7


def weekday_name(hebrew_weekday: int, lang: str = "he") -> str:
    """1 (Sunday) .. 7 (Shabbat) → display name."""
    names = _WEEKDAY_NAMES.get(lang, _WEEKDAY_NAMES["he"])
    return names[(hebrew_weekday - 1) % 7]
