"""Special-day classification for a Hebrew date (Israel reckoning, single rule set)."""

import logging

from ibirkat.hebrew import (
    ADAR,
    ADAR_II,
    KISLEV,
    NISAN,
    SIVAN,
    TEVET,
    TISHREI,
    day_numeral,
    following_day,
    month_name,
    weekday_name,
)
from ibirkat.i18n import t
from ibirkat.models import UNAVAILABLE, DayClassification, HebrewDate, HebrewDateInfo

_LOGGER = logging.getLogger(__name__)

FRIDAY = 4  # date.weekday()
SHABBAT = 7  # HebrewDate.weekday

# (month, day) in Tishrei-first numbering. One-day festivals only.
YOM_TOV_DAYS: frozenset[tuple[int, int]] = frozenset(
    {
        (TISHREI, 1),  # Rosh HaShana
        (TISHREI, 2),
        (TISHREI, 10),  # Yom Kippur
        (TISHREI, 15),  # Sukkot
        (TISHREI, 22),  # Shmini Atzeret / Simchat Torah
        (NISAN, 15),  # Pesach, first day
        (NISAN, 21),  # Pesach, seventh day
        (SIVAN, 6),  # Shavuot
    }
)


def is_yom_tov(hebrew_date: HebrewDate) -> bool:
    return (hebrew_date.month, hebrew_date.day) in YOM_TOV_DAYS


def special_tags(hebrew_date: HebrewDate, lang: str = "he") -> tuple[str, ...]:
    """All matching special-day tags, in table order. Rules are independent."""
    month, day = hebrew_date.month, hebrew_date.day
    purim_month = ADAR_II if hebrew_date.is_leap_year else ADAR

    keys: list[str] = []
    if day in (1, 30):
        keys.append("tag_rosh_chodesh")
    if month == TISHREI and 16 <= day <= 21:
        keys.append("tag_chol_hamoed_sukkot")
    if month == NISAN and 16 <= day <= 20:
        keys.append("tag_chol_hamoed_pesach")
    if (month == KISLEV and day >= 25) or (month == TEVET and day <= 2):
        keys.append("tag_chanukah")
    if month == purim_month and day == 14:
        keys.append("tag_purim")
    if month == purim_month and day == 15:
        keys.append("tag_shushan_purim")
    if hebrew_date.is_leap_year and month == ADAR and day == 14:
        keys.append("tag_purim_katan")
    if hebrew_date.is_leap_year and month == ADAR and day == 15:
        keys.append("tag_shushan_purim_katan")

    return tuple(t(key, lang) for key in keys)


def classify(
    hebrew_date: HebrewDate, weekday: int, lang: str = "he"
) -> DayClassification:
    """Tag a Hebrew date and derive the Erev Shabbat / Erev Yom Tov / Shabbat flags.

    Args:
        hebrew_date: Date to classify.
        weekday: Gregorian weekday of the civil day, Python numbering (Monday=0, Friday=4).
        lang: Language for tag strings.

    Returns:
        DayClassification. Erev Shabbat is any Friday; Erev Yom Tov means the
        following Hebrew day is in YOM_TOV_DAYS; Shabbat is Hebrew weekday 7.
    """
    try:
        erev_yom_tov = is_yom_tov(following_day(hebrew_date))
    except ValueError as e:
        _LOGGER.warning("Cannot resolve the day after %s: %s", hebrew_date, e)
        erev_yom_tov = False

    return DayClassification(
        tags=special_tags(hebrew_date, lang),
        is_erev_shabbat=weekday == FRIDAY,
        is_erev_yom_tov=erev_yom_tov,
        is_shabbat=hebrew_date.weekday == SHABBAT,
    )


def hebrew_date_info(
    hebrew_date: HebrewDate | None, weekday: int, lang: str = "he"
) -> HebrewDateInfo:
    """Display-ready date with tags and flags.

    A date that could not be resolved degrades to the "—" month text with no
    numeral, tags or flags.
    """
    if hebrew_date is None:
        return HebrewDateInfo(day_numeral="", month_name=UNAVAILABLE, is_leap_year=False)

    classification = classify(hebrew_date, weekday, lang)
    return HebrewDateInfo(
        day_numeral=day_numeral(hebrew_date.day),
        month_name=month_name(hebrew_date.month, hebrew_date.is_leap_year, lang),
        is_leap_year=hebrew_date.is_leap_year,
        special_tags=classification.tags,
        is_erev_shabbat=classification.is_erev_shabbat,
        is_erev_yom_tov=classification.is_erev_yom_tov,
        is_shabbat=classification.is_shabbat,
        hebrew_date=hebrew_date,
        weekday_name=weekday_name(hebrew_date.weekday, lang),
    )
