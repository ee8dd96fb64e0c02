"""Unit tests for the Hebrew calendar converter.

Verifies the Tishrei-first month numbering, leap-year handling, the evening
rollover rules and letter-numeral formatting."""

from datetime import date, datetime, timedelta

import pytest
from pytz import utc

from ibirkat.hebrew import (
    ADAR,
    ADAR_II,
    DayRollover,
    civil_weekday,
    day_numeral,
    following_day,
    from_civil_date,
    hebrew_date,
    is_leap_year,
    make_hebrew_date,
    month_name,
    to_civil_date,
    weekday_name,
)

JERUSALEM_TZ = "Asia/Jerusalem"


@pytest.mark.parametrize(
    "civil, expected",
    [
        (date(2024, 3, 24), (5784, ADAR_II, 14)),  # Purim in a leap year
        (date(2024, 2, 23), (5784, ADAR, 14)),  # Purim Katan
        (date(2025, 3, 14), (5785, ADAR, 14)),  # Purim in a common year
        (date(2024, 10, 3), (5785, 1, 1)),  # Rosh HaShana
        (date(2024, 4, 9), (5784, 8, 1)),  # 1 Nisan
        (date(2024, 12, 26), (5785, 3, 25)),  # 25 Kislev
    ],
)
def test_from_civil_date(civil, expected):
    """Known civil dates map to the expected Tishrei-first Hebrew dates."""
    hd = from_civil_date(civil)
    assert (hd.year, hd.month, hd.day) == expected


def test_leap_years():
    """5784 has thirteen months, 5785 twelve."""
    assert is_leap_year(5784)
    assert not is_leap_year(5785)
    assert from_civil_date(date(2024, 3, 24)).is_leap_year


def test_weekday_numbering():
    """Weekday runs 1 (Sunday) to 7 (Shabbat)."""
    assert from_civil_date(date(2024, 3, 24)).weekday == 1
    assert from_civil_date(date(2025, 3, 15)).weekday == 7


def test_adar_ii_rejected_in_common_year():
    """Adar II does not exist in a non-leap year."""
    with pytest.raises(ValueError):
        make_hebrew_date(5785, ADAR_II, 1)


def test_to_civil_date():
    """Converting back lands on the original civil date."""
    assert to_civil_date(make_hebrew_date(5784, ADAR_II, 14)) == date(2024, 3, 24)
    assert to_civil_date(make_hebrew_date(5785, 8, 15)) == date(2025, 4, 13)


def test_following_day_crosses_year():
    """The day after 29 Elul is 1 Tishrei of the next year."""
    nxt = following_day(make_hebrew_date(5784, 13, 29))
    assert (nxt.year, nxt.month, nxt.day) == (5785, 1, 1)


def test_fixed_shift_rollover():
    """With the default rule, 18:00 local and later is already the next day."""
    before = hebrew_date(datetime(2024, 3, 23, 17, 0), JERUSALEM_TZ)
    after = hebrew_date(datetime(2024, 3, 23, 18, 30), JERUSALEM_TZ)
    assert before.day == 13
    assert after.day == 14
    assert after.month == ADAR_II


def test_aware_instant_is_converted_to_local_time():
    """An aware UTC instant is read in the location's zone before rolling over."""
    hd = hebrew_date(datetime(2024, 3, 23, 16, 30, tzinfo=utc), JERUSALEM_TZ)
    assert hd.day == 14


def test_sunset_rollover(jerusalem):
    """The sunset rule keeps 19:30 on the same day in June; the shift does not."""
    instant = datetime(2024, 6, 21, 19, 30)
    shifted = hebrew_date(instant, JERUSALEM_TZ)
    by_sunset = hebrew_date(instant, JERUSALEM_TZ, DayRollover.SUNSET, jerusalem)
    assert by_sunset.day == 15
    assert shifted.day == 16

    after_sunset = hebrew_date(
        datetime(2024, 6, 21, 20, 0), JERUSALEM_TZ, DayRollover.SUNSET, jerusalem
    )
    assert after_sunset.day == 16


def test_sunset_rollover_without_sunset_uses_shift(tromso):
    """With no sunset that day the sunset rule falls back to the fixed shift."""
    instant = datetime(2024, 6, 21, 19, 0)
    assert hebrew_date(instant, "Europe/Oslo", DayRollover.SUNSET, tromso) == (
        hebrew_date(instant, "Europe/Oslo")
    )


@pytest.mark.parametrize(
    "n, expected",
    [
        (1, "א׳"),
        (9, "ט׳"),
        (10, "י׳"),
        (11, "י״א"),
        (14, "י״ד"),
        (15, "ט״ו"),
        (16, "ט״ז"),
        (20, "כ׳"),
        (29, "כ״ט"),
        (30, "ל׳"),
    ],
)
def test_day_numeral(n, expected):
    """Geresh after a single letter, gershayim before the last of several."""
    assert day_numeral(n) == expected


def test_day_numeral_avoids_divine_names():
    """15 and 16 are never spelled with yod-he or yod-vav."""
    for n in range(1, 31):
        plain = day_numeral(n).replace("׳", "").replace("״", "")
        assert plain not in ("יה", "יו")


def test_month_names():
    """Month 6 reads Adar I only in leap years."""
    assert month_name(ADAR, False) == "אדר"
    assert month_name(ADAR, True) == "אדר א׳"
    assert month_name(ADAR_II, True) == "אדר ב׳"
    assert month_name(8, False) == "ניסן"
    assert month_name(ADAR, True, "en") == "Adar I"
    assert month_name(1, False, "xx") == "תשרי"


def test_weekday_names():
    """Hebrew weekday 7 is Shabbat in both languages."""
    assert weekday_name(7) == "שבת"
    assert weekday_name(1, "en") == "Sunday"


def test_civil_weekday():
    """Hebrew weekday maps back to the Python weekday of the same civil day."""
    for offset in range(7):
        civil = date(2024, 6, 16) + timedelta(days=offset)
        assert civil_weekday(from_civil_date(civil)) == civil.weekday()
