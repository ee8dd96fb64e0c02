"""Simple two-language (he/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    # --- Special-day tags ---
    "tag_rosh_chodesh": {
        "he": "ראש חודש",
        "en": "Rosh Chodesh",
    },
    "tag_chol_hamoed_sukkot": {
        "he": "חול המועד סוכות",
        "en": "Chol HaMoed Sukkot",
    },
    "tag_chol_hamoed_pesach": {
        "he": "חול המועד פסח",
        "en": "Chol HaMoed Pesach",
    },
    "tag_chanukah": {
        "he": "חנוכה",
        "en": "Chanukah",
    },
    "tag_purim": {
        "he": "פורים",
        "en": "Purim",
    },
    "tag_shushan_purim": {
        "he": "שושן פורים",
        "en": "Shushan Purim",
    },
    "tag_purim_katan": {
        "he": "פורים קטן",
        "en": "Purim Katan",
    },
    "tag_shushan_purim_katan": {
        "he": "שושן פורים קטן",
        "en": "Shushan Purim Katan",
    },
    # --- Profiles ---
    "profile_sephardi": {
        "he": "עדות המזרח / ר׳ עובדיה",
        "en": "Sephardi / R. Ovadia",
    },
    "profile_ashkenazi": {
        "he": "אשכנז (ישיבתי)",
        "en": "Ashkenazi (yeshivish)",
    },
    "profile_chabad": {
        "he": "חב״ד",
        "en": "Chabad",
    },
    "profile_custom": {
        "he": "פרופיל מותאם אישית",
        "en": "Custom profile",
    },
    # --- Marker titles ---
    "marker_alos": {
        "he": "עלות השחר",
        "en": "Dawn (Alot HaShachar)",
    },
    "marker_tzitzitTefillin": {
        "he": "זמן ציצית ותפילין",
        "en": "Earliest tallit and tefillin",
    },
    "marker_netz": {
        "he": "הנץ החמה",
        "en": "Sunrise",
    },
    "marker_sofShma-MA": {
        "he": "סוף זמן קריאת שמע (מגן אברהם)",
        "en": "Latest Shema (Magen Avraham)",
    },
    "marker_sofShma-GRA": {
        "he": "סוף זמן קריאת שמע (גר״א ובעל התניא)",
        "en": "Latest Shema (Gra and Baal HaTanya)",
    },
    "marker_sofTfila-MA": {
        "he": "סוף זמן תפילה (מגן אברהם)",
        "en": "Latest Shacharit (Magen Avraham)",
    },
    "marker_sofTfila-GRA": {
        "he": "סוף זמן תפילה (גר״א ובעל התניא)",
        "en": "Latest Shacharit (Gra and Baal HaTanya)",
    },
    "marker_chatzot": {
        "he": "חצות היום",
        "en": "Midday",
    },
    "marker_minchaGedola": {
        "he": "מנחה גדולה",
        "en": "Earliest Mincha",
    },
    "marker_minchaKetana": {
        "he": "מנחה קטנה",
        "en": "Mincha Ketana",
    },
    "marker_plagHamincha": {
        "he": "פלג המנחה",
        "en": "Plag HaMincha",
    },
    "marker_candleLighting": {
        "he": "תוספת שבת/יו״ט",
        "en": "Candle lighting",
    },
    "marker_shekiya": {
        "he": "שקיעת החמה",
        "en": "Sunset",
    },
    "marker_night-GRA-3-4-mil": {
        "he": "לילה לגר״א - ג׳ רבעי מיל",
        "en": "Nightfall (Gra, three quarters of a mil)",
    },
    "marker_taaniyot-end": {
        "he": "לילה - גמר תעניות דרבנן",
        "en": "End of rabbinic fasts",
    },
    "marker_tzeit-3-stars": {
        "he": "צאת ג׳ כוכבים",
        "en": "Three stars",
    },
    "marker_night-RabbeinuTam": {
        "he": "לילה לרבינו תם - ד׳ מילין",
        "en": "Nightfall (Rabbeinu Tam)",
    },
    "marker_chatzotLayla": {
        "he": "חצות הלילה",
        "en": "Midnight",
    },
    # --- Marker subtitles ---
    "subtitle_sofShma-MA": {
        "he": "סוף ג׳ שעות זמניות",
        "en": "End of the third proportional hour",
    },
    "subtitle_sofTfila-MA": {
        "he": "סוף ד׳ שעות זמניות",
        "en": "End of the fourth proportional hour",
    },
    # --- Shabbat / Yom Tov block ---
    "special_shabbat": {
        "he": "ערב שבת",
        "en": "Erev Shabbat",
    },
    "special_yom_tov": {
        "he": "ערב חג",
        "en": "Erev Yom Tov",
    },
    "label_candle_lighting": {
        "he": "הדלקת נרות",
        "en": "Candle lighting",
    },
    "label_end_time": {
        "he": "צאת שבת / חג",
        "en": "Shabbat / Yom Tov ends",
    },
    "label_candle_offset": {
        "he": "{minutes} דק׳ לפני שקיעה",
        "en": "{minutes} min before sunset",
    },
    "label_proportional_hour": {
        "he": "שעה זמנית",
        "en": "Proportional hour",
    },
    "banner_erev_shabbat": {
        "he": "שבת שלום!",
        "en": "Shabbat Shalom!",
    },
    "banner_erev_yom_tov": {
        "he": "חג שמח!",
        "en": "Chag Sameach!",
    },
    "banner_shabbat": {
        "he": "שבת היום",
        "en": "Today is Shabbat",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'he', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("he") or key
