"""Marker catalog — every named zman and the opinions that compute it.

Catalog construction is profile-parameterised: each profile moves its
preferred opinions to the front of a marker's list, so the first opinion is
always the one a profile shows before any user pick. The Custom profile
starts from the Sephardi ordering, which is also what a reset restores.
"""

from ibirkat.i18n import t
from ibirkat.models import (
    DaySpan,
    Degrees,
    FixedMinutes,
    MarkerDefinition,
    OpinionDefinition,
    Profile,
    ProportionalHours,
)
from ibirkat.models import ReferenceEvent as Ev

# --- Day spans ---

GRA_DAY = DaySpan("gra", FixedMinutes(Ev.SUNRISE, 0), FixedMinutes(Ev.SUNSET, 0))
MGA_72_FIXED = DaySpan(
    "mga-72-fixed", FixedMinutes(Ev.DAWN, 0), FixedMinutes(Ev.DUSK, 0)
)
MGA_72_ZMANIYOT = DaySpan(
    "mga-72-zmaniyot",
    ProportionalHours(GRA_DAY, -1.2, Ev.SUNRISE),
    ProportionalHours(GRA_DAY, 1.2, Ev.SUNSET),
)
MGA_90_ZMANIYOT = DaySpan(
    "mga-90-zmaniyot",
    ProportionalHours(GRA_DAY, -1.5, Ev.SUNRISE),
    ProportionalHours(GRA_DAY, 1.5, Ev.SUNSET),
)
MGA_16_1 = DaySpan(
    "mga-16.1", Degrees(16.1, morning=True), Degrees(16.1, morning=False)
)
NIGHT = DaySpan(
    "night", FixedMinutes(Ev.SUNSET, 0), FixedMinutes(Ev.NEXT_SUNRISE, 0)
)

_MGA_DAYS = (
    (
        "90-zmaniyot",
        MGA_90_ZMANIYOT,
        "לפי 90 דקות בזמניות",
        "תחילת היום 90 דקות זמניות קודם הנץ",
    ),
    (
        "72-fixed",
        MGA_72_FIXED,
        "לפי 72 דקות שוות",
        "תחילת היום 72 דקות קבועות קודם הנץ",
    ),
    (
        "72-zmaniyot",
        MGA_72_ZMANIYOT,
        "לפי 72 דקות בזמניות",
        "תחילת היום 72 דקות זמניות קודם הנץ",
    ),
    (
        "16.1",
        MGA_16_1,
        "לפי 16.1 מעלות",
        "מעלות השחר בשיעור 16.1° ועד צאת הכוכבים בשיעור 16.1°",
    ),
)


def _mga(prefix: str, hours: float) -> tuple[OpinionDefinition, ...]:
    return tuple(
        OpinionDefinition(
            id=f"{prefix}-{suffix}",
            label=label,
            rule=ProportionalHours(span, hours),
            detail=detail,
        )
        for suffix, span, label, detail in _MGA_DAYS
    )


def _after_sunset(opinion_id: str, minutes: float, label: str) -> OpinionDefinition:
    return OpinionDefinition(opinion_id, label, FixedMinutes(Ev.SUNSET, minutes))


# Canonical (Sephardi) order. marker id → opinions.
_MARKERS: tuple[tuple[str, tuple[OpinionDefinition, ...]], ...] = (
    (
        "alos",
        (
            OpinionDefinition(
                "alos-72-fixed",
                "72 דקות שוות קודם הנץ",
                FixedMinutes(Ev.SUNRISE, -72),
                "72 דקות קבועות לפני הנץ",
            ),
            OpinionDefinition(
                "alos-72-zmaniyot",
                "72 דקות בזמניות (≈16.1°) קודם הנץ",
                ProportionalHours(GRA_DAY, -1.2, Ev.SUNRISE),
                "1.2 שעות זמניות לפני הנץ",
            ),
            OpinionDefinition(
                "alos-90-zmaniyot",
                "90 דקות בזמניות קודם הנץ",
                ProportionalHours(GRA_DAY, -1.5, Ev.SUNRISE),
                "1.5 שעות זמניות לפני הנץ",
            ),
            OpinionDefinition(
                "alos-16.1",
                "16.1 מעלות תחת האופק",
                Degrees(16.1, morning=True),
                "עלות לפי 16.1° מתחת לאופק",
            ),
            OpinionDefinition(
                "alos-19.75",
                "19.75 מעלות תחת האופק",
                Degrees(19.75, morning=True),
                "90 דקות במעלות",
            ),
        ),
    ),
    (
        "tzitzitTefillin",
        (
            OpinionDefinition("tzitzit-11", "11 מעלות תחת האופק", Degrees(11.0, morning=True)),
            OpinionDefinition("tzitzit-11.5", "11.5 מעלות תחת האופק", Degrees(11.5, morning=True)),
            OpinionDefinition(
                "tzitzit-10.2",
                "10.2 מעלות תחת האופק",
                Degrees(10.2, morning=True),
                "לחומרא",
            ),
        ),
    ),
    (
        "netz",
        (
            OpinionDefinition(
                "netz-sea",
                "מישור בגובה פני הים",
                FixedMinutes(Ev.SEA_LEVEL_SUNRISE, 0),
                "זריחת השמש על קו האופק בגובה פני הים",
            ),
            OpinionDefinition(
                "netz-visible",
                "הנץ הנראה לפי גובה המקום",
                FixedMinutes(Ev.SUNRISE, 0),
                "כולל שקיעת האופק בגלל הגובה",
            ),
        ),
    ),
    ("sofShma-MA", _mga("sofShma-MA", 3)),
    (
        "sofShma-GRA",
        (
            OpinionDefinition(
                "sofShma-GRA-main",
                "ג׳ שעות זמניות מן הנץ",
                ProportionalHours(GRA_DAY, 3),
                "סוף ג׳ שעות זמניות מהנץ עד השקיעה",
            ),
        ),
    ),
    ("sofTfila-MA", _mga("sofTfila-MA", 4)),
    (
        "sofTfila-GRA",
        (
            OpinionDefinition(
                "sofTfila-GRA-main",
                "ד׳ שעות זמניות מן הנץ",
                ProportionalHours(GRA_DAY, 4),
                "סוף ד׳ שעות זמניות מהנץ עד השקיעה",
            ),
        ),
    ),
    (
        "chatzot",
        (
            OpinionDefinition(
                "chatzot-main",
                "אמצע היום ההלכתי",
                ProportionalHours(GRA_DAY, 6),
                "אמצע הזמן בין הנץ לשקיעה",
            ),
        ),
    ),
    (
        "minchaGedola",
        (
            OpinionDefinition(
                "minchaG-GRA",
                "גר״א ובעל התניא",
                ProportionalHours(GRA_DAY, 6.5),
                "חצי שעה זמנית אחרי חצות",
            ),
            OpinionDefinition(
                "minchaG-MA-72-fixed",
                "לחומרא (מגן אברהם, 30 דקות שוות אחר חצות)",
                FixedMinutes(Ev.MIDDAY, 30),
                "זמן לכתחילה למנחה",
            ),
        ),
    ),
    (
        "minchaKetana",
        (
            OpinionDefinition(
                "minchaK-GRA",
                "גר״א ובעל התניא",
                ProportionalHours(GRA_DAY, 9.5),
                "תשע שעות ומחצה זמניות",
            ),
            OpinionDefinition(
                "minchaK-MA-72-fixed",
                "מגן אברהם (72 דקות שוות)",
                ProportionalHours(MGA_72_FIXED, 9.5),
            ),
        ),
    ),
    (
        "plagHamincha",
        (
            OpinionDefinition(
                "plag-GRA",
                "גר״א ובעל התניא",
                ProportionalHours(GRA_DAY, 10.75),
                "פלג לפי הגר״א",
            ),
            OpinionDefinition(
                "plag-MA-72-fixed",
                "מגן אברהם (72 דקות שוות)",
                ProportionalHours(MGA_72_FIXED, 10.75),
                "פלג לפי מג״א",
            ),
        ),
    ),
    (
        "candleLighting",
        (
            OpinionDefinition(
                "candle-18",
                "18 דקות לפני השקיעה",
                FixedMinutes(Ev.SUNSET, -18),
                "מנהג רוב הקהילות",
            ),
            OpinionDefinition("candle-24", "24 דקות לפני השקיעה", FixedMinutes(Ev.SUNSET, -24)),
            OpinionDefinition("candle-30", "30 דקות לפני השקיעה", FixedMinutes(Ev.SUNSET, -30)),
            OpinionDefinition(
                "candle-40",
                "40 דקות לפני השקיעה",
                FixedMinutes(Ev.SUNSET, -40),
                "מנהג ירושלים",
            ),
        ),
    ),
    (
        "shekiya",
        (
            OpinionDefinition(
                "shekiya-sea",
                "מישור בגובה פני הים",
                FixedMinutes(Ev.SEA_LEVEL_SUNSET, 0),
                "שקיעה בגובה פני הים",
            ),
            OpinionDefinition(
                "shekiya-visible",
                "השקיעה הנראית לפי גובה המקום",
                FixedMinutes(Ev.SUNSET, 0),
                "כולל שקיעת האופק בגלל הגובה",
            ),
        ),
    ),
    (
        "night-GRA-3-4-mil",
        (
            _after_sunset("night-GRA-13.5", 13.5, "13½ דקות אחרי השקיעה"),
            _after_sunset("night-GRA-18", 18, "18 דקות אחרי השקיעה"),
            _after_sunset("night-GRA-22.5", 22.5, "22½ דקות אחרי השקיעה"),
            _after_sunset("night-GRA-24", 24, "24 דקות אחרי השקיעה (סידור אדה״ז)"),
        ),
    ),
    (
        "taaniyot-end",
        (
            _after_sunset("taanit-tokchinski", 27, "ר׳ טוקצ׳ינסקי – 27 דקות אחרי השקיעה"),
            OpinionDefinition(
                "taanit-7.083",
                "7.083 מעלות תחת האופק",
                Degrees(7.083, morning=False),
                "צאת ג׳ כוכבים בינוניים",
            ),
        ),
    ),
    (
        "tzeit-3-stars",
        (
            _after_sunset("tzeit-34", 34, "34 דקות אחרי השקיעה"),
            _after_sunset("tzeit-36", 36, "36 דקות אחרי השקיעה"),
            _after_sunset("tzeit-40", 40, "40 דקות אחרי השקיעה (מוצאי שבת ויו״ט / חזון איש)"),
        ),
    ),
    (
        "night-RabbeinuTam",
        (
            OpinionDefinition(
                "rt-72-fixed",
                "72 דקות שוות אחר השקיעה",
                FixedMinutes(Ev.SEA_LEVEL_SUNSET, 72),
                "מהשקיעה בגובה פני הים",
            ),
            OpinionDefinition(
                "rt-72-fixed-visible",
                "72 דקות שוות אחר השקיעה הנראית",
                FixedMinutes(Ev.SUNSET, 72),
                "מהשקיעה לפי גובה המקום",
            ),
            OpinionDefinition(
                "rt-72-zmaniyot",
                "72 דקות בזמניות אחר השקיעה",
                ProportionalHours(GRA_DAY, 1.2, Ev.SUNSET),
            ),
        ),
    ),
    (
        "chatzotLayla",
        (
            OpinionDefinition(
                "chatzot-layla",
                "אמצע הלילה ההלכתי",
                ProportionalHours(NIGHT, 6),
                "אמצע הזמן בין שקיעה לזריחה",
            ),
            OpinionDefinition(
                "chatzot-layla-12h",
                "12 שעות אחרי חצות היום",
                FixedMinutes(Ev.MIDDAY, 12 * 60),
            ),
        ),
    ),
)

_SUBTITLED = frozenset({"sofShma-MA", "sofTfila-MA"})

# Per-profile opinions moved to the front, in this order. Unlisted markers keep
# the canonical order.
PROFILE_PREFERENCES: dict[Profile, dict[str, tuple[str, ...]]] = {
    Profile.SEPHARDI: {
        "sofShma-MA": ("sofShma-MA-72-fixed",),
        "sofTfila-MA": ("sofTfila-MA-72-fixed",),
    },
    Profile.ASHKENAZI: {
        "alos": ("alos-72-zmaniyot",),
        "tzitzitTefillin": ("tzitzit-11.5",),
        "sofShma-MA": ("sofShma-MA-72-zmaniyot",),
        "sofTfila-MA": ("sofTfila-MA-72-zmaniyot",),
        "tzeit-3-stars": ("tzeit-40",),
    },
    Profile.CHABAD: {
        "alos": ("alos-72-zmaniyot",),
        "tzitzitTefillin": ("tzitzit-11.5",),
        "sofShma-MA": ("sofShma-MA-72-zmaniyot",),
        "sofTfila-MA": ("sofTfila-MA-72-zmaniyot",),
        "night-GRA-3-4-mil": ("night-GRA-24",),
    },
}
PROFILE_PREFERENCES[Profile.CUSTOM] = PROFILE_PREFERENCES[Profile.SEPHARDI]


def order_for_profile(
    marker_id: str, opinions: tuple[OpinionDefinition, ...], profile: Profile
) -> tuple[OpinionDefinition, ...]:
    """Stable reorder: the profile's preferred ids first, everything else after."""
    preferred = PROFILE_PREFERENCES.get(profile, {}).get(marker_id, ())
    by_id = {opinion.id: opinion for opinion in opinions}
    head = tuple(by_id[opinion_id] for opinion_id in preferred if opinion_id in by_id)
    tail = tuple(opinion for opinion in opinions if opinion.id not in preferred)
    return head + tail


def marker_ids() -> tuple[str, ...]:
    return tuple(marker_id for marker_id, _ in _MARKERS)


def build_catalog(
    profile: Profile = Profile.SEPHARDI, lang: str = "he"
) -> tuple[MarkerDefinition, ...]:
    """Build the ordered marker list for a profile.

    Args:
        profile: Community profile; decides the opinion order within each marker.
        lang: Language for marker titles and subtitles.

    Returns:
        Tuple of MarkerDefinition in display order.
    """
    return tuple(
        MarkerDefinition(
            id=marker_id,
            title=t(f"marker_{marker_id}", lang),
            subtitle=t(f"subtitle_{marker_id}", lang) if marker_id in _SUBTITLED else None,
            opinions=order_for_profile(marker_id, opinions, profile),
        )
        for marker_id, opinions in _MARKERS
    )
