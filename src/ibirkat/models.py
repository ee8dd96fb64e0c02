"""Data model definitions — immutable values passed from the compute layers to display."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import Enum

UNAVAILABLE = "—"


@dataclass(frozen=True)
class QueryInput:
    """Raw caller input. Not yet validated."""

    address: str | None  # Free-text place name; None = use the fallback location
    when: str  # "YYYY-MM-DD" civil date


@dataclass(frozen=True)
class GeoContext:
    """Resolved location. Input to every solar computation."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive
    time_zone: str  # IANA zone id ("Asia/Jerusalem")
    elevation_m: float = 0.0  # Metres above sea level
    display_name: str = ""

    def at_sea_level(self) -> GeoContext:
        """Same place with elevation 0, used by sea-level and degree-based opinions."""
        if self.elevation_m == 0:
            return self
        return replace(self, elevation_m=0.0)


class SolarEventKind(str, Enum):
    SUNRISE = "sunrise"
    SUNSET = "sunset"


@dataclass(frozen=True)
class SolarEvent:
    """A single sun crossing. instant is None when it does not occur that day."""

    kind: SolarEventKind
    zenith: float
    instant: datetime | None


class ReferenceEvent(str, Enum):
    """Anchor instants that fixed-minute and proportional rules hang off."""

    DAWN = "dawn"  # 72 fixed minutes before visible sunrise
    SUNRISE = "sunrise"  # Visible sunrise (elevation adjusted)
    SUNSET = "sunset"  # Visible sunset (elevation adjusted)
    DUSK = "dusk"  # 72 fixed minutes after visible sunset
    SEA_LEVEL_SUNRISE = "sea_level_sunrise"
    SEA_LEVEL_SUNSET = "sea_level_sunset"
    MIDDAY = "midday"  # Midpoint of sunrise and sunset
    NEXT_SUNRISE = "next_sunrise"  # Visible sunrise of the following civil day


@dataclass(frozen=True)
class FixedMinutes:
    """Anchor event plus a signed number of clock minutes."""

    event: ReferenceEvent
    minutes: float


@dataclass(frozen=True)
class Degrees:
    """Sun at `depression` degrees below the geometric horizon, evaluated at sea level."""

    depression: float
    morning: bool


@dataclass(frozen=True)
class ProportionalHours:
    """origin + hours × (span length / 12). origin defaults to the span start."""

    span: DaySpan
    hours: float
    origin: ReferenceEvent | None = None


Rule = FixedMinutes | Degrees | ProportionalHours


@dataclass(frozen=True)
class DaySpan:
    """One authority's halachic day: a start and an end boundary."""

    id: str
    start: Rule
    end: Rule


@dataclass(frozen=True)
class OpinionDefinition:
    """A single authority's definition of a marker. Selectable, never editable."""

    id: str
    label: str
    rule: Rule | None  # None only for the placeholder opinion
    detail: str | None = None


@dataclass(frozen=True)
class MarkerDefinition:
    """A named time marker and its ordered opinions (first = default)."""

    id: str
    title: str
    opinions: tuple[OpinionDefinition, ...]
    subtitle: str | None = None

    def __post_init__(self) -> None:
        if not self.opinions:
            placeholder = OpinionDefinition(
                id=f"{self.id}-placeholder", label=UNAVAILABLE, rule=None
            )
            object.__setattr__(self, "opinions", (placeholder,))

    @property
    def default_opinion(self) -> OpinionDefinition:
        return self.opinions[0]

    def opinion(self, opinion_id: str) -> OpinionDefinition | None:
        for candidate in self.opinions:
            if candidate.id == opinion_id:
                return candidate
        return None


class Profile(str, Enum):
    """Community profile selecting the preferred opinion per marker."""

    SEPHARDI = "sephardi"  # עדות המזרח / ר׳ עובדיה
    ASHKENAZI = "ashkenazi"  # אשכנז (ישיבתי)
    CHABAD = "chabad"  # חב״ד
    CUSTOM = "custom"  # מותאם אישית

    @classmethod
    def parse(cls, raw: str | None) -> Profile:
        """Stored selector string → Profile. Unknown values fall back to Sephardi."""
        try:
            return cls(raw)
        except ValueError:
            return cls.SEPHARDI


@dataclass(frozen=True)
class OpinionResult:
    """One opinion evaluated for a concrete date and place."""

    id: str
    label: str
    detail: str | None
    instant: datetime | None
    formatted_time: str  # "HH:MM" or UNAVAILABLE


@dataclass(frozen=True)
class MarkerResult:
    id: str
    title: str
    subtitle: str | None
    opinions: tuple[OpinionResult, ...]
    effective_opinion_id: str

    @property
    def is_interactive(self) -> bool:
        """Markers with a single opinion are display-only."""
        return len(self.opinions) > 1

    @property
    def effective_opinion(self) -> OpinionResult:
        for opinion in self.opinions:
            if opinion.id == self.effective_opinion_id:
                return opinion
        return self.opinions[0]


@dataclass(frozen=True)
class HebrewDate:
    """Hebrew calendar date in Tishrei-first numbering (7 = Adar II, leap years only)."""

    year: int
    month: int  # 1 Tishrei … 6 Adar / Adar I, 7 Adar II, 8 Nisan … 13 Elul
    day: int  # 1..30
    is_leap_year: bool
    weekday: int  # 1 Sunday … 7 Shabbat


@dataclass(frozen=True)
class DayClassification:
    tags: tuple[str, ...]
    is_erev_shabbat: bool
    is_erev_yom_tov: bool
    is_shabbat: bool


@dataclass(frozen=True)
class HebrewDateInfo:
    """Display-ready Hebrew date. Derived fresh per query."""

    day_numeral: str  # "י״ד"; empty when the date could not be resolved
    month_name: str
    is_leap_year: bool
    special_tags: tuple[str, ...] = ()
    is_erev_shabbat: bool = False
    is_erev_yom_tov: bool = False
    is_shabbat: bool = False
    hebrew_date: HebrewDate | None = None
    weekday_name: str = ""

    @property
    def date_text(self) -> str:
        if not self.day_numeral:
            return self.month_name
        return f"{self.day_numeral} {self.month_name}"

    @property
    def formatted(self) -> str:
        """Date text followed by special-day tags: "י״ד אדר · פורים"."""
        return " · ".join((self.date_text, *self.special_tags))


class SpecialDayKind(str, Enum):
    SHABBAT = "shabbat"
    YOM_TOV = "yom_tov"


@dataclass(frozen=True)
class SpecialTimes:
    """Candle lighting / Havdalah block shown on Erev Shabbat and Erev Yom Tov."""

    kind: SpecialDayKind
    candle_lighting: datetime | None
    end_time: datetime | None
    candle_offset: int
    havdalah_offset: int
    candle_lighting_text: str = UNAVAILABLE
    end_time_text: str = UNAVAILABLE


@dataclass(frozen=True)
class ZmanimResult:
    """The sole output of a query. Fully computed state."""

    context: GeoContext
    day: date
    profile: Profile
    markers: tuple[MarkerResult, ...]
    hebrew: HebrewDateInfo
    special_times: SpecialTimes | None = None
    proportional_hour: timedelta | None = None  # GRA shaah zmanit

    def marker(self, marker_id: str) -> MarkerResult | None:
        for result in self.markers:
            if result.id == marker_id:
                return result
        return None
