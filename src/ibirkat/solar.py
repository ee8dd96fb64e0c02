"""Solar position layer — sunrise, sunset and depression-angle crossings.

Implements the NOAA / Almanac for Computers sunrise equation. Accuracy is
about a minute at mid latitudes, which is what the halachic opinions built
on top of it assume.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from pytz import timezone

from ibirkat.models import GeoContext, SolarEvent, SolarEventKind

_LOGGER = logging.getLogger(__name__)

GEOMETRIC_ZENITH = 90.0
# 34' refraction + 16' solar radius
CIVIL_ZENITH = 90.833

_DIP_PER_SQRT_METRE = 0.0347


class PolarFallback(str, Enum):
    """What to return when the sun never reaches the requested zenith."""

    PROPAGATE = "propagate"  # Keep None; display layer shows the "—" sentinel
    # 06:00 local for a missing sunrise, 18:00 for a missing sunset. Depression
    # crossings stay None: a clock time there would break the dawn ordering.
    FIXED_CLOCK = "fixed_clock"


_FALLBACK_MORNING = time(6, 0)
_FALLBACK_EVENING = time(18, 0)


def horizon_dip(elevation_m: float) -> float:
    """Extra depression (degrees) of the visible horizon seen from elevation_m."""
    if elevation_m <= 0:
        return 0.0
    return _DIP_PER_SQRT_METRE * math.sqrt(elevation_m)


def _utc_hours(
    day: date, latitude: float, longitude: float, zenith: float, morning: bool
) -> float | None:
    """UT decimal hours of the crossing, or None when cos(H) is out of range."""
    lng_hour = longitude / 15.0
    approx = day.timetuple().tm_yday + ((6.0 if morning else 18.0) - lng_hour) / 24.0

    mean_anomaly = 0.9856 * approx - 3.289
    true_longitude = (
        mean_anomaly
        + 1.916 * math.sin(math.radians(mean_anomaly))
        + 0.020 * math.sin(math.radians(2 * mean_anomaly))
        + 282.634
    ) % 360

    right_ascension = (
        math.degrees(math.atan(0.91764 * math.tan(math.radians(true_longitude)))) % 360
    )
    # Put RA in the same quadrant as the true longitude
    right_ascension += (
        math.floor(true_longitude / 90) * 90 - math.floor(right_ascension / 90) * 90
    )
    right_ascension /= 15.0

    sin_dec = 0.39782 * math.sin(math.radians(true_longitude))
    cos_dec = math.cos(math.asin(sin_dec))

    lat = math.radians(latitude)
    cos_h = (math.cos(math.radians(zenith)) - sin_dec * math.sin(lat)) / (
        cos_dec * math.cos(lat)
    )
    if cos_h > 1 or cos_h < -1:
        return None

    hour_angle = math.degrees(math.acos(cos_h))
    if morning:
        hour_angle = 360 - hour_angle
    hour_angle /= 15.0

    local_mean = hour_angle + right_ascension - 0.06571 * approx - 6.622
    return (local_mean - lng_hour) % 24


def _utc_offset_hours(day: date, time_zone: str) -> float:
    """Zone offset in force at local noon of day (DST aware)."""
    tz = timezone(time_zone)
    offset = tz.localize(datetime.combine(day, time(12, 0))).utcoffset()
    return offset.total_seconds() / 3600.0 if offset is not None else 0.0


def _local_datetime(day: date, time_zone: str, local_hours: float) -> datetime:
    naive = datetime.combine(day, time(0, 0)) + timedelta(hours=local_hours)
    return timezone(time_zone).localize(naive)


@dataclass(frozen=True)
class SolarPositionCalculator:
    """Stateless calculator; the only setting is the polar fallback policy.

    Two zenith conventions share one code path: the civil zenith (90.833°,
    plus horizon dip for elevation) for visible sunrise/sunset, and
    90° + depression for degree-based opinions, which are always evaluated
    at sea level.
    """

    polar_fallback: PolarFallback = PolarFallback.PROPAGATE

    def crossing_time(
        self, day: date, geo: GeoContext, zenith: float, is_morning: bool
    ) -> datetime | None:
        """Instant the sun crosses `zenith` on the local civil day.

        Args:
            day: Local civil date.
            geo: Location; its elevation is NOT applied here, callers choose
                the zenith (see sunrise/sunset for the dip-adjusted variants).
            zenith: Zenith angle in degrees (90.833 civil, 90 + depression otherwise).
            is_morning: True for the rising crossing, False for the setting one.

        Returns:
            Timezone-aware datetime, or None when the crossing does not occur.
            An evening crossing after midnight is dated the following day.
        """
        ut = _utc_hours(day, geo.latitude, geo.longitude, zenith, is_morning)
        if ut is None:
            _LOGGER.debug(
                "No %s crossing of zenith %.3f on %s at lat %.3f",
                "morning" if is_morning else "evening",
                zenith,
                day,
                geo.latitude,
            )
            return None
        local_hours = (ut + _utc_offset_hours(day, geo.time_zone)) % 24
        # Evening crossings after local midnight belong to the next calendar day,
        # morning crossings before it to the previous one
        if not is_morning and local_hours < 12:
            local_hours += 24
        elif is_morning and local_hours > 12:
            local_hours -= 24
        return _local_datetime(day, geo.time_zone, local_hours)

    def solar_event(
        self, day: date, geo: GeoContext, zenith: float, is_morning: bool
    ) -> SolarEvent:
        """crossing_time wrapped in a SolarEvent, with the fallback policy applied."""
        instant = self._with_fallback(
            self.crossing_time(day, geo, zenith, is_morning), day, geo, is_morning
        )
        kind = SolarEventKind.SUNRISE if is_morning else SolarEventKind.SUNSET
        return SolarEvent(kind=kind, zenith=zenith, instant=instant)

    def sunrise(self, day: date, geo: GeoContext) -> datetime | None:
        """Visible sunrise: civil zenith plus the horizon dip for geo.elevation_m."""
        zenith = CIVIL_ZENITH + horizon_dip(geo.elevation_m)
        return self.solar_event(day, geo, zenith, True).instant

    def sunset(self, day: date, geo: GeoContext) -> datetime | None:
        """Visible sunset: civil zenith plus the horizon dip for geo.elevation_m."""
        zenith = CIVIL_ZENITH + horizon_dip(geo.elevation_m)
        return self.solar_event(day, geo, zenith, False).instant

    def sea_level_sunrise(self, day: date, geo: GeoContext) -> datetime | None:
        return self.sunrise(day, geo.at_sea_level())

    def sea_level_sunset(self, day: date, geo: GeoContext) -> datetime | None:
        return self.sunset(day, geo.at_sea_level())

    def depression_time(
        self, day: date, geo: GeoContext, depression: float, is_morning: bool
    ) -> datetime | None:
        """Sun `depression` degrees below the geometric horizon, at sea level.

        The polar fallback is not applied: a missing crossing is always None.
        """
        zenith = GEOMETRIC_ZENITH + depression
        return self.crossing_time(day, geo.at_sea_level(), zenith, is_morning)

    def _with_fallback(
        self, instant: datetime | None, day: date, geo: GeoContext, is_morning: bool
    ) -> datetime | None:
        if instant is not None or self.polar_fallback is PolarFallback.PROPAGATE:
            return instant
        clock = _FALLBACK_MORNING if is_morning else _FALLBACK_EVENING
        _LOGGER.warning(
            "Polar fallback: using %s local on %s for %s",
            clock.strftime("%H:%M"),
            day,
            geo.display_name or f"{geo.latitude:.3f},{geo.longitude:.3f}",
        )
        return timezone(geo.time_zone).localize(datetime.combine(day, clock))
