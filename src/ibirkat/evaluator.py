"""Opinion evaluation layer — turns catalog rules into concrete instants.

Rules are a closed union (FixedMinutes | Degrees | ProportionalHours). A
proportional rule measures its span, divides by 12 and adds the requested
number of those hours to its origin. Span boundaries are rules themselves, so
an MGA day defined as "1.2 GRA hours before sunrise" nests naturally.
"""

import logging
from datetime import date, datetime, timedelta

from pytz import timezone

from ibirkat.models import (
    UNAVAILABLE,
    DaySpan,
    Degrees,
    FixedMinutes,
    GeoContext,
    MarkerDefinition,
    OpinionResult,
    ProportionalHours,
    ReferenceEvent,
    Rule,
)
from ibirkat.solar import SolarPositionCalculator

_LOGGER = logging.getLogger(__name__)

DAWN_DUSK_MINUTES = 72


def _shift(instant: datetime | None, minutes: float) -> datetime | None:
    if instant is None:
        return None
    return instant + timedelta(minutes=minutes)


class DayAnchors:
    """Anchor instants for one civil day and place, computed on first use."""

    def __init__(
        self,
        day: date,
        geo: GeoContext,
        calculator: SolarPositionCalculator | None = None,
    ) -> None:
        self.day = day
        self.geo = geo
        self.calculator = calculator or SolarPositionCalculator()
        self._cache: dict[ReferenceEvent, datetime | None] = {}

    def get(self, event: ReferenceEvent) -> datetime | None:
        if event not in self._cache:
            self._cache[event] = self._compute(event)
        return self._cache[event]

    def _compute(self, event: ReferenceEvent) -> datetime | None:
        calc, day, geo = self.calculator, self.day, self.geo
        if event is ReferenceEvent.SUNRISE:
            return calc.sunrise(day, geo)
        if event is ReferenceEvent.SUNSET:
            return calc.sunset(day, geo)
        if event is ReferenceEvent.SEA_LEVEL_SUNRISE:
            return calc.sea_level_sunrise(day, geo)
        if event is ReferenceEvent.SEA_LEVEL_SUNSET:
            return calc.sea_level_sunset(day, geo)
        if event is ReferenceEvent.DAWN:
            return _shift(self.get(ReferenceEvent.SUNRISE), -DAWN_DUSK_MINUTES)
        if event is ReferenceEvent.DUSK:
            return _shift(self.get(ReferenceEvent.SUNSET), DAWN_DUSK_MINUTES)
        if event is ReferenceEvent.MIDDAY:
            sunrise = self.get(ReferenceEvent.SUNRISE)
            sunset = self.get(ReferenceEvent.SUNSET)
            if sunrise is None or sunset is None:
                return None
            return sunrise + (sunset - sunrise) / 2
        if event is ReferenceEvent.NEXT_SUNRISE:
            return calc.sunrise(day + timedelta(days=1), geo)
        raise ValueError(f"Unknown reference event: {event!r}")


def span_bounds(
    span: DaySpan, anchors: DayAnchors
) -> tuple[datetime | None, datetime | None]:
    return evaluate_rule(span.start, anchors), evaluate_rule(span.end, anchors)


def proportional_hour(span: DaySpan, anchors: DayAnchors) -> timedelta | None:
    """One twelfth of the span, or None when a bound is missing or inverted."""
    start, end = span_bounds(span, anchors)
    if start is None or end is None:
        return None
    if end <= start:
        _LOGGER.debug("Span %s is empty on %s", span.id, anchors.day)
        return None
    return (end - start) / 12


def evaluate_rule(rule: Rule, anchors: DayAnchors) -> datetime | None:
    """Evaluate a single rule against the day's anchors.

    Args:
        rule: FixedMinutes, Degrees or ProportionalHours.
        anchors: Lazily computed anchors for the civil day and place.

    Returns:
        Timezone-aware instant, or None when an anchor it depends on does not exist.

    Raises:
        TypeError: If rule is not one of the known rule types.
    """
    if isinstance(rule, FixedMinutes):
        return _shift(anchors.get(rule.event), rule.minutes)
    if isinstance(rule, Degrees):
        return anchors.calculator.depression_time(
            anchors.day, anchors.geo, rule.depression, rule.morning
        )
    if isinstance(rule, ProportionalHours):
        hour = proportional_hour(rule.span, anchors)
        if hour is None:
            return None
        if rule.origin is None:
            origin = evaluate_rule(rule.span.start, anchors)
        else:
            origin = anchors.get(rule.origin)
        if origin is None:
            return None
        return origin + hour * rule.hours
    raise TypeError(f"Unknown rule type: {type(rule).__name__}")


def format_time(instant: datetime | None, time_zone: str) -> str:
    """Clock time HH:MM in time_zone, or the "—" sentinel for a missing instant."""
    if instant is None:
        return UNAVAILABLE
    return instant.astimezone(timezone(time_zone)).strftime("%H:%M")


def evaluate(
    marker: MarkerDefinition,
    geo: GeoContext,
    day: date,
    calculator: SolarPositionCalculator | None = None,
    anchors: DayAnchors | None = None,
) -> tuple[OpinionResult, ...]:
    """Evaluate every opinion of a marker for a civil day and place.

    Args:
        marker: Catalog entry.
        geo: Resolved location.
        day: Local civil date.
        calculator: Solar calculator; ignored when anchors is given.
        anchors: Shared anchors, so markers of one query reuse the same sun times.

    Returns:
        OpinionResult per opinion, in the marker's order.
    """
    anchors = anchors or DayAnchors(day, geo, calculator)
    results = []
    for opinion in marker.opinions:
        instant = evaluate_rule(opinion.rule, anchors) if opinion.rule else None
        results.append(
            OpinionResult(
                id=opinion.id,
                label=opinion.label,
                detail=opinion.detail,
                instant=instant,
                formatted_time=format_time(instant, geo.time_zone),
            )
        )
    return tuple(results)
