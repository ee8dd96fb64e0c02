"""Plain-text renderer for a ZmanimResult.

Layout, top to bottom: place and date header, Hebrew date line, an optional
Erev Shabbat / Yom Tov block, then one line per marker with the effective
opinion's time. verbose=True lists every opinion under interactive markers.
"""

from __future__ import annotations

from datetime import timedelta

from ibirkat.i18n import t
from ibirkat.models import UNAVAILABLE, MarkerResult, SpecialDayKind, ZmanimResult

_TIME_WIDTH = 5


def _format_duration(value: timedelta | None) -> str:
    if value is None:
        return UNAVAILABLE
    total = int(round(value.total_seconds()))
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d}"


def _banner(result: ZmanimResult, lang: str) -> str | None:
    hebrew = result.hebrew
    if hebrew.is_erev_shabbat:
        return t("banner_erev_shabbat", lang)
    if hebrew.is_erev_yom_tov:
        return t("banner_erev_yom_tov", lang)
    if hebrew.is_shabbat:
        return t("banner_shabbat", lang)
    return None


def _marker_lines(marker: MarkerResult, verbose: bool) -> list[str]:
    chosen = marker.effective_opinion
    title = f"{marker.title} ({marker.subtitle})" if marker.subtitle else marker.title
    lines = [f"{chosen.formatted_time:>{_TIME_WIDTH}}  {title}  [{chosen.label}]"]
    if verbose and marker.is_interactive:
        for opinion in marker.opinions:
            flag = "*" if opinion.id == chosen.id else " "
            when = f"{opinion.formatted_time:>{_TIME_WIDTH}}"
            lines.append(f"{'':>{_TIME_WIDTH}}  {flag} {when}  {opinion.label}")
    return lines


def render_text(result: ZmanimResult, lang: str = "he", verbose: bool = False) -> str:
    """Render a ZmanimResult as plain text.

    Args:
        result: Fully computed result.
        lang: Language for labels.
        verbose: List every opinion of interactive markers, marking the shown one.

    Returns:
        Multi-line string, newline terminated.
    """
    geo = result.context
    place = geo.display_name or f"{geo.latitude:.4f}, {geo.longitude:.4f}"
    lines = [
        f"{place} · {result.day.isoformat()} · {t(f'profile_{result.profile.value}', lang)}",
        " · ".join(
            part for part in (result.hebrew.weekday_name, result.hebrew.formatted) if part
        ),
    ]

    banner = _banner(result, lang)
    if banner:
        lines.append(banner)

    special = result.special_times
    if special is not None:
        kind_key = (
            "special_shabbat" if special.kind is SpecialDayKind.SHABBAT else "special_yom_tov"
        )
        offset_text = t("label_candle_offset", lang).format(minutes=special.candle_offset)
        candle_label = f"{t('label_candle_lighting', lang)} ({offset_text})"
        lines += [
            "",
            t(kind_key, lang),
            f"{special.candle_lighting_text:>{_TIME_WIDTH}}  {candle_label}",
            f"{special.end_time_text:>{_TIME_WIDTH}}  {t('label_end_time', lang)}",
        ]

    lines.append("")
    for marker in result.markers:
        lines += _marker_lines(marker, verbose)

    lines += [
        "",
        f"{t('label_proportional_hour', lang)}: {_format_duration(result.proportional_hour)}",
    ]
    return "\n".join(lines) + "\n"
