"""CLI entry point printing the day's zmanim.

    ibirkat "Tel Aviv" --date 2024-06-21
    ibirkat --profile custom --pick alos=alos-16.1
    ibirkat --reset

Preference flags are saved to IBIRKAT_PREFERENCES_PATH when it is set.
"""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date

from dotenv import load_dotenv

from ibirkat.compute import open_store, run
from ibirkat.config import Settings
from ibirkat.models import Profile, QueryInput
from ibirkat.profiles import CANDLE_OFFSETS, HAVDALAH_OFFSETS, ProfileResolver
from ibirkat.renderers.text import render_text

_LOGGER = logging.getLogger(__name__)


def _parse_pick(raw: str) -> tuple[str, str]:
    marker_id, sep, opinion_id = raw.partition("=")
    if not sep or not marker_id or not opinion_id:
        raise argparse.ArgumentTypeError("expected MARKER=OPINION")
    return marker_id, opinion_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ibirkat", description="Halachic times for a day and place."
    )
    parser.add_argument(
        "address", nargs="?", default=None, help="Place name; Jerusalem if omitted"
    )
    parser.add_argument("--date", default=None, help="YYYY-MM-DD (default: today)")
    parser.add_argument(
        "--elevation", type=float, default=None, help="Observer elevation in metres"
    )
    parser.add_argument("--lang", choices=("he", "en"), default=None)
    parser.add_argument("--profile", choices=[p.value for p in Profile], default=None)
    parser.add_argument(
        "--pick",
        type=_parse_pick,
        action="append",
        default=[],
        metavar="MARKER=OPINION",
    )
    parser.add_argument(
        "--reset", action="store_true", help="Clear custom opinion picks"
    )
    parser.add_argument("--candle", type=int, choices=CANDLE_OFFSETS, default=None)
    parser.add_argument(
        "--havdalah", type=int, choices=HAVDALAH_OFFSETS, default=None
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="List every opinion"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    if args.lang:
        settings = replace(settings, lang=args.lang)
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = open_store(settings)
    resolver = ProfileResolver(store)
    if args.profile:
        resolver.profile = Profile(args.profile)
    if args.reset:
        resolver.reset_to_defaults()
    for marker_id, opinion_id in args.pick:
        if not resolver.pick_opinion(marker_id, opinion_id):
            _LOGGER.warning("Ignoring --pick %s: profile is not custom", marker_id)
    if args.candle is not None:
        resolver.candle_offset = args.candle
    if args.havdalah is not None:
        resolver.havdalah_offset = args.havdalah

    when = args.date or date.today().isoformat()
    try:
        result = run(
            QueryInput(address=args.address, when=when),
            store,
            settings,
            args.elevation,
        )
    except ValueError as e:
        print(f"ibirkat: {e}", file=sys.stderr)
        return 2

    sys.stdout.write(render_text(result, settings.lang, verbose=args.verbose))
    return 0


if __name__ == "__main__":
    sys.exit(main())
