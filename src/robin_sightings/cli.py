"""
Command-line entry point: ``robin-sightings <command>``.

  info      show settings
  refresh   download the feed (unless cached and fresh) and rebuild the site
  weeks     print one filled week as a table, from the cache or live
  serve     serve the built site on localhost
"""

from __future__ import annotations

import argparse
import http.server
import sys
from functools import partial
from pathlib import Path

from loguru import logger

from robin_sightings import __version__
from robin_sightings.config import get_settings
from robin_sightings.datasources.sightings import decode_sightings, fetch_sightings
from robin_sightings.errors import SightingsError
from robin_sightings.flows.build import build_all
from robin_sightings.flows.fetch import SIGHTINGS_PATH, fetch_all
from robin_sightings.schemas import DailyRecord, LoadStatus
from robin_sightings.state import SightingsState
from robin_sightings.store import DataStore


def configure_logging(*, debug: bool = False) -> None:
    """Send library log output to stderr; WARNING and up unless debugging."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug or get_settings().debug else "WARNING")


def _fail(message: object) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


# =============================================================================
# Commands
# =============================================================================


def cmd_info(_args: argparse.Namespace) -> int:
    settings = get_settings()
    rows = {
        "Application": settings.app_name,
        "Version": __version__,
        "Environment": settings.app_env,
        "Debug": settings.debug,
        "Data URL": settings.data_url,
        "Data dir": settings.data_dir,
        "Cache TTL": f"{settings.cache_ttl_hours:g}h",
    }
    for key, value in rows.items():
        print(f"{key}: {value}")
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Fetch the feed into the cache, then rebuild the site from it."""
    url = get_settings().data_url
    try:
        fetch_all(url, force=args.force)
        result = build_all()
    except SightingsError as exc:
        return _fail(exc)

    if "error" in result:
        return _fail(result["error"])

    print(f"Built {result['pages']} pages for {result['weeks']} weeks in {result['output']}")
    return 0


def _load_cached() -> list[DailyRecord]:
    payload = DataStore(get_settings().data_dir).read(SIGHTINGS_PATH)
    if payload is None:
        msg = "No cached sightings. Run 'robin-sightings refresh' first."
        raise SightingsError(msg)
    return decode_sightings(payload)


def format_week(state: SightingsState) -> str:
    """Plain-text table of the selected week; synthesized days read "no data"."""
    lines = [f"{state.week_label} of {state.total_weeks}", f"{'Date':<12}Sightings"]
    lines.extend(
        f"{r.date:<12}{'no data' if r.date in state.synthesized else r.count}"
        for r in state.current_records
    )
    return "\n".join(lines)


def cmd_weeks(args: argparse.Namespace) -> int:
    """Print week ``--week`` (1-based) of the filled series."""
    settings = get_settings()
    fetcher = (
        partial(fetch_sightings, settings.data_url, timeout=settings.request_timeout)
        if args.live
        else _load_cached
    )

    state = SightingsState()
    if state.load(fetcher) is LoadStatus.FAILED:
        return _fail(state.error)

    if state.total_weeks == 0:
        print("No sightings recorded yet.")
        return 1
    if not 1 <= args.week <= state.total_weeks:
        return _fail(f"week must be between 1 and {state.total_weeks}")

    state.go_to_week(args.week - 1)
    print(format_week(state))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve ``data/derived/site`` until interrupted."""
    settings = get_settings()
    site_dir = Path(settings.data_dir) / "derived" / "site"
    if not site_dir.is_dir():
        return _fail(f"{site_dir} does not exist. Run 'robin-sightings refresh' first.")

    port = settings.api_port if args.port is None else args.port
    handler = partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))
    with http.server.ThreadingHTTPServer(("", port), handler) as server:
        print(f"Serving {site_dir} at http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nStopped.")
    return 0


# =============================================================================
# Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="robin-sightings",
        description="Weekly charts of daily robin sightings",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")

    commands = parser.add_subparsers(dest="command", metavar="<command>")

    info = commands.add_parser("info", help="Show settings")
    info.set_defaults(func=cmd_info)

    refresh = commands.add_parser("refresh", help="Fetch sightings and rebuild the site")
    refresh.add_argument(
        "--force",
        action="store_true",
        help="Download even if the cached feed is still fresh",
    )
    refresh.set_defaults(func=cmd_refresh)

    weeks = commands.add_parser("weeks", help="Print one week of sightings")
    weeks.add_argument("--week", type=int, default=1, help="Week number, 1-based (default: 1)")
    weeks.add_argument(
        "--live",
        action="store_true",
        help="Fetch the feed directly instead of reading the cache",
    )
    weeks.set_defaults(func=cmd_weeks)

    serve = commands.add_parser("serve", help="Serve the built site locally")
    serve.add_argument("--port", type=int, default=None, help="Port (default: api_port setting)")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(debug=args.debug)
    logger.debug("Settings: {}", get_settings())

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0 if args.command is None else 1
    return func(args)


if __name__ == "__main__":
    sys.exit(main())
