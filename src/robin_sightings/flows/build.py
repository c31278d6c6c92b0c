"""
Prefect flow for building the static site from cached sightings.

Writes ``index.html`` (the first week) and one ``week-N.html`` per week.

Run locally:
    python -m robin_sightings.flows.build
"""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path
from typing import Any

from prefect import flow, task

from robin_sightings.analysis.weeks import fill_missing_dates, split_into_weeks
from robin_sightings.config import get_settings
from robin_sightings.datasources.sightings import decode_sightings
from robin_sightings.renderers import render_template
from robin_sightings.renderers.chart import build_week_chart_html
from robin_sightings.renderers.navigation import build_week_nav_html, week_page_name
from robin_sightings.schemas import DailyRecord
from robin_sightings.store import DataStore

# Store and output paths
store = DataStore(get_settings().data_dir)
SITE_DIR = store.derived / "site"

# Path matching what fetch.py writes
SIGHTINGS_PATH = Path("live/sightings.json")


# =============================================================================
# Data loading
# =============================================================================


@task(name="load-sightings")
def load_sightings() -> list[DailyRecord] | None:
    """Load and decode cached sightings, or None if nothing was fetched yet."""
    payload = store.read(SIGHTINGS_PATH)
    if payload is None:
        return None
    return decode_sightings(payload)


def _updated_label() -> str:
    envelope = store.load(SIGHTINGS_PATH)
    if envelope is None or envelope.meta.fetched_at is None:
        return ""
    return envelope.meta.fetched_at.astimezone().strftime("%Y-%m-%d %H:%M")


# =============================================================================
# Page building
# =============================================================================


@task(name="build-pages")
def build_pages(
    weeks: list[list[DailyRecord]],
    synthesized: Collection[str],
    updated: str = "",
) -> dict[str, str]:
    """Render every week to a full HTML page, keyed by file name.

    ``index.html`` repeats the first week, or shows the empty state when
    there are no weeks at all.
    """
    if not weeks:
        return {
            "index.html": render_template(
                "base.html.j2", week_label="", nav="", chart="", updated=updated
            )
        }

    pages: dict[str, str] = {}
    for index, week in enumerate(weeks):
        pages[week_page_name(index)] = render_template(
            "base.html.j2",
            week_label=f"Week {index + 1}",
            nav=build_week_nav_html(index, len(weeks)),
            chart=build_week_chart_html(week, synthesized),
            updated=updated,
        )
    pages["index.html"] = pages[week_page_name(0)]
    return pages


@task(name="write-site")
def write_site(pages: dict[str, str]) -> list[Path]:
    """Write pages to the site directory, removing stale week pages first."""
    SITE_DIR.mkdir(parents=True, exist_ok=True)
    for stale in SITE_DIR.glob("week-*.html"):
        stale.unlink()

    written: list[Path] = []
    for name, html in sorted(pages.items()):
        output_path = SITE_DIR / name
        with output_path.open("w") as f:
            f.write(html)
        written.append(output_path)
    return written


@flow(name="build-site", log_prints=True)
def build_all() -> dict[str, Any]:
    """
    Build the static site from the cached sightings payload.

    This is the main Prefect flow that generates the static site.
    """
    print("Loading sightings...")
    records = load_sightings()
    if records is None:
        print("No sightings data found. Run fetch flow first.")
        return {"error": "no data"}

    print(f"Filling {len(records)} records to whole weeks...")
    result = fill_missing_dates(records)
    weeks = split_into_weeks(result.series)
    print(f"{len(weeks)} weeks, {len(result.synthesized)} days without data")

    print("Building pages...")
    pages = build_pages(weeks, result.synthesized, _updated_label())

    print("Writing site...")
    written = write_site(pages)

    print(f"Site built: {SITE_DIR}")
    return {"weeks": len(weeks), "pages": len(written), "output": str(SITE_DIR)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
