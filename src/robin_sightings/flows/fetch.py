"""
Prefect flow for fetching the sightings feed.

Run locally:
    python -m robin_sightings.flows.fetch
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from robin_sightings.config import get_settings
from robin_sightings.datasources import sightings
from robin_sightings.store import DataStore

store = DataStore(get_settings().data_dir)

SIGHTINGS_PATH = Path("live/sightings.json")


@task(name="fetch-sightings", retries=2, retry_delay_seconds=5)
def fetch_sightings_payload(url: str) -> Any:
    """Download the raw sightings payload. Network failures are retried."""
    return sightings.fetch_payload(url, timeout=get_settings().request_timeout)


@task(name="validate-sightings")
def validate_sightings(payload: Any) -> int:
    """Check that *payload* decodes; return its record count. Not retried."""
    return len(sightings.decode_sightings(payload))


@task(name="save-sightings")
def save_sightings(payload: Any, url: str) -> Path:
    """Save the sightings payload via store."""
    ttl = timedelta(hours=get_settings().cache_ttl_hours)
    return store.write(
        SIGHTINGS_PATH,
        payload,
        source=sightings.SOURCE_NAME,
        valid_until=datetime.now(UTC) + ttl,
        url=url,
        records=len(payload),
    )


@flow(name="fetch-sightings", log_prints=True)
def fetch_all(url: str | None = None, *, force: bool = False) -> dict[str, Any]:
    """
    Fetch the sightings feed unless the cached copy is still fresh.

    Args:
        url: Feed URL (defaults to ``Settings.data_url``).
        force: Download even when the cache is fresh.
    """
    url = url or get_settings().data_url

    if not force and store.is_fresh(SIGHTINGS_PATH):
        print(f"Sightings cache is fresh, skipping download ({SIGHTINGS_PATH})")
        return {"skipped": True, "output": str(store.base / SIGHTINGS_PATH)}

    print(f"Fetching sightings from {url}...")
    payload = fetch_sightings_payload(url)
    # Refuse to cache a payload the build step could not use
    validate_sightings(payload)
    output_path = save_sightings(payload, url)
    print(f"Saved {len(payload)} records to {output_path}")
    return {"skipped": False, "records": len(payload), "output": str(output_path)}


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {result}")
