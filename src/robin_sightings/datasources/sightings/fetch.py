"""HTTP download of the sightings feed."""

from __future__ import annotations

from typing import Any

import requests
from loguru import logger

from robin_sightings.datasources.sightings.decode import decode_sightings
from robin_sightings.errors import SightingsFetchError
from robin_sightings.schemas import DailyRecord
from robin_sightings.services.http import session


def fetch_payload(url: str, *, timeout: float | None = None) -> Any:
    """
    Download the raw JSON sightings payload.

    Args:
        url: Feed URL.
        timeout: Per-request timeout in seconds (session default if None).

    Returns:
        The decoded JSON body, unvalidated.

    Raises:
        SightingsFetchError: Network failure, non-2xx status, or a body that
            is not JSON.
    """
    logger.debug("Fetching sightings from {}", url)
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        msg = f"Failed to fetch sightings from {url}: {exc}"
        raise SightingsFetchError(msg) from exc

    try:
        return resp.json()
    except ValueError as exc:
        msg = f"Sightings feed at {url} did not return JSON"
        raise SightingsFetchError(msg) from exc


def fetch_sightings(url: str, *, timeout: float | None = None) -> list[DailyRecord]:
    """Download and decode the sightings feed in one step."""
    return decode_sightings(fetch_payload(url, timeout=timeout))
