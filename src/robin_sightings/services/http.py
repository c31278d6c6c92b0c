"""
Shared ``requests.Session`` for talking to the sightings feed.

Transient failures (connection resets, 429 and 5xx gateway errors) are
retried with exponential backoff by urllib3, and every request gets a
timeout even when the caller does not pass one.
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from robin_sightings import __version__

RETRY_STATUSES = frozenset({429, 502, 503, 504})
DEFAULT_TIMEOUT = 30.0  # seconds


def build_retry(attempts: int = 4, backoff: float = 2.0) -> Retry:
    """Retry policy for idempotent requests only."""
    return Retry(
        total=attempts,
        backoff_factor=backoff,
        status_forcelist=sorted(RETRY_STATUSES),
        allowed_methods=frozenset({"GET", "HEAD", "OPTIONS"}),
        # Let raise_for_status() report the last response instead of MaxRetryError
        raise_on_status=False,
    )


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that fills in *timeout* when a request leaves it unset."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        # Session.request always forwards timeout, usually as None
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a session with the retrying, timeout-injecting adapter mounted.

    Args:
        retry: Retry policy (``build_retry()`` if omitted).
        timeout: Seconds to wait when a request does not set its own timeout.
    """
    adapter = TimeoutHTTPAdapter(max_retries=retry or build_retry(), timeout=timeout)
    s = requests.Session()
    for prefix in ("http://", "https://"):
        s.mount(prefix, adapter)
    s.headers.update(
        {
            "User-Agent": f"robin-sightings/{__version__}",
            "Accept": "application/json",
        }
    )
    return s


session: requests.Session = create_session()
