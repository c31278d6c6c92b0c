"""Robin Sightings - weekly charts of daily robin sightings.

Architecture::

    datasources/   Sightings feed (HTTP fetch + payload decoding)
    store.py       JSON cache with TTL (live -> derived)
    analysis/      Date codec, week filling and week paging (pure functions)
    state.py       Load/navigation state machine (idle -> loading -> ready | failed)
    renderers/     Pure data -> HTML (week chart, week navigation)
    flows/         Prefect orchestration (fetch checks freshness, build renders site)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources -> store (cache) -> analysis -> renderers -> derived/site/
"""

__version__ = "0.1.0"

from robin_sightings.config import Settings
from robin_sightings.schemas import DailyRecord, LoadStatus

__all__ = ["DailyRecord", "LoadStatus", "Settings", "__version__"]
