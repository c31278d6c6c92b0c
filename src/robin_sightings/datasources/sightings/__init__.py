"""Robin sightings feed data source.

Public API:
  - fetch: fetch_payload (raw JSON), fetch_sightings (fetch + decode)
  - decode: decode_sightings (JSON payload -> list[DailyRecord])
  - client: wire field names and source identifier
"""

from robin_sightings.datasources.sightings.client import COUNT_FIELD, DATE_FIELD, SOURCE_NAME
from robin_sightings.datasources.sightings.decode import decode_sightings
from robin_sightings.datasources.sightings.fetch import fetch_payload, fetch_sightings

__all__ = [
    "COUNT_FIELD",
    "DATE_FIELD",
    "SOURCE_NAME",
    "decode_sightings",
    "fetch_payload",
    "fetch_sightings",
]
