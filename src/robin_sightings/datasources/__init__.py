"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # URLs, wire field names, constants
    ├── decode.py         # Payload validation -> domain models
    └── fetch.py          # Fetch functions (one per endpoint/concept)

Fetch functions go through ``robin_sightings.services.http.session`` and raise
``SightingsFetchError``; decoders raise ``SightingsDecodeError``. Nothing
downstream of a decoder ever sees raw JSON.
"""
