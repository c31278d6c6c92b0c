"""
Prefect flows for the sightings pipeline.

Flows:
- fetch: Download the sightings feed into the store (skipped while fresh)
- build: Fill and page the cached sightings, write one HTML page per week

Usage (local):
    python -m robin_sightings.flows.fetch
    python -m robin_sightings.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m robin_sightings.flows.fetch
"""
