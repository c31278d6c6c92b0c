"""Sightings feed constants.

The feed is a JSON array of ``{"date": "DD/MM/YYYY", "sightings": <int>}``
objects, one per observed day, in no particular order.
"""

SOURCE_NAME = "robin-sightings-feed"

# Wire field names
DATE_FIELD = "date"
COUNT_FIELD = "sightings"
