"""
Domain models for robin sightings.

Pydantic models for records decoded from the sightings feed. The wire format
calls the daily count ``sightings``; internally it is ``count``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LoadStatus(StrEnum):
    """Lifecycle of a sightings load."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class DailyRecord(BaseModel):
    """Number of robin sightings on one calendar day."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    date: str = Field(..., description="Canonical DD/MM/YYYY date string")
    count: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("count", "sightings"),
        description="Sightings on this day",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize back to the feed's ``{date, sightings}`` shape."""
        return {"date": self.date, "sightings": self.count}
