"""Enveloped JSON cache for the sightings feed and the built site.

Two tiers live under the data directory:
  - live/: the last downloaded feed, reused until ``valid_until``
  - derived/: outputs rebuilt from live/ on every build

Cached files look like::

    {"meta": {"source": ..., "fetched_at": ..., "valid_until": ...}, "data": ...}

Only the raw feed is cached. Week filling always runs again after a read.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from robin_sightings.errors import SightingsDecodeError

if TYPE_CHECKING:
    from pathlib import Path


class CacheMeta(BaseModel):
    """Provenance of a cached payload. Unknown keys are kept as extra metadata."""

    model_config = ConfigDict(extra="allow")

    source: str = ""
    fetched_at: AwareDatetime | None = None
    valid_until: AwareDatetime | None = None

    @field_validator("fetched_at", "valid_until", mode="before")
    @classmethod
    def _assume_utc(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def is_fresh(self, now: datetime | None = None) -> bool:
        if self.valid_until is None:
            return False
        return (now or datetime.now(UTC)) < self.valid_until


class Envelope(BaseModel):
    meta: CacheMeta = Field(default_factory=CacheMeta)
    data: Any = None


class DataStore:
    """Cache rooted at *base_dir*; every path is relative to it."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.live = base_dir / "live"
        self.derived = base_dir / "derived"

    def load(self, path: Path) -> Envelope | None:
        """
        Return the parsed envelope at *path*, or None when nothing is cached.

        Raises:
            SightingsDecodeError: The file is not valid JSON or not an envelope.
        """
        target = self._resolve(path)
        if not target.is_file():
            return None
        try:
            return Envelope.model_validate_json(target.read_text())
        except ValidationError as exc:
            msg = f"Corrupt cache file {target}: {exc.errors()[0]['msg']}"
            raise SightingsDecodeError(msg) from exc

    def read(self, path: Path) -> Any | None:
        """Return just the cached ``data``, or None when nothing is cached."""
        envelope = self.load(path)
        return None if envelope is None else envelope.data

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **extra: Any,
    ) -> Path:
        """
        Cache *data* at *path* with a fresh ``fetched_at`` stamp.

        Args:
            path: Location under the base directory, e.g. ``live/sightings.json``.
            data: Any JSON-serializable value.
            source: Feed name or URL the data came from.
            valid_until: When the copy goes stale. None means it is never fresh.
            **extra: Additional metadata stored alongside ``source``.

        Returns:
            The absolute path written.
        """
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        meta = CacheMeta(
            source=source,
            fetched_at=datetime.now(UTC),
            valid_until=valid_until,
            **extra,
        )
        envelope = {"meta": meta.model_dump(mode="json", exclude_none=True), "data": data}
        target.write_text(json.dumps(envelope, indent=2))

        logger.debug("Cached {} from {}", target, source)
        return target

    def is_fresh(self, path: Path) -> bool:
        """True when *path* is cached and its ``valid_until`` is still ahead.

        A corrupt file is never fresh, so the next fetch replaces it.
        """
        try:
            envelope = self.load(path)
        except SightingsDecodeError as exc:
            logger.warning("{}", exc)
            return False
        return envelope is not None and envelope.meta.is_fresh()

    def _resolve(self, path: Path) -> Path:
        target = path if path.is_absolute() else self.base / path
        if not target.resolve().is_relative_to(self.base.resolve()):
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg)
        return target
