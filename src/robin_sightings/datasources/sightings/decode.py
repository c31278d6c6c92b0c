"""Validation of the raw sightings payload.

Turns whatever JSON the feed returned into a typed list of ``DailyRecord``
or fails the whole batch. Dates are checked here so that a bad record never
reaches the week filler.
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from pydantic import ValidationError

from robin_sightings.analysis.dates import canonical
from robin_sightings.datasources.sightings.client import COUNT_FIELD, DATE_FIELD
from robin_sightings.errors import MalformedDate, SightingsDecodeError
from robin_sightings.schemas import DailyRecord


def _decode_record(index: int, item: Any) -> DailyRecord:
    if not isinstance(item, dict):
        msg = f"Record {index}: expected an object, got {type(item).__name__}"
        raise SightingsDecodeError(msg)

    missing = [name for name in (DATE_FIELD, COUNT_FIELD) if name not in item]
    if missing:
        msg = f"Record {index}: missing field(s) {', '.join(missing)}"
        raise SightingsDecodeError(msg)

    try:
        record = DailyRecord.model_validate(
            {"date": item[DATE_FIELD], "count": item[COUNT_FIELD]}
        )
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        msg = f"Record {index}: {errors}"
        raise SightingsDecodeError(msg) from exc

    try:
        date_str = canonical(record.date)
    except MalformedDate as exc:
        msg = f"Record {index}: {exc}"
        raise SightingsDecodeError(msg) from exc

    return record.model_copy(update={"date": date_str})


def decode_sightings(payload: Any) -> list[DailyRecord]:
    """
    Decode a feed payload into daily records.

    Args:
        payload: Parsed JSON, expected to be a list of
            ``{"date": "DD/MM/YYYY", "sightings": int}`` objects.

    Returns:
        Records in feed order with canonical (zero-padded) dates.

    Raises:
        SightingsDecodeError: The payload is not a list, or any element is
            malformed. Nothing is returned for the valid elements.
    """
    if not isinstance(payload, list):
        msg = f"Expected a JSON array of sightings, got {type(payload).__name__}"
        logger.warning(msg)
        raise SightingsDecodeError(msg)

    try:
        records = [_decode_record(i, item) for i, item in enumerate(payload)]
    except SightingsDecodeError as exc:
        logger.warning("Rejected sightings payload: {}", exc)
        raise

    logger.debug("Decoded {} sightings records", len(records))
    return records
