"""JSON codec for the persisted batch list.

The slot always holds the full list as one JSON array.  Optional fields that
are unset are omitted.  A payload that is not a JSON array at all (bad JSON,
wrong top-level shape) decodes to an empty list.  Inside a readable array,
records that no longer fit the Batch shape are skipped one by one, so the
rest of the list survives and is kept by the next write.
"""

import json
import logging

from pydantic import TypeAdapter, ValidationError

from potatoqc.schemas.batch import Batch

logger = logging.getLogger(__name__)

_batch_list = TypeAdapter(list[Batch])


def dump_batches(batches: list[Batch]) -> bytes:
    return _batch_list.dump_json(batches, by_alias=True, exclude_none=True)


def load_batches(payload: bytes | str | None) -> list[Batch]:
    if not payload:
        return []

    try:
        records = json.loads(payload)
    except ValueError:
        logger.warning("Discarding unreadable batch payload (invalid JSON)")
        return []

    if not isinstance(records, list):
        logger.warning(
            f"Discarding unreadable batch payload (top level is {type(records).__name__})"
        )
        return []

    batches = []
    for position, record in enumerate(records):
        try:
            batches.append(Batch.model_validate(record))
        except ValidationError as exc:
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning(
                f"Skipping unreadable batch record at {position} "
                f"(id={record_id}, {exc.error_count()} errors)"
            )
    return batches
