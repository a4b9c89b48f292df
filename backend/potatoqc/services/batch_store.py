"""Batch record store.

Owns the canonical, insertion-ordered list of batches held in one storage
slot.  Every call reads the slot; every mutation writes the entire list back
(there are no partial writes), one mutation at a time under an in-process
lock.  Callers always receive freshly decoded copies, never the store's own
objects.

Failure semantics:
  - an absent or unreadable slot reads as an empty list
  - ``update`` of an unknown id returns None and writes nothing
  - ``remove`` of an unknown id is a silent no-op (the list is still saved)
"""

from __future__ import annotations

import builtins
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable

from potatoqc.schemas.batch import Batch, BatchCreate, BatchPatch
from potatoqc.services.serialization import dump_batches, load_batches
from potatoqc.storage.base import SlotAdapter

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_batch_id() -> str:
    return str(uuid.uuid4())


class BatchStore:
    def __init__(
        self,
        slot: SlotAdapter,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_batch_id,
    ):
        self.slot = slot
        self.clock = clock
        self.id_factory = id_factory
        # Serializes read-modify-write cycles; routes run in a threadpool
        self._lock = threading.RLock()

    # ── Slot I/O ─────────────────────────────────────────────

    def _read(self) -> list[Batch]:
        return load_batches(self.slot.load())

    def _write(self, batches: list[Batch]) -> None:
        self.slot.save(dump_batches(batches))

    def _next_id(self, batches: list[Batch]) -> str:
        taken = {b.id for b in batches}
        batch_id = self.id_factory()
        while batch_id in taken:
            logger.warning(f"Batch id collision on {batch_id}, drawing again")
            batch_id = self.id_factory()
        return batch_id

    # ── Reads ────────────────────────────────────────────────

    # Named after the store operation; annotations below use builtins.list
    def list(self) -> builtins.list[Batch]:
        """All batches, oldest first."""
        return self._read()

    def get(self, batch_id: str) -> Batch | None:
        return next((b for b in self._read() if b.id == batch_id), None)

    def search(self, query: str | None = None) -> builtins.list[Batch]:
        """Case-insensitive substring match on batch number or supplier.

        An empty or missing query returns every batch.
        """
        batches = self._read()
        if not query:
            return batches

        needle = query.casefold()
        return [
            b for b in batches
            if needle in b.batch_number.casefold() or needle in b.supplier.casefold()
        ]

    # ── Mutations ────────────────────────────────────────────

    def add(self, fields: BatchCreate) -> Batch:
        """Append a new batch with a fresh id and creation time."""
        with self._lock:
            batches = self._read()
            batch = Batch(
                id=self._next_id(batches),
                created_at=self.clock(),
                **fields.model_dump(),
            )
            batches.append(batch)
            self._write(batches)

        logger.info(f"Added batch {batch.batch_number} ({batch.id})")
        return batch

    def update(self, batch_id: str, patch: BatchPatch) -> Batch | None:
        """Merge ``patch`` over an existing batch and stamp ``updated_at``.

        Returns None, without writing, when no batch has ``batch_id``.
        """
        with self._lock:
            batches = self._read()
            index = next((i for i, b in enumerate(batches) if b.id == batch_id), None)
            if index is None:
                logger.info(f"Update skipped, batch not found: {batch_id}")
                return None

            merged = {
                **batches[index].model_dump(),
                **patch.changes(),
                "updated_at": self.clock(),
            }
            batch = Batch.model_validate(merged)
            batches[index] = batch
            self._write(batches)

        logger.info(f"Updated batch {batch.batch_number} ({batch.id})")
        return batch

    def remove(self, batch_id: str) -> None:
        with self._lock:
            batches = self._read()
            remaining = [b for b in batches if b.id != batch_id]
            self._write(remaining)

        if len(remaining) == len(batches):
            logger.debug(f"Remove of unknown batch {batch_id} ignored")
        else:
            logger.info(f"Removed batch {batch_id}")
