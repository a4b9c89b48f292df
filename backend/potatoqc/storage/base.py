"""Slot adapters: where the serialized batch list lives.

A slot is one named location holding one byte payload.  The store only ever
reads the whole payload and writes the whole payload back, so an adapter
needs exactly two operations:

    load() -> bytes | None     None when nothing has been written yet
    save(payload) -> None      replace the payload
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class SlotAdapter(Protocol):
    def load(self) -> bytes | None: ...

    def save(self, payload: bytes) -> None: ...


class MemorySlot:
    """Keeps the payload in process memory."""

    def __init__(self, payload: bytes | None = None):
        self.payload = payload
        self.writes = 0

    def load(self) -> bytes | None:
        return self.payload

    def save(self, payload: bytes) -> None:
        self.payload = payload
        self.writes += 1


class FileSlot:
    """One JSON file on disk, replaced atomically on every save."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> bytes | None:
        if not self.path.exists():
            return None
        return self.path.read_bytes()

    def save(self, payload: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(payload)} bytes to {self.path}")
