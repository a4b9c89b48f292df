"""Slot adapter backed by a SQL table (see ``models.storage_slot``)."""

import logging

from sqlalchemy.orm import Session, sessionmaker

from potatoqc.models.storage_slot import StorageSlot

logger = logging.getLogger(__name__)


class DatabaseSlot:
    def __init__(self, session_factory: sessionmaker[Session], name: str):
        self.session_factory = session_factory
        self.name = name

    def load(self) -> bytes | None:
        with self.session_factory() as session:
            slot = session.get(StorageSlot, self.name)
            return slot.payload if slot else None

    def save(self, payload: bytes) -> None:
        with self.session_factory.begin() as session:
            slot = session.get(StorageSlot, self.name)
            if slot is None:
                session.add(StorageSlot(name=self.name, payload=payload))
                logger.info(f"Created storage slot {self.name}")
            else:
                slot.payload = payload
