"""Storage slot backends and the factory that picks one from settings."""

import logging

from potatoqc.config import Settings
from potatoqc.storage.base import FileSlot, MemorySlot, SlotAdapter

logger = logging.getLogger(__name__)

__all__ = ["FileSlot", "MemorySlot", "SlotAdapter", "build_slot"]


def build_slot(config: Settings) -> SlotAdapter:
    """Create the slot adapter named by ``config.storage_backend``."""
    backend = config.storage_backend

    if backend == "memory":
        slot = MemorySlot()
    elif backend == "file":
        slot = FileSlot(config.storage_path)
    elif backend == "database":
        from potatoqc.database import build_engine, build_session_factory
        from potatoqc.storage.database import DatabaseSlot

        engine = build_engine(config.database_url, echo=False)
        slot = DatabaseSlot(build_session_factory(engine), config.storage_slot)
    elif backend == "redis":
        from potatoqc.storage.redis_slot import RedisSlot

        slot = RedisSlot.from_url(config.redis_url, config.storage_slot)
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    logger.info(f"Using {backend} storage slot")
    return slot
