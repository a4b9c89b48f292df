"""Aggregate model imports so create_all sees every table."""

from potatoqc.models.storage_slot import StorageSlot  # noqa: F401
