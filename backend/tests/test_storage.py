"""Storage slot backend and codec tests."""

import json
from pathlib import Path

import pytest

from potatoqc.config import Settings
from potatoqc.database import build_engine, build_session_factory
from potatoqc.schemas.batch import Batch
from potatoqc.services.batch_store import BatchStore
from potatoqc.services.serialization import dump_batches, load_batches
from potatoqc.storage import FileSlot, MemorySlot, build_slot
from potatoqc.storage.database import DatabaseSlot
from potatoqc.storage.redis_slot import RedisSlot


class FakeRedis:
    """Minimal stand-in for the two Redis commands the slot uses."""

    def __init__(self):
        self.data: dict[str, bytes] = {}
        self.closed = False

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True

    def close(self):
        self.closed = True


@pytest.mark.storage
class TestCodec:

    def test_uses_camel_case_and_omits_unset(self, store, acme_fields):
        batch = store.add(acme_fields)
        [record] = json.loads(dump_batches([batch]))

        assert record["batchNumber"] == "B-1"
        assert record["sizeDefects"] == 0.0
        assert record["arrivalDate"] == "2024-09-01"
        assert record["createdAt"].startswith("2024-09-01T08:00:00")
        assert "updatedAt" not in record
        assert "dryMatter" not in record

    def test_round_trip(self, store, acme_fields):
        batch = store.add(acme_fields)
        assert load_batches(dump_batches([batch])) == [batch]

    @pytest.mark.parametrize("payload", [None, b"", "", b"[1, 2]", b"{", b"null"])
    def test_unreadable_payload_is_empty(self, payload):
        assert load_batches(payload) == []

    def test_accepts_text_payload(self):
        payload = json.dumps([{
            "id": "a", "createdAt": "2024-01-01T00:00:00Z",
            "batchNumber": "B", "supplier": "S", "arrivalDate": "2024-01-01",
            "quantity": 1, "price": 2,
        }])
        [batch] = load_batches(payload)
        assert isinstance(batch, Batch)
        assert batch.price == 2.0

    def test_skips_only_the_records_that_do_not_fit(self, store, acme_fields):
        good = json.loads(dump_batches([store.add(acme_fields)]))[0]
        payload = json.dumps([good, {"id": "broken"}, "text", None, good])
        batches = load_batches(payload)
        assert [b.id for b in batches] == ["batch-1", "batch-1"]

    def test_undecodable_bytes_are_empty(self):
        assert load_batches(b"\x80\x81[]") == []


@pytest.mark.storage
class TestFileSlot:

    def test_missing_file_loads_none(self, tmp_path: Path):
        assert FileSlot(tmp_path / "batches.json").load() is None

    def test_save_creates_parent_and_replaces(self, tmp_path: Path):
        path = tmp_path / "nested" / "batches.json"
        slot = FileSlot(path)
        slot.save(b"[]")
        slot.save(b'["second"]')
        assert path.read_bytes() == b'["second"]'
        assert slot.load() == b'["second"]'
        # No temp files left behind
        assert [p.name for p in path.parent.iterdir()] == ["batches.json"]

    def test_store_persists_across_instances(self, tmp_path: Path, clock, acme_fields):
        path = tmp_path / "batches.json"
        created = BatchStore(FileSlot(path), clock=clock).add(acme_fields)
        assert BatchStore(FileSlot(path), clock=clock).list() == [created]


@pytest.mark.storage
class TestDatabaseSlot:

    @pytest.fixture
    def session_factory(self, tmp_path: Path):
        engine = build_engine(f"sqlite:///{tmp_path / 'potatoqc.db'}")
        yield build_session_factory(engine)
        engine.dispose()

    def test_empty_table_loads_none(self, session_factory):
        assert DatabaseSlot(session_factory, "potato_batches").load() is None

    def test_save_inserts_then_updates(self, session_factory):
        slot = DatabaseSlot(session_factory, "potato_batches")
        slot.save(b"[]")
        slot.save(b'[{"a": 1}]')
        assert slot.load() == b'[{"a": 1}]'

    def test_slots_are_independent(self, session_factory):
        DatabaseSlot(session_factory, "one").save(b"1")
        DatabaseSlot(session_factory, "two").save(b"2")
        assert DatabaseSlot(session_factory, "one").load() == b"1"

    def test_store_round_trip(self, session_factory, clock, acme_fields):
        store = BatchStore(DatabaseSlot(session_factory, "potato_batches"), clock=clock)
        created = store.add(acme_fields)
        assert store.list() == [created]


@pytest.mark.storage
class TestRedisSlot:

    def test_load_and_save(self):
        client = FakeRedis()
        slot = RedisSlot(client, "potato_batches")
        assert slot.load() is None
        slot.save(b"[]")
        assert client.data == {"potato_batches": b"[]"}
        assert slot.load() == b"[]"

    def test_store_round_trip(self, clock, acme_fields):
        store = BatchStore(RedisSlot(FakeRedis(), "potato_batches"), clock=clock)
        created = store.add(acme_fields)
        assert store.list() == [created]

    def test_close(self):
        client = FakeRedis()
        RedisSlot(client, "k").close()
        assert client.closed


@pytest.mark.storage
class TestBuildSlot:

    def test_memory(self):
        assert isinstance(build_slot(Settings(storage_backend="memory")), MemorySlot)

    def test_file(self, tmp_path: Path):
        slot = build_slot(
            Settings(storage_backend="file", storage_path=tmp_path / "b.json")
        )
        assert isinstance(slot, FileSlot)
        assert slot.path == tmp_path / "b.json"

    def test_database(self, tmp_path: Path):
        slot = build_slot(
            Settings(
                storage_backend="database",
                database_url=f"sqlite:///{tmp_path / 'b.db'}",
                storage_slot="custom",
            )
        )
        assert isinstance(slot, DatabaseSlot)
        assert slot.name == "custom"
        assert slot.load() is None
