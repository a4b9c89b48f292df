"""Pytest configuration and fixtures for PotatoQC tests.

Provides a deterministic store (fixed clock, sequential ids) over an
in-memory slot, and an HTTP client wired to that store.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from potatoqc.deps import get_store
from potatoqc.main import app
from potatoqc.schemas.batch import BatchCreate
from potatoqc.services.batch_store import BatchStore
from potatoqc.storage import MemorySlot


class StepClock:
    """Returns a new timestamp one minute later on every call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(minutes=1)
        return now


class SequentialIds:
    def __init__(self, prefix: str = "batch"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


class SlowSlot(MemorySlot):
    """Memory slot whose reads stall, widening any read-modify-write race."""

    def __init__(self, payload: bytes | None = None, delay: float = 0.02):
        super().__init__(payload)
        self.delay = delay

    def load(self) -> bytes | None:
        payload = self.payload
        time.sleep(self.delay)
        return payload


# ── Store fixtures ───────────────────────────────────────────────

@pytest.fixture
def clock() -> StepClock:
    return StepClock(datetime(2024, 9, 1, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture
def store(slot: MemorySlot, clock: StepClock) -> BatchStore:
    return BatchStore(slot, clock=clock, id_factory=SequentialIds())


@pytest.fixture
def slow_store(clock: StepClock) -> BatchStore:
    return BatchStore(SlowSlot(), clock=clock, id_factory=SequentialIds())


@pytest.fixture
def acme_fields() -> BatchCreate:
    """The B-1 / Acme batch: soil 5, greening 3, disease 2."""
    return BatchCreate(
        batch_number="B-1",
        supplier="Acme",
        arrival_date="2024-09-01",
        quantity=10,
        price=100,
        soil=5,
        greening=3,
        disease=2,
        peeling=0,
        mechanical=0,
        wilting=0,
        size_defects=0,
    )


# ── API client ───────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client(store: BatchStore) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the store dependency pointed at the memory store."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: HTTP API tests")
    config.addinivalue_line("markers", "storage: Storage backend tests")
