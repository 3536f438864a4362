from datetime import date, datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from qada.main import app
from qada.models.ledger import Prayer, QadaLedger
from qada.services.ledger_service import LedgerService
from qada.services.state_manager import LedgerStateManager

TODAY = date(2024, 1, 1)
CREATED_AT = datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc)


class InMemoryLedgerRepository:
    """Stands in for LedgerRepository; keeps the serialized record like the real one."""

    def __init__(self, record: Optional[dict] = None):
        self.record = record
        self.saves = 0
        self.clears = 0

    async def load(self) -> Optional[QadaLedger]:
        if self.record is None:
            return None
        return QadaLedger.model_validate(self.record)

    async def save(self, ledger: QadaLedger) -> bool:
        self.record = ledger.to_record()
        self.saves += 1
        return True

    async def clear(self) -> bool:
        self.record = None
        self.clears += 1
        return True


@pytest.fixture
def mock_db():
    """Motor database double: db[name] returns one collection with async methods."""
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.replace_one = AsyncMock()
    collection.delete_one = AsyncMock()

    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


@pytest.fixture
def sample_ledger() -> QadaLedger:
    """2000-01-01, start age 12, as of 2024-01-01 (4383 eligible days)."""
    return LedgerService.create_initial_ledger(
        "2000-01-01",
        12,
        {
            Prayer.FAJR: 40,
            Prayer.DHUHR: 10,
            Prayer.ASR: 20,
            Prayer.MAGHRIB: 0,
            Prayer.ISHA: 25,
            Prayer.WITR: 50,
        },
        now=CREATED_AT,
        today=TODAY,
    )


@pytest.fixture
def memory_repo():
    return InMemoryLedgerRepository()


@pytest.fixture
def state_manager(memory_repo):
    return LedgerStateManager(memory_repo)


@pytest.fixture
def test_client(state_manager):
    """FastAPI test client wired to an in-memory ledger (no MongoDB, no lifespan)."""
    app.state.ledger_manager = state_manager
    client = TestClient(app)
    yield client
    del app.state.ledger_manager


@pytest.fixture
def setup_payload():
    return {
        "birth_date": "2000-01-01",
        "start_age": 12,
        "percent_missed": {"FAJR": 40, "DHUHR": 10, "ASR": 0, "MAGHRIB": 0, "ISHA": 0, "WITR": 0},
    }
