import pytest
from unittest.mock import AsyncMock

from qada.core.config import settings
from qada.models.ledger import Prayer
from qada.repositories.ledger_repo import LedgerRepository


@pytest.mark.asyncio
async def test_load_missing_record(mock_db):
    repo = LedgerRepository(mock_db)

    assert await repo.load() is None
    repo.collection.find_one.assert_awaited_once_with({"_id": settings.LEDGER_STORAGE_KEY})


@pytest.mark.asyncio
async def test_load_decodes_record(mock_db, sample_ledger):
    doc = sample_ledger.to_record()
    doc["_id"] = settings.LEDGER_STORAGE_KEY
    mock_db[settings.LEDGER_COLLECTION].find_one.return_value = doc

    ledger = await LedgerRepository(mock_db).load()

    assert ledger == sample_ledger
    assert ledger.totals[Prayer.FAJR] == 1754


@pytest.mark.asyncio
async def test_load_accepts_record_with_iso_timestamps(mock_db):
    mock_db[settings.LEDGER_COLLECTION].find_one.return_value = {
        "_id": settings.LEDGER_STORAGE_KEY,
        "version": "0.2-mobile",
        "birthDate": "2000-01-01",
        "startAge": 12,
        "percentMissed": {"FAJR": 40, "DHUHR": 0, "ASR": 0, "MAGHRIB": 0, "ISHA": 0, "WITR": 0},
        "eligibleDays": 4383,
        "totals": {"FAJR": 1754, "DHUHR": 0, "ASR": 0, "MAGHRIB": 0, "ISHA": 0, "WITR": 0},
        "remaining": {"FAJR": 1700, "DHUHR": 0, "ASR": 0, "MAGHRIB": 0, "ISHA": 0, "WITR": 0},
        "createdAt": "2024-01-01T08:30:00.000Z",
        "updatedAt": "2024-02-01T08:30:00.000Z",
    }

    ledger = await LedgerRepository(mock_db).load()

    assert ledger.remaining[Prayer.FAJR] == 1700
    assert ledger.goal_date is None
    assert ledger.updated_at > ledger.created_at


@pytest.mark.asyncio
async def test_load_unknown_version_reads_as_absent(mock_db, sample_ledger):
    doc = sample_ledger.to_record()
    doc["version"] = "9.9"
    mock_db[settings.LEDGER_COLLECTION].find_one.return_value = doc

    assert await LedgerRepository(mock_db).load() is None


@pytest.mark.asyncio
async def test_load_corrupt_record_reads_as_absent(mock_db):
    mock_db[settings.LEDGER_COLLECTION].find_one.return_value = {
        "version": settings.LEDGER_VERSION,
        "birthDate": "2000-01-01",
        "remaining": "garbage",
    }

    assert await LedgerRepository(mock_db).load() is None


@pytest.mark.asyncio
async def test_load_read_failure_reads_as_absent(mock_db):
    mock_db[settings.LEDGER_COLLECTION].find_one.side_effect = ConnectionError("down")

    assert await LedgerRepository(mock_db).load() is None


@pytest.mark.asyncio
async def test_save_upserts_record(mock_db, sample_ledger):
    repo = LedgerRepository(mock_db)

    assert await repo.save(sample_ledger) is True

    repo.collection.replace_one.assert_awaited_once()
    query, record = repo.collection.replace_one.call_args[0]
    assert query == {"_id": settings.LEDGER_STORAGE_KEY}
    assert record["eligibleDays"] == 4383
    assert record["remaining"]["FAJR"] == 1754
    assert repo.collection.replace_one.call_args[1] == {"upsert": True}


@pytest.mark.asyncio
async def test_save_failure_is_swallowed(mock_db, sample_ledger):
    mock_db[settings.LEDGER_COLLECTION].replace_one = AsyncMock(side_effect=TimeoutError("slow"))

    assert await LedgerRepository(mock_db).save(sample_ledger) is False


@pytest.mark.asyncio
async def test_clear(mock_db):
    repo = LedgerRepository(mock_db)

    assert await repo.clear() is True
    repo.collection.delete_one.assert_awaited_once_with({"_id": settings.LEDGER_STORAGE_KEY})


@pytest.mark.asyncio
async def test_clear_failure_is_swallowed(mock_db):
    mock_db[settings.LEDGER_COLLECTION].delete_one.side_effect = ConnectionError("down")

    assert await LedgerRepository(mock_db).clear() is False
