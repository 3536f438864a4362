import pytest
from unittest.mock import AsyncMock

from qada.models.ledger import Prayer
from qada.services.state_manager import LedgerStateManager


@pytest.mark.asyncio
async def test_load_without_record_means_not_set_up(state_manager):
    assert await state_manager.load() is None
    assert state_manager.loaded is True
    assert state_manager.get() is None


@pytest.mark.asyncio
async def test_load_existing_record(memory_repo, sample_ledger):
    memory_repo.record = sample_ledger.to_record()
    manager = LedgerStateManager(memory_repo)

    ledger = await manager.load()

    assert ledger == sample_ledger
    assert manager.get() == sample_ledger


@pytest.mark.asyncio
async def test_create_installs_and_persists(state_manager, memory_repo):
    ledger = state_manager.create("2000-01-01", 12, {Prayer.FAJR: 40})
    await state_manager.drain()

    assert state_manager.get() is ledger
    assert memory_repo.saves == 1
    assert memory_repo.record["birthDate"] == "2000-01-01"
    assert memory_repo.record["remaining"]["FAJR"] == ledger.totals[Prayer.FAJR]


@pytest.mark.asyncio
async def test_apply_delta_updates_memory_and_storage(state_manager, memory_repo, sample_ledger):
    state_manager.install(sample_ledger)

    updated = state_manager.apply_delta(Prayer.FAJR, -1)
    await state_manager.drain()

    assert state_manager.get().remaining[Prayer.FAJR] == 1753
    assert updated.created_at == sample_ledger.created_at
    assert updated.updated_at > sample_ledger.updated_at
    assert memory_repo.record["remaining"]["FAJR"] == 1753
    assert memory_repo.saves == 2


@pytest.mark.asyncio
async def test_mutate_without_ledger_is_noop(state_manager, memory_repo):
    assert state_manager.mutate(lambda ledger: ledger) is None
    assert state_manager.apply_delta(Prayer.ASR, -1) is None
    await state_manager.drain()
    assert memory_repo.saves == 0


@pytest.mark.asyncio
async def test_mutate_keeps_created_at(state_manager, sample_ledger):
    state_manager.install(sample_ledger)

    def rewrite(ledger):
        return ledger.model_copy(update={"created_at": ledger.created_at.replace(year=1990)})

    updated = state_manager.mutate(rewrite)
    assert updated.created_at == sample_ledger.created_at
    assert updated.updated_at >= updated.created_at
    await state_manager.drain()


@pytest.mark.asyncio
async def test_reset_clears_memory_and_storage(state_manager, memory_repo, sample_ledger):
    state_manager.install(sample_ledger)
    await state_manager.drain()

    state_manager.reset()
    await state_manager.drain()

    assert state_manager.get() is None
    assert memory_repo.record is None
    assert memory_repo.clears == 1


@pytest.mark.asyncio
async def test_failed_save_does_not_roll_back_memory(sample_ledger):
    repo = AsyncMock()
    repo.save.return_value = False
    manager = LedgerStateManager(repo)
    manager.install(sample_ledger)

    manager.apply_delta(Prayer.WITR, -2)
    await manager.drain()

    assert manager.get().remaining[Prayer.WITR] == sample_ledger.remaining[Prayer.WITR] - 2
    assert repo.save.await_count == 2


def test_changes_require_running_event_loop(state_manager, memory_repo, sample_ledger):
    with pytest.raises(RuntimeError):
        state_manager.install(sample_ledger)
    with pytest.raises(RuntimeError):
        state_manager.reset()

    assert state_manager.get() is None
    assert memory_repo.saves == 0
    assert memory_repo.clears == 0


def test_restore_adopts_without_writing(state_manager, memory_repo, sample_ledger):
    state_manager.restore(sample_ledger)

    assert state_manager.get() is sample_ledger
    assert state_manager.loaded is True
    assert memory_repo.saves == 0
