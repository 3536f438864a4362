"""
LedgerStateManager - owner of the in-memory ledger.

The in-memory ledger is authoritative as soon as a mutation is applied.
Each accepted change schedules a save (or clear) on the repository
without waiting for it; drain() awaits whatever is still in flight.
Changes must be made from the running event loop that owns the
repository (request handlers, the app lifespan); restore() adopts an
already-persisted ledger without writing.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Set

from qada.models.ledger import Prayer, QadaLedger
from qada.repositories.ledger_repo import LedgerRepository
from qada.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

LedgerTransform = Callable[[QadaLedger], QadaLedger]


class LedgerStateManager:
    def __init__(self, repository: LedgerRepository):
        self.repository = repository
        self._ledger: Optional[QadaLedger] = None
        self._loaded = False
        self._pending: Set[asyncio.Task] = set()

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> Optional[QadaLedger]:
        self.restore(await self.repository.load())
        logger.info("Ledger %s", "loaded" if self._ledger else "not set up")
        return self._ledger

    def restore(self, ledger: Optional[QadaLedger]) -> None:
        self._ledger = ledger
        self._loaded = True

    def get(self) -> Optional[QadaLedger]:
        return self._ledger

    def install(self, ledger: QadaLedger) -> QadaLedger:
        self._notify(self.repository.save, ledger)
        self._ledger = ledger
        return ledger

    def create(self, birth_date: str, start_age, percent_missed) -> QadaLedger:
        ledger = LedgerService.create_initial_ledger(birth_date, start_age, percent_missed)
        return self.install(ledger)

    def mutate(self, transform: LedgerTransform) -> Optional[QadaLedger]:
        """Apply ``transform`` to the current ledger; no-op when there is none."""
        previous = self._ledger
        if previous is None:
            return None

        updated = transform(previous)
        now = datetime.now(timezone.utc)
        updated = updated.model_copy(update={
            "created_at": previous.created_at,
            "updated_at": max(updated.updated_at, previous.updated_at, now),
        })
        return self.install(updated)

    def apply_delta(self, prayer: Prayer, delta: int) -> Optional[QadaLedger]:
        return self.mutate(lambda ledger: LedgerService.apply_delta(ledger, prayer, delta))

    def set_goal_date(self, goal_date: Optional[str]) -> Optional[QadaLedger]:
        return self.mutate(lambda ledger: LedgerService.set_goal_date(ledger, goal_date))

    def reset(self) -> None:
        self._notify(self.repository.clear)
        if self._ledger is not None:
            logger.info("Ledger reset")
        self._ledger = None

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _notify(self, operation, *args) -> None:
        # RuntimeError outside a running loop, before anything changes
        loop = asyncio.get_running_loop()
        task = loop.create_task(operation(*args))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
