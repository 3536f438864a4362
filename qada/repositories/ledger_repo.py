"""
LedgerRepository - durable copy of the single ledger.

The ledger lives in one document keyed by the versioned storage key.
Every operation is best-effort:
- load() never raises; read/decode failures and unknown versions read as "no ledger"
- save()/clear() log failures and report them as False instead of raising
"""

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from qada.core.config import settings
from qada.models.ledger import QadaLedger

logger = logging.getLogger(__name__)


class LedgerRepository:
    """Repository for the persisted ledger record."""

    def __init__(self, db: AsyncIOMotorDatabase, storage_key: Optional[str] = None):
        self.db = db
        self.collection = db[settings.LEDGER_COLLECTION]
        self.storage_key = storage_key or settings.LEDGER_STORAGE_KEY
        self._write_lock = asyncio.Lock()

    async def load(self) -> Optional[QadaLedger]:
        try:
            doc = await self.collection.find_one({"_id": self.storage_key})
        except Exception:
            logger.exception("Failed to read ledger %s", self.storage_key)
            return None

        if not doc:
            return None

        doc.pop("_id", None)
        if doc.get("version") != settings.LEDGER_VERSION:
            logger.warning(
                "Ignoring ledger %s with unrecognized version %r",
                self.storage_key, doc.get("version")
            )
            return None

        try:
            return QadaLedger.model_validate(doc)
        except ValidationError:
            logger.exception("Stored ledger %s could not be decoded", self.storage_key)
            return None

    async def save(self, ledger: QadaLedger) -> bool:
        record = ledger.to_record()
        async with self._write_lock:
            try:
                await self.collection.replace_one(
                    {"_id": self.storage_key},
                    record,
                    upsert=True
                )
            except Exception:
                logger.exception("Failed to save ledger %s", self.storage_key)
                return False
        return True

    async def clear(self) -> bool:
        async with self._write_lock:
            try:
                await self.collection.delete_one({"_id": self.storage_key})
            except Exception:
                logger.exception("Failed to clear ledger %s", self.storage_key)
                return False
        return True
