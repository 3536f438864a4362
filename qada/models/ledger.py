"""
Ledger model - the single persisted make-up prayer record.

Design principles:
- One ledger per device, stored under a fixed versioned key
- totals are fixed at creation; only remaining (and goal/milestones) change
- remaining is clamped at 0 but has no upper bound
- Persisted with camelCase keys, timestamps as ISO strings
"""

from enum import Enum
from typing import Dict, List, Optional
from datetime import datetime, timezone

from pydantic import BaseModel, Field, ConfigDict, NonNegativeInt, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Prayer(str, Enum):
    FAJR = "FAJR"
    DHUHR = "DHUHR"
    ASR = "ASR"
    MAGHRIB = "MAGHRIB"
    ISHA = "ISHA"
    WITR = "WITR"


# Canonical order; tie-breaks and listings follow it.
PRAYERS: List[Prayer] = list(Prayer)

PrayerMap = Dict[Prayer, int]

MILESTONES = ("75", "50", "25", "0")


def empty_prayer_map(value: int = 0) -> PrayerMap:
    return {prayer: value for prayer in PRAYERS}


class QadaLedger(BaseModel):
    """
    Make-up prayer debt for one person.

    Invariants:
    - totals[p] = ceil(eligible_days * percent_missed[p] / 100)
    - remaining[p] >= 0
    - updated_at >= created_at
    """
    model_config = ConfigDict(populate_by_name=True)

    version: str
    birth_date: str = Field(alias="birthDate")
    start_age: NonNegativeInt = Field(alias="startAge")
    percent_missed: Dict[Prayer, int] = Field(alias="percentMissed")
    eligible_days: NonNegativeInt = Field(alias="eligibleDays")
    totals: Dict[Prayer, NonNegativeInt]
    remaining: Dict[Prayer, NonNegativeInt]

    goal_date: Optional[str] = Field(default=None, alias="goalDate")
    milestones_seen: Dict[str, bool] = Field(default_factory=dict, alias="milestonesSeen")

    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=_utcnow, alias="updatedAt")

    @field_validator("percent_missed", "totals", "remaining")
    @classmethod
    def _fill_categories(cls, value: Dict[Prayer, int]) -> Dict[Prayer, int]:
        return {prayer: value.get(prayer, 0) for prayer in PRAYERS}

    def total_remaining(self) -> int:
        return sum(self.remaining[p] for p in PRAYERS)

    def total_owed(self) -> int:
        return sum(self.totals[p] for p in PRAYERS)

    def to_record(self) -> dict:
        """Serialized form as stored by the persistence layer."""
        return self.model_dump(mode="json", by_alias=True)
