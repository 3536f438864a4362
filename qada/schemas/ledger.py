from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from qada.core.config import settings
from qada.models.ledger import Prayer


class LedgerCreateRequest(BaseModel):
    """Setup input. start_age is truncated, percentages clamped to 0..100."""
    birth_date: str = Field(..., examples=["2000-01-01"])
    start_age: float = settings.DEFAULT_START_AGE
    percent_missed: Dict[Prayer, Optional[int]] = Field(default_factory=dict)


class LedgerDeltaRequest(BaseModel):
    """Signed change to one prayer's remaining count."""
    prayer: Prayer
    delta: int


class GoalDateRequest(BaseModel):
    goal_date: Optional[str] = None


class LedgerResponse(BaseModel):
    version: str
    birth_date: str
    start_age: int
    percent_missed: Dict[Prayer, int]
    eligible_days: int
    totals: Dict[Prayer, int]
    remaining: Dict[Prayer, int]
    goal_date: Optional[str] = None
    milestones_seen: Dict[str, bool] = {}
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LedgerDeltaResponse(BaseModel):
    ledger: LedgerResponse
    new_milestones: List[str] = []


class PrayerProgress(BaseModel):
    prayer: Prayer
    remaining: int
    total: int
    percent_missed: int


class ProgressResponse(BaseModel):
    eligible_days: int
    total_remaining: int
    total_owed: int
    percent_remaining: float
    updated_at: datetime
    prayers: List[PrayerProgress]
