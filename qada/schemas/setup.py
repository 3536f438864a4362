from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field

from qada.core.config import settings
from qada.core.sync import PercentCountPair
from qada.models.ledger import Prayer


class EligibleDaysResponse(BaseModel):
    birth_date: str
    start_age: int
    eligible_days: int
    valid_birth_date: bool


class SyncRequest(BaseModel):
    """One keystroke in the percent or count field of one prayer."""
    birth_date: str
    start_age: float = settings.DEFAULT_START_AGE
    field: Literal["percent", "count"]
    value: Optional[str] = None


class SyncResponse(BaseModel):
    eligible_days: int
    pair: PercentCountPair


class PreviewRequest(BaseModel):
    birth_date: str
    start_age: float = settings.DEFAULT_START_AGE
    pairs: Dict[Prayer, PercentCountPair] = Field(default_factory=dict)


class PreviewResponse(BaseModel):
    eligible_days: int
    pairs: Dict[Prayer, PercentCountPair]
    totals: Dict[Prayer, int]
