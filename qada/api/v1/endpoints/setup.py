from fastapi import APIRouter, Query

from qada.core.calc import compute_eligible_days, compute_totals
from qada.core.config import settings
from qada.core.dates import parse_calendar_date
from qada.core.sync import PercentCountPair
from qada.models.ledger import PRAYERS
from qada.schemas.setup import (
    EligibleDaysResponse,
    PreviewRequest,
    PreviewResponse,
    SyncRequest,
    SyncResponse,
)
from qada.utils.ledger_validation import clamp_start_age

router = APIRouter()


@router.get("/eligible-days", response_model=EligibleDaysResponse)
async def get_eligible_days(
    birth_date: str = Query(...),
    start_age: float = Query(settings.DEFAULT_START_AGE)
):
    """Live eligible-day count for in-progress setup input"""
    age = clamp_start_age(start_age)
    return EligibleDaysResponse(
        birth_date=birth_date,
        start_age=age,
        eligible_days=compute_eligible_days(birth_date, age),
        valid_birth_date=parse_calendar_date(birth_date) is not None
    )


@router.post("/sync", response_model=SyncResponse)
async def sync_field(payload: SyncRequest):
    """
    Apply one edit to a percent/count pair.

    The edited field is clamped and the other one recomputed from it;
    a blank value unsets both.
    """
    eligible_days = compute_eligible_days(payload.birth_date, clamp_start_age(payload.start_age))
    pair = PercentCountPair()
    if payload.field == "percent":
        pair = pair.edit_percent(payload.value, eligible_days)
    else:
        pair = pair.edit_count(payload.value, eligible_days)
    return SyncResponse(eligible_days=eligible_days, pair=pair)


@router.post("/preview", response_model=PreviewResponse)
async def preview_totals(payload: PreviewRequest):
    """Totals the current setup input would commit to."""
    eligible_days = compute_eligible_days(payload.birth_date, clamp_start_age(payload.start_age))
    pairs = {
        prayer: payload.pairs.get(prayer, PercentCountPair()).refresh(eligible_days)
        for prayer in PRAYERS
    }
    percents = {prayer: pair.effective_percent for prayer, pair in pairs.items()}
    return PreviewResponse(
        eligible_days=eligible_days,
        pairs=pairs,
        totals=compute_totals(eligible_days, percents)
    )
