from fastapi import APIRouter, Depends, HTTPException, status

from qada.api.deps import get_current_ledger
from qada.core.dates import parse_calendar_date
from qada.core.pace import GoalPace, PaceProjection, project_pace, required_pace
from qada.models.ledger import PrayerMap, QadaLedger
from qada.schemas.plan import PaceRequest
from qada.utils.ledger_validation import PACE_PRESETS, sanitize_pace

router = APIRouter()


@router.post("/projection", response_model=PaceProjection)
async def get_projection(
    payload: PaceRequest,
    ledger: QadaLedger = Depends(get_current_ledger)
):
    """Forecast the finish date for a daily make-up pace"""
    pace = sanitize_pace(payload.pace)
    return project_pace(ledger.remaining, pace, payload.today)


@router.get("/presets/{name}", response_model=PrayerMap)
async def get_preset(name: str):
    """Preset pace values (one_each, zero_all)"""
    preset = PACE_PRESETS.get(name)
    if preset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown preset '{name}'"
        )
    return preset


@router.get("/goal-pace", response_model=GoalPace)
async def get_goal_pace(ledger: QadaLedger = Depends(get_current_ledger)):
    """Daily pace needed to finish by the stored goal date"""
    if not ledger.goal_date:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No goal date set"
        )

    plan = required_pace(ledger.remaining, parse_calendar_date(ledger.goal_date))
    if plan is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Goal date must be in the future"
        )
    return plan
