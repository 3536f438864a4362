from fastapi import APIRouter, Depends, HTTPException, status

from qada.api.deps import get_current_ledger, get_state_manager
from qada.core.calc import summarize_progress
from qada.models.ledger import QadaLedger
from qada.schemas.ledger import (
    GoalDateRequest,
    LedgerCreateRequest,
    LedgerDeltaRequest,
    LedgerDeltaResponse,
    LedgerResponse,
    ProgressResponse,
)
from qada.services.state_manager import LedgerStateManager
from qada.utils.ledger_validation import SetupValidationError

router = APIRouter()


def _validation_error(exc: SetupValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"field": exc.field, "message": str(exc)}
    )


@router.get("", response_model=LedgerResponse)
async def get_ledger(ledger: QadaLedger = Depends(get_current_ledger)):
    """Get the current ledger"""
    return LedgerResponse.model_validate(ledger)


@router.post("", response_model=LedgerResponse, status_code=status.HTTP_201_CREATED)
async def create_ledger(
    payload: LedgerCreateRequest,
    manager: LedgerStateManager = Depends(get_state_manager)
):
    """Create the ledger from setup input."""
    if manager.get() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ledger already exists. Reset it before running setup again."
        )

    try:
        ledger = manager.create(payload.birth_date, payload.start_age, payload.percent_missed)
    except SetupValidationError as exc:
        raise _validation_error(exc)

    return LedgerResponse.model_validate(ledger)


@router.post("/delta", response_model=LedgerDeltaResponse)
async def apply_delta(
    payload: LedgerDeltaRequest,
    ledger: QadaLedger = Depends(get_current_ledger),
    manager: LedgerStateManager = Depends(get_state_manager)
):
    """Log make-up prayers (negative delta) or add missed ones back (positive delta)."""
    seen_before = {m for m, flag in ledger.milestones_seen.items() if flag}
    updated = manager.apply_delta(payload.prayer, payload.delta)
    new_milestones = [
        m for m, flag in updated.milestones_seen.items()
        if flag and m not in seen_before
    ]
    return LedgerDeltaResponse(
        ledger=LedgerResponse.model_validate(updated),
        new_milestones=new_milestones
    )


@router.delete("")
async def reset_ledger(manager: LedgerStateManager = Depends(get_state_manager)):
    """Discard the ledger. Irreversible."""
    manager.reset()
    return {"success": True}


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(ledger: QadaLedger = Depends(get_current_ledger)):
    """Remaining versus totals per prayer"""
    return summarize_progress(ledger)


@router.put("/goal", response_model=LedgerResponse)
async def set_goal_date(
    payload: GoalDateRequest,
    ledger: QadaLedger = Depends(get_current_ledger),
    manager: LedgerStateManager = Depends(get_state_manager)
):
    """Set or clear the target finish date used by the plan."""
    try:
        updated = manager.set_goal_date(payload.goal_date)
    except SetupValidationError as exc:
        raise _validation_error(exc)
    return LedgerResponse.model_validate(updated)
