from fastapi import Depends, HTTPException, Request, status

from qada.models.ledger import QadaLedger
from qada.services.state_manager import LedgerStateManager


def get_state_manager(request: Request) -> LedgerStateManager:
    """State manager created at startup."""
    return request.app.state.ledger_manager


def get_current_ledger(
    manager: LedgerStateManager = Depends(get_state_manager)
) -> QadaLedger:
    ledger = manager.get()
    if ledger is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No ledger found. Please complete setup first."
        )
    return ledger
