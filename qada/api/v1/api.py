from fastapi import APIRouter
from qada.api.v1.endpoints import ledger, setup, plan

api_router = APIRouter()

api_router.include_router(ledger.router, prefix="/ledger", tags=["ledger"])
api_router.include_router(setup.router, prefix="/setup", tags=["setup"])
api_router.include_router(plan.router, prefix="/plan", tags=["plan"])
