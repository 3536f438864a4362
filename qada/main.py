from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qada.core.config import settings
from qada.core.logging_config import configure_logging
from qada.db.mongo import connect_to_mongo, close_mongo_connection, get_db
from qada.repositories.ledger_repo import LedgerRepository
from qada.services.state_manager import LedgerStateManager
from qada.api.v1.api import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await connect_to_mongo()
    manager = LedgerStateManager(LedgerRepository(get_db()))
    await manager.load()
    app.state.ledger_manager = manager
    yield
    await manager.drain()
    await close_mongo_connection()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "Welcome to Qada Ledger API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
