from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "Qada Ledger API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.2.0"
    DESCRIPTION: str = "Make-up prayer debt ledger and pace planner"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "qada"
    MONGODB_TIMEOUT_MS: int = 5000

    # Ledger storage
    LEDGER_COLLECTION: str = "ledgers"
    LEDGER_STORAGE_KEY: str = "qada_state_v1"
    LEDGER_VERSION: str = "0.2-mobile"

    # Setup defaults
    DEFAULT_START_AGE: int = 12

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8081"]

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

settings = Settings()
