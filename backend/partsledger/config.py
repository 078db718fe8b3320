from typing import List

from pydantic_settings import BaseSettings
from pydantic import model_validator


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./parts.db"
    ENVIRONMENT: str = "development"
    AUTO_CREATE_TABLES: bool = True
    DEBUG: bool = True
    APP_NAME: str = "Parts Ledger"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    ENABLE_REQUEST_ID: bool = True
    ENABLE_REQUEST_LOGGING: bool = True
    READINESS_CHECK_DATABASE: bool = True
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"
    AUTO_REORDER_ENABLED: bool = False
    AUTO_REORDER_INTERVAL_HOURS: float = 6.0
    AUTO_REORDER_INITIAL_DELAY_SECONDS: float = 5.0
    ORDER_NUMBER_MAX_RETRIES: int = 5

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.lower().startswith("sqlite")

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",")]

    @property
    def auto_reorder_interval_seconds(self) -> float:
        return self.AUTO_REORDER_INTERVAL_HOURS * 3600

    @model_validator(mode="after")
    def validate_production_safety(self):
        if self.ORDER_NUMBER_MAX_RETRIES < 1:
            raise ValueError("ORDER_NUMBER_MAX_RETRIES must be at least 1.")

        if self.AUTO_REORDER_INTERVAL_HOURS <= 0:
            raise ValueError("AUTO_REORDER_INTERVAL_HOURS must be positive.")

        if not self.is_production:
            return self

        if self.is_sqlite:
            raise ValueError("SQLite is not allowed when ENVIRONMENT is production.")

        if self.AUTO_CREATE_TABLES:
            raise ValueError("AUTO_CREATE_TABLES must be false in production; use Alembic migrations.")

        return self


settings = Settings()
