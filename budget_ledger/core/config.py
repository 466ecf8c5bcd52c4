# budget_ledger/core/config.py
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Budget Ledger"
    API_V1_STR: str = "/api/v1"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "budget_ledger"

    DATABASE_URL: Optional[str] = None # Если задан, перекрывает POSTGRES_*
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Категории и аналитика
    DEFAULT_CATEGORY_COLOR: str = "#3b82f6" # Стандартный синий, если цвет не указан
    SAVINGS_CATEGORY_TOKEN: str = "spar" # Категория считается "сбережениями", если имя содержит этот фрагмент
    TREND_WINDOW_MONTHS: int = 6
    HISTORY_WINDOW_MONTHS: int = 12
    BUDGET_WARNING_PERCENT: int = 80

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:5432/{self.POSTGRES_DB}"


@lru_cache() # Кэшируем, чтобы настройки читались один раз
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
