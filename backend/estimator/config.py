"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./estimator.db"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # Transaction coordinator
    TX_MAX_RETRIES: int = 3
    TX_BASE_DELAY_SECONDS: float = 0.1
    TX_TIMEOUT_SECONDS: float = 30.0
    SQLITE_BUSY_TIMEOUT_SECONDS: float = 5.0

    # Hour bounds shared by task types and per-task overrides
    MAX_HOURS: float = 1000.0
    MAX_QUANTITY: int = 1000

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
