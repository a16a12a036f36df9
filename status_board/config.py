from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_ENV_PATH = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_PATH),
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Classroom Status Board"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./status_board.db"

    # shared secret for the admin endpoints (X-Admin-Token header)
    ADMIN_TOKEN: str = "change-me"

    # clients poll /status on this interval
    POLL_INTERVAL_SECONDS: int = 3

    # room defaults used when no config row exists yet
    DEFAULT_SEATS_PER_ROW: int = 10
    DEFAULT_TOTAL_ROWS: int = 5
    DEFAULT_SEAT_DIRECTION: str = "bottom-right-horizontal"
    DEFAULT_DISPLAY_TITLE: str = "Bootcamp Status"

    ATTENDANCE_AFTERNOON_START_HOUR: int = 13

    EXPORT_DIR: Path = _PROJECT_ROOT / "exports"
    LOG_DIR: Path = _PROJECT_ROOT / "logs"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: List[str] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        return []


settings = Settings()
