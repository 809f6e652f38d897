import logging
from datetime import datetime, date
from typing import List, Optional

import pytz
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Zone used to resolve "today" for reports
    TIMEZONE: str = "UTC"

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 3600

    class Config:
        env_file = ".env"

settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_local_now() -> datetime:
    """Current time in the configured server timezone."""
    tz = pytz.timezone(settings.TIMEZONE)
    return datetime.now(tz)


def get_local_today() -> date:
    return get_local_now().date()
