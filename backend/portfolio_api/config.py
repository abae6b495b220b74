# backend/portfolio_api/config.py
import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
]


def _parse_origins(raw: Optional[str]) -> List[str]:
    raw = (raw or "").strip()
    if not raw:
        return list(DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings:
    """Runtime configuration read from the environment (and .env, if present)."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        owner_open_id: Optional[str] = None,
        jwt_secret: str = "dev-secret-change",
        session_cookie_name: str = "app_session_id",
        session_ttl_days: int = 365,
        cors_origins: Optional[List[str]] = None,
        log_level: str = "INFO",
    ):
        self.database_url = database_url or None
        self.owner_open_id = owner_open_id or None
        self.jwt_secret = jwt_secret
        self.session_cookie_name = session_cookie_name
        self.session_ttl_days = session_ttl_days
        self.cors_origins = cors_origins if cors_origins is not None else list(DEFAULT_ORIGINS)
        self.log_level = log_level

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL"),
            owner_open_id=os.getenv("OWNER_OPEN_ID"),
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret-change"),
            session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "app_session_id"),
            session_ttl_days=int(os.getenv("SESSION_TTL_DAYS", "365")),
            cors_origins=_parse_origins(os.getenv("CORS_ORIGINS")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
