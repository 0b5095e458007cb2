import os
import logging
import secrets
from functools import lru_cache
from typing import List, Optional

logger = logging.getLogger(__name__)


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Process-wide configuration.

    Built once from the environment (see ``get_settings``) and handed to the
    components that need it. Any field can be overridden by keyword, which is
    how the tests point the app at an in-memory database.
    """

    # ---------- security ----------
    secret_key: str
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 60

    # ---------- persistence ----------
    database_url: str = "sqlite:///./alphatrive.db"

    # ---------- http ----------
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str]

    # ---------- listing ----------
    default_page_size: int = 10
    max_page_size: int = 100

    log_level: str = "INFO"

    def __init__(
        self,
        secret_key: Optional[str] = None,
        database_url: Optional[str] = None,
        jwt_algorithm: Optional[str] = None,
        token_expire_minutes: Optional[int] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        cors_origins: Optional[List[str]] = None,
        default_page_size: Optional[int] = None,
        max_page_size: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        self.secret_key = secret_key or os.getenv("JWT_SECRET_KEY") or ""
        if not self.secret_key:
            logger.warning("JWT_SECRET_KEY is not set, using a random key; tokens will not survive a restart")
            self.secret_key = secrets.token_urlsafe(48)

        self.database_url = database_url or os.getenv("DATABASE_URL", self.database_url)
        self.jwt_algorithm = jwt_algorithm or os.getenv("JWT_ALGORITHM", self.jwt_algorithm)
        self.token_expire_minutes = token_expire_minutes or int(
            os.getenv("TOKEN_EXPIRE_MINUTES", self.token_expire_minutes)
        )
        self.host = host or os.getenv("HOST", self.host)
        self.port = port or int(os.getenv("PORT", self.port))
        self.cors_origins = cors_origins if cors_origins is not None else _env_list("CORS_ORIGINS", "*")
        self.default_page_size = default_page_size or int(os.getenv("DEFAULT_PAGE_SIZE", self.default_page_size))
        self.max_page_size = max_page_size or int(os.getenv("MAX_PAGE_SIZE", self.max_page_size))
        self.log_level = (log_level or os.getenv("LOG_LEVEL", self.log_level)).upper()

    def __repr__(self):
        # secret_key is never printed
        return (
            f"Settings(database_url={self.database_url!r}, jwt_algorithm={self.jwt_algorithm!r}, "
            f"token_expire_minutes={self.token_expire_minutes}, port={self.port})"
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
