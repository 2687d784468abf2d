"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for the AUTOGIRO API happen here. No module
should call os.getenv() or os.environ.get() directly -- import get_settings()
instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. secret_key -> SECRET_KEY, database_url -> DATABASE_URL).

  @model_validator(mode="after"): Applies the DEBUG-conditional defaults.
      Dev mode fills in a random SECRET_KEY, a local SQLite DATABASE_URL and
      the well-known bootstrap password. Production mode refuses to start
      without SECRET_KEY and DATABASE_URL.

Security notes:
  SECRET_KEY shorter than 32 chars is rejected outright. JWT HS256 signing
  relies on key entropy -- a short key weakens every issued token.

  In production mode a missing DEFAULT_USER_PASSWORD does not fail startup;
  the bootstrap step skips seeding and logs a warning instead, so no account
  with a guessable password is ever created outside development.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
inventory/, or db/.
"""

import logging
import secrets
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("autogiro.config")

_DEV_DATABASE_URL = "sqlite:///autogiro.db"
_DEV_USER_PASSWORD = "123456"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file. The model_validator enforces
    production-safety rules at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    log_level: str = "INFO"
    # Empty string is the sentinel for "not configured" on both fields below.
    secret_key: str = ""
    database_url: str = ""

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str = "0.0.0.0"  # noqa: S104 -- container bind, fronted by a proxy
    port: int = 3001
    cors_origins: list[str] = ["*"]

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    token_expire_seconds: int = 24 * 60 * 60
    bcrypt_rounds: int = 10
    default_user_password: str = ""

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def apply_environment_policy(self) -> "Settings":
        """Fill dev defaults or fail fast in production.

        Dev mode (DEBUG=true): auto-generate SECRET_KEY, fall back to a local
            SQLite file and the well-known bootstrap password.

        Production mode (DEBUG=false or not set): SECRET_KEY and DATABASE_URL
            must both be supplied by the environment.
        """
        if not self.secret_key:
            if self.debug:
                self.secret_key = secrets.token_hex(32)
                logger.warning("Using auto-generated SECRET_KEY. Tokens will not survive a restart.")
            else:
                raise ValueError(
                    "SECRET_KEY is required in production mode. "
                    "Set SECRET_KEY in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters.")

        if not self.database_url:
            if self.debug:
                self.database_url = _DEV_DATABASE_URL
            else:
                raise ValueError("DATABASE_URL is required in production mode.")

        if not self.default_user_password and self.debug:
            self.default_user_password = _DEV_USER_PASSWORD

        if not 4 <= self.bcrypt_rounds <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31.")
        if self.token_expire_seconds <= 0:
            raise ValueError("TOKEN_EXPIRE_SECONDS must be positive.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
