from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, blank_to_none


class Settings(BaseSettings):
    """
    Application settings loaded from the environment (and an optional .env file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "users"

    # Full URL that wins over the POSTGRES_* parts (e.g. sqlite+aiosqlite:///./users.db)
    DATABASE_URL_OVERRIDE: str | None = None

    # Connection pool
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: float = 30.0

    # Create user_table on startup. Production schemas are owned by migrations.
    DB_CREATE_SCHEMA: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    # Rotating app.log/errors.log are written here when LOG_TO_STDOUT is false
    LOG_DIR: Path | None = None
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL the engine should connect to.

        DATABASE_URL_OVERRIDE is used verbatim when set; otherwise the URL is
        assembled from the POSTGRES_* settings.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Upper-case LOG_LEVEL before the Literal check so `debug` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("LOG_DIR", mode="before")
    @classmethod
    def normalize_log_dir(cls, v: str | Path | None) -> str | Path | None:
        return blank_to_none(v)

    @field_validator("DATABASE_URL_OVERRIDE", mode="before")
    @classmethod
    def normalize_database_url(cls, v: str | None) -> str | None:
        return blank_to_none(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings are read once per process.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
