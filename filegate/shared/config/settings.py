# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "changeme", "")
_MIN_PRODUCTION_SECRET_LENGTH = 32
_LONG_TOKEN_LIFETIME = 86400


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///filegate.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    jwt_secret: str = Field("dev", alias="JWT_SECRET")
    token_lifetime_seconds: int = Field(3600, ge=1, alias="TOKEN_LIFETIME_SECONDS")
    storage_root: Path = Field(Path("storage"), alias="STORAGE_ROOT")
    auth_header: str = Field("auth", min_length=1, alias="AUTH_HEADER")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @field_validator("storage_root", mode="after")
    def _ensure_storage_root(cls, value: Any) -> Any:  # noqa: N805
        if isinstance(value, Path):
            value.mkdir(parents=True, exist_ok=True)
            return value.resolve()
        return value

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        # Runs before setup_logging.
        if self.jwt_secret in _INSECURE_SECRETS:
            print(
                "\n❌ JWT_SECRET is a development placeholder; refusing to sign tokens with it.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        notes = []
        if len(self.jwt_secret) < _MIN_PRODUCTION_SECRET_LENGTH:
            notes.append(f"JWT_SECRET is shorter than {_MIN_PRODUCTION_SECRET_LENGTH} characters")
        if self.token_lifetime_seconds > _LONG_TOKEN_LIFETIME:
            notes.append(f"TOKEN_LIFETIME_SECONDS={self.token_lifetime_seconds} exceeds one day")
        if self.debug_logging:
            notes.append("DEBUG_LOGGING is on; request headers are logged as hashes")
        if self.database.is_sqlite():
            notes.append("DATABASE_URL points at SQLite")

        for note in notes:
            print(f"⚠️  production: {note}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "load_config"]
