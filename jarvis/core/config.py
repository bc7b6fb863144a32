"""
Jarvis - Application Configuration

Settings are resolved once at startup from environment variables, with a
`.env` file in the working directory as a secondary source. Variable names
carry no prefix (HTTP_PORT, DB_HOST, REDIS_DB, ...).

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Frozen model: settings never change after load
"""

import re
from typing import Any

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jarvis.core.exceptions import ConfigurationError

DEFAULT_REDIS_DB = 0

# Optional sign followed by ASCII digits only
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Empty variables are treated as unset, so `DB_HOST=` yields "localhost".
    Ports are kept as strings; they are only ever interpolated into
    connection addresses.
    """

    # Server configuration
    http_port: str = "8080"
    http_host: str = "localhost"

    # PostgreSQL configuration
    database_url: str = ""
    db_host: str = "localhost"
    db_port: str = "5432"
    db_name: str = "jarvis"
    db_user: str = "postgres"
    db_password: str = ""
    db_ssl_mode: str = "disable"

    # Redis configuration
    redis_url: str = ""
    redis_host: str = "localhost"
    redis_port: str = "6379"
    redis_password: str = ""
    redis_db: int = DEFAULT_REDIS_DB

    # AI configuration
    openai_api_key: str = ""
    model_name: str = "gpt-3.5-turbo"

    # Logging configuration
    log_level: str = "info"
    log_json: bool = True

    # Tracing configuration
    service_name: str = "jarvis"
    tracing_enabled: bool = True
    tracing_console_export: bool = False

    # Security
    jwt_secret: str = "your-secret-key"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        # model_name would otherwise clash with pydantic's protected "model_" namespace
        protected_namespaces=(),
    )

    @field_validator("redis_db", mode="before")
    @classmethod
    def _redis_db_or_default(cls, value: Any) -> int:
        """Fall back to the default database index on unparseable input."""
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str) and _INT_PATTERN.fullmatch(value):
            return int(value)
        return DEFAULT_REDIS_DB


def load_settings() -> Settings:
    """Resolve settings from the environment.

    Returns:
        Frozen Settings instance

    Raises:
        ConfigurationError: If a value cannot be parsed (e.g. LOG_JSON=maybe)
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"invalid configuration: {exc}") from exc
