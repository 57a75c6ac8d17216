"""
Configuration Schemas.

One top-level model per file in config/settings/:

    application.yaml   ApplicationSchema
    database.yaml      DatabaseSchema
    logging.yaml       LoggingSchema
    security.yaml      SecuritySchema
    error_levels.yaml  ErrorLevelsSchema

Unknown keys are rejected, so a misspelt setting fails at startup rather
than silently falling back to a default.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ErrorLevel = Literal["info", "warning", "error", "critical"]


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ServerSchema(_Strict):
    host: str
    port: int = Field(gt=0, lt=65536)


class CorsSchema(_Strict):
    origins: list[str]


class PaginationSchema(_Strict):
    """Bounds for ``limit`` on list endpoints."""

    default_limit: int = Field(gt=0)
    max_limit: int = Field(gt=0)


class I18nSchema(_Strict):
    """``default_locale`` answers requests that match none of ``locales``."""

    default_locale: str
    locales: list[str] = Field(min_length=1)


class ApplicationSchema(_Strict):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema
    pagination: PaginationSchema
    i18n: I18nSchema

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class DatabaseSchema(_Strict):
    """Connection settings. The password is DB_PASSWORD in config/.env."""

    driver: str
    host: str
    port: int
    name: str
    user: str
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    echo: bool
    create_tables: bool
    url: str | None = None


class ConsoleHandlerSchema(_Strict):
    enabled: bool


class FileHandlerSchema(_Strict):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_Strict):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_Strict):
    level: LogLevelName
    format: Literal["json", "console"]
    handlers: HandlersSchema


class JwtSchema(_Strict):
    algorithm: str
    issuer: str
    session_expire_minutes: int = Field(gt=0)


class SecretsValidationSchema(_Strict):
    jwt_secret_min_length: int = Field(gt=0)


class SecuritySchema(_Strict):
    jwt: JwtSchema
    token_header: str = Field(min_length=1)
    secrets_validation: SecretsValidationSchema


class ErrorLevelsSchema(_Strict):
    """Severity reported in the ``level`` field of error responses."""

    default: ErrorLevel
    levels: dict[str, ErrorLevel]

    def level_for(self, key: str) -> str:
        """Severity for a message key, falling back to the default."""
        return self.levels.get(key, self.default)
