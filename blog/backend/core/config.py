"""
Configuration Management.

Three sources, all under config/ at the project root:

    .env                 secrets (Settings): DB_PASSWORD, JWT_SECRET,
                         ADMIN_USERNAME, ADMIN_PASSWORD_HASH, PASSWORD_SALT.
                         Environment variables take precedence.
    settings/*.yaml      everything else (AppConfig), one strict schema
                         per file, see config_schema.py
    locales/<lang>.yaml  message tables, one per configured locale

The project root is the nearest directory, from the working directory
upwards, that holds a .project_root marker.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from blog.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    ErrorLevelsSchema,
    LoggingSchema,
    SecuritySchema,
)

PROJECT_ROOT_MARKER = ".project_root"


def find_project_root() -> Path:
    """Find the project root by its marker file."""
    start = Path.cwd()
    for directory in (start, *start.parents):
        if (directory / PROJECT_ROOT_MARKER).exists():
            return directory
    raise RuntimeError(f"Project root not found. Ensure {PROJECT_ROOT_MARKER} file exists.")


def validate_project_root() -> Path:
    """
    find_project_root() for entry scripts.

    Raises:
        SystemExit: With a readable message when no marker is found
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a file from config/settings/."""
    return _read_yaml(find_project_root() / "config" / "settings" / filename)


def load_locale_table(locale: str) -> dict[str, str]:
    """Load config/locales/<locale>.yaml as a key to text mapping."""
    raw = _read_yaml(find_project_root() / "config" / "locales" / f"{locale}.yaml")
    return {str(key): str(value) for key, value in raw.items()}


class Settings(BaseSettings):
    """Secrets. Nothing here is ever logged or echoed."""

    db_password: str
    jwt_secret: str
    admin_username: str
    admin_password_hash: str
    password_salt: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppConfig:
    """
    Validated YAML settings.

    Each file in FILES is loaded and checked against its schema when the
    object is built, so a typo in a YAML file stops startup with the file
    name and the pydantic error instead of failing later on first use.
    """

    FILES: dict[str, tuple[str, type[BaseModel]]] = {
        "application": ("application.yaml", ApplicationSchema),
        "database": ("database.yaml", DatabaseSchema),
        "logging": ("logging.yaml", LoggingSchema),
        "security": ("security.yaml", SecuritySchema),
        "error_levels": ("error_levels.yaml", ErrorLevelsSchema),
    }

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    security: SecuritySchema
    error_levels: ErrorLevelsSchema

    def __init__(self) -> None:
        for attribute, (filename, schema) in self.FILES.items():
            try:
                section = schema(**load_yaml_config(filename))
            except ValidationError as e:
                raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e
            setattr(self, attribute, section)


@lru_cache
def get_settings() -> Settings:
    """Secrets from config/.env and the environment, loaded once."""
    return Settings(_env_file=str(find_project_root() / "config" / ".env"))


@lru_cache
def get_app_config() -> AppConfig:
    """YAML settings, loaded once."""
    return AppConfig()


@lru_cache
def get_locale_tables() -> dict[str, dict[str, str]]:
    """Message tables for every locale listed in application.yaml."""
    return {
        locale: load_locale_table(locale)
        for locale in get_app_config().application.i18n.locales
    }


def get_database_url() -> str:
    """
    SQLAlchemy URL for the configured database.

    An explicit ``url`` in database.yaml wins. For sqlite drivers ``name``
    is the database file and no credentials are used; otherwise the
    password comes from DB_PASSWORD.
    """
    db = get_app_config().database
    if db.url:
        return db.url
    if db.driver.startswith("sqlite"):
        return f"{db.driver}:///{db.name}"
    return f"{db.driver}://{db.user}:{get_settings().db_password}@{db.host}:{db.port}/{db.name}"


def get_server_address() -> tuple[str, int]:
    """(host, port) the API server binds to."""
    server = get_app_config().application.server
    return server.host, server.port
