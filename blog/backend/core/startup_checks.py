"""
Startup Security Validation.

Checks the secrets and production settings before the application
accepts traffic. If any check fails, the application refuses to start
with a message listing every failure.

Called during FastAPI lifespan initialization.
"""

from blog.backend.core.config import AppConfig, Settings, get_app_config, get_settings
from blog.backend.core.logging import get_logger

logger = get_logger(__name__)


class StartupSecurityError(RuntimeError):
    """Raised when a startup security check fails."""


def run_startup_checks() -> None:
    """
    Validate the security settings at startup.

    Raises:
        StartupSecurityError: If any check fails
    """
    app_config = get_app_config()
    settings = get_settings()
    environment = app_config.application.environment

    errors: list[str] = []

    _check_secret_strength(settings, app_config, errors)
    _check_admin_account(settings, errors)
    _check_production_safety(app_config, errors)

    if errors:
        for error in errors:
            logger.error("Startup security check failed", extra={"check": error})
        raise StartupSecurityError(
            f"Startup blocked: {len(errors)} security check(s) failed:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    logger.info(
        "Startup security checks passed",
        extra={"environment": environment, "checks_run": 3},
    )


def _check_secret_strength(settings: Settings, app_config: AppConfig, errors: list[str]) -> None:
    """JWT secret must meet the configured minimum length."""
    jwt_min = app_config.security.secrets_validation.jwt_secret_min_length
    if len(settings.jwt_secret) < jwt_min:
        errors.append(
            f"JWT_SECRET is {len(settings.jwt_secret)} chars, minimum is {jwt_min}"
        )


def _check_admin_account(settings: Settings, errors: list[str]) -> None:
    """The administrator account must be fully configured."""
    if not settings.admin_username:
        errors.append("ADMIN_USERNAME is empty")
    if not settings.admin_password_hash:
        errors.append("ADMIN_PASSWORD_HASH is empty")
    if not settings.password_salt:
        errors.append("PASSWORD_SALT is empty")


def _check_production_safety(app_config: AppConfig, errors: list[str]) -> None:
    """Debug surfaces stay off in production."""
    app = app_config.application
    if not app.is_production:
        return

    if app.debug:
        errors.append("debug is true in production environment")

    if app.docs_enabled:
        errors.append("docs_enabled is true in production environment")

    localhost_origins = [o for o in app.cors.origins if "localhost" in o]
    if localhost_origins:
        errors.append(f"CORS origins contain localhost in production: {localhost_origins}")
