#!/usr/bin/env python3
"""
Blog backend entry script.

    python run.py                          # API server (default action)
    python run.py --action server --reload --verbose
    python run.py --action init-db         # create the tables
    python run.py --action hash-password   # print ADMIN_PASSWORD_HASH
    python run.py --action config          # show the YAML settings
"""

import asyncio
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from blog.backend.core.logging import get_logger, log_with_source, setup_logging


def validate_project_root() -> Path:
    """Exit unless the .project_root marker sits next to this script."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _uvicorn_command(host: str, port: int, reload: bool) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn", "blog.backend.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def run_server(logger: Any, host: str | None, port: int | None, reload: bool) -> None:
    """Run uvicorn in a child process; the configured address fills in missing options."""
    from blog.backend.core.config import get_server_address

    config_host, config_port = get_server_address()
    host = host or config_host
    port = port or config_port

    log_with_source(logger, "cli", "info", "Starting server", host=host, port=port, reload=reload)
    click.echo(f"Starting server at http://{host}:{port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(_uvicorn_command(host, port, reload), check=True)
    except KeyboardInterrupt:
        log_with_source(logger, "cli", "info", "Server stopped")
    except subprocess.CalledProcessError as e:
        log_with_source(logger, "cli", "error", "Server exited with an error", exit_code=e.returncode)
        sys.exit(e.returncode)


def init_db(logger: Any) -> None:
    """Create every table in the configured database."""
    from blog.backend.core.database import create_all, dispose_engine

    async def _create() -> None:
        try:
            await create_all()
        finally:
            await dispose_engine()

    asyncio.run(_create())
    log_with_source(logger, "cli", "info", "Database initialised")
    click.echo(click.style("Tables created.", fg="green"))


def hash_admin_password(logger: Any) -> None:
    """Prompt for the salt and a password, then print the value for ADMIN_PASSWORD_HASH."""
    from blog.backend.core.security import hash_password

    salt = click.prompt("Salt (PASSWORD_SALT)", hide_input=True)
    password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    log_with_source(logger, "cli", "debug", "Password hashed")
    click.echo(f"ADMIN_PASSWORD_HASH={hash_password(password, salt)}")


def show_config(logger: Any) -> None:
    """Print the YAML settings. Secrets live in Settings and are never shown."""
    from blog.backend.core.config import get_app_config

    app_config = get_app_config()
    for attribute, (filename, _) in app_config.FILES.items():
        click.echo(f"\n{attribute.replace('_', ' ').title()} Settings (from {filename}):")
        click.echo("-" * 40)
        for key, value in getattr(app_config, attribute).model_dump().items():
            click.echo(f"  {key}: {value}")

    log_with_source(logger, "cli", "debug", "Configuration displayed")


ACTIONS: dict[str, Callable[..., None]] = {
    "init-db": init_db,
    "hash-password": hash_admin_password,
    "config": show_config,
}


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", *ACTIONS]),
    default="server",
    help="Action to perform.",
)
@click.option("--verbose", "-v", is_flag=True, help="INFO level logging.")
@click.option("--debug", "-d", is_flag=True, help="DEBUG level logging.")
@click.option("--host", default=None, help="Server host (server action).")
@click.option("--port", default=None, type=int, help="Server port (server action).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes (server action).")
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
) -> None:
    """
    Blog Backend Entry Point.

    Runs the API server, creates the database tables, hashes the
    administrator password or shows the configuration.
    """
    validate_project_root()

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)
    logger.debug("Running action", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    else:
        ACTIONS[action](logger)


if __name__ == "__main__":
    main()
