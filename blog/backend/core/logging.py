"""
Centralized Logging Configuration.

Every module logs through get_logger(); setup_logging() is called once by
the app lifespan or the entry script. Settings come from
config/settings/logging.yaml, and keyword arguments override them.

A JSON record carries:
    timestamp, level, logger, event   - always
    func_name, lineno                 - call site
    source                            - web, cli, internal or unknown
    request_id, method, path          - inside an HTTP request
    any key passed through extra={...}, flattened to the top level

Usage:
    from blog.backend.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Article created", extra={"article_id": article.id})

Records go to stdout and, when enabled, to the rotating JSONL file named in
logging.yaml (logs/system.jsonl by default).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from blog.backend.core.config import find_project_root, get_app_config
from blog.backend.core.config_schema import FileHandlerSchema

VALID_SOURCES = frozenset({
    "web",
    "cli",
    "internal",
    "unknown",
})
"""Recognized log source values. Source is always set explicitly by the caller."""

# Libraries whose INFO output would drown the application's own records
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def _flatten_extra(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Merge an ``extra`` mapping into the record. Existing keys win."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    elif extra is not None:
        event_dict["extra"] = extra
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        _flatten_extra,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_shared_processors(),
    )


def _resolve_log_path(configured_path: str) -> Path:
    """Resolve a logging.yaml path against the project root."""
    return find_project_root() / configured_path


def _file_handler(file_config: FileHandlerSchema) -> RotatingFileHandler:
    """Rotating JSONL handler; creates the log directory if needed."""
    log_path = _resolve_log_path(file_config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name. Overrides logging.yaml.
        format_type: ``json`` or ``console``. Overrides logging.yaml.
        enable_console: Write records to stdout. Overrides logging.yaml.
        enable_file_logging: Write records to the JSONL file. Overrides logging.yaml.
    """
    config = get_app_config().logging

    level = level if level is not None else config.level
    format_type = format_type if format_type is not None else config.format
    if enable_console is None:
        enable_console = config.handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = config.handlers.file.enabled

    structlog.configure(
        processors=_shared_processors() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []
    if enable_console:
        renderer = (
            structlog.dev.ConsoleRenderer(colors=True)
            if format_type == "console"
            else structlog.processors.JSONRenderer()
        )
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(_formatter(renderer))
        handlers.append(console)
    if enable_file_logging:
        handlers.append(_file_handler(config.handlers.file))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return the structlog logger for a module, usually ``__name__``."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Used outside request handling (CLI actions, startup hooks), where no
    middleware binds the source.

    Raises:
        ValueError: If source is not one of VALID_SOURCES
        AttributeError: If level is not a log method name
    """
    if source not in VALID_SOURCES:
        raise ValueError(f"Unknown log source: {source}")
    getattr(logger, level.lower())(message, source=source, **kwargs)
