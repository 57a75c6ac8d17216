"""
Unit Tests for Centralized Logging.

Tests the logging setup, source validation and log path resolution.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from blog.backend.core.config_schema import LoggingSchema
from blog.backend.core.logging import (
    VALID_SOURCES,
    _resolve_log_path,
    get_logger,
    log_with_source,
    setup_logging,
)


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_valid_sources_contains_expected_values(self):
        assert VALID_SOURCES == frozenset({"web", "cli", "internal", "unknown"})

    def test_valid_sources_is_frozenset(self):
        assert isinstance(VALID_SOURCES, frozenset)


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture
    def logging_config(self):
        return LoggingSchema(
            level="INFO",
            format="json",
            handlers={
                "console": {"enabled": True},
                "file": {
                    "enabled": False,
                    "path": "logs/system.jsonl",
                    "max_bytes": 1024,
                    "backup_count": 1,
                },
            },
        )

    @pytest.fixture
    def patched_config(self, logging_config):
        app_config = MagicMock()
        app_config.logging = logging_config
        with patch("blog.backend.core.logging.get_app_config", return_value=app_config):
            yield logging_config

    def test_uses_config_level(self, patched_config):
        """Should use the level from logging.yaml when not overridden."""
        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_override_takes_precedence(self, patched_config):
        """Explicit parameters should override config values."""
        setup_logging(level="DEBUG", format_type="console")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert [type(h).__name__ for h in root_logger.handlers] == ["StreamHandler"]

    def test_file_logging_enabled(self, tmp_path, patched_config):
        """Should add a RotatingFileHandler and create its directory."""
        log_file = tmp_path / "logs" / "system.jsonl"

        with patch("blog.backend.core.logging._resolve_log_path", return_value=log_file):
            setup_logging(enable_console=False, enable_file_logging=True)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["RotatingFileHandler"]
        assert log_file.parent.is_dir()

        for handler in logging.getLogger().handlers[:]:
            handler.close()
            logging.getLogger().removeHandler(handler)


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_adds_source_field(self):
        logger = get_logger("test")
        mock_info = MagicMock()

        with patch.object(logger, "info", mock_info):
            log_with_source(logger, "cli", "info", "Tables created", tables=4)

        mock_info.assert_called_once_with("Tables created", source="cli", tables=4)

    def test_unknown_source_rejected(self):
        with pytest.raises(ValueError, match="telegram"):
            log_with_source(get_logger("test"), "telegram", "info", "Hello")

    def test_unknown_level_rejected(self):
        with pytest.raises(AttributeError):
            log_with_source(get_logger("test"), "internal", "loud", "Hello")


def test_resolve_log_path_relative_to_project_root(tmp_path):
    with patch("blog.backend.core.logging.find_project_root", return_value=tmp_path):
        assert _resolve_log_path("logs/system.jsonl") == tmp_path / "logs" / "system.jsonl"


class TestFlattenExtra:
    """Tests for the extra={...} flattening processor."""

    def test_extra_keys_lifted(self):
        from blog.backend.core.logging import _flatten_extra

        record = _flatten_extra(None, "info", {"event": "Tag created", "extra": {"tag_id": "t1"}})

        assert record == {"event": "Tag created", "tag_id": "t1"}

    def test_existing_keys_win(self):
        from blog.backend.core.logging import _flatten_extra

        record = _flatten_extra(None, "info", {"event": "x", "source": "cli", "extra": {"source": "web"}})

        assert record["source"] == "cli"

    def test_non_mapping_extra_kept(self):
        from blog.backend.core.logging import _flatten_extra

        assert _flatten_extra(None, "info", {"event": "x", "extra": "raw"})["extra"] == "raw"
