"""Tests for logging configuration."""

import logging
import os
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import docs_ts.logging.logging_config
from docs_ts.logging import get_docs_logger, setup_logging
from docs_ts.logging.logging_config import LOGGER_NAME, LoggingConfig


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_config_path_from_env(self):
        """Config path comes from DOCS_TS_LOGGING_CONFIG."""
        with patch.dict(os.environ, {"DOCS_TS_LOGGING_CONFIG": "/path/to/logging.yml"}):
            config = LoggingConfig()
            assert config.config_path == Path("/path/to/logging.yml")

    def test_no_config_path_returns_none(self):
        with patch.dict(os.environ, clear=True):
            config = LoggingConfig()
            assert config.config_path is None

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Test loading config from YAML file."""
        config_file = tmp_path / "logging.yml"
        config_file.write_text("""
version: 1
disable_existing_loggers: false
handlers:
  console:
    class: logging.StreamHandler
""")

        loaded = LoggingConfig(config_path=config_file).load_config()

        assert loaded["version"] == 1
        assert loaded["disable_existing_loggers"] is False
        assert "console" in loaded["handlers"]

    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path) -> None:
        loaded = LoggingConfig(config_path=tmp_path / "absent.yml").load_config()
        assert LOGGER_NAME in loaded["loggers"]

    def test_default_level_from_env(self):
        with patch.dict(os.environ, {"DOCS_TS_LOG_LEVEL": "DEBUG"}, clear=True):
            loaded = LoggingConfig().load_config()
            assert loaded["loggers"][LOGGER_NAME]["level"] == "DEBUG"

    def test_default_config_logs_to_stderr(self):
        with patch.dict(os.environ, clear=True):
            loaded = LoggingConfig().load_config()
        assert loaded["handlers"]["console"]["stream"] == "ext://sys.stderr"
        assert loaded["loggers"][LOGGER_NAME]["level"] == "INFO"

    @patch("logging.config.dictConfig")
    def test_apply_config(self, mock_dict_config: Mock) -> None:
        LoggingConfig().apply()

        mock_dict_config.assert_called_once()
        assert mock_dict_config.call_args[0][0]["version"] == 1


class TestSetupLogging:
    """Test setup_logging function."""

    @patch("docs_ts.logging.logging_config.LoggingConfig.apply")
    def test_setup_logging_basic(self, mock_apply: Mock) -> None:
        setup_logging()
        mock_apply.assert_called_once()

    def test_setup_logging_with_level(self) -> None:
        """The level override applies to the docs-ts logger hierarchy."""
        setup_logging(level="debug")
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
        setup_logging(level="INFO")
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    @patch("docs_ts.logging.logging_config.LoggingConfig")
    def test_setup_logging_with_config_path(self, mock_config_class: Mock, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yml"
        mock_instance = MagicMock()
        mock_config_class.return_value = mock_instance

        setup_logging(config_path=config_file)

        mock_config_class.assert_called_once_with(config_file)
        mock_instance.apply.assert_called_once()


class TestGetDocsLogger:
    """Test get_docs_logger function."""

    @patch("docs_ts.logging.logging_config.setup_logging")
    @patch("docs_ts.logging.logging_config.get_logger")
    def test_get_docs_logger_ensures_setup(self, mock_get_logger: Mock, mock_setup: Mock) -> None:
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        # Reset global state
        docs_ts.logging.logging_config._logging_config = None  # type: ignore[attr-defined]

        logger = get_docs_logger("docs_ts.core")

        mock_setup.assert_called_once()
        mock_get_logger.assert_called_with("docs_ts.core")
        assert logger == mock_logger

    @patch("docs_ts.logging.logging_config.get_logger")
    def test_get_docs_logger_reuses_config(self, mock_get_logger: Mock) -> None:
        """Subsequent calls don't set logging up again."""
        docs_ts.logging.logging_config._logging_config = MagicMock()  # type: ignore[attr-defined]

        with patch("docs_ts.logging.logging_config.setup_logging") as mock_setup:
            get_docs_logger("module1")
            get_docs_logger("module2")

            mock_setup.assert_not_called()
            assert mock_get_logger.call_count == 2

    def test_loggers_share_the_docs_ts_hierarchy(self) -> None:
        setup_logging()
        assert get_docs_logger("docs_ts.core").name == f"{LOGGER_NAME}.core"
