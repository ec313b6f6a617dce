"""Tests for logging configuration."""

import logging
import threading
from pathlib import Path

import pytest

from glamkit.settings import AppSettings
from glamkit.utils.logging_config import ColoredFormatter, CSVFormatter, setup_logging


def _record(message: str, level: int = logging.WARNING) -> logging.LogRecord:
    return logging.LogRecord("glamkit.test", level, __file__, 42, message, None, None)


class TestFormatters:
    """Test the console and file formatters."""

    def test_colored_level_name(self) -> None:
        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s")
        formatted = formatter.format(_record("careful"))
        assert formatted == "\033[33mWARNING\033[0m careful"

    def test_csv_columns(self) -> None:
        """Test the CSV layout and quote escaping."""
        formatted = CSVFormatter().format(_record('say "hi"'))
        fields = formatted.split(";")
        assert len(fields) == 7
        assert fields[1] == "WARNING "
        assert fields[3] == '"glamkit.test"'
        assert fields[4] == '"42"'
        assert fields[5] == f'"{threading.current_thread().name}"'
        assert fields[6] == '"say ""hi"""'


class TestLoggingSettings:
    """Test logging options stored in settings."""

    def test_defaults(self, tmp_path: Path) -> None:
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        assert settings.logging.file_log_level == "DEBUG"
        assert settings.logging.log_file_path == "logs/glamkit.csv"

    def test_invalid_file_level(self, tmp_path: Path) -> None:
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        settings.logging.file_log_level = "info"
        settings.logging.file_log_level = "CHATTY"
        assert settings.logging.file_log_level == "INFO"


class TestSetupLogging:
    """Test logging setup from settings."""

    def test_console_only(self, tmp_path: Path, restore_root_logger: logging.Logger) -> None:
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        settings.logging.console_log_level = "WARNING"
        setup_logging(settings)

        handlers = restore_root_logger.handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.WARNING
        assert isinstance(handlers[0].formatter, ColoredFormatter)

    def test_file_logging(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_root_logger: logging.Logger
    ) -> None:
        monkeypatch.chdir(tmp_path)
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        settings.logging.console_logging = False
        settings.logging.file_logging = True
        setup_logging(settings)

        logging.getLogger("glamkit.test").warning("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        log_file = tmp_path / "logs" / "glamkit.csv"
        assert log_file.is_file()
        assert '"written to file"' in log_file.read_text(encoding="utf-8")

    def test_custom_log_path(self, tmp_path: Path, restore_root_logger: logging.Logger) -> None:
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        settings.logging.console_logging = False
        settings.logging.file_logging = True
        settings.logging.file_log_level = "ERROR"
        settings.logging.log_file_path = str(tmp_path / "out" / "build.csv")
        setup_logging(settings)

        handlers = restore_root_logger.handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.ERROR
        assert (tmp_path / "out" / "build.csv").is_file()
