"""
Logging configuration for glamkit.

Console output goes through `ColoredFormatter`; the optional file log is a
semicolon separated CSV with one column per record attribute. The thread
column tells apart the `customize` worker threads of a set build.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings, LoggingSettings

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Libraries whose DEBUG output drowns ours.
QUIET_LOGGERS = ("PIL", "PIL.PngImagePlugin")


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if record.levelname not in formatted:
            return formatted

        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        return formatted.replace(
            record.levelname, f"{color}{record.levelname}{self.COLORS['RESET']}", 1
        )


class CSVFormatter(logging.Formatter):
    """CSV-safe formatter for file logging.

    Columns: timestamp, level, ms since start, logger, line, thread, message.
    """

    def format(self, record: logging.LogRecord) -> str:
        fields = [
            self.formatTime(record, self.datefmt),
            f"{int(record.relativeCreated)} ms",
            record.name,
            str(record.lineno),
            record.threadName or "",
            record.getMessage(),
        ]
        quoted = ['"' + value.replace('"', '""') + '"' for value in fields]
        # The level stays unquoted and padded so the file lines up.
        quoted.insert(1, record.levelname.ljust(8))
        return ";".join(quoted)


def _level(name: str, default: int) -> int:
    return getattr(logging, name.upper(), default)


def _console_handler(options: "LoggingSettings") -> logging.Handler:
    if options.console_use_colors:
        formatter: logging.Formatter = ColoredFormatter(
            fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT
        )
    else:
        formatter = logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT)

    handler = logging.StreamHandler()
    handler.setLevel(_level(options.console_log_level, logging.INFO))
    handler.setFormatter(formatter)
    return handler


def _file_handler(options: "LoggingSettings", log_path: Path) -> logging.Handler:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(_level(options.file_log_level, logging.DEBUG))
    handler.setFormatter(CSVFormatter(datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(settings: "AppSettings") -> None:
    """
    Setup application logging with console and file handlers.

    Replaces every handler on the root logger, so calling it again after
    a settings change reconfigures logging in place.

    Args:
        settings: AppSettings instance for all logging configuration
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    options = settings.logging
    logging.getLogger("glamkit").setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if options.console_logging:
        root_logger.addHandler(_console_handler(options))

    log_path: Optional[Path] = None
    if options.file_logging:
        log_path = Path(options.log_file_path)
        try:
            root_logger.addHandler(_file_handler(options, log_path))
        except OSError as e:
            # Keep going with console output only.
            log_path = None
            root_logger.warning(f"Could not setup file logging: {e}")

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if options.console_logging:
        logger.debug(
            f"Console logging: {options.console_log_level} "
            f"(colors: {options.console_use_colors})"
        )
    if log_path is not None:
        logger.debug(f"File logging: {options.file_log_level} at {log_path.absolute()}")
