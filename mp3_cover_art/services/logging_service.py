"""
This module provides the application logger.

`AppLogger` writes every message to two sinks: the console (coloured per level)
and a plain-text log file, one file per calendar day, that is only ever appended
to. Messages below the configured threshold are dropped before anything is
formatted.

The logger is built on loguru, but each `AppLogger` instance owns its handlers
and only receives the records it emitted itself. It is created by the
application shell and passed explicitly to the components that log, so several
instances (for example in tests) can coexist without interfering.

Problems with the log file never reach the caller. If the file cannot be created
the file sink is switched off for the rest of the run; if a write fails the
error is reported on the console only and logging carries on.
"""

import sys
import uuid
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO, Union

from loguru import logger

from ..config.common import (
    DEFAULT_LOG_DIR_NAME,
    LEVEL_COLORS,
    LOG_FILE_TEMPLATE,
    LOGGER_FORMAT,
)


class LogLevel(IntEnum):
    """Ordered log levels. A message is emitted when its level is >= the threshold."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return self.name

    @property
    def loguru_name(self) -> str:
        return _LOGURU_LEVEL_NAMES[self]

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """
        Converts a level name ("debug", "info", "warn", "error") or rank into a LogLevel.

        Names are case-insensitive, and "warning" is accepted as an alias of "warn".

        Raises:
            ValueError: If the value does not name a known level.
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        name = str(value).strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            valid = ", ".join(level.name.lower() for level in cls)
            raise ValueError(f"Unknown log level '{value}'. Valid levels: {valid}") from None


_LOGURU_LEVEL_NAMES = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARNING",
    LogLevel.ERROR: "ERROR",
}


class _DailyFileSink:
    """
    A loguru sink appending each formatted line to the daily log file.

    The file is opened for every write so that nothing is held open between
    messages. Write errors are handed to `on_error` instead of being raised.
    """

    def __init__(self, path: Path, on_error: Callable[[str], None]):
        self.path = path
        self.on_error = on_error

    def write(self, message: str):
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(message)
        except OSError as e:
            self.on_error(f"Failed to write to log file {self.path}: {e}")


class AppLogger:
    """
    Level-filtered, timestamped logger writing to the console and a daily log file.

    Attributes:
        level (LogLevel): The threshold below which messages are discarded.
        log_to_file (bool): Whether the file sink is active. It is switched off
                            automatically if the log file cannot be created.
        log_dir (Path): Directory holding the daily log files.
        log_file_path (Optional[Path]): The file written by this instance, or None
                                        when the file sink is disabled.

    Records still travel through loguru's global `logger`, so a handler added
    elsewhere without a filter (such as loguru's default stderr handler) receives
    them too. The application removes those handlers at startup. Library callers
    can drop them with `logger.remove()`, or filter out records whose `extra`
    carries an `app_logger_id`.
    """

    def __init__(
        self,
        level: Union[str, int, LogLevel] = LogLevel.INFO,
        log_to_file: bool = True,
        log_dir: Optional[Path] = None,
        console: Optional[TextIO] = None,
    ):
        """
        Creates the logger and its sinks.

        Args:
            level: Threshold level, as a `LogLevel` or one of its names.
            log_to_file: If False, only the console sink is used.
            log_dir: Directory for the daily log file. Defaults to `./logs`.
            console: Stream for the console sink. Defaults to standard output.
        """
        self.level = LogLevel.parse(level)
        self.log_to_file = log_to_file
        self.log_dir = Path(log_dir) if log_dir else Path.cwd() / DEFAULT_LOG_DIR_NAME
        self.log_file_path: Optional[Path] = None

        self._instance_id = uuid.uuid4().hex
        self._logger = logger.bind(app_logger_id=self._instance_id)
        self._handler_ids: List[int] = []

        self._handler_ids.append(
            logger.add(
                console if console is not None else sys.stdout,
                level=self.level.loguru_name,
                format=self._console_format,
                filter=self._owns_record,
                colorize=None,
            )
        )

        if self.log_to_file:
            self._initialize_log_file()

    # --- Sink setup ---

    def _owns_record(self, record: Dict[str, Any]) -> bool:
        return record["extra"].get("app_logger_id") == self._instance_id

    def _owns_file_record(self, record: Dict[str, Any]) -> bool:
        return self._owns_record(record) and not record["extra"].get("console_only", False)

    @staticmethod
    def _console_format(record: Dict[str, Any]) -> str:
        color = LEVEL_COLORS.get(record["extra"].get("level_label"), "white")
        return f"<{color}>{LOGGER_FORMAT}</{color}>\n{{exception}}"

    @staticmethod
    def get_date_string() -> str:
        """Returns the current UTC calendar date as YYYY-MM-DD, matching the line timestamps."""
        return datetime.now(timezone.utc).date().isoformat()

    def _initialize_log_file(self):
        """
        Ensures the log directory and today's log file exist, then adds the file sink.

        On failure the error is reported on the console and the file sink stays off.
        """
        log_file_path = self.log_dir / LOG_FILE_TEMPLATE.format(date=self.get_date_string())
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            log_file_path.touch(exist_ok=True)
        except OSError as e:
            self.log_to_file = False
            self._console_error(f"Failed to initialize log file {log_file_path}: {e}")
            return

        self.log_file_path = log_file_path
        self._handler_ids.append(
            logger.add(
                _DailyFileSink(log_file_path, on_error=self._console_error),
                level=self.level.loguru_name,
                format=LOGGER_FORMAT,
                filter=self._owns_file_record,
                colorize=False,
            )
        )

    def _console_error(self, message: str):
        self._logger.bind(level_label=LogLevel.ERROR.label, console_only=True).error(message)

    # --- Public API ---

    def is_enabled_for(self, level: Union[str, int, LogLevel]) -> bool:
        return LogLevel.parse(level) >= self.level

    def log(self, level: Union[str, int, LogLevel], message: str):
        """
        Emits `message` at `level` to both sinks, unless it is below the threshold.

        Args:
            level: Level of the message.
            message: Free text. It is written as-is (no brace formatting).
        """
        level = LogLevel.parse(level)
        if level < self.level:
            return
        self._logger.bind(level_label=level.label).log(level.loguru_name, message)

    def debug(self, message: str):
        self.log(LogLevel.DEBUG, message)

    def info(self, message: str):
        self.log(LogLevel.INFO, message)

    def warn(self, message: str):
        self.log(LogLevel.WARN, message)

    def error(self, message: str):
        self.log(LogLevel.ERROR, message)

    def close(self):
        """Detaches this instance's sinks. Further calls to `log` write nothing."""
        for handler_id in self._handler_ids:
            try:
                logger.remove(handler_id)
            except ValueError:
                pass
        self._handler_ids = []

    def __enter__(self) -> "AppLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
