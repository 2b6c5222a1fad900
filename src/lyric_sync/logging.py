"""Structured logging for lyric-sync.

Every module logs through ``get_logger(__name__)`` into the ``lyric_sync``
logger tree. Records can carry fields passed via ``extra=``, fields bound
with ``LyricSyncLogger.with_context`` and fields set for a block with
``LogContext``; the formatter prints them after the message (text mode) or
under ``"context"`` (JSON mode).

Parsers log debug summaries and a warning when a recoverable step (such as
decoding an embedded language payload) is abandoned. Nothing is printed
below WARNING unless verbosity is raised.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "lyric_sync"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "taskName",
    }
)


class LogLevel(IntEnum):
    """CLI verbosity, from ``-v`` count."""

    QUIET = 0  # Only errors
    NORMAL = 1  # Errors + warnings
    VERBOSE = 2  # Errors + warnings + info
    DEBUG = 3  # Everything including per-track parse summaries

    @property
    def stdlib_level(self) -> int:
        return {
            LogLevel.QUIET: logging.ERROR,
            LogLevel.NORMAL: logging.WARNING,
            LogLevel.VERBOSE: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


@dataclass
class LogConfig:
    """Settings for the ``lyric_sync`` logger tree.

    Attributes:
        level: Console verbosity
        log_file: Extra debug-level log file, if any
        json_format: Emit one JSON object per record
        include_timestamp: Prefix records with their creation time
        include_context: Print extra/bound fields
        color: Color the console output when stderr is a terminal
    """

    level: LogLevel = LogLevel.NORMAL
    log_file: Path | None = None
    json_format: bool = False
    include_timestamp: bool = True
    include_context: bool = True
    color: bool = True


_ANSI_RESET = "\033[0m"
_ANSI_GRAY = "\033[90m"
_ANSI_CYAN = "\033[96m"
_LEVEL_ANSI = {
    logging.DEBUG: _ANSI_GRAY,
    logging.INFO: "\033[92m",
    logging.WARNING: "\033[93m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[91m",
}


def _short_name(name: str, width: int = 20) -> str:
    if name.startswith(ROOT_LOGGER_NAME + "."):
        name = name[len(ROOT_LOGGER_NAME) + 1 :]
    if len(name) > width:
        name = "..." + name[-(width - 3) :]
    return name


class StructuredFormatter(logging.Formatter):
    """Render records as a text line or a JSON object.

    Both modes share the same fields: level, logger, message, the optional
    timestamp and the optional context dict of extra record attributes.
    """

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_context: bool = True,
        color: bool = True,
    ):
        super().__init__()
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_context = include_context
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        fields = self._fields(record)
        trace = self.formatException(record.exc_info) if record.exc_info else None

        if self.json_format:
            if trace:
                fields["exception"] = trace
            return json.dumps(fields, ensure_ascii=False)

        line = self._render(record, fields)
        return f"{line}\n{trace}" if trace else line

    def _fields(self, record: logging.LogRecord) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if self.include_timestamp:
            fields["timestamp"] = datetime.fromtimestamp(record.created).isoformat(timespec="seconds")
        fields["level"] = record.levelname.lower()
        fields["logger"] = record.name
        fields["message"] = record.getMessage()

        if self.include_context:
            context = {}
            for key, value in record.__dict__.items():
                if key in _RESERVED_ATTRS or key.startswith("_"):
                    continue
                try:
                    json.dumps(value)
                except (TypeError, ValueError):
                    value = str(value)
                context[key] = value
            if context:
                fields["context"] = context
        return fields

    def _paint(self, text: str, ansi: str) -> str:
        return f"{ansi}{text}{_ANSI_RESET}" if self.color else text

    def _render(self, record: logging.LogRecord, fields: dict[str, Any]) -> str:
        parts = []
        if "timestamp" in fields:
            parts.append(self._paint(fields["timestamp"].replace("T", " "), _ANSI_GRAY))
        parts.append(self._paint(f"{record.levelname:<7}", _LEVEL_ANSI.get(record.levelno, _ANSI_RESET)))
        parts.append(self._paint(f"{_short_name(record.name):>20}", _ANSI_CYAN))
        parts.append(fields["message"])

        line = " | ".join(parts)
        if "context" in fields:
            pairs = " ".join(f"{k}={v}" for k, v in fields["context"].items())
            line += " " + self._paint(f"[{pairs}]", _ANSI_GRAY)
        return line


class LyricSyncLogger(logging.Logger):
    """Logger whose records always carry its bound context fields."""

    def __init__(self, name: str, level: int = logging.NOTSET):
        super().__init__(name, level)
        self._context: dict[str, Any] = {}

    def with_context(self, **context: Any) -> "LyricSyncLogger":
        """Return a copy of this logger with extra fields bound.

        Args:
            **context: Fields added to every record of the new logger

        Returns:
            Logger sharing this logger's parent and handlers
        """
        bound = LyricSyncLogger(self.name, self.level)
        bound.parent = self.parent
        bound.handlers = self.handlers
        bound._context = {**self._context, **context}
        return bound

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple,
        exc_info: Any = None,
        extra: dict | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        if self._context:
            extra = {**self._context, **(extra or {})}
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


_config = LogConfig()
_initialized = False


def _handler(target: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    target.setLevel(level)
    target.setFormatter(formatter)
    return target


def configure_logging(config: LogConfig | None = None) -> None:
    """(Re)build the handlers of the ``lyric_sync`` logger.

    Args:
        config: New configuration; the current one is reused when omitted
    """
    global _config, _initialized

    if config is not None:
        _config = config

    logging.setLoggerClass(LyricSyncLogger)
    console_level = _config.level.stdlib_level

    tree = logging.getLogger(ROOT_LOGGER_NAME)
    for old in list(tree.handlers):
        tree.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()

    tree.addHandler(
        _handler(
            logging.StreamHandler(sys.stderr),
            console_level,
            StructuredFormatter(
                json_format=_config.json_format,
                include_timestamp=_config.include_timestamp,
                include_context=_config.include_context,
                color=_config.color and sys.stderr.isatty(),
            ),
        )
    )

    tree_level = console_level
    if _config.log_file is not None:
        _config.log_file.parent.mkdir(parents=True, exist_ok=True)
        # The file always gets full detail
        tree.addHandler(
            _handler(
                logging.FileHandler(_config.log_file, encoding="utf-8"),
                logging.DEBUG,
                StructuredFormatter(json_format=_config.json_format, color=False),
            )
        )
        tree_level = logging.DEBUG

    tree.setLevel(tree_level)
    _initialized = True


def get_logger(name: str) -> LyricSyncLogger:
    """Return the logger for a module, configuring logging on first use.

    Args:
        name: Logger name, normally ``__name__``
    """
    if not _initialized:
        configure_logging()

    logger = logging.getLogger(name)
    if isinstance(logger, LyricSyncLogger):
        return logger

    # Created before LyricSyncLogger was installed as the logger class
    wrapped = LyricSyncLogger(name, logger.level)
    wrapped.parent = logger.parent
    wrapped.handlers = logger.handlers
    return wrapped


def set_verbosity(level: LogLevel) -> None:
    """Change console verbosity, keeping the rest of the configuration."""
    _config.level = level
    configure_logging()


def enable_file_logging(log_file: Path) -> None:
    """Also write debug-level records to ``log_file``."""
    _config.log_file = log_file
    configure_logging()


class LogContext:
    """Set record fields for every log call inside a ``with`` block.

    Example:
        with LogContext(lyrics_file="song.krc"):
            result = parse_lyrics("krc", text)
    """

    def __init__(self, **context: Any):
        self.context = context
        self._previous_factory = None

    def __enter__(self) -> "LogContext":
        previous = logging.getLogRecordFactory()
        context = self.context

        def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = previous(*args, **kwargs)
            for key, value in context.items():
                setattr(record, key, value)
            return record

        self._previous_factory = previous
        logging.setLogRecordFactory(factory)
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: Any) -> None:
        if self._previous_factory is not None:
            logging.setLogRecordFactory(self._previous_factory)
