"""\
Logging
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, September 07 2026
Last updated on: Saturday, October 03 2026

This module provides logging utilities and configuration helpers for
this framework. It builds on the standard Python logging library with
custom formatters for coloured and JSON output, automatic extra field
handling, log rotation and a decorator for timing functions.

Modules obtain their logger with `get_logger(__name__)` and pass
contextual fields through `extra`, the formatters take care of
rendering them.
"""

from __future__ import annotations

import ast
import functools
import json
import logging
import logging.handlers
import re
import sys
import time
import typing as t
from pathlib import Path

if t.TYPE_CHECKING:
    from specter.core.config import LoggerConfig

__all__: list[str] = [
    "ColouredFormatter",
    "JSONFormatter",
    "SpecterFormatter",
    "configure",
    "dehumanise",
    "get_logger",
    "perf_logger",
]


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records in JSON format, capturing the
    timestamp, log level, logger name, message, module, function, line
    number, exception information and any extra fields.

    :param extras: Whether to include extra fields in output, defaults
        to `True`.
    """

    def __init__(self, extras: bool = True) -> None:
        """Initialise the JSON formatter instance."""
        super().__init__()
        self.extras = extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if (
                    key not in payload
                    and key not in SpecterFormatter.LOG_RECORD_ATTRS
                    and not key.startswith("_")
                ):
                    payload[key] = value
        return json.dumps(payload, default=str)


class SpecterFormatter(logging.Formatter):
    """Formatter that automatically includes extra fields.

    Extra fields, i.e. those not part of the standard `LogRecord`
    attributes, are rendered with `extra_format` and joined with
    `extra_separator`. The result is available as `%(extra)s` in the
    format string.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps, defaults to
        `None`.
    :param extra_format: Format string for individual extra fields,
        defaults to `{key}: {value}`.
    :param extra_separator: Separator between multiple extra fields,
        defaults to a single space.
    :var LOG_RECORD_ATTRS: Set of standard `LogRecord` attributes.
    """

    LOG_RECORD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "taskName",
        "qualName",
        "extra",
    }

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        extra_format: str = "{key}: {value}",
        extra_separator: str = " ",
    ) -> None:
        """Initialise the custom formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling."""
        clone = logging.makeLogRecord(record.__dict__)
        entries = [
            self.extra.format(key=key, value=value)
            for key, value in sorted(record.__dict__.items())
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_")
        ]
        clone.extra = self.extra_separator.join(entries)
        if not hasattr(clone, "qualName"):
            clone.qualName = f"{record.name}.{record.funcName}"
        return super().format(clone)


@functools.lru_cache(maxsize=64)
def _parse(pathname: str) -> ast.Module | None:
    """Parse and cache the source tree of a logging module."""
    try:
        return ast.parse(Path(pathname).read_text(encoding="utf-8"))
    except (SyntaxError, UnicodeDecodeError, OSError):
        return None


class ColouredFormatter(SpecterFormatter):
    """Coloured formatter with fully qualified function names.

    Log lines name the function that logged with its module path and
    enclosing class, e.g. `specter.wrapper.caller.Caller.call`. Colours
    are only applied when `is_tty` is set, so log files remain free of
    ANSI escape sequences.

    :var COLORS: Dictionary mapping log levels to ANSI colour codes.
    """

    COLORS = {
        "DEBUG": "\x1b[38;5;14m",
        "INFO": "\x1b[38;5;41m",
        "WARNING": "\x1b[38;5;215m",
        "ERROR": "\x1b[38;5;204m",
        "CRITICAL": "\x1b[38;5;197m",
        "QUALNAME": "\x1b[38;5;140m",
        "RESET": "\x1b[0m",
    }

    is_tty: bool = False

    def make_qualname(self, record: logging.LogRecord) -> str:
        """Generate fully qualified function/method name of a record."""
        func = record.funcName
        tree = _parse(record.pathname) if record.pathname else None
        klass = self.class_at_line(tree, record.lineno, func) if tree else None
        if klass and func != "__init__":
            return f"{record.name}.{klass}.{func}"
        if klass:
            return f"{record.name}.{klass}"
        return f"{record.name}.{func}"

    @staticmethod
    def class_at_line(tree: ast.Module, line: int, func: str) -> str | None:
        """Find the class containing a function at the given line.

        :param tree: The AST tree of the source file.
        :param line: The line number where the function logged.
        :param func: The function name to look for.
        :return: Class name if found, `None` otherwise.
        """
        for node in ast.walk(tree):
            if not isinstance(node, ast.ClassDef):
                continue
            for method in node.body:
                if (
                    isinstance(method, ast.FunctionDef)
                    and method.name == func
                    and method.lineno <= line <= (method.end_lineno or line)
                ):
                    return node.name
        return None

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with qualified names and colours."""
        clone = logging.makeLogRecord(record.__dict__)
        qualname = self.make_qualname(record)
        clone.qualName = qualname
        if self.is_tty:
            colour = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            clone.levelname = (
                f"{colour}{record.levelname:>8s}{self.COLORS['RESET']}"
            )
            clone.qualName = (
                f"{self.COLORS['QUALNAME']}{qualname}{self.COLORS['RESET']}"
            )
        else:
            clone.levelname = f"{record.levelname:>8s}"
        return super().format(clone)


def configure(config: LoggerConfig) -> None:
    """Configure logging based on provided configuration settings.

    This function installs a console handler and a rotating file handler
    on the `specter` logger according to the configuration. Handlers
    previously installed by this function are replaced.

    :param config: Logging configuration settings.
    """
    logger = logging.getLogger("specter")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers: list[logging.Handler] = []
    if config.tty.enable:
        tty = logging.StreamHandler(sys.stdout)
        tty.setLevel(getattr(logging, config.tty.level))
        tty.setFormatter(
            _formatter(config, config.tty.fmt, colour=config.tty.colour)
        )
        handlers.append(tty)
    if config.file.enable:
        Path(config.file.path).parent.mkdir(parents=True, exist_ok=True)
        file = logging.handlers.RotatingFileHandler(
            filename=config.file.path,
            maxBytes=dehumanise(config.file.max_size),
            backupCount=config.file.backups,
            encoding=config.file.encoding,
        )
        file.setLevel(getattr(logging, config.file.level))
        file.setFormatter(_formatter(config, config.file.fmt, colour=False))
        handlers.append(file)
    levels = [handler.level for handler in handlers]
    logger.setLevel(min(levels) if levels else getattr(logging, config.level))
    for handler in handlers:
        logger.addHandler(handler)


def _formatter(
    config: LoggerConfig,
    fmt: str,
    *,
    colour: bool,
) -> logging.Formatter:
    """Build the formatter for one handler."""
    if config.as_json:
        return JSONFormatter()
    formatter = ColouredFormatter(
        fmt=fmt,
        datefmt=config.datefmt,
        extra_format="[{key}: {value}]",
    )
    formatter.is_tty = colour
    return formatter


def dehumanise(size: str) -> int:
    """Parse size string to bytes.

    :param size: Size string like `10MB`, `1GB`, etc.
    :return: Size in bytes.
    :raises ValueError: If the size string cannot be parsed.
    """
    size = size.upper().strip()
    multipliers = {
        "B": 1,
        "KB": 1024,
        "MB": 1024**2,
        "GB": 1024**3,
        "TB": 1024**4,
    }
    matched = re.match(r"^(\d+(?:\.\d+)?)\s*([KMGT]?B)?$", size)
    if not matched:
        raise ValueError(f"Invalid size format: {size}")
    value, unit = matched.groups()
    return int(float(value) * multipliers.get(unit or "B", 1))


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(logger_name)


def perf_logger(
    func: t.Callable[..., t.Any] | None = None,
    *,
    failure_level: int = logging.ERROR,
) -> t.Any:
    """Decorator to log function execution time.

    The elapsed time is logged at debug level on success, and at
    `failure_level` on failure. The traceback is attached only when the
    failure is logged at error level or above. The exception is always
    re-raised.

    :param func: Function to wrap.
    :param failure_level: Level used to log failures, defaults to
        `logging.ERROR`.
    :return: Wrapped function with performance logging.

    .. code-block:: python

        @perf_logger(failure_level=logging.DEBUG)
        def build():
            ...
    """
    if func is None:
        return functools.partial(perf_logger, failure_level=failure_level)

    @functools.wraps(func)
    def wrapper(*args: t.Any, **kwargs: t.Any) -> t.Any:
        """Wrapper function to log execution time."""
        logger = get_logger(func.__module__)
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            elapsed = time.perf_counter() - started
            logger.log(
                failure_level,
                f"Function {func.__qualname__!r} failed after "
                f"{elapsed:.4f}s: {exc}",
                extra={"function": func.__qualname__, "elapsed": elapsed},
                exc_info=failure_level >= logging.ERROR,
            )
            raise
        elapsed = time.perf_counter() - started
        logger.debug(
            f"Function: {func.__qualname__!r} completed in {elapsed:.4f}s",
            extra={"function": func.__qualname__, "elapsed": elapsed},
        )
        return result

    return wrapper
