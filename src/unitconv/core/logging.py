#!/usr/bin/env python3
"""
Structured logging for unitconv with context propagation.

Features:
- Environment-driven configuration (LOG_LEVEL, LOG_OUTPUT)
- JSON records in production, readable lines in development
- Per-pass context (pass ids, root element names) via contextvars
- stdout for DEBUG/INFO, stderr for WARNING and above, optional rotating file
"""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

_pass_context: ContextVar[Dict[str, Any]] = ContextVar("pass_context", default={})

_RESERVED_RECORD_KEYS = frozenset(
    (
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
        "lineno", "funcName", "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "message", "exc_info", "exc_text", "stack_info", "context",
        "taskName",
    )
)


class StructuredFormatter(logging.Formatter):
    """Formatter that emits JSON for production or a readable line for development."""

    def __init__(self, use_json: bool = False):
        self.use_json = use_json
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        context = _pass_context.get({})
        if getattr(record, "context", None):
            context = {**context, **record.context}

        if self.use_json:
            return self._format_json(record, context)
        return self._format_readable(record, context)

    def _format_json(self, record: logging.LogRecord, context: Dict[str, Any]) -> str:
        entry = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                entry[key] = value

        return json.dumps(entry, default=str)

    def _format_readable(self, record: logging.LogRecord, context: Dict[str, Any]) -> str:
        timestamp = self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S")
        context_str = ""
        if context:
            context_str = " | " + " ".join(f"{k}={v}" for k, v in context.items())

        line = f"{timestamp} | {record.levelname:5} | {record.name} | {record.getMessage()}{context_str}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that attaches the current pass context to every record."""

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        context = _pass_context.get({})
        if self.extra:
            context = {**context, **self.extra}

        if kwargs.get("extra"):
            call_context = kwargs["extra"].pop("context", {})
            context = {**context, **call_context}

        kwargs.setdefault("extra", {})
        kwargs["extra"]["context"] = context
        return msg, kwargs


def get_log_level() -> str:
    """Log level from the environment, INFO by default."""
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def get_log_output() -> str:
    """Output mode from the environment: console, file or both."""
    return os.environ.get("LOG_OUTPUT", "console").lower()


def is_production_env() -> bool:
    """Detect a production deployment, where JSON records are preferred."""
    indicators = [
        os.environ.get("ENVIRONMENT") == "production",
        os.environ.get("UNITCONV_ENV") == "production",
        os.path.exists("/.dockerenv"),
        os.environ.get("KUBERNETES_SERVICE_HOST") is not None,
    ]
    return any(indicators)


def setup_structured_logging(
    name: str,
    log_level: Optional[str] = None,
    log_output: Optional[str] = None,
    force_json: Optional[bool] = None,
    context: Optional[Dict[str, Any]] = None,
) -> ContextLogger:
    """
    Configure a module logger with structured output.

    Args:
        name: Logger name (typically __name__)
        log_level: Level override (DEBUG, INFO, WARNING, ERROR)
        log_output: Output override (console, file, both)
        force_json: Force JSON output regardless of environment detection
        context: Default context included in every record

    Returns:
        ContextLogger wrapping the configured logger
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return ContextLogger(logger, context)

    level = log_level or get_log_level()
    output = log_output or get_log_output()
    use_json = force_json if force_json is not None else is_production_env()

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = StructuredFormatter(use_json=use_json)

    if output in ("console", "both"):
        _setup_console_handlers(logger, formatter)
    if output in ("file", "both"):
        _setup_file_handler(logger, formatter, name)

    logger.propagate = False
    return ContextLogger(logger, context)


def _setup_console_handlers(logger: logging.Logger, formatter: StructuredFormatter) -> None:
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING)
    logger.addHandler(stderr_handler)


def _setup_file_handler(logger: logging.Logger, formatter: StructuredFormatter, name: str) -> None:
    logs_dir = Path.cwd() / "logs"
    logs_dir.mkdir(exist_ok=True)

    module_basename = name.split(".")[-1]
    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / f"{module_basename}.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def set_context(**kwargs: Any) -> None:
    """Add key-value pairs to the logging context of the current execution context."""
    _pass_context.set({**_pass_context.get({}), **kwargs})


def clear_context() -> None:
    _pass_context.set({})


def get_context() -> Dict[str, Any]:
    return _pass_context.get({}).copy()


class LogContext:
    """
    Context manager for temporary logging context.

    Usage:
        with LogContext(pass_id="3f2a", root="body"):
            logger.debug("Converting")  # record carries pass_id and root
    """

    def __init__(self, **kwargs: Any):
        self.new_context = kwargs
        self.old_context: Dict[str, Any] = {}

    def __enter__(self):
        self.old_context = get_context()
        set_context(**{**self.old_context, **self.new_context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _pass_context.set(self.old_context)


def set_level(level: str, prefix: str = "unitconv") -> None:
    """Change the level of every already-configured logger under ``prefix``."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(logger, logging.Logger) and (name == prefix or name.startswith(prefix + ".")):
            logger.setLevel(numeric_level)
