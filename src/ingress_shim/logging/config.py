"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

LOG_DIR = Path.home() / ".local" / "state" / "ingress-shim"
LOG_FILE = LOG_DIR / "ingress-shim.log"
MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3
RETENTION_DAYS = 14

# Marker attribute for handlers installed here, so reconfiguring replaces them
_HANDLER_MARKER = "_ingress_shim_handler"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _cleanup_old_logs() -> None:
    """Delete rotated log files older than RETENTION_DAYS."""
    if not LOG_DIR.exists():
        return
    cutoff = datetime.now() - timedelta(days=RETENTION_DAYS)
    for log_file in LOG_DIR.glob(f"{LOG_FILE.name}*"):
        try:
            if datetime.fromtimestamp(log_file.stat().st_mtime) < cutoff:
                log_file.unlink()
        except OSError:
            continue


def _file_handler() -> logging.Handler:
    """Build the rotating JSON file handler."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    _cleanup_old_logs()

    handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
    )
    return handler


def _console_handler(log_level: int, *, json_output: bool, debug: bool) -> logging.Handler:
    """Build the stderr handler, human-readable unless json_output is set."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=debug),
        )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
    )
    return handler


def configure_logging(
    verbose: bool = False,
    debug: bool = False,
    json_output: bool = False,
    log_to_file: bool = True,
) -> None:
    """Configure structured logging for the controller.

    Console output goes to stderr so command output on stdout stays clean.
    When ``log_to_file`` is set, a JSON copy of every record is also written
    to ``~/.local/state/ingress-shim/ingress-shim.log`` with size-based
    rotation and age-based cleanup.

    Calling this more than once replaces the handlers installed by the
    previous call.

    Args:
        verbose: Enable INFO level output.
        debug: Enable DEBUG level output.
        json_output: Render console logs as JSON (for running in-cluster).
        log_to_file: Also write JSON logs to the rotating log file.
    """
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers = [
        h for h in root_logger.handlers if not getattr(h, _HANDLER_MARKER, False)
    ]

    handlers = [_console_handler(log_level, json_output=json_output, debug=debug)]
    if log_to_file:
        handlers.append(_file_handler())
    for handler in handlers:
        setattr(handler, _HANDLER_MARKER, True)
        root_logger.addHandler(handler)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Get a logger with optional initial context bound.

    Args:
        name: Logger name. If None, structlog picks the calling module.
        **initial_context: Key/value pairs to bind to the logger.

    Returns:
        A bound structlog logger.
    """
    logger: structlog.BoundLogger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
