#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for reconciliation cycles, indexing and CLI commands.

Each component (``database``, ``cli``...) gets two rotated files in the
log directory:

    <component>.log   every message, one line per event
    errors.log        exceptions with context and traceback

Messages carry a tag and an optional JSON payload:

    OPERATION - reconcile_media_completed: {"uid": "m1", "duration": 0.01}
    WARNING - Won't update title, was modified: {"uid": "m1"}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5

ERROR_LOG = "errors.log"


def rotating_handler(
    path: Path,
    level: int,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> RotatingFileHandler:
    """UTF-8 rotating file handler with the file line format."""
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    return handler


def console_handler(level: int = logging.WARNING) -> logging.StreamHandler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    return handler


def format_message(tag: str, message: str, details: Optional[Dict[str, Any]] = None) -> str:
    """``TAG - message`` with the details appended as JSON when present."""
    if details:
        return f"{tag} - {message}: {json.dumps(details, default=str)}"
    return f"{tag} - {message}"


def format_cli_error(error: Exception) -> str:
    return f"❌ {type(error).__name__}: {error}"


class MediaMetaLogger:
    """
    File-backed logger of one component.

    Attributes:
        log_dir: Directory for log files
        component_name: Prefix of the logger names and of the main log file
        main_logger: ``<component>.operations``, all messages
        error_logger: ``<component>.errors``, exceptions only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "mediameta",
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._logger(
            "operations",
            rotating_handler(
                self.log_dir / f"{component_name}.log", logging.DEBUG, max_bytes, backup_count
            ),
            console_handler(),
        )
        self.error_logger = self._logger(
            "errors",
            rotating_handler(self.log_dir / ERROR_LOG, logging.ERROR, max_bytes, backup_count),
        )

    def _logger(self, channel: str, *handlers: logging.Handler) -> logging.Logger:
        logger = logging.getLogger(f"{self.component_name}.{channel}")
        logger.setLevel(handlers[0].level)
        # A second instance for the same component replaces the handlers
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        for handler in handlers:
            logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Close and detach all handlers."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def _emit(
        self, level: int, tag: str, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        # stacklevel points funcName/lineno at the caller of log_*
        self.main_logger.log(level, format_message(tag, message, details), stacklevel=3)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log a completed operation, always with its (possibly empty) details."""
        self._emit(logging.INFO, "OPERATION", operation, details or {})

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.DEBUG, "DEBUG", message, details)

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.INFO, "INFO", message, details)

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.WARNING, "WARNING", message, details)

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an exception to the error log.

        Writes the exception, the context as ``key=value`` pairs and the
        traceback of the exception being handled.
        """
        lines = [f"ERROR - {type(error).__name__}: {error}"]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        lines.append(f"Traceback:\n{traceback.format_exc()}")

        for line in lines:
            self.error_logger.error(line)

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error raised by a command and return its console message.

        Examples:
            >>> logger.log_cli_error(DatabaseError("disk full"))
            '❌ DatabaseError: disk full'
        """
        self.log_error(error, context or {"source": "cli"})

        message = format_cli_error(error)
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


class NullLogger(MediaMetaLogger):
    """Logger that writes nothing; stands in for a missing MediaMetaLogger."""

    def __init__(self) -> None:
        pass

    def close(self) -> None:
        pass

    def _emit(
        self, level: int, tag: str, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[MediaMetaLogger]) -> MediaMetaLogger:
    """The given logger, or a shared NullLogger for None."""
    return logger if logger is not None else _null_logger


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a failed command, print its message to stderr and exit.

    The logger and the verbose flag are read from ``ctx.obj``; verbose
    output includes the traceback. Never returns.
    """
    context: Dict[str, Any] = {"operation": operation, **(additional_context or {})}
    logger = safe_logger(ctx.obj.get("logger"))

    message = logger.log_cli_error(error, context, show_traceback=ctx.obj.get("verbose", False))
    click.echo(message, err=True)
    sys.exit(exit_code)
