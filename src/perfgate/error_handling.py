"""Standardized Error Handling Utilities

Provides the exception hierarchy used by the regression gate and a few
helpers that log failures consistently before they abort a run.

Only infrastructure problems are raised. Per-metric problems (missing or
invalid data points) are logged with ``log_warning_with_context`` and recorded
in the report instead.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn


class PerfGateError(Exception):
    """Base exception class for all perfgate errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class ConfigurationError(PerfGateError):
    """Raised when a threshold or path setting is invalid."""

    pass


class DependencyError(PerfGateError):
    """Raised when a capability required for analysis is unavailable."""

    pass


class NoResultFilesError(PerfGateError):
    """Raised when the results directory holds no benchmark result files."""

    pass


class BaselineError(PerfGateError):
    """Raised when an existing baseline file cannot be read."""

    pass


class BaselineWriteError(BaselineError):
    """Raised when the baseline snapshot cannot be written."""

    pass


class ReportWriteError(PerfGateError):
    """Raised when the regression report cannot be persisted."""

    pass


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[PerfGateError] = PerfGateError,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> NoReturn:
    """Log a failed operation and re-raise it as a perfgate error.

    Args:
        error: Original exception that occurred
        operation: Description of operation that failed
        error_type: Type of PerfGateError to raise
        context: Additional context information
        logger: Logger to use (defaults to module logger)

    Raises:
        PerfGateError: ``error_type`` wrapping ``error``
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    message = f"Failed to {operation}: {error}"

    error_context = dict(context or {})
    error_context.update(
        {
            "operation": operation,
            "original_error_type": type(error).__name__,
        }
    )

    transformed_error = error_type(message, cause=error, context=error_context)

    log_message = f"🚨 {operation.capitalize()} failed: {error}"
    context_str = ", ".join(
        f"{k}={v}" for k, v in error_context.items() if k != "operation"
    )
    if context_str:
        log_message += f" (context: {context_str})"

    logger.error(log_message)
    logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    raise transformed_error from error


@contextmanager
def error_context(
    operation: str,
    error_type: type[PerfGateError] = PerfGateError,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Iterator[None]:
    """Context manager for standardized error handling.

    Usage:
        with error_context("write report", ReportWriteError, context={"path": path}):
            write_the_file()

    perfgate errors pass through unchanged; anything else is wrapped in
    ``error_type`` and logged once.
    """
    try:
        yield
    except PerfGateError:
        raise
    except Exception as e:
        handle_error(e, operation, error_type, context, logger)


def log_warning_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log a warning with standardized context formatting."""
    if logger is None:
        logger = logging.getLogger(__name__)

    warning_msg = f"⚠️  {message}"
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        warning_msg += f" (context: {context_str})"

    logger.warning(warning_msg)


def log_info_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log an info message with standardized context formatting."""
    if logger is None:
        logger = logging.getLogger(__name__)

    info_msg = f"ℹ️  {message}"
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        info_msg += f" (context: {context_str})"

    logger.info(info_msg)
