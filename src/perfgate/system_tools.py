"""Capability checks run before any analysis.

JSON decoding is required: without it no result or baseline file can be read,
so its absence aborts the run. Percent changes are always computed with exact
``decimal`` arithmetic, so there is no reduced-precision mode to probe for.
"""

from __future__ import annotations

import importlib.util
import logging
from dataclasses import dataclass

from .error_handling import DependencyError

logger = logging.getLogger(__name__)

REQUIRED_MODULES = ("json",)


@dataclass(frozen=True, slots=True)
class DependencyStatus:
    """Result of the startup capability check."""

    json_available: bool

    def require(self) -> None:
        """Raise *DependencyError* if JSON processing is unavailable."""
        if not self.json_available:
            raise DependencyError(
                "JSON processing is required but not available. "
                "Reinstall Python with its standard library intact."
            )


def check_import_available(module_name: str) -> bool:
    """Check if a module can be imported without actually importing it."""
    try:
        return importlib.util.find_spec(module_name) is not None
    except (ImportError, ValueError):
        return False


def check_dependencies() -> DependencyStatus:
    """Probe capabilities and fail fast when a required one is missing.

    Raises:
        DependencyError: If JSON processing is unavailable
    """
    status = DependencyStatus(
        json_available=all(check_import_available(name) for name in REQUIRED_MODULES),
    )
    status.require()
    logger.debug(f"Dependency check passed: {', '.join(REQUIRED_MODULES)}")
    return status
