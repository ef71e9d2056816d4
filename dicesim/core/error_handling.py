"""
Centralized error handling and contract checks.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .logging import format_context


class ErrorSeverity(Enum):
    """Enumeration of error severity levels for the simulator."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DiceSimError(Exception):
    """Base class for every error raised by the simulator."""


class OutOfContractError(DiceSimError, ValueError):
    """Raised when a value falls outside the range an operation supports."""


@dataclass
class SimulationError:
    """Represents a reported error with severity, context, and optional exception."""
    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Centralized error reporting for the simulator."""

    def __init__(self) -> None:
        """Initialize the ErrorHandler with a logger and empty error history."""
        self.logger = logging.getLogger("dicesim.errors")
        self.error_history: list[SimulationError] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> None:
        """Record an error and log it at the level matching its severity."""
        error = SimulationError(
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        self.error_history.append(error)

        text = format_context(error.message, error.context)
        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {text}")
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {text}")
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {text}")
        else:
            self.logger.info(f"INFO: {text}")

    def clear(self) -> None:
        """Forget every recorded error."""
        self.error_history.clear()


# Global error handler instance
ERROR_HANDLER = ErrorHandler()


def log_warning(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log a warning-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.MEDIUM, context, exception)


def log_error(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log an error-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.HIGH, context, exception)


# ==============================================================================
# CONTRACT HELPERS
# ==============================================================================
# Out-of-contract inputs are programming errors: they are logged with their
# context and raised, never corrected.


def require_int_in_range(
    value: Any,
    param_name: str,
    min_val: int,
    max_val: Optional[int] = None,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Validates that a value is an integer within the specified range.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive), None for no maximum
        context: Additional context for logging

    Returns:
        int: The validated value

    Raises:
        OutOfContractError: If validation fails
    """
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or value < min_val
        or (max_val is not None and value > max_val)
    ):
        range_desc = (
            f">= {min_val}" if max_val is None else f"between {min_val} and {max_val}"
        )
        log_error(
            f"{param_name} must be integer {range_desc}, got: {value}",
            {
                **(context or {}),
                "param_name": param_name,
                "value": value,
                "min_val": min_val,
                "max_val": max_val,
            },
        )
        raise OutOfContractError(
            f"Invalid {param_name}: expected integer {range_desc}, got {value!r}"
        )
    return value


def require_probability(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> float:
    """
    Validates that a value is a probability in [0, 1].

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        context: Additional context for logging

    Returns:
        float: The validated probability

    Raises:
        OutOfContractError: If validation fails
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
        log_error(
            f"{param_name} must be a probability in [0, 1], got: {value}",
            {**(context or {}), "param_name": param_name, "value": value},
        )
        raise OutOfContractError(f"Invalid {param_name}: {value!r}")
    return float(value)
