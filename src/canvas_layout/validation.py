"""
Configuration validation utilities for layout algorithms.

Algorithm constructors validate their parameters with these helpers and
raise descriptive exceptions on invalid configuration. Graph input passed
to ``layout()`` is never validated this way: malformed graphs degrade
gracefully instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .types import LayoutDirection


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when an algorithm parameter is out of range."""

    pass


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidConfigError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidConfigError(f"{name} must be finite, got {value!r}")
    return number


def validate_positive(name: str, value: Any) -> float:
    """
    Validate a strictly positive number.

    Raises:
        InvalidConfigError: If value is not a finite number > 0
    """
    number = _as_float(name, value)
    if number <= 0:
        raise InvalidConfigError(f"{name} must be positive, got {value}")
    return number


def validate_non_negative(name: str, value: Any) -> float:
    """
    Validate a number >= 0.

    Raises:
        InvalidConfigError: If value is not a finite number >= 0
    """
    number = _as_float(name, value)
    if number < 0:
        raise InvalidConfigError(f"{name} must be >= 0, got {value}")
    return number


def validate_open_unit_interval(name: str, value: Any) -> float:
    """
    Validate a number strictly between 0 and 1.

    Raises:
        InvalidConfigError: If value is not in (0, 1)
    """
    number = _as_float(name, value)
    if not 0 < number < 1:
        raise InvalidConfigError(f"{name} must be in (0, 1), got {value}")
    return number


def validate_iterations(name: str, value: Any) -> int:
    """
    Validate an iteration count is a non-negative integer.

    Raises:
        InvalidConfigError: If value is not an int >= 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidConfigError(f"{name} must be >= 0, got {value}")
    return value


def parse_direction(value: Any) -> Optional[LayoutDirection]:
    """
    Parse a LayoutDirection or its string value.

    Returns:
        The direction, or None if the value is not recognised
    """
    if isinstance(value, LayoutDirection):
        return value
    try:
        return LayoutDirection(value)
    except ValueError:
        return None


__all__ = [
    "ValidationError",
    "InvalidConfigError",
    "GraphStructureWarning",
    "validate_positive",
    "validate_non_negative",
    "validate_open_unit_interval",
    "validate_iterations",
    "parse_direction",
]
