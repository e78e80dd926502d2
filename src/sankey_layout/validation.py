"""
Input validation utilities for Sankey layout.

Provides centralized validation functions for node identifiers, link values,
canvas geometry and other layout parameters. Raises descriptive exceptions
on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional, Sequence


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class DuplicateNodeIdError(ValidationError):
    """Raised when two declared nodes share an identifier."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Duplicate node id: {node_id!r}")
        self.node_id = node_id


class InvalidValueError(ValidationError):
    """Raised when a link value is non-positive or non-finite."""

    def __init__(self, link_index: int, value: Any, reason: str) -> None:
        super().__init__(f"Link {link_index}: value {value!r} {reason}")
        self.link_index = link_index
        self.value = value


class CycleDetectedError(ValidationError):
    """Raised when the graph is not a DAG and columns cannot be assigned."""

    def __init__(self, cycle: Optional[Sequence[str]] = None) -> None:
        if cycle:
            msg = "Graph contains a cycle: " + " -> ".join(str(c) for c in cycle)
        else:
            msg = "Graph contains a cycle"
        super().__init__(msg)
        self.cycle = list(cycle) if cycle else []


class InvalidConfigError(ValidationError):
    """Raised when layout configuration values are invalid."""

    pass


class InsufficientHeightWarning(UserWarning):
    """Warning issued when node padding had to be dropped to fit the canvas."""

    pass


def validate_unique_ids(ids: Iterable[str]) -> None:
    """
    Check that node identifiers are unique.

    Args:
        ids: Node identifiers in declaration order

    Raises:
        DuplicateNodeIdError: On the first repeated identifier
    """
    seen: set[str] = set()
    for node_id in ids:
        if node_id in seen:
            raise DuplicateNodeIdError(node_id)
        seen.add(node_id)


def validate_link_value(value: Any, link_index: int) -> float:
    """
    Validate a link's flow value.

    Args:
        value: Raw value
        link_index: Index of the link, used in the error message

    Returns:
        The value as float

    Raises:
        InvalidValueError: If value is not a number, not finite, or <= 0
    """
    if isinstance(value, bool):
        raise InvalidValueError(link_index, value, "is not a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidValueError(link_index, value, "is not a number") from None
    except OverflowError:
        raise InvalidValueError(link_index, value, "is not finite") from None

    if not math.isfinite(number):
        raise InvalidValueError(link_index, value, "is not finite")
    if number <= 0:
        raise InvalidValueError(link_index, value, "must be positive")
    return number


def validate_canvas_size(width: float, height: float) -> tuple[float, float]:
    """
    Validate canvas dimensions.

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidConfigError: If a dimension is not positive
    """
    width, height = float(width), float(height)
    if not width > 0:
        raise InvalidConfigError(f"Canvas width must be positive, got {width}")
    if not height > 0:
        raise InvalidConfigError(f"Canvas height must be positive, got {height}")
    return width, height


def validate_margin(margin: float, width: float, height: float) -> float:
    """
    Validate that the margin leaves a drawable area.

    Raises:
        InvalidConfigError: If margin is negative or consumes the canvas
    """
    margin = float(margin)
    if margin < 0:
        raise InvalidConfigError(f"margin must be >= 0, got {margin}")
    if 2 * margin >= width or 2 * margin >= height:
        raise InvalidConfigError(
            f"margin {margin} leaves no drawable area on a {width}x{height} canvas"
        )
    return margin


def validate_node_width(node_width: float, drawable_width: float) -> float:
    """
    Validate node thickness.

    Raises:
        InvalidConfigError: If node width is not positive or wider than the drawable area
    """
    node_width = float(node_width)
    if not node_width > 0:
        raise InvalidConfigError(f"node_width must be positive, got {node_width}")
    if node_width > drawable_width:
        raise InvalidConfigError(
            f"node_width {node_width} exceeds drawable width {drawable_width}"
        )
    return node_width


def validate_non_negative(name: str, value: float) -> float:
    """Validate a float option that may be zero but not negative."""
    value = float(value)
    if not value >= 0:
        raise InvalidConfigError(f"{name} must be >= 0, got {value}")
    return value


def validate_iterations(iterations: int) -> int:
    """
    Validate relaxation pass count.

    Raises:
        InvalidConfigError: If iterations < 0
    """
    iterations = int(iterations)
    if iterations < 0:
        raise InvalidConfigError(f"iterations must be >= 0, got {iterations}")
    return iterations


__all__ = [
    "ValidationError",
    "DuplicateNodeIdError",
    "InvalidValueError",
    "CycleDetectedError",
    "InvalidConfigError",
    "InsufficientHeightWarning",
    "validate_unique_ids",
    "validate_link_value",
    "validate_canvas_size",
    "validate_margin",
    "validate_node_width",
    "validate_non_negative",
    "validate_iterations",
]
