# _common.py
"""Common type aliases, constants and validators shared across the package."""

from __future__ import annotations

from typing import Any, Protocol

# Type aliases
Point = tuple[float, float]
"""2D point as (x, y)."""

Extent = tuple[float, float, float, float]
"""Axis-aligned rectangle as (min_x, min_y, max_x, max_y)."""

MAX_CAPACITY = 4
"""Default number of items a leaf holds before it subdivides."""

MAX_DEPTH = 20
"""Default depth at which leaves stop subdividing."""


class Positioned(Protocol):
    """
    Capability required from every item stored in a QuadTree.

    ``position()`` must be side-effect free and return the same value for as
    long as the item lives in a tree. Moving an item without reinserting it
    leaves it in the wrong node.
    """

    def position(self) -> Point: ...


def _is_np_array(x: Any) -> bool:
    """
    Check if x is a NumPy array without importing NumPy.

    This allows type checking without forcing NumPy as a hard dependency.
    """
    mod = getattr(x.__class__, "__module__", "")
    return mod.startswith("numpy") and hasattr(x, "ndim") and hasattr(x, "shape")


def validate_extent(extent: Any) -> Extent:
    """
    Validate and normalize an extent to a tuple of floats.

    Args:
        extent: Sequence of 4 numbers (min_x, min_y, max_x, max_y).

    Returns:
        Validated extent as tuple.

    Raises:
        ValueError: If the extent does not hold exactly four values.
    """
    if type(extent) is not tuple:
        extent = tuple(extent)
    if len(extent) != 4:
        raise ValueError(
            "extent must be a tuple of four numeric values (x min, y min, x max, y max)"
        )
    return tuple(float(v) for v in extent)  # type: ignore[return-value]


def validate_tree_params(capacity: int, max_depth: int) -> None:
    """
    Validate per-tree tuning parameters.

    Raises:
        ValueError: If capacity is below 1 or max_depth is negative.
    """
    if capacity < 1:
        raise ValueError(f"capacity must be at least 1, got {capacity}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
