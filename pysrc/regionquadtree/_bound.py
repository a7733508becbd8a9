# _bound.py
"""Bound - immutable axis-aligned rectangle with containment predicates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ._common import Extent, Point, validate_extent


@dataclass(frozen=True)
class Bound:
    """
    Axis-aligned rectangle given by its origin corner and extents.

    Containment is half-open on both axes, so a point on the right or bottom
    edge belongs to the neighbouring rectangle. No validation is done on the
    extents; negative sizes simply contain nothing.

    Attributes:
        origin: Corner with the smallest coordinates, (x, y).
        width: Extent along x.
        height: Extent along y.
    """

    origin: Point
    width: float
    height: float

    @classmethod
    def from_extent(cls, extent: Any) -> Bound:
        """
        Build a Bound from a (min_x, min_y, max_x, max_y) sequence.

        Raises:
            ValueError: If extent does not hold exactly four values.
        """
        x0, y0, x1, y1 = validate_extent(extent)
        return cls((x0, y0), x1 - x0, y1 - y0)

    @property
    def min_x(self) -> float:
        return self.origin[0]

    @property
    def min_y(self) -> float:
        return self.origin[1]

    @property
    def max_x(self) -> float:
        return self.origin[0] + self.width

    @property
    def max_y(self) -> float:
        return self.origin[1] + self.height

    def to_extent(self) -> Extent:
        """Return the rectangle as (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def contains(self, point: Point) -> bool:
        """Return True if point lies in [min_x, max_x) x [min_y, max_y)."""
        x, y = point
        ox, oy = self.origin
        return ox <= x < ox + self.width and oy <= y < oy + self.height

    def intersects(self, other: Bound) -> bool:
        """
        Return True unless the rectangles are separated along an axis.

        Shared edges count as overlap.
        """
        if self.min_x > other.max_x or other.min_x > self.max_x:
            return False
        if self.min_y > other.max_y or other.min_y > self.max_y:
            return False
        return True

    def quadrants(self) -> tuple[Bound, Bound, Bound, Bound]:
        """
        Split into four equal children.

        Order is top-left, bottom-left, top-right, bottom-right with y
        growing downward.
        """
        x, y = self.origin
        w = self.width / 2
        h = self.height / 2
        return (
            Bound((x, y), w, h),
            Bound((x, y + h), w, h),
            Bound((x + w, y), w, h),
            Bound((x + w, y + h), w, h),
        )
