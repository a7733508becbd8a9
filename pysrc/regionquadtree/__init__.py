"""regionquadtree - Pure Python region quadtree for positioned items."""

from ._bound import Bound
from ._common import MAX_CAPACITY, MAX_DEPTH, Extent, Point, Positioned
from ._insert_result import InsertResult
from ._item import PointItem
from .quadtree import QuadTree

__all__ = [
    "MAX_CAPACITY",
    "MAX_DEPTH",
    "Bound",
    "Extent",
    "InsertResult",
    "Point",
    "PointItem",
    "Positioned",
    "QuadTree",
]
