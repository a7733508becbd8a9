# _item.py
from __future__ import annotations

from typing import Any

from ._common import Point


class PointItem:
    """
    Lightweight positioned entry for callers without their own item type.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        obj: The attached Python object if any, else None.

    Notes:
        - Holds a strong reference to the object when provided.
        - Equality compares coordinates and the attached object.
    """

    __slots__ = ("obj", "x", "y")

    def __init__(self, x: float, y: float, obj: Any | None = None):
        self.x = float(x)
        self.y = float(y)
        self.obj = obj

    def position(self) -> Point:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointItem):
            return NotImplemented
        return (self.x, self.y, self.obj) == (other.x, other.y, other.obj)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PointItem(x={self.x}, y={self.y}, obj={self.obj!r})"
