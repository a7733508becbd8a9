# quadtree.py
"""QuadTree - pure Python region quadtree over positioned items."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from ._bound import Bound
from ._common import (
    MAX_CAPACITY,
    MAX_DEPTH,
    Extent,
    Point,
    Positioned,
    _is_np_array,
    validate_tree_params,
)
from ._insert_result import InsertResult
from ._item import PointItem

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Positioned)


class QuadTree(Generic[T]):
    """
    Region quadtree storing any item that exposes ``position() -> (x, y)``.

    Every node covers a fixed Bound. A leaf buffers up to ``capacity`` items;
    the next insertion splits it into four equal quadrants and pushes the
    buffered items down, so internal nodes route and never store.

    Performance characteristics:
        Inserts: average O(log n)
        Rect queries: average O(log n + k) where k is matches returned

    Thread-safety:
        Instances are not thread-safe. Use external synchronization if you
        mutate the same tree from multiple threads, and never query while
        another thread inserts or clears.

    Args:
        bounds: Region covered by the tree, fixed for its lifetime.
        capacity: Max number of items per leaf before splitting.
        max_depth: Depth at which leaves stop splitting and grow past
            capacity instead, so items sharing one position pile up in a
            single leaf. Root depth is 0.

    Raises:
        ValueError: If capacity or max_depth are invalid.

    Example:
        ```python
        qt = QuadTree(Bound((0.0, 0.0), 100.0, 100.0))
        leftover = qt.insert(PointItem(10.0, 20.0))
        assert leftover is None
        for item in qt.query(Bound((5.0, 5.0), 20.0, 20.0)):
            print(item.position())
        ```
    """

    __slots__ = ("bounds", "capacity", "children", "depth", "items", "max_depth")

    MAX_CAPACITY = MAX_CAPACITY
    MAX_DEPTH = MAX_DEPTH

    def __init__(
        self,
        bounds: Bound,
        *,
        capacity: int = MAX_CAPACITY,
        max_depth: int = MAX_DEPTH,
        _depth: int = 0,
    ):
        validate_tree_params(capacity, max_depth)
        self.bounds = bounds
        self.capacity = capacity
        self.max_depth = max_depth
        self.depth = _depth
        self.items: list[T] = []
        self.children: list[QuadTree[T]] | None = None

    # ---- Insertion ----

    def insert(self, item: T) -> T | None:
        """
        Insert a single item.

        Args:
            item: Anything with a ``position()`` method.

        Returns:
            None when stored. The same item when its position lies outside
            this node's bounds; nothing is stored in that case.
        """
        pos = item.position()
        if not self.bounds.contains(pos):
            if self.depth == 0:
                logger.debug("Rejected %r at %s, outside %s", item, pos, self.bounds.to_extent())
            return item
        self._insert(item, pos)
        return None

    def _insert(self, item: T, pos: Point) -> None:
        # pos is already known to lie in self.bounds
        if self.children is None:
            if len(self.items) < self.capacity:
                self.items.append(item)
                return
            if self.depth >= self.max_depth:
                self.items.append(item)
                if len(self.items) == self.capacity + 1:
                    logger.debug(
                        "Leaf %s at max depth %d grew past capacity %d",
                        self.bounds.to_extent(),
                        self.depth,
                        self.capacity,
                    )
                return
            self.subdivide()
        self._child_for(pos)._insert(item, pos)

    def insert_all(self, items: Iterable[T], *, strict: bool = False) -> InsertResult:
        """
        Insert items one by one in the given order.

        Out-of-bounds items are skipped and collected in the result.

        Args:
            items: Iterable of positioned items.
            strict: Raise on the first out-of-bounds item instead of skipping
                it. Items before it stay inserted.

        Returns:
            InsertResult with the inserted count and the rejected items.

        Raises:
            ValueError: If strict is set and an item is outside the bounds.
        """
        result = InsertResult()
        for item in items:
            rejected = self.insert(item)
            if rejected is None:
                result.inserted += 1
                continue
            if strict:
                x, y = rejected.position()
                bx0, by0, bx1, by1 = self.bounds.to_extent()
                raise ValueError(
                    f"Item {rejected!r} at ({x}, {y}) is outside bounds ({bx0}, {by0}, {bx1}, {by1})"
                )
            result.rejected.append(rejected)
        return result

    def insert_many_np(self, coords: Any, objs: list[Any] | None = None) -> InsertResult:
        """
        Bulk insert points from a NumPy array as PointItem entries.

        Args:
            coords: NumPy array with shape (N, 2).
            objs: Optional list of Python objects aligned with coords.

        Returns:
            InsertResult with the inserted count and rejected PointItems.

        Raises:
            TypeError: If coords is not a NumPy array.
            ValueError: If coords is not (N, 2) or objs length doesn't match.
            ImportError: If NumPy is not installed.
        """
        if not _is_np_array(coords):
            raise TypeError("insert_many_np requires a NumPy array")

        import numpy as np

        if not isinstance(coords, np.ndarray):
            raise TypeError("insert_many_np requires a NumPy array")

        if coords.size == 0:
            return InsertResult()

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(f"coords must have shape (N, 2), got {coords.shape}")

        if objs is not None and len(objs) != len(coords):
            raise ValueError("objs length must match coords length")

        rows = coords.tolist()
        if objs is None:
            items = [PointItem(x, y) for x, y in rows]
        else:
            items = [PointItem(x, y, obj) for (x, y), obj in zip(rows, objs)]
        return self.insert_all(items)  # type: ignore[arg-type]

    # ---- Structure ----

    def subdivide(self) -> None:
        """
        Turn this leaf into an internal node with four empty children.

        Items buffered here are routed into the children straight away.
        Calling it on an internal node does nothing.
        """
        if self.children is not None:
            return
        self.children = [
            QuadTree(
                quadrant,
                capacity=self.capacity,
                max_depth=self.max_depth,
                _depth=self.depth + 1,
            )
            for quadrant in self.bounds.quadrants()
        ]
        buffered, self.items = self.items, []
        logger.debug(
            "Subdivided %s at depth %d, redistributing %d items",
            self.bounds.to_extent(),
            self.depth,
            len(buffered),
        )
        for item in buffered:
            pos = item.position()
            self._child_for(pos)._insert(item, pos)

    def _child_for(self, pos: Point) -> QuadTree[T]:
        # Same midpoint arithmetic as Bound.quadrants, so exactly one child matches
        x, y = pos
        ox, oy = self.bounds.origin
        idx = 0
        if x >= ox + self.bounds.width / 2:
            idx += 2
        if y >= oy + self.bounds.height / 2:
            idx += 1
        return self.children[idx]  # type: ignore[index]

    def is_leaf(self) -> bool:
        """Return True if this node has not subdivided."""
        return self.children is None

    def clear(self) -> None:
        """Empty the subtree in place, preserving bounds, capacity, and max_depth."""
        self.items = []
        if self.children is not None:
            for child in self.children:
                child.clear()
            self.children = None

    # ---- Queries ----

    def query(self, bounds: Bound) -> list[T]:
        """
        Return all items whose position lies inside a rectangle.

        Subtrees whose bounds miss the rectangle are skipped. Order is this
        node's items first, then each child in quadrant order.

        Args:
            bounds: Query rectangle.

        Returns:
            List of stored items.
        """
        out: list[T] = []
        self._query(bounds, out)
        return out

    def _query(self, bounds: Bound, out: list[T]) -> None:
        if not self.bounds.intersects(bounds):
            return
        contains = bounds.contains
        out.extend(item for item in self.items if contains(item.position()))
        if self.children is not None:
            for child in self.children:
                child._query(bounds, out)

    def query_np(self, bounds: Bound) -> Any:
        """
        Return the positions of ``query(bounds)`` as a NumPy array.

        Returns:
            NDArray[np.float64] with shape (K, 2), same order as query().

        Raises:
            ImportError: If NumPy is not installed.
        """
        import numpy as np

        hits = self.query(bounds)
        return np.array([item.position() for item in hits], dtype=np.float64).reshape(-1, 2)

    def query_all(self) -> list[T]:
        """Return every item in the subtree, in query() order."""
        out: list[T] = []
        self._collect(out)
        return out

    def _collect(self, out: list[T]) -> None:
        out.extend(self.items)
        if self.children is not None:
            for child in self.children:
                child._collect(out)

    def query_all_mut(self) -> list[T]:
        """
        Return every item in the subtree for in-place updates.

        The returned objects are the stored ones. Changing what their
        ``position()`` reports leaves them in the wrong node; clear and
        reinsert instead.
        """
        return self.query_all()

    def get_trees(self) -> list[QuadTree[T]]:
        """Return this node and every descendant, in pre-order."""
        out: list[QuadTree[T]] = [self]
        if self.children is not None:
            for child in self.children:
                out.extend(child.get_trees())
        return out

    # ---- Utilities ----

    def get_all_node_boundaries(self) -> list[Extent]:
        """
        Return all node boundaries in the tree. Useful for visualization.
        """
        return [node.bounds.to_extent() for node in self.get_trees()]

    def get_inner_max_depth(self) -> int:
        """Return how many levels the deepest node sits below this one."""
        return max(node.depth for node in self.get_trees()) - self.depth

    def __len__(self) -> int:
        """Return the number of items in the subtree."""
        return sum(len(node.items) for node in self.get_trees())

    def __iter__(self) -> Iterator[T]:
        """Iterate over all items in query_all() order."""
        return iter(self.query_all())

    def __contains__(self, point: Point) -> bool:
        """
        Check if any item sits exactly at the given coordinates.

        Example:
            ```python
            qt.insert(PointItem(10.0, 20.0))
            assert (10.0, 20.0) in qt
            assert (5.0, 5.0) not in qt
            ```
        """
        point = tuple(point)
        if not self.bounds.contains(point):
            return False
        node = self
        while True:
            if any(tuple(item.position()) == point for item in node.items):
                return True
            if node.children is None:
                return False
            node = node._child_for(point)

    def __repr__(self) -> str:
        return (
            f"QuadTree(bounds={self.bounds.to_extent()}, depth={self.depth}, "
            f"items={len(self.items)}, leaf={self.is_leaf()})"
        )
