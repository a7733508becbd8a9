import random

import pytest

from regionquadtree import Bound


class Pt:
    """Minimal user-defined item; only position() is required by the tree."""

    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y

    def position(self):
        return (self.x, self.y)

    def __eq__(self, other):
        return isinstance(other, Pt) and (self.x, self.y) == (other.x, other.y)

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Pt({self.x}, {self.y})"


@pytest.fixture
def bounds():
    """Root region [400, 800) x [400, 800)."""
    return Bound((400.0, 400.0), 400.0, 400.0)


@pytest.fixture(params=[1, 2, 4, 16], ids=lambda c: f"cap{c}")
def capacity(request):
    return request.param


@pytest.fixture
def random_points(bounds):
    rng = random.Random(1234)
    x0, y0, x1, y1 = bounds.to_extent()
    return [Pt(rng.uniform(x0, x1 - 1.0), rng.uniform(y0, y1 - 1.0)) for _ in range(500)]


def brute_force(points, rect):
    return [p for p in points if rect.contains(p.position())]
