import numpy as np
import pytest

from regionquadtree import Bound, PointItem, QuadTree

BOUNDS = Bound((0.0, 0.0), 1000.0, 1000.0)


def test_insert_many_np_wraps_rows_as_point_items():
    qt = QuadTree(BOUNDS, capacity=8)
    points = np.array([[10, 10], [20, 20], [30, 30]], dtype=np.float32)
    res = qt.insert_many_np(points)
    assert res.inserted == 3
    assert res.rejected == []

    its = qt.query(Bound((0.0, 0.0), 40.0, 40.0))
    assert len(its) == 3
    for it in its:
        assert isinstance(it, PointItem)
        assert it.obj is None
    assert [it.position() for it in its] == [(10.0, 10.0), (20.0, 20.0), (30.0, 30.0)]


def test_insert_many_np_with_objects():
    qt = QuadTree(BOUNDS)
    points = np.array([[10.0, 10.0], [900.0, 900.0]])
    qt.insert_many_np(points, objs=["a", "b"])
    assert {it.obj for it in qt} == {"a", "b"}

    with pytest.raises(ValueError, match="objs length"):
        qt.insert_many_np(points, objs=["only one"])


def test_insert_empty_numpy_array():
    qt = QuadTree(BOUNDS)
    res = qt.insert_many_np(np.empty((0, 2), dtype=np.float32))
    assert res.inserted == 0
    assert len(qt) == 0


def test_insert_many_np_out_of_bounds_rows_are_rejected():
    qt = QuadTree(BOUNDS)
    points = np.array([[10, 10], [2000, 2000], [30, 30]], dtype=np.float32)
    res = qt.insert_many_np(points)
    assert res.inserted == 2
    assert res.rejected == [PointItem(2000.0, 2000.0)]
    assert len(qt) == 2


def test_insert_many_np_rejects_non_arrays_and_bad_shapes():
    qt = QuadTree(BOUNDS)
    with pytest.raises(TypeError):
        qt.insert_many_np([[1.0, 2.0]])
    with pytest.raises(ValueError, match=r"shape \(N, 2\)"):
        qt.insert_many_np(np.array([[1.0, 2.0, 3.0]]))
    with pytest.raises(ValueError):
        qt.insert_many_np(np.array([1.0, 2.0]))


def test_query_np_matches_query_order():
    qt = QuadTree(BOUNDS, capacity=2)
    rng = np.random.default_rng(7)
    coords = rng.uniform(0.0, 999.0, size=(200, 2))
    qt.insert_many_np(coords)

    rect = Bound((100.0, 200.0), 300.0, 400.0)
    arr = qt.query_np(rect)
    assert arr.dtype == np.float64
    assert arr.shape == (len(qt.query(rect)), 2)
    assert [tuple(row) for row in arr.tolist()] == [it.position() for it in qt.query(rect)]

    mask = (
        (coords[:, 0] >= 100.0)
        & (coords[:, 0] < 400.0)
        & (coords[:, 1] >= 200.0)
        & (coords[:, 1] < 600.0)
    )
    assert sorted(map(tuple, arr.tolist())) == sorted(map(tuple, coords[mask].tolist()))


def test_query_np_empty_has_two_columns():
    qt = QuadTree(BOUNDS)
    arr = qt.query_np(BOUNDS)
    assert arr.shape == (0, 2)
