import pytest

from Nodes.Point import Point
from Nodes.Rectangle import Rectangle
from trees.KD_tree import KdTree
from trees.metrics import (
    benchmark_kdtree, analyze_kdtree_instance, brute_force_nearest,
    brute_force_range, verify_nearest
)


def test_brute_force_helpers():
    pts = [Point(0.1, 0.1), Point(0.9, 0.9), Point(0.4, 0.5)]
    best, d2 = brute_force_nearest(pts, Point(0.5, 0.5))
    assert best == Point(0.4, 0.5)
    assert d2 == pytest.approx(0.01)
    assert brute_force_range(pts, Rectangle(0, 0, 0.5, 0.5)) == [Point(0.1, 0.1), Point(0.4, 0.5)]
    with pytest.raises(ValueError):
        brute_force_nearest([], Point(0.5, 0.5))


def test_verify_nearest():
    pts = [Point(0.7, 0.2), Point(0.5, 0.4), Point(0.2, 0.3)]
    tree = KdTree(pts)
    assert verify_nearest(tree, pts, Point(0.6, 0.5))


def test_benchmark_kdtree():
    res = benchmark_kdtree(sizes=[10, 50], queries=20, seed=7)
    assert res['sizes'] == [10, 50]
    for key in ('times', 'mem_peaks', 'heights', 'range_times', 'nearest_times',
                'brute_force_times', 'mismatches'):
        assert len(res[key]) == 2
    assert res['mismatches'] == [0, 0]
    assert all(h >= 4 for h in res['heights'])
    assert res['heights'][0] <= 10 and res['heights'][1] <= 50


def test_analyze_kdtree_instance():
    tree = KdTree([(0.1, 0.2), (0.3, 0.4), (0.5, 0.6)])
    res = analyze_kdtree_instance(tree, queries=10, seed=1)
    assert res['sizes'] == [3]
    assert res['heights'] == [3]
    assert res['mismatches'] == [0]

    empty = analyze_kdtree_instance(KdTree())
    assert empty['sizes'] == [0]
    assert empty['nearest_times'] == [0.0]
