from hypothesis import given, settings, strategies as st

from Nodes.Point import Point
from Nodes.Rectangle import Rectangle
from trees.KD_tree import KdTree
from trees.metrics import brute_force_nearest, brute_force_range

coord = st.floats(0.0, 1.0, allow_nan=False)
# rejilla gruesa para forzar empates en las coordenadas
grid_coord = st.integers(0, 8).map(lambda i: i / 8)
points = st.lists(st.builds(Point, st.one_of(coord, grid_coord), st.one_of(coord, grid_coord)),
                  max_size=80)


@st.composite
def rectangles(draw):
    x0, x1 = sorted((draw(st.one_of(coord, grid_coord)), draw(st.one_of(coord, grid_coord))))
    y0, y1 = sorted((draw(st.one_of(coord, grid_coord)), draw(st.one_of(coord, grid_coord))))
    return Rectangle(x0, y0, x1, y1)


@given(points)
def test_size_counts_every_insert(pts):
    tree = KdTree(pts)
    assert tree.size() == len(pts)
    assert tree.is_empty() == (len(pts) == 0)


@given(points, points)
def test_inserted_points_stay_contained(pts, more):
    tree = KdTree(pts)
    assert all(tree.contains(p) for p in pts)
    for p in more:
        tree.insert(p)
    assert all(tree.contains(p) for p in pts)


@given(points, st.builds(Point, coord, coord))
def test_contains_matches_membership(pts, q):
    tree = KdTree(pts)
    assert tree.contains(q) == (q in pts)


@given(points, rectangles())
def test_range_matches_brute_force(pts, rect):
    tree = KdTree(pts)
    got = tree.range(rect)
    assert sorted(got, key=Point.as_tuple) == sorted(brute_force_range(pts, rect), key=Point.as_tuple)


@given(points, rectangles())
def test_range_is_independent_of_insertion_order(pts, rect):
    forward = KdTree(pts).range(rect)
    backward = KdTree(pts[::-1]).range(rect)
    assert sorted(forward, key=Point.as_tuple) == sorted(backward, key=Point.as_tuple)


@settings(max_examples=200)
@given(points.filter(len), st.one_of(st.builds(Point, coord, coord),
                                      st.builds(Point, st.floats(-3, 4), st.floats(-3, 4))))
def test_nearest_matches_brute_force(pts, q):
    tree = KdTree(pts)
    _, best_d2 = brute_force_nearest(pts, q)
    assert tree.nearest(q).distance_squared_to(q) == best_d2


@given(points.filter(len), st.data())
def test_nearest_of_stored_point_is_itself(pts, data):
    tree = KdTree(pts)
    q = data.draw(st.sampled_from(pts))
    assert tree.nearest(q) == q


@given(points.filter(len), rectangles(), st.builds(Point, coord, coord))
def test_reads_are_idempotent(pts, rect, q):
    tree = KdTree(pts)
    assert tree.range(rect) == tree.range(rect)
    assert tree.nearest(q) == tree.nearest(q)
    assert tree.contains(q) == tree.contains(q)
    assert tree.size() == len(pts)


@given(points)
def test_every_subtree_lies_in_its_rectangle(pts):
    tree = KdTree(pts)
    stack = [tree.root] if tree.root is not None else []
    while stack:
        node = stack.pop()
        assert node.rect.contains(node.point)
        for child in (node.left_bottom, node.right_top):
            if child is not None:
                assert child.rect.xmin >= node.rect.xmin and child.rect.xmax <= node.rect.xmax
                assert child.rect.ymin >= node.rect.ymin and child.rect.ymax <= node.rect.ymax
                stack.append(child)
