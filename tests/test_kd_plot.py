import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba

from Nodes.Point import Point
from Nodes.Rectangle import Rectangle
from trees.KD_tree import KdTree
from trees.kd_plot import draw_kdtree, VERTICAL_SPLIT_COLOR, HORIZONTAL_SPLIT_COLOR


def _tree():
    return KdTree([(0.7, 0.2), (0.5, 0.4), (0.2, 0.3), (0.4, 0.7), (0.9, 0.6)])


def test_draw_one_segment_per_node():
    fig, ax = plt.subplots()
    draw_kdtree(_tree(), ax)
    lines = ax.get_lines()
    assert len(lines) == 5

    red = [l for l in lines if to_rgba(l.get_color()) == to_rgba(VERTICAL_SPLIT_COLOR)]
    blue = [l for l in lines if to_rgba(l.get_color()) == to_rgba(HORIZONTAL_SPLIT_COLOR)]
    assert len(red) == 3
    assert len(blue) == 2

    # la raíz corta todo el cuadrado en x = 0.7
    assert list(red[0].get_xdata()) == [0.7, 0.7]
    assert list(red[0].get_ydata()) == [0.0, 1.0]
    # (0.5, 0.4) corta solo su rectángulo [0, 0.7] x [0, 1]
    assert list(blue[0].get_xdata()) == [0.0, 0.7]
    assert list(blue[0].get_ydata()) == [0.4, 0.4]

    assert len(ax.collections) == 1
    assert ax.get_xlim() == (0.0, 1.0)
    plt.close(fig)


def test_draw_empty_tree_and_extras():
    fig, ax = plt.subplots()
    draw_kdtree(KdTree(), ax)
    assert len(ax.get_lines()) == 0
    assert len(ax.collections) == 0
    plt.close(fig)

    fig, ax = plt.subplots()
    draw_kdtree(_tree(), ax, highlight=Point(0.5, 0.4), query_rect=Rectangle(0, 0, 0.5, 0.5))
    assert len(ax.get_lines()) == 6
    assert len(ax.collections) == 2
    plt.close(fig)
