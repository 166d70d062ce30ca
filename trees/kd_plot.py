from Nodes.Rectangle import UNIT_SQUARE

POINT_COLOR = "black"
VERTICAL_SPLIT_COLOR = "red"
HORIZONTAL_SPLIT_COLOR = "blue"


def draw_kdtree(tree, ax, point_size=12, highlight=None, query_rect=None):
    """Dibuja el 2d-tree sobre un Axes de matplotlib.

    Nodos que dividen por x -> recta vertical roja dentro de su rectángulo,
    nodos que dividen por y -> recta horizontal azul. highlight marca un
    punto (p. ej. el vecino más cercano) y query_rect el rectángulo consultado.
    """
    domain = getattr(tree, "domain", UNIT_SQUARE)
    ax.set_xlim(domain.xmin, domain.xmax)
    ax.set_ylim(domain.ymin, domain.ymax)
    ax.set_aspect("equal")

    xs = []
    ys = []
    for point, rect, vertical in tree.partitions():
        xs.append(point.x)
        ys.append(point.y)
        if vertical:
            ax.plot([point.x, point.x], [rect.ymin, rect.ymax],
                    color=VERTICAL_SPLIT_COLOR, linewidth=1)
        else:
            ax.plot([rect.xmin, rect.xmax], [point.y, point.y],
                    color=HORIZONTAL_SPLIT_COLOR, linewidth=1)

    if xs:
        ax.scatter(xs, ys, s=point_size, color=POINT_COLOR, zorder=3)

    if query_rect is not None:
        ax.plot([query_rect.xmin, query_rect.xmax, query_rect.xmax, query_rect.xmin, query_rect.xmin],
                [query_rect.ymin, query_rect.ymin, query_rect.ymax, query_rect.ymax, query_rect.ymin],
                color="green", linestyle="--", linewidth=1)

    if highlight is not None:
        ax.scatter([highlight.x], [highlight.y], s=point_size * 4,
                   facecolors="none", edgecolors="orange", zorder=4)

    return ax
