class KDNode:
    """Nodo del 2d-tree: su punto, el rectángulo que le pertenece y dos hijos.

    point y rect se fijan al crearse; solo left_bottom y right_top se
    completan con inserciones posteriores.
    """

    __slots__ = ("point", "rect", "left_bottom", "right_top")

    def __init__(self, point, rect):
        self.point = point
        self.rect = rect
        self.left_bottom = None
        self.right_top = None

    def child_rects(self, vertical):
        """Rectángulos (izquierda/abajo, derecha/arriba) de los hijos de este nodo."""
        return self.rect.split(self.point.coord(vertical), vertical)

    def goes_left(self, point, vertical):
        # empate en el eje activo va a derecha/arriba
        return point.coord(vertical) < self.point.coord(vertical)

    def __repr__(self):
        return f"KDNode(point={self.point}, rect={self.rect})"
