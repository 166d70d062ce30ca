from Nodes.KD_node import KDNode
from Nodes.Point import as_point
from Nodes.Rectangle import Rectangle, UNIT_SQUARE
from trees.errors import InvalidArgument, PreconditionViolation
from trees.logger import logger


class KdTree:
    """2d-tree: árbol binario de búsqueda no balanceado con claves (x, y).

    La raíz discrimina por x, sus hijos por y, y así alternando. Cada nodo
    guarda el rectángulo del plano que le pertenece, que se usa para podar
    las búsquedas por rango y de vecino más cercano.

    Los recorridos usan una pila explícita: con inserciones ordenadas el
    árbol degenera en una lista y la recursión superaría el límite de Python.
    """

    def __init__(self, points=None, domain=UNIT_SQUARE):
        if not isinstance(domain, Rectangle):
            raise InvalidArgument(f"domain must be a Rectangle, got {domain!r}")
        self.domain = domain
        self.root = None
        self.n = 0
        if points is not None:
            for p in points:
                self.insert(p)

    def size(self):
        return self.n

    def is_empty(self):
        return self.n == 0

    def __len__(self):
        return self.n

    def __contains__(self, point):
        return self.contains(point)

    def __iter__(self):
        for point, _, _ in self.partitions():
            yield point

    # --- operaciones principales ---
    def insert(self, point):
        """Inserta point; los duplicados no se eliminan y también cuentan en size()."""
        point = as_point(point)
        if not self.domain.contains(point):
            raise InvalidArgument(f"{point} lies outside the tree domain {self.domain}")

        if self.root is None:
            self.root = KDNode(point, self.domain)
            self.n += 1
            logger.debug("insert %s as root", point)
            return

        node = self.root
        vertical = True
        depth = 0
        while True:
            depth += 1
            if node.goes_left(point, vertical):
                if node.left_bottom is None:
                    node.left_bottom = KDNode(point, node.child_rects(vertical)[0])
                    break
                node = node.left_bottom
            else:
                if node.right_top is None:
                    node.right_top = KDNode(point, node.child_rects(vertical)[1])
                    break
                node = node.right_top
            vertical = not vertical

        self.n += 1
        logger.debug("insert %s at depth %d", point, depth)

    def contains(self, point):
        """True si point fue insertado (se comparan ambas coordenadas)."""
        point = as_point(point)
        node = self.root
        vertical = True
        while node is not None:
            if node.point == point:
                return True
            if node.goes_left(point, vertical):
                node = node.left_bottom
            else:
                node = node.right_top
            vertical = not vertical
        return False

    def range(self, rect):
        """Lista nueva con los puntos dentro de rect (bordes incluidos).

        Orden en preorden: nodo, izquierda/abajo, derecha/arriba.
        """
        if rect is None:
            raise InvalidArgument("rect must not be None")
        if not isinstance(rect, Rectangle):
            raise InvalidArgument(f"expected a Rectangle, got {rect!r}")

        found = []
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            # el subárbol entero vive dentro de node.rect
            if not node.rect.intersects(rect):
                continue
            if rect.contains(node.point):
                found.append(node.point)
            if node.right_top is not None:
                stack.append(node.right_top)
            if node.left_bottom is not None:
                stack.append(node.left_bottom)
        return found

    def nearest(self, point):
        """Punto almacenado más cercano a point (distancia euclídea).

        Requiere un árbol no vacío: lanza PreconditionViolation si no.
        """
        point = as_point(point)
        if self.root is None:
            logger.debug("nearest(%s) called on an empty tree", point)
            raise PreconditionViolation("nearest() requires a non-empty tree")

        best = self.root.point
        best_dist = best.distance_squared_to(point)

        stack = [(self.root, True)]
        while stack:
            node, vertical = stack.pop()
            # cota y distancias se comparan al cuadrado
            if node.rect.distance_squared_to(point) > best_dist:
                continue

            dist = node.point.distance_squared_to(point)
            if dist < best_dist:
                best = node.point
                best_dist = dist

            # el lado donde cae point se explora primero
            if node.goes_left(point, vertical):
                first, second = node.left_bottom, node.right_top
            else:
                first, second = node.right_top, node.left_bottom

            if second is not None:
                stack.append((second, not vertical))
            if first is not None:
                stack.append((first, not vertical))

        return best

    # --- recorridos de solo lectura ---
    def partitions(self):
        """Genera (point, rect, vertical) por nodo, en preorden.

        vertical=True indica que el nodo divide su rectángulo con una recta x = point.x.
        """
        stack = [(self.root, True)] if self.root is not None else []
        while stack:
            node, vertical = stack.pop()
            yield node.point, node.rect, vertical
            if node.right_top is not None:
                stack.append((node.right_top, not vertical))
            if node.left_bottom is not None:
                stack.append((node.left_bottom, not vertical))

    def height(self):
        """Número de niveles del árbol (0 si está vacío)."""
        tallest = 0
        stack = [(self.root, 1)] if self.root is not None else []
        while stack:
            node, level = stack.pop()
            tallest = max(tallest, level)
            for child in (node.left_bottom, node.right_top):
                if child is not None:
                    stack.append((child, level + 1))
        return tallest
