import math
from numbers import Real

from trees.errors import InvalidArgument, MalformedRectangle


class Rectangle:
    """Rectángulo alineado a los ejes (xmin, ymin, xmax, ymax), bordes incluidos."""

    __slots__ = ("xmin", "ymin", "xmax", "ymax")

    def __init__(self, xmin, ymin, xmax, ymax):
        for name, value in (("xmin", xmin), ("ymin", ymin), ("xmax", xmax), ("ymax", ymax)):
            if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
                raise InvalidArgument(f"{name} must be a real number, got {value!r}")
        if xmin > xmax:
            raise MalformedRectangle(f"xmin {xmin} > xmax {xmax}")
        if ymin > ymax:
            raise MalformedRectangle(f"ymin {ymin} > ymax {ymax}")

        object.__setattr__(self, "xmin", float(xmin))
        object.__setattr__(self, "ymin", float(ymin))
        object.__setattr__(self, "xmax", float(xmax))
        object.__setattr__(self, "ymax", float(ymax))

    def __setattr__(self, name, value):
        raise AttributeError("Rectangle is immutable")

    @property
    def width(self):
        return self.xmax - self.xmin

    @property
    def height(self):
        return self.ymax - self.ymin

    def contains(self, point):
        return (self.xmin <= point.x <= self.xmax and
                self.ymin <= point.y <= self.ymax)

    def intersects(self, other):
        # bordes que se tocan cuentan como intersección
        return not (self.xmax < other.xmin or
                    self.xmin > other.xmax or
                    self.ymax < other.ymin or
                    self.ymin > other.ymax)

    def distance_squared_to(self, point):
        """Cota inferior (al cuadrado) de la distancia de point a cualquier punto del rectángulo."""
        dx = 0.0
        dy = 0.0
        if point.x < self.xmin:
            dx = point.x - self.xmin
        elif point.x > self.xmax:
            dx = point.x - self.xmax
        if point.y < self.ymin:
            dy = point.y - self.ymin
        elif point.y > self.ymax:
            dy = point.y - self.ymax
        return dx * dx + dy * dy

    def distance_to(self, point):
        return math.sqrt(self.distance_squared_to(point))

    def split(self, value, vertical):
        """Divide en (izquierda/abajo, derecha/arriba) en value.

        vertical=True corta con una recta x = value, si no con y = value.
        """
        if vertical:
            return (Rectangle(self.xmin, self.ymin, value, self.ymax),
                    Rectangle(value, self.ymin, self.xmax, self.ymax))
        return (Rectangle(self.xmin, self.ymin, self.xmax, value),
                Rectangle(self.xmin, value, self.xmax, self.ymax))

    def as_tuple(self):
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    def __eq__(self, other):
        if not isinstance(other, Rectangle):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return f"Rectangle({self.xmin}, {self.ymin}, {self.xmax}, {self.ymax})"


UNIT_SQUARE = Rectangle(0.0, 0.0, 1.0, 1.0)
