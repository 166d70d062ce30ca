from dataclasses import dataclass
import math

import numpy as np

from trees.errors import InvalidArgument


@dataclass(frozen=True)
class Point:
    """Punto inmutable (x, y) del plano."""
    x: float
    y: float

    def distance_squared_to(self, other):
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other):
        return math.sqrt(self.distance_squared_to(other))

    def coord(self, vertical):
        # vertical=True -> el nodo discrimina por x
        return self.x if vertical else self.y

    def as_tuple(self):
        return (self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


def as_point(obj):
    """Convierte Point, tupla, lista o np.ndarray de largo 2 en Point.

    Lanza InvalidArgument si obj es None o no tiene dos coordenadas reales.
    """
    if obj is None:
        raise InvalidArgument("point must not be None")
    if isinstance(obj, Point):
        return obj

    arr = np.asarray(obj)
    if arr.shape != (2,) or not np.issubdtype(arr.dtype, np.number) or np.issubdtype(arr.dtype, np.complexfloating):
        raise InvalidArgument(f"expected a pair of real coordinates, got {obj!r}")
    x, y = float(arr[0]), float(arr[1])
    if math.isnan(x) or math.isnan(y):
        raise InvalidArgument(f"coordinates must not be NaN, got {obj!r}")
    return Point(x, y)
