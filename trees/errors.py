class SpatialIndexError(Exception):
    """Error base de los índices espaciales."""


class InvalidArgument(SpatialIndexError, ValueError):
    """Punto o rectángulo nulo o inválido pasado a una operación."""


class MalformedRectangle(InvalidArgument):
    """Rectángulo con xmin > xmax o ymin > ymax."""


class PreconditionViolation(SpatialIndexError, RuntimeError):
    """Operación llamada en un estado que no la admite (p. ej. nearest en árbol vacío)."""
