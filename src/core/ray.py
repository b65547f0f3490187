# core/ray.py
from core.vector import Vector3

# Every pixel ray looks down the positive z-axis.
VIEW_DIRECTION = Vector3(0.0, 0.0, 1.0)

class Ray:
    """
    Represents a ray in 3D space with an origin and direction.
    """
    def __init__(self, origin: Vector3, direction: Vector3):
        self.origin = origin
        self.direction = direction

    @staticmethod
    def through_pixel(x: int, y: int) -> "Ray":
        """
        Returns the orthographic view ray for pixel (x, y): origin at
        (x, y, 0), direction +z.
        """
        return Ray(Vector3(x, y, 0.0), VIEW_DIRECTION)

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t
