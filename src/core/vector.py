# core/vector.py
import math

class Vector3:
    """
    A 3D vector of floats. Arithmetic is exposed as named methods
    (add, subtract, scale, cross, dot); the operators delegate to them.
    Treated as immutable: every operation returns a new Vector3.
    """
    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def add(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def multiply(self, other: "Vector3") -> "Vector3":
        """Componentwise product."""
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def divide(self, other: "Vector3") -> "Vector3":
        """Componentwise quotient."""
        return Vector3(self.x / other.x, self.y / other.y, self.z / other.z)

    def scale(self, t: float) -> "Vector3":
        return Vector3(self.x * t, self.y * t, self.z * t)

    def divide_scalar(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def as_tuple(self):
        return (self.x, self.y, self.z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return self.add(other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return self.subtract(other)

    def __mul__(self, other):
        if isinstance(other, Vector3):
            return self.multiply(other)
        return self.scale(other)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, Vector3):
            return self.divide(other)
        return self.divide_scalar(other)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    __hash__ = None

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"
