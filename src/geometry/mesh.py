from typing import List, Tuple, Optional
from core.vector import Vector3
from core.aabb import AABB
from core.errors import ImageFormatError

WHITE = Vector3(1.0, 1.0, 1.0)

class Triangle:
    """A single triangle with a colour at each vertex.

    vertices[i] carries colors[i]. Vertex order fixes the edge vectors
    (v1 - v0, v2 - v0) and therefore which side faces the viewer.
    """
    def __init__(self,
                 v0: Vector3, v1: Vector3, v2: Vector3,
                 c0: Optional[Vector3] = None, c1: Optional[Vector3] = None, c2: Optional[Vector3] = None):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2

        # Colours are raw linear RGB, unclamped
        self.c0 = c0 if c0 is not None else WHITE
        self.c1 = c1 if c1 is not None else WHITE
        self.c2 = c2 if c2 is not None else WHITE

    @property
    def vertices(self) -> Tuple[Vector3, Vector3, Vector3]:
        return (self.v0, self.v1, self.v2)

    @property
    def colors(self) -> Tuple[Vector3, Vector3, Vector3]:
        return (self.c0, self.c1, self.c2)

    def edges(self) -> Tuple[Vector3, Vector3]:
        """Edge vectors spanning the triangle's plane."""
        return self.v1.subtract(self.v0), self.v2.subtract(self.v0)

    def is_finite(self) -> bool:
        return all(p.is_finite() for p in self.vertices + self.colors)

    def interpolate_color(self, alpha: float, beta: float, gamma: float) -> Vector3:
        """Affine combination of the vertex colours at barycentrics (alpha, beta, gamma)."""
        return self.c0.scale(alpha).add(self.c1.scale(beta)).add(self.c2.scale(gamma))

    def bounding_box(self) -> AABB:
        """Compute the bounding box for the triangle."""
        min_x = min(self.v0.x, self.v1.x, self.v2.x)
        min_y = min(self.v0.y, self.v1.y, self.v2.y)
        min_z = min(self.v0.z, self.v1.z, self.v2.z)
        max_x = max(self.v0.x, self.v1.x, self.v2.x)
        max_y = max(self.v0.y, self.v1.y, self.v2.y)
        max_z = max(self.v0.z, self.v1.z, self.v2.z)
        return AABB(Vector3(min_x, min_y, min_z), Vector3(max_x, max_y, max_z))

    def __repr__(self) -> str:
        return f"Triangle({self.v0}, {self.v1}, {self.v2})"

def _resolve_index(token: str, count: int) -> int:
    # OBJ indices are 1-based; negative indices count back from the end
    idx = int(token.split('/')[0])
    if idx > 0:
        idx -= 1
    elif idx < 0:
        idx += count
    else:
        raise ValueError("vertex index 0 is not valid")
    if not 0 <= idx < count:
        raise ValueError(f"vertex index {token} out of range ({count} vertices)")
    return idx

def load_obj_triangle(filename: str) -> Triangle:
    """Load the first face of an OBJ file as a coloured triangle.

    Vertex lines may carry a colour after the position (``v x y z r g b``);
    vertices without one are white. Only the first face is used and it
    must be a triangle.

    Raises:
        ImageFormatError: on malformed lines, a non-triangular face or no face
        OSError: if the file cannot be read
    """
    positions: List[Vector3] = []
    colors: List[Vector3] = []

    print(f"Opening file: {filename}")
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            if line.startswith('#'):  # Skip comments
                continue

            values = line.split()
            if not values:
                continue

            try:
                if values[0] == 'v':
                    if len(values) not in (4, 7):
                        raise ValueError(f"expected 3 or 6 numbers, got {len(values) - 1}")
                    positions.append(Vector3(float(values[1]), float(values[2]), float(values[3])))
                    if len(values) == 7:
                        colors.append(Vector3(float(values[4]), float(values[5]), float(values[6])))
                    else:
                        colors.append(WHITE)
                elif values[0] == 'f':
                    corners = values[1:]
                    if len(corners) != 3:
                        raise ValueError(f"only triangles are supported, face has {len(corners)} vertices")
                    i0, i1, i2 = (_resolve_index(c, len(positions)) for c in corners)
                    triangle = Triangle(positions[i0], positions[i1], positions[i2],
                                        colors[i0], colors[i1], colors[i2])
                    print(f"Loaded triangle from line {line_num} ({len(positions)} vertices read)")
                    return triangle
            except ValueError as e:
                raise ImageFormatError(f"{filename}:{line_num}: {line.strip()!r}: {e}") from e

    raise ImageFormatError(f"{filename}: no face found")
