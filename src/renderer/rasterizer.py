# renderer/rasterizer.py
import math
from typing import Optional
import numpy as np
from core.ray import Ray
from core.vector import Vector3
from core.errors import RasterizerConfigError
from geometry.mesh import Triangle
from renderer.framebuffer import Framebuffer
from renderer.kernels import rasterize_kernel

# Determinants at or below this are degenerate or facing away from the view
DETERMINANT_EPSILON = 1e-7
# Barycentric weights may dip this far below zero and still count as inside
BARYCENTRIC_EPSILON = 1e-10
# Intersections must lie further than this along the view ray
MIN_HIT_DISTANCE = 0.1

BACKENDS = ("numba", "python")

class Fragment:
    """
    A covered pixel: barycentric weights of the hit, its distance along the
    view ray and the interpolated colour.
    """
    def __init__(self, x: int, y: int, alpha: float, beta: float, gamma: float,
                 distance: float, color: Vector3):
        self.x = x
        self.y = y
        self.alpha = alpha
        self.beta = beta
        self.gamma = gamma
        self.distance = distance
        self.color = color

    @property
    def barycentrics(self):
        return (self.alpha, self.beta, self.gamma)

    def __repr__(self) -> str:
        return (f"Fragment(({self.x}, {self.y}), alpha={self.alpha}, beta={self.beta}, "
                f"gamma={self.gamma}, d={self.distance})")

class Rasterizer:
    """
    Orthographic single-triangle rasterizer.

    Each pixel (x, y) casts a ray from (x, y, 0) along +z. The ray is tested
    against the triangle's plane; the barycentric weights of the hit decide
    coverage and interpolate the vertex colours. Pixels are independent, so
    the numba backend processes rows in parallel.
    """
    def __init__(self,
                 determinant_epsilon: float = DETERMINANT_EPSILON,
                 barycentric_epsilon: float = BARYCENTRIC_EPSILON,
                 min_distance: float = MIN_HIT_DISTANCE,
                 cull_backfaces: bool = True,
                 backend: str = "numba"):
        if backend not in BACKENDS:
            raise RasterizerConfigError(f"unknown backend {backend!r}, expected one of {BACKENDS}")
        if not determinant_epsilon >= 0.0:
            raise RasterizerConfigError(f"determinant_epsilon must be >= 0, got {determinant_epsilon}")
        if not barycentric_epsilon >= 0.0:
            raise RasterizerConfigError(f"barycentric_epsilon must be >= 0, got {barycentric_epsilon}")
        if math.isnan(min_distance):
            raise RasterizerConfigError("min_distance must not be NaN")
        self.determinant_epsilon = float(determinant_epsilon)
        self.barycentric_epsilon = float(barycentric_epsilon)
        self.min_distance = float(min_distance)
        self.cull_backfaces = cull_backfaces
        self.backend = backend

    def _facing(self, a: float) -> bool:
        if self.cull_backfaces:
            return a > self.determinant_epsilon
        return abs(a) > self.determinant_epsilon

    def classify(self, x: int, y: int, triangle: Triangle) -> Optional[Fragment]:
        """
        Coverage test for one pixel. Returns the Fragment if the pixel's view
        ray hits the triangle, otherwise None.
        """
        if not triangle.is_finite():
            return None
        ray = Ray.through_pixel(x, y)

        # Plane of the triangle
        u, v = triangle.edges()
        n = ray.direction.cross(v)
        a = u.dot(n)
        if not self._facing(a):
            return None

        # Intersection of the ray with the plane, in barycentric form
        s = ray.origin.subtract(triangle.v0)
        r = s.cross(u)
        beta = s.dot(n) / a
        gamma = ray.direction.dot(r) / a
        d = v.dot(r) / a
        alpha = 1.0 - (beta + gamma)

        eps = self.barycentric_epsilon
        # NaN fails every comparison here, so it never counts as inside
        inside = alpha >= -eps and beta >= -eps and gamma >= -eps
        if not (inside and d > self.min_distance):
            return None
        return Fragment(x, y, alpha, beta, gamma, d,
                        triangle.interpolate_color(alpha, beta, gamma))

    def _window(self, triangle: Triangle, width: int, height: int):
        if not triangle.is_finite():
            return None
        return triangle.bounding_box().pixel_range(width, height)

    def _run_kernel(self, triangle: Triangle, buffer: np.ndarray, width: int, window) -> np.ndarray:
        height = buffer.shape[0] // width
        mask = np.zeros(width * height, dtype=np.bool_)
        vertices = np.array([p.as_tuple() for p in triangle.vertices], dtype=np.float64)
        colors = np.array([c.as_tuple() for c in triangle.colors], dtype=np.float64)
        x0, x1, y0, y1 = window
        rasterize_kernel(vertices, colors, buffer, width, x0, x1, y0, y1,
                         self.determinant_epsilon, self.barycentric_epsilon,
                         self.min_distance, self.cull_backfaces, mask)
        return mask

    def rasterize(self, triangle: Triangle, framebuffer: Framebuffer) -> int:
        """
        Shade every pixel of `framebuffer` covered by `triangle`; uncovered
        pixels keep their value. Returns the number of pixels written.
        """
        window = self._window(triangle, framebuffer.width, framebuffer.height)
        if window is None:
            return 0

        if self.backend == "numba":
            mask = self._run_kernel(triangle, framebuffer.buffer, framebuffer.width, window)
            return int(mask.sum())

        covered = 0
        x0, x1, y0, y1 = window
        for y in range(y0, y1):
            for x in range(x0, x1):
                fragment = self.classify(x, y, triangle)
                if fragment is not None:
                    framebuffer.set_pixel(x, y, fragment.color)
                    covered += 1
        return covered

    def coverage_mask(self, triangle: Triangle, width: int, height: int) -> np.ndarray:
        """
        Boolean (height, width) array, indexed [y, x], of the pixels the
        triangle covers. Nothing is shaded.
        """
        mask = np.zeros((height, width), dtype=np.bool_)
        window = self._window(triangle, width, height)
        if window is None:
            return mask

        if self.backend == "numba":
            scratch = np.zeros((width * height, 3), dtype=np.float32)
            return self._run_kernel(triangle, scratch, width, window).reshape(height, width)

        x0, x1, y0, y1 = window
        for y in range(y0, y1):
            for x in range(x0, x1):
                mask[y, x] = self.classify(x, y, triangle) is not None
        return mask
