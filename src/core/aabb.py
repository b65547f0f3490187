# src/core/aabb.py
import math
from core.vector import Vector3

class AABB:
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    def pixel_range(self, width: int, height: int, margin: int = 1):
        """
        Integer pixel window (x0, x1, y0, y1), half-open, covering the box's
        xy projection grown by `margin` pixels and clipped to a
        width x height grid. Returns None when the window is empty.
        """
        x0 = max(0, math.floor(self.minimum.x) - margin)
        y0 = max(0, math.floor(self.minimum.y) - margin)
        x1 = min(width, math.ceil(self.maximum.x) + margin + 1)
        y1 = min(height, math.ceil(self.maximum.y) + margin + 1)
        if x0 >= x1 or y0 >= y1:
            return None
        return x0, x1, y0, y1
