import math
import numpy as np
import pytest
from core.vector import Vector3
from core.ray import Ray

def test_named_arithmetic():
    a = Vector3(1, 2, 3)
    b = Vector3(4, 5, 6)
    assert a.add(b) == Vector3(5, 7, 9)
    assert b.subtract(a) == Vector3(3, 3, 3)
    assert a.multiply(b) == Vector3(4, 10, 18)
    assert b.divide(Vector3(2, 5, 3)) == Vector3(2, 1, 2)
    assert a.scale(2) == Vector3(2, 4, 6)
    assert b.divide_scalar(2) == Vector3(2, 2.5, 3)

def test_operators_delegate():
    a = Vector3(1, 2, 3)
    b = Vector3(4, 5, 6)
    assert a + b == a.add(b)
    assert a - b == a.subtract(b)
    assert a * b == a.multiply(b)
    assert a * 2 == 2 * a == a.scale(2)
    assert a / 2 == a.divide_scalar(2)
    assert a / b == a.divide(b)

def test_dot_and_cross():
    x = Vector3(1, 0, 0)
    y = Vector3(0, 1, 0)
    assert x.cross(y) == Vector3(0, 0, 1)
    assert y.cross(x) == Vector3(0, 0, -1)
    assert x.dot(y) == 0
    assert Vector3(1, 2, 3).dot(Vector3(4, 5, 6)) == 32

def test_operations_return_new_vectors():
    a = Vector3(1, 1, 1)
    a.add(Vector3(1, 1, 1))
    assert a.as_tuple() == (1.0, 1.0, 1.0)

def test_is_finite():
    assert Vector3(1, 2, 3).is_finite()
    assert not Vector3(math.nan, 0, 0).is_finite()
    assert not Vector3(0, math.inf, 0).is_finite()

def test_unpacks():
    x, y, z = Vector3(1, 2, 3)
    assert (x, y, z) == (1.0, 2.0, 3.0)

def test_pixel_ray_looks_down_z():
    ray = Ray.through_pixel(2, 5)
    assert ray.origin == Vector3(2, 5, 0)
    assert ray.direction == Vector3(0, 0, 1)
    assert ray.at(4) == Vector3(2, 5, 4)

def test_numpy_scalars_scale():
    a = Vector3(1, 2, 3)
    assert a * np.float32(2) == Vector3(2, 4, 6)
    assert a / np.float64(2) == Vector3(0.5, 1, 1.5)
    assert a * np.int64(3) == Vector3(3, 6, 9)
