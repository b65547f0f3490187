import pytest
from core.vector import Vector3
from geometry.mesh import Triangle

from colors import RED, GREEN, BLUE

@pytest.fixture(params=["python", "numba"])
def backend(request):
    return request.param

@pytest.fixture
def front_triangle():
    """Right triangle at depth 1, wound to face the +z view rays."""
    return Triangle(Vector3(0, 0, 1), Vector3(0, 3, 1), Vector3(3, 0, 1), RED, GREEN, BLUE)

@pytest.fixture
def flat_triangle():
    """The z = 0 triangle (0,0,0), (3,0,0), (0,3,0); it faces away from +z."""
    return Triangle(Vector3(0, 0, 0), Vector3(3, 0, 0), Vector3(0, 3, 0), RED, GREEN, BLUE)
