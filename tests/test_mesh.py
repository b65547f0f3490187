import pytest
from core.vector import Vector3
from core.errors import ImageFormatError
from geometry.mesh import Triangle, load_obj_triangle, WHITE

def write(tmp_path, text):
    path = tmp_path / "scene.obj"
    path.write_text(text)
    return str(path)

def test_interpolate_color_is_affine():
    tri = Triangle(Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0),
                   Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 2))
    color = tri.interpolate_color(0.5, 0.25, 0.25)
    assert color.as_tuple() == pytest.approx((0.5, 0.25, 0.5))

def test_edges_and_bounds():
    tri = Triangle(Vector3(1, 2, 3), Vector3(4, 0, 3), Vector3(2, 6, 5))
    u, v = tri.edges()
    assert u == Vector3(3, -2, 0)
    assert v == Vector3(1, 4, 2)
    box = tri.bounding_box()
    assert box.minimum == Vector3(1, 0, 3)
    assert box.maximum == Vector3(4, 6, 5)

def test_colors_default_to_white():
    tri = Triangle(Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0))
    assert tri.colors == (WHITE, WHITE, WHITE)

def test_pixel_range_is_clipped():
    tri = Triangle(Vector3(-5, 1.5, 0), Vector3(2.2, 1.5, 0), Vector3(0, 30, 0))
    assert tri.bounding_box().pixel_range(8, 8) == (0, 5, 0, 8)
    off_screen = Triangle(Vector3(20, 20, 0), Vector3(30, 20, 0), Vector3(20, 30, 0))
    assert off_screen.bounding_box().pixel_range(8, 8) is None

def test_load_colored_triangle(tmp_path):
    path = write(tmp_path, "# test\nv 0 0 1 1 0 0\nv 0 3 1 0 1 0\nv 3 0 1 0 0 1\n\nf 1 2 3\n")
    tri = load_obj_triangle(path)
    assert tri.vertices == (Vector3(0, 0, 1), Vector3(0, 3, 1), Vector3(3, 0, 1))
    assert tri.colors == (Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1))

def test_load_index_forms(tmp_path):
    path = write(tmp_path, "v 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 1\nf -3/1/1 2//1 3/1\n")
    tri = load_obj_triangle(path)
    assert tri.v0 == Vector3(0, 0, 0)
    assert tri.v2 == Vector3(0, 1, 0)
    assert tri.c0 == WHITE

def test_only_first_face_is_used(tmp_path):
    path = write(tmp_path, "v 0 0 0\nv 1 0 0\nv 0 1 0\nv 5 5 5\nf 1 2 3\nf 2 3 4\n")
    assert load_obj_triangle(path).v2 == Vector3(0, 1, 0)

@pytest.mark.parametrize("text", [
    "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n",
    "v 0 0 0\nv 1 0 0\nf 1 2 3\n",
    "v 0 0 zero\n",
    "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n",
    "v 0 0 0\n",
])
def test_malformed_obj(tmp_path, text):
    with pytest.raises(ImageFormatError):
        load_obj_triangle(write(tmp_path, text))

def test_missing_obj(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_obj_triangle(str(tmp_path / "missing.obj"))
