import math

import pytest
from PIL import Image

from minirt.elements import ObjectType, parse_lines
from minirt.errors import SceneError
from minirt.scene import (
    Camera,
    Canvas,
    build_scene,
    load_image,
)
from minirt.vector import Vec3

BASE = [
    "A 0.2 255,255,255",
    "C 0,0,0 0,0,-1 90",
    "L 0,5,0 0.7 255,0,0",
]


def _scene(*lines, width=100, height=50):
    return build_scene(parse_lines([*BASE, *lines]), width, height)


def _write_texture(path):
    Image.new("RGB", (2, 2), (255, 0, 0)).save(path, format="PNG")


def test_canvas_aspect_ratio():
    canvas = Canvas.from_size(1000, 500)
    assert (canvas.width, canvas.height) == (1000, 500)
    assert canvas.aspect_ratio == 0.5


def test_camera_basis_is_orthonormal():
    canvas = Canvas.from_size(100, 100)
    camera = Camera.from_view(canvas, Vec3(1, 2, 3), Vec3(0, 0, -1), 90)
    for axis in (camera.u_dir, camera.v_dir, camera.w_dir):
        assert math.isclose(axis.length(), 1.0)
    assert math.isclose(camera.u_dir.dot(camera.v_dir), 0.0, abs_tol=1e-12)
    assert math.isclose(camera.u_dir.dot(camera.w_dir), 0.0, abs_tol=1e-12)
    assert camera.w_dir == Vec3(0, 0, 1)


def test_camera_viewport_follows_fov_and_aspect():
    canvas = Canvas.from_size(200, 100)
    camera = Camera.from_view(canvas, Vec3(), Vec3(0, 0, -1), 90)
    assert math.isclose(camera.viewport_width, 2 * math.tan(math.pi / 4))
    assert math.isclose(camera.viewport_height, camera.viewport_width * 0.5)
    assert math.isclose(camera.horizontal.length(), camera.viewport_width)
    assert math.isclose(camera.vertical.length(), camera.viewport_height)


def test_camera_viewport_centre_lies_along_direction():
    canvas = Canvas.from_size(100, 100)
    origin = Vec3(1, 2, 3)
    direction = Vec3(1, 0, 0)
    camera = Camera.from_view(canvas, origin, direction, 60)
    centre = camera.left_bottom + camera.horizontal / 2 + camera.vertical / 2
    assert tuple(centre) == pytest.approx((2.0, 2.0, 3.0), abs=1e-9)


def test_camera_looking_straight_up():
    canvas = Canvas.from_size(100, 100)
    camera = Camera.from_view(canvas, Vec3(), Vec3(0, 1, 0), 90)
    assert math.isclose(camera.u_dir.length(), 1.0)
    assert math.isclose(camera.v_dir.length(), 1.0)


def test_environment_is_built():
    scene = _scene()
    assert scene.ambient.light_ratio == 0.2
    assert scene.ambient.light_color == Vec3(1, 1, 1)
    assert len(scene.lights) == 1
    light = scene.lights[0]
    assert light.origin == Vec3(0, 5, 0)
    assert light.bright_ratio == 0.7
    assert light.color == Vec3(1, 0, 0)
    assert scene.camera.origin == Vec3(0, 0, 0)
    assert scene.canvas.aspect_ratio == 0.5


def test_lights_keep_file_order():
    scene = _scene("L 1,1,1 0.3 0,255,0")
    assert [light.bright_ratio for light in scene.lights] == [0.7, 0.3]


def test_sphere_object():
    scene = _scene("sp 0,0,-5 2 rgb 0,0,255 0.5 0.25 64")
    (sphere,) = scene.objects
    assert sphere.obj_type is ObjectType.SPHERE
    assert sphere.center == Vec3(0, 0, -5)
    assert sphere.radius == 1.0
    assert sphere.radius2 == 1.0
    assert sphere.normal == Vec3()
    assert (sphere.kd, sphere.ks, sphere.ksn) == (0.5, 0.25, 64.0)
    assert sphere.surface.color == Vec3(0, 0, 1)
    assert sphere.surface.checkerboard is None
    assert sphere.surface.bumpmap is None


def test_plane_normal_is_normalised():
    scene = _scene("pl 0,-1,0 0,2,0 rgb 0,255,0 0.6 0.2 16")
    (plane,) = scene.objects
    assert plane.normal == Vec3(0, 1, 0)
    assert plane.radius == 0.0


def test_cylinder_checkerboard():
    scene = _scene("cy 0,0,0 0,1,0 2 3 ck 255,255,255 0,0,0 8.7 4 0.5 0.5 32")
    (cylinder,) = scene.objects
    assert cylinder.height == 3.0
    assert cylinder.surface.color == Vec3(1, 1, 1)
    board = cylinder.surface.checkerboard
    assert board.check_color == Vec3(0, 0, 0)
    assert (board.width, board.height) == (8, 4)


def test_cone_bumpmap(tmp_path):
    texture = tmp_path / "tex.xpm"
    bump = tmp_path / "bump.xpm"
    _write_texture(texture)
    _write_texture(bump)
    scene = _scene(f"co 1,1,1 0,0,1 1 2 bm {texture} {bump} 0.5 0.5 10")
    (cone,) = scene.objects
    assert cone.obj_type is ObjectType.CONE
    assert cone.radius == 0.5
    assert cone.height == 2.0
    bumpmap = cone.surface.bumpmap
    assert bumpmap.texture.pixel(0, 0) == 0xFF0000
    assert bumpmap.bump.width == 2


def test_bumpmap_without_bump_file(tmp_path):
    texture = tmp_path / "tex.xpm"
    _write_texture(texture)
    scene = _scene(f"sp 0,0,0 1 bm {texture} 0.5 0.5 10")
    assert scene.objects[0].surface.bumpmap.bump is None


def test_negative_diameter_is_rejected():
    with pytest.raises(SceneError) as info:
        _scene("sp 0,0,0 -2 rgb 0,0,0 0.5 0.5 10")
    assert info.value.message == "The properties of the shape must be positive."


def test_zero_normal_is_rejected():
    with pytest.raises(SceneError) as info:
        _scene("pl 0,0,0 0,0,0 rgb 0,0,0 0.5 0.5 10")
    assert info.value.message == "Normalized vector must came in standard."


def test_kd_out_of_range_is_rejected():
    with pytest.raises(SceneError) as info:
        _scene("sp 0,0,0 1 rgb 0,0,0 1.5 0.5 10")
    assert info.value.message == "Number must came in standard range."


def test_fov_at_limit_is_rejected():
    elements = parse_lines(["A 0.2 255,255,255", "C 0,0,0 0,0,-1 180", "L 0,5,0 0.7 255,0,0"])
    with pytest.raises(SceneError) as info:
        build_scene(elements, 10, 10)
    assert info.value.message == "FOV range should be under 180."


def test_load_image_requires_xpm_extension(tmp_path):
    path = tmp_path / "tex.png"
    _write_texture(path)
    with pytest.raises(SceneError) as info:
        load_image(path)
    assert info.value.message == "The image file extension must be [.xpm]."


def test_load_image_short_name():
    with pytest.raises(SceneError):
        load_image("xpm")


def test_load_image_bad_content(tmp_path):
    path = tmp_path / "bad.xpm"
    path.write_text("nothing here")
    with pytest.raises(SceneError) as info:
        load_image(path)
    assert info.value.message == "image file is not correct."


def test_load_image_reads_pixels(tmp_path):
    path = tmp_path / "tex.xpm"
    _write_texture(path)
    image = load_image(path)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(1, 1) == 0xFF0000