"""Scene model and its construction from parsed scene-file elements."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from minirt.elements import Element, ObjectType, TextureType
from minirt.errors import SceneError
from minirt.images import TextureImage
from minirt.values import (
    parse_double,
    parse_double_vector,
    parse_int_vector,
)
from minirt.vector import Vec3, coordinate_system

DEFAULT_WIDTH = 1000
DEFAULT_HEIGHT = 1000

_SURFACE_TYPES = frozenset(
    {ObjectType.SPHERE, ObjectType.PLANE, ObjectType.CYLINDER, ObjectType.CONE}
)


@dataclass(frozen=True)
class Canvas:
    width: int
    height: int
    aspect_ratio: float

    @classmethod
    def from_size(cls, width: int, height: int) -> Canvas:
        return cls(width, height, height / width)


@dataclass(frozen=True)
class Camera:
    origin: Vec3
    viewport_height: float
    viewport_width: float
    w_dir: Vec3
    u_dir: Vec3
    v_dir: Vec3
    horizontal: Vec3
    vertical: Vec3
    left_bottom: Vec3

    @classmethod
    def from_view(
        cls, canvas: Canvas, origin: Vec3, direction: Vec3, fov: float
    ) -> Camera:
        """Build a camera looking along direction with a horizontal fov in degrees."""
        field_width = math.tan(math.radians(fov) / 2) * 2.0
        w_dir = direction * -1
        u_dir, v_dir = coordinate_system(w_dir)
        viewport_width = field_width
        viewport_height = field_width * canvas.aspect_ratio
        horizontal = u_dir * viewport_width
        vertical = v_dir * viewport_height
        left_bottom = origin - ((horizontal + vertical) / 2 + w_dir)
        return cls(
            origin=origin,
            viewport_height=viewport_height,
            viewport_width=viewport_width,
            w_dir=w_dir,
            u_dir=u_dir,
            v_dir=v_dir,
            horizontal=horizontal,
            vertical=vertical,
            left_bottom=left_bottom,
        )


@dataclass(frozen=True)
class Ambient:
    light_ratio: float = 0.0
    light_color: Vec3 = Vec3()


@dataclass(frozen=True)
class Light:
    origin: Vec3
    bright_ratio: float
    color: Vec3


@dataclass(frozen=True)
class Checkerboard:
    check_color: Vec3
    width: int
    height: int


@dataclass(frozen=True)
class BumpMap:
    texture: TextureImage
    bump: Optional[TextureImage] = None


@dataclass(frozen=True)
class Surface:
    """How an object is coloured: a plain colour, a checkerboard or an image."""

    color: Vec3 = Vec3()
    checkerboard: Optional[Checkerboard] = None
    bumpmap: Optional[BumpMap] = None


@dataclass(frozen=True)
class SceneObject:
    obj_type: ObjectType
    center: Vec3
    normal: Vec3 = Vec3()
    radius: float = 0.0
    radius2: float = 0.0
    height: float = 0.0
    kd: float = 0.0
    ks: float = 0.0
    ksn: float = 0.0
    surface: Surface = Surface()


@dataclass
class Scene:
    canvas: Canvas
    camera: Optional[Camera] = None
    ambient: Ambient = Ambient()
    lights: list[Light] = field(default_factory=list)
    objects: list[SceneObject] = field(default_factory=list)


def load_image(filename: Union[str, os.PathLike]) -> TextureImage:
    """Load a texture, which must be named with the .xpm extension."""
    name = os.fspath(filename)
    if len(name) < 4 or not name.endswith(".xpm"):
        raise SceneError("The image file extension must be [.xpm].")
    return TextureImage.load(name)


def _ambient(element: Element) -> Ambient:
    return Ambient(
        light_ratio=parse_double(element.bright_ratio, 0.0, 1.0),
        light_color=parse_int_vector(element.rgb, 0, 255),
    )


def _camera(canvas: Canvas, element: Element) -> Camera:
    origin = parse_double_vector(element.point, 0, 0)
    direction = parse_double_vector(element.normal, -1, 1)
    fov = parse_double(element.fov, 0, 180)
    return Camera.from_view(canvas, origin, direction, fov)


def _light(element: Element) -> Light:
    origin = parse_double_vector(element.point, 0, 0)
    bright_ratio = parse_double(element.bright_ratio, 0.0, 1.0)
    color = parse_int_vector(element.rgb, 0, 255)
    return Light(origin, bright_ratio, color)


def _surface(element: Element) -> Surface:
    if element.texture is TextureType.CHECKBOARD:
        color = parse_int_vector(element.rgb, 0, 255)
        board = Checkerboard(
            check_color=parse_int_vector(element.check_color, 0, 255),
            width=int(parse_double(element.check_width, 0, math.inf)),
            height=int(parse_double(element.check_height, 0, math.inf)),
        )
        return Surface(color=color, checkerboard=board)
    if element.texture is TextureType.BUMPMAP:
        texture = load_image(element.texture_file)
        bump = load_image(element.bump_file) if element.bump_file is not None else None
        return Surface(bumpmap=BumpMap(texture, bump))
    return Surface(color=parse_int_vector(element.rgb, 0, 255))


def _scene_object(element: Element) -> SceneObject:
    obj_type = element.obj_type
    center = parse_double_vector(element.point, 0, 0)
    normal = Vec3()
    if obj_type is not ObjectType.SPHERE:
        normal = parse_double_vector(element.normal, -1, 1)
    radius = 0.0
    if obj_type is not ObjectType.PLANE:
        radius = parse_double(element.diameter, 0, math.inf) / 2
    height = 0.0
    if obj_type in (ObjectType.CYLINDER, ObjectType.CONE):
        height = parse_double(element.height, 0, math.inf)
    kd = parse_double(element.kd, 0, 1)
    ks = parse_double(element.ks, 0, 1)
    ksn = parse_double(element.ksn, 0, math.inf)
    return SceneObject(
        obj_type=obj_type,
        center=center,
        normal=normal,
        radius=radius,
        radius2=radius * radius,
        height=height,
        kd=kd,
        ks=ks,
        ksn=ksn,
        surface=_surface(element),
    )


def build_scene(
    elements: Iterable[Element],
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> Scene:
    """Turn parsed elements into a scene rendered on a width x height canvas."""
    scene = Scene(canvas=Canvas.from_size(width, height))
    for element in elements:
        if element.obj_type is ObjectType.AMBIENT:
            scene.ambient = _ambient(element)
        elif element.obj_type is ObjectType.CAMERA:
            scene.camera = _camera(scene.canvas, element)
        elif element.obj_type is ObjectType.POINT_LIGHT:
            scene.lights.append(_light(element))
        elif element.obj_type in _SURFACE_TYPES:
            scene.objects.append(_scene_object(element))
    return scene