"""Reading a scene file into a list of textual scene elements."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Union

from minirt.errors import SceneError


class ObjectType(IntEnum):
    NOTTYPE = -1
    AMBIENT = 0
    CAMERA = 1
    POINT_LIGHT = 2
    SPHERE = 3
    PLANE = 4
    CYLINDER = 5
    CONE = 6


class Info(IntEnum):
    POINT = 0
    BRI_RATIO = 1
    NOR_VEC = 2
    DIAMETER = 3
    HEIGHT = 4
    FOV = 5
    RGB = 6
    KD = 7
    KS = 8
    KSN = 9


class TextureType(IntEnum):
    ERROR_LESS = -3
    ERROR_MORE = -2
    NOTCOLOR = -1
    COLOR = 0
    CHECKBOARD = 1
    BUMPMAP = 2


_IDENTS = {
    "A": ObjectType.AMBIENT,
    "C": ObjectType.CAMERA,
    "L": ObjectType.POINT_LIGHT,
    "sp": ObjectType.SPHERE,
    "pl": ObjectType.PLANE,
    "cy": ObjectType.CYLINDER,
    "co": ObjectType.CONE,
}

_SURFACES = frozenset(
    {ObjectType.SPHERE, ObjectType.PLANE, ObjectType.CYLINDER, ObjectType.CONE}
)
_LIT = frozenset({ObjectType.AMBIENT, ObjectType.POINT_LIGHT})

_INFO_OWNERS = {
    Info.POINT: frozenset({ObjectType.CAMERA, ObjectType.POINT_LIGHT}) | _SURFACES,
    Info.BRI_RATIO: _LIT,
    Info.NOR_VEC: frozenset(
        {ObjectType.CAMERA, ObjectType.PLANE, ObjectType.CYLINDER, ObjectType.CONE}
    ),
    Info.DIAMETER: frozenset(
        {ObjectType.SPHERE, ObjectType.CYLINDER, ObjectType.CONE}
    ),
    Info.HEIGHT: frozenset({ObjectType.CYLINDER, ObjectType.CONE}),
    Info.FOV: frozenset({ObjectType.CAMERA}),
    Info.RGB: _LIT,
    Info.KD: _SURFACES,
    Info.KS: _SURFACES,
    Info.KSN: _SURFACES,
}

# Geometry fields in the order they appear on a line, after the identifier.
_GEOMETRY_FIELDS = (
    (Info.POINT, "point"),
    (Info.BRI_RATIO, "bright_ratio"),
    (Info.NOR_VEC, "normal"),
    (Info.DIAMETER, "diameter"),
    (Info.HEIGHT, "height"),
    (Info.FOV, "fov"),
)

# Colour tag -> (texture type, accepted field counts counting the tag itself).
_TEXTURE_LAYOUTS = {
    "rgb": (TextureType.COLOR, (5,)),
    "ck": (TextureType.CHECKBOARD, (8,)),
    "bm": (TextureType.BUMPMAP, (5, 6)),
}

_SEPARATORS = re.compile(r"[ \t\v\f\r]+")

_LESS = "Elements came in less than standard."
_MORE = "Elements came in more than standard."


@dataclass
class Element:
    """One line of a scene file, split into its named text fields."""

    obj_type: ObjectType
    ident: str
    bright_ratio: Optional[str] = None
    point: Optional[str] = None
    normal: Optional[str] = None
    diameter: Optional[str] = None
    height: Optional[str] = None
    fov: Optional[str] = None
    rgb: Optional[str] = None
    kd: Optional[str] = None
    ks: Optional[str] = None
    ksn: Optional[str] = None
    texture: TextureType = TextureType.COLOR
    texture_ident: Optional[str] = None
    check_color: Optional[str] = None
    check_width: Optional[str] = None
    check_height: Optional[str] = None
    texture_file: Optional[str] = None
    bump_file: Optional[str] = None


def element_type(ident: str) -> ObjectType:
    """Map an element identifier such as "sp" to its type."""
    return _IDENTS.get(ident, ObjectType.NOTTYPE)


def is_info_valid(obj_type: ObjectType, info: Info) -> bool:
    """Tell whether an element of this type carries the given field."""
    return obj_type in _INFO_OWNERS[info]


def is_element_valid(obj_type: ObjectType, fields: list[str]) -> bool:
    """Tell whether the line has at least the identifier and geometry fields."""
    needed = 1 + sum(is_info_valid(obj_type, info) for info, _ in _GEOMETRY_FIELDS)
    return len(fields) >= needed


def _surface_texture(fields: list[str], index: int) -> TextureType:
    remaining = len(fields) - index
    if remaining <= 0:
        return TextureType.ERROR_LESS
    layout = _TEXTURE_LAYOUTS.get(fields[index])
    if layout is None:
        return TextureType.NOTCOLOR
    texture, sizes = layout
    if remaining in sizes:
        return texture
    return TextureType.ERROR_LESS if remaining < sizes[0] else TextureType.ERROR_MORE


def texture_type(obj_type: ObjectType, fields: list[str], index: int) -> TextureType:
    """Classify the colour part of a line that starts at fields[index]."""
    if obj_type in _LIT:
        expected = index + 1
        if len(fields) < expected:
            return TextureType.ERROR_LESS
        if len(fields) > expected:
            return TextureType.ERROR_MORE
        return TextureType.COLOR
    if obj_type in _SURFACES:
        return _surface_texture(fields, index)
    return TextureType.COLOR


def _set_surface(element: Element, fields: list[str]) -> None:
    element.texture_ident = fields[0]
    body = fields[1:-3]
    if element.texture is TextureType.COLOR:
        element.rgb = body[0]
    elif element.texture is TextureType.CHECKBOARD:
        (element.rgb, element.check_color,
         element.check_width, element.check_height) = body
    elif element.texture is TextureType.BUMPMAP:
        element.texture_file = body[0]
        if len(body) > 1:
            element.bump_file = body[1]
    element.kd, element.ks, element.ksn = fields[-3:]


def parse_line(line: str) -> Optional[Element]:
    """Split one scene line into an Element; a blank line gives None."""
    fields = [field for field in _SEPARATORS.split(line.rstrip("\n")) if field]
    if not fields:
        return None
    obj_type = element_type(fields[0])
    if obj_type is ObjectType.NOTTYPE:
        raise SceneError("Invalid element name.")
    if not is_element_valid(obj_type, fields):
        raise SceneError(_LESS)
    element = Element(obj_type=obj_type, ident=fields[0])
    values = iter(fields[1:])
    index = 1
    for info, name in _GEOMETRY_FIELDS:
        if is_info_valid(obj_type, info):
            setattr(element, name, next(values))
            index += 1

    element.texture = texture_type(obj_type, fields, index)
    if element.texture is TextureType.ERROR_LESS:
        raise SceneError(_LESS)
    if element.texture is TextureType.ERROR_MORE:
        raise SceneError(_MORE)
    if element.texture is TextureType.NOTCOLOR:
        raise SceneError("Color type for that location is not standard.")

    if obj_type in _LIT:
        element.rgb = fields[index]
    elif obj_type in _SURFACES:
        _set_surface(element, fields[index:])
    return element


def is_scene_env_valid(elements: Iterable[Element]) -> bool:
    """Exactly one ambient light and one camera, and at least one light."""
    idents = [element.ident for element in elements]
    return idents.count("A") == 1 and idents.count("L") >= 1 and idents.count("C") == 1


def parse_lines(lines: Iterable[str]) -> list[Element]:
    """Parse every line of a scene and check the scene as a whole."""
    elements = [element for element in map(parse_line, lines) if element is not None]
    if not is_scene_env_valid(elements):
        raise SceneError(
            "Each Ambient and Camera must be one, Light must be more than one."
        )
    return elements


def read_scene_file(path: Union[str, os.PathLike]) -> list[Element]:
    """Read and parse a scene file, which must have the .rt extension."""
    filename = os.fspath(path)
    if len(filename) < 3 or not filename.endswith(".rt"):
        raise SceneError("The file extension must include [.rt].")
    try:
        with open(filename, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    except UnicodeDecodeError as exc:
        raise SceneError("File format does not match.") from exc
    except OSError as exc:
        raise SceneError(exc.strerror or str(exc)) from exc
    return parse_lines(lines)