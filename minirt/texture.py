"""Surface colouring: checkerboards, image textures and normal maps."""

from __future__ import annotations

import math

from minirt.images import TextureImage, pixel_to_color
from minirt.vector import Vec3, basis_transform


def checker_color(u: float, v: float, surface) -> Vec3:
    """Pick the base or the check colour of a checkerboard surface at (u, v)."""
    board = surface.checkerboard
    u_int = math.floor(u * board.width)
    v_int = math.floor(v * board.height)
    if (u_int + v_int) % 2:
        return surface.color
    return board.check_color


def _texel(u: float, v: float, image: TextureImage) -> int:
    x = int(u * image.width)
    y = int((1.0 - v) * image.height)
    return image.pixel(x, y)


def image_mapping(u: float, v: float, image: TextureImage) -> Vec3:
    """Return the texture colour at the surface coordinates (u, v)."""
    return pixel_to_color(_texel(u, v, image))


def normal_mapping(record, image: TextureImage) -> Vec3:
    """Perturb the hit normal with a tangent-space normal map."""
    tangent = pixel_to_color(_texel(record.u, record.v, image)) * 2 - Vec3(1, 1, 1)
    return basis_transform(record.u_dir, record.v_dir, record.normal, tangent)


def hit_color_set(record, obj) -> None:
    """Set the colour of a hit, and its normal if the object has a bump map."""
    surface = obj.surface
    if surface.checkerboard is not None:
        record.color = checker_color(record.u, record.v, surface)
    elif surface.bumpmap is not None:
        record.color = image_mapping(record.u, record.v, surface.bumpmap.texture)
        if surface.bumpmap.bump is not None:
            record.normal = normal_mapping(record, surface.bumpmap.bump)
    else:
        record.color = surface.color