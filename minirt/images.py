"""Texture images and the packing of colours into 0xRRGGBB pixels."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Union

from PIL import Image

from minirt.errors import SceneError
from minirt.vector import Vec3

RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _channel(value: float) -> int:
    return _clamp(int(256 * value), 0, 255)


def color_to_pixel(color: Vec3) -> int:
    """Pack a colour with channels in [0, 1] into a 0xRRGGBB integer."""
    return (
        _channel(color.x) << RED_SHIFT
        | _channel(color.y) << GREEN_SHIFT
        | _channel(color.z) << BLUE_SHIFT
    )


def pixel_to_color(pixel: int) -> Vec3:
    """Unpack a 0xRRGGBB integer into a colour with channels in [0, 1)."""
    return Vec3(
        ((pixel >> RED_SHIFT) & 0xFF) / 256,
        ((pixel >> GREEN_SHIFT) & 0xFF) / 256,
        ((pixel >> BLUE_SHIFT) & 0xFF) / 256,
    )


@dataclass(frozen=True)
class TextureImage:
    """A decoded image whose pixels are 0xRRGGBB integers, stored row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match the image size")

    @classmethod
    def load(cls, path: Union[str, os.PathLike]) -> TextureImage:
        """Decode an image file; an unreadable file raises SceneError."""
        try:
            with Image.open(path) as image:
                rgb = image.convert("RGB")
        except (OSError, ValueError) as exc:
            raise SceneError("image file is not correct.") from exc
        channels = iter(rgb.tobytes())
        pixels = tuple(
            (r << RED_SHIFT) | (g << GREEN_SHIFT) | (b << BLUE_SHIFT)
            for r, g, b in zip(channels, channels, channels)
        )
        return cls(rgb.width, rgb.height, pixels)

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y), clamping the coordinates to the image."""
        x = _clamp(x, 0, self.width - 1)
        y = _clamp(y, 0, self.height - 1)
        return self.pixels[y * self.width + x]