"""Rendering a whole scene to pixels, to an image, and the command line."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image

from minirt.elements import read_scene_file
from minirt.errors import MiniRTError, SceneError
from minirt.images import color_to_pixel
from minirt.scene import Scene, build_scene
from minirt.shading import primary_ray, trace_ray

WIN_WIDTH = 1000
WIN_HEIGHT = 1000


def _shade(scene: Scene, alpha: float, beta: float) -> int:
    return color_to_pixel(trace_ray(scene, primary_ray(scene.camera, alpha, beta)))


def render(scene: Scene, width: int = WIN_WIDTH, height: int = WIN_HEIGHT) -> list[int]:
    """Render the scene into 0xRRGGBB pixels, row by row from the top row."""
    if width < 2 or height < 2:
        raise ValueError("the image must be at least 2 pixels wide and high")
    if scene.camera is None:
        raise SceneError("The scene has no camera.")
    return [
        _shade(scene, x / (width - 1), (height - 1 - y) / (height - 1))
        for y in range(height)
        for x in range(width)
    ]


def to_image(pixels: Sequence[int], width: int, height: int) -> Image.Image:
    """Turn 0xRRGGBB pixels stored row by row into an RGB image."""
    if len(pixels) != width * height:
        raise ValueError("pixel count does not match the image size")
    image = Image.new("RGB", (width, height))
    image.putdata([((p >> 16) & 0xFF, (p >> 8) & 0xFF, p & 0xFF) for p in pixels])
    return image


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minirt", description="Render a .rt scene file to an image."
    )
    parser.add_argument("scene", nargs="*", help="scene description (.rt)")
    parser.add_argument(
        "-o", "--output", help="image file to write (default: scene name with .png)"
    )
    parser.add_argument("--width", type=int, default=WIN_WIDTH)
    parser.add_argument("--height", type=int, default=WIN_HEIGHT)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render the scene named on the command line and save it as an image."""
    args = _parser().parse_args(argv)
    try:
        if len(args.scene) != 1:
            raise SceneError("The number of arguments must be one.")
        path = args.scene[0]
        scene = build_scene(read_scene_file(path), args.width, args.height)
        pixels = render(scene, args.width, args.height)
        output = args.output or str(Path(path).with_suffix(".png"))
        to_image(pixels, args.width, args.height).save(output)
    except (MiniRTError, ValueError, OSError) as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())