"""Conversion of scene-file fields into numbers and vectors."""

from __future__ import annotations

import math
import re
from typing import Optional

from minirt.errors import SceneError
from minirt.vector import Vec3

_INT_PATTERN = re.compile(r"[+-]?\d+")
_DOUBLE_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

_BAD_TYPE = "Number must came in correct type."
_BAD_RANGE = "Number must came in standard range."


def parse_int(text: Optional[str], low: int, high: int) -> int:
    """Parse a whole number and check that it lies within [low, high]."""
    if text is None or not _INT_PATTERN.fullmatch(text):
        raise SceneError(_BAD_TYPE)
    value = int(text)
    if value < low or value > high:
        raise SceneError(_BAD_RANGE)
    return value


def parse_double(text: Optional[str], low: float, high: float) -> float:
    """Parse a decimal number and check it against [low, high].

    The bounds (0, 0) mean "no limit"; (0, inf) and (0, 180) give the
    messages for shape sizes and for the field of view.
    """
    if text is None or not _DOUBLE_PATTERN.fullmatch(text):
        raise SceneError(_BAD_TYPE)
    value = float(text)
    if low == 0 and high == 0:
        return value
    if low == 0 and high == math.inf and value < 0:
        raise SceneError("The properties of the shape must be positive.")
    if low == 0 and high == 180 and value >= 180:
        raise SceneError("FOV range should be under 180.")
    if low == 0 and high == 180 and value < 0:
        raise SceneError("FOV range should be over 0.")
    if value < low or value > high:
        raise SceneError(_BAD_RANGE)
    return value


def _components(text: str, message: str) -> list[Optional[str]]:
    parts: list[Optional[str]] = list(text.split(","))
    if len(parts) > 3:
        raise SceneError(message)
    parts.extend([None] * (3 - len(parts)))
    return parts


def parse_int_vector(text: str, low: int, high: int) -> Vec3:
    """Parse "r,g,b"; a colour in [0, 255] is scaled into [0, 1]."""
    parts = _components(text, "[r,g,b] elements must came in standard.")
    x, y, z = (parse_int(part, low, high) for part in parts)
    vec = Vec3(x, y, z)
    if low == 0 and high == 255:
        vec = vec / 255
    return vec


def parse_double_vector(text: str, low: float, high: float) -> Vec3:
    """Parse "x,y,z"; a direction with bounds (-1, 1) is normalised."""
    parts = _components(text, "[x,y,z] elements must came in standard.")
    x, y, z = (parse_double(part, low, high) for part in parts)
    vec = Vec3(x, y, z)
    if low == -1 and high == 1:
        if vec.length() == 0.0:
            raise SceneError("Normalized vector must came in standard.")
        vec = vec.unit()
    return vec