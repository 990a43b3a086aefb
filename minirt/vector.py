"""Three-component vectors used for points, directions and colours."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator, Union

from minirt.errors import DivisorError

Scalar = Union[int, float]


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector; also used as a point and as an RGB colour."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union[Vec3, Scalar]) -> Vec3:
        """Scale by a number, or multiply component-wise by another vector."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, Real):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> Vec3:
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __truediv__(self, divisor: Scalar) -> Vec3:
        if not isinstance(divisor, Real):
            return NotImplemented
        if not divisor:
            raise DivisorError()
        return self * (1 / divisor)

    def __neg__(self) -> Vec3:
        return self * -1

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def unit(self) -> Vec3:
        """Return the vector scaled to length one; a zero vector raises DivisorError."""
        return self / self.length()

    def minimum(self, other: Vec3) -> Vec3:
        """Component-wise minimum of two vectors."""
        return Vec3(
            other.x if self.x > other.x else self.x,
            other.y if self.y > other.y else self.y,
            other.z if self.z > other.z else self.z,
        )

    def up(self) -> Vec3:
        """Return an up vector that is never parallel to this axis-aligned direction."""
        if self == Vec3(0, 1, 0):
            return Vec3(0, 0, 1)
        if self == Vec3(0, -1, 0):
            return Vec3(0, 0, -1)
        return Vec3(0, 1, 0)


def coordinate_system(w: Vec3) -> tuple[Vec3, Vec3]:
    """Build two unit vectors u and v orthogonal to w and to each other."""
    u = w.up().cross(w).unit()
    v = w.cross(u).unit()
    return u, v


def basis_transform(u_dir: Vec3, v_dir: Vec3, normal: Vec3, vec: Vec3) -> Vec3:
    """Map vec from the (u_dir, v_dir, normal) basis into world space."""
    return u_dir * vec.x + v_dir * vec.y + normal * vec.z