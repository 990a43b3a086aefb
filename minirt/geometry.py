"""Rays and their intersection with spheres, planes, cylinders and cones."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import Callable, Iterable, Optional

from minirt.elements import ObjectType
from minirt.scene import SceneObject
from minirt.texture import hit_color_set
from minirt.vector import Vec3, coordinate_system

EPSILON = 1e-6

ALPHA = 0
BETA = 1


@dataclass(frozen=True)
class Ray:
    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Point reached after travelling t along the ray."""
        return self.origin + self.direction * t


@dataclass
class HitRecord:
    """State of the nearest intersection found so far along a ray."""

    p: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    u_dir: Vec3 = field(default_factory=Vec3)
    v_dir: Vec3 = field(default_factory=Vec3)
    tmin: float = EPSILON
    tmax: float = math.inf
    t: float = 0.0
    u: float = 0.0
    v: float = 0.0
    front_face: bool = False
    color: Vec3 = field(default_factory=Vec3)
    obj: Optional[SceneObject] = None

    def set_face_normal(self, ray: Ray) -> None:
        """Make the normal face against the ray and remember which side was hit."""
        self.front_face = ray.direction.dot(self.normal) < 0
        if not self.front_face:
            self.normal = -self.normal

    def _assign(self, other: HitRecord) -> None:
        for item in fields(self):
            setattr(self, item.name, getattr(other, item.name))


def _divide(numerator: float, denominator: float) -> float:
    """Floating-point division that yields inf or nan instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _wrap_unit(value: float) -> float:
    remainder = math.fmod(value, 1.0)
    return remainder + 1.0 if remainder < 0 else remainder


def solve_root(a: float, half_b: float, c: float, which: int) -> float:
    """Root of a*t^2 + 2*half_b*t + c = 0: ALPHA is the smaller, BETA the larger.

    Returns nan when there is no real root.
    """
    discriminant = half_b * half_b - a * c
    if discriminant < 0:
        return math.nan
    sqrt_d = math.sqrt(discriminant)
    if which == ALPHA:
        return _divide(-half_b - sqrt_d, a)
    if which == BETA:
        return _divide(-half_b + sqrt_d, a)
    return math.nan


def _in_range(root: float, record: HitRecord) -> bool:
    return not math.isnan(root) and record.tmin <= root <= record.tmax


def _axial_uv(record: HitRecord, obj: SceneObject) -> None:
    record.u_dir, record.v_dir = coordinate_system(obj.normal)
    pc = record.p - obj.center
    theta = math.atan2(-pc.dot(record.v_dir), pc.dot(record.u_dir)) + math.pi
    record.u = theta / math.pi * 0.5
    record.v = _wrap_unit(pc.dot(obj.normal))


def _sphere_uv(record: HitRecord, obj: SceneObject) -> None:
    normal = record.normal
    record.u_dir, record.v_dir = coordinate_system(normal)
    theta = math.acos(max(-1.0, min(1.0, -normal.y)))
    phi = math.atan2(-normal.z, normal.x) + math.pi
    record.u = phi / math.pi * 0.5
    record.v = theta / math.pi


def _plane_uv(record: HitRecord, obj: SceneObject) -> None:
    record.u_dir, record.v_dir = coordinate_system(record.normal)
    record.u = _wrap_unit(record.p.dot(record.u_dir))
    record.v = _wrap_unit(record.p.dot(record.v_dir))


def _finish(
    obj: SceneObject,
    ray: Ray,
    record: HitRecord,
    uv: Callable[[HitRecord, SceneObject], None],
) -> bool:
    record.obj = obj
    record.set_face_normal(ray)
    uv(record, obj)
    hit_color_set(record, obj)
    return True


def _sphere_check(obj: SceneObject, ray: Ray, record: HitRecord, root: float) -> bool:
    if not _in_range(root, record):
        return False
    record.t = root
    record.p = ray.at(root)
    record.normal = (record.p - obj.center).unit()
    return _finish(obj, ray, record, _sphere_uv)


def hit_sphere(obj: SceneObject, ray: Ray, record: HitRecord) -> bool:
    oc = ray.origin - obj.center
    a = ray.direction.length_squared()
    half_b = ray.direction.dot(oc)
    c = oc.length_squared() - obj.radius2
    return any(
        _sphere_check(obj, ray, record, solve_root(a, half_b, c, which))
        for which in (ALPHA, BETA)
    )


def hit_plane(obj: SceneObject, ray: Ray, record: HitRecord) -> bool:
    denominator = ray.direction.dot(obj.normal)
    if denominator == 0:
        return False
    numerator = -(ray.origin - obj.center).dot(obj.normal)
    root = numerator / denominator
    if root < record.tmin or record.tmax < root:
        return False
    record.t = root
    record.p = ray.at(root)
    record.normal = obj.normal
    return _finish(obj, ray, record, _plane_uv)


def _radial(obj: SceneObject, point: Vec3) -> Vec3:
    axis_point = obj.center + obj.normal * (point - obj.center).dot(obj.normal)
    return (point - axis_point).unit()


def _cylinder_check(
    obj: SceneObject, ray: Ray, record: HitRecord, root: float
) -> bool:
    if not _in_range(root, record):
        return False
    record.t = root
    record.p = ray.at(root)
    p_height = (record.p - obj.center).dot(obj.normal)
    if p_height < 0 or p_height > obj.height:
        return False
    record.normal = _radial(obj, record.p)
    return _finish(obj, ray, record, _axial_uv)


def hit_cylinder(obj: SceneObject, ray: Ray, record: HitRecord) -> bool:
    oc = ray.origin - obj.center
    dn = ray.direction.dot(obj.normal)
    on = oc.dot(obj.normal)
    a = ray.direction.dot(ray.direction) - dn * dn
    half_b = ray.direction.dot(oc) - on * dn
    c = oc.dot(oc) - on * on - obj.radius2
    return any(
        _cylinder_check(obj, ray, record, solve_root(a, half_b, c, which))
        for which in (ALPHA, BETA)
    )


def _cone_check(obj: SceneObject, ray: Ray, record: HitRecord, root: float) -> bool:
    if not _in_range(root, record):
        return False
    record.t = root
    record.p = ray.at(root)
    p_height = (record.p - obj.center).dot(obj.normal)
    if p_height < 0 or p_height > obj.height:
        return False
    remaining = obj.height - p_height
    radial = _radial(obj, record.p)
    slope = _divide(obj.radius * remaining, obj.height)
    record.normal = (obj.normal * slope + radial * remaining).unit()
    return _finish(obj, ray, record, _axial_uv)


def hit_cone(obj: SceneObject, ray: Ray, record: HitRecord) -> bool:
    h_ratio = _divide(obj.radius2, obj.height * obj.height)
    oc = ray.origin - obj.center
    dn = ray.direction.dot(obj.normal)
    on = oc.dot(obj.normal)
    a = ray.direction.dot(ray.direction) - dn * dn * (1 + h_ratio)
    half_b = (
        ray.direction.dot(oc)
        - on * dn * (1 + h_ratio)
        + h_ratio * obj.height * dn
    )
    c = (
        oc.dot(oc)
        - on * on * (1 + h_ratio)
        - obj.radius2
        + 2 * h_ratio * obj.height * on
    )
    return any(
        _cone_check(obj, ray, record, solve_root(a, half_b, c, which))
        for which in (ALPHA, BETA)
    )


_HITTERS = {
    ObjectType.SPHERE: hit_sphere,
    ObjectType.PLANE: hit_plane,
    ObjectType.CYLINDER: hit_cylinder,
    ObjectType.CONE: hit_cone,
}


def hit_object(obj: SceneObject, ray: Ray, record: HitRecord) -> bool:
    """Intersect one object, updating record on a hit within its range."""
    try:
        hitter = _HITTERS[obj.obj_type]
    except KeyError:
        raise ValueError(f"cannot intersect an object of type {obj.obj_type!r}") from None
    return hitter(obj, ray, record)


def hit_any(objects: Iterable[SceneObject], ray: Ray, record: HitRecord) -> bool:
    """Find the nearest hit among objects; record holds it when one is found."""
    current = replace(record)
    found = False
    for obj in objects:
        if hit_object(obj, ray, current):
            found = True
            current.tmax = current.t
            record._assign(current)
    return found