"""Phong shading of ray hits and the colour seen along a ray."""

from __future__ import annotations

import math
from typing import Iterable

from minirt.geometry import EPSILON, HitRecord, Ray, hit_any
from minirt.scene import Camera, Light, Scene, SceneObject
from minirt.vector import Vec3

_BLACK = Vec3(0, 0, 0)
_WHITE = Vec3(1, 1, 1)
_SKY = Vec3(0.5, 0.7, 1.0)


def primary_ray(camera: Camera, alpha: float, beta: float) -> Ray:
    """Ray from the camera through the viewport point (alpha, beta) in [0, 1]^2."""
    target = camera.left_bottom + camera.horizontal * alpha + camera.vertical * beta
    return Ray(camera.origin, (target - camera.origin).unit())


def is_in_shadow(
    objects: Iterable[SceneObject], point: Vec3, light_dir: Vec3, light_len: float
) -> bool:
    """Tell whether an object lies between point and a light light_len away."""
    shadow_ray = Ray(point + light_dir * EPSILON, light_dir)
    record = HitRecord(tmin=0.0, tmax=light_len)
    return hit_any(objects, shadow_ray, record)


def phong_diffuse(record: HitRecord, light: Light, light_dir: Vec3) -> Vec3:
    """Diffuse term: light colour * kd * max(0, n . l)."""
    diffuse = max(0.0, record.normal.dot(light_dir)) * record.obj.kd
    return light.color * diffuse


def _reflect(light_dir: Vec3, normal: Vec3) -> Vec3:
    return normal * (normal.dot(light_dir) * 2) - light_dir


def phong_specular(record: HitRecord, ray: Ray, light: Light, light_dir: Vec3) -> Vec3:
    """Specular term: light colour * ks * max(0, r . v) ^ ksn."""
    obj = record.obj
    view_dir = (ray.direction * -1).unit()
    reflect_dir = _reflect(light_dir, record.normal)
    spec = math.pow(max(0.0, reflect_dir.dot(view_dir)), obj.ksn)
    return light.color * obj.ks * spec


def point_light(scene: Scene, record: HitRecord, ray: Ray, light: Light) -> Vec3:
    """Contribution of one point light to the hit, black when it is shadowed."""
    to_light = light.origin - record.p
    light_len = to_light.length()
    light_dir = to_light.unit()
    if is_in_shadow(scene.objects, record.p, light_dir, light_len):
        return _BLACK
    phong = phong_diffuse(record, light, light_dir) + phong_specular(
        record, ray, light, light_dir
    )
    return phong * light.bright_ratio


def phong_illumination(scene: Scene, record: HitRecord, ray: Ray) -> Vec3:
    """Colour of a hit lit by every light and the ambient light, capped at 1."""
    result = _BLACK
    for light in scene.lights:
        result = result + point_light(scene, record, ray, light)
    ambient = scene.ambient.light_color * scene.ambient.light_ratio
    result = result + ambient
    return _WHITE.minimum(result * record.color)


def trace_ray(scene: Scene, ray: Ray) -> Vec3:
    """Colour seen along a ray: the shaded nearest hit, or the sky gradient."""
    record = HitRecord()
    if hit_any(scene.objects, ray, record):
        return phong_illumination(scene, record, ray)
    t = 0.5 * (ray.direction.y + 1.0)
    return _WHITE * (1.0 - t) + _SKY * t