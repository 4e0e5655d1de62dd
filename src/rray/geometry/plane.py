"""Infinite plane primitive with ray-plane intersection.

A plane is defined by a point on it and a normal vector. The normal is
stored as given and reported unchanged at every hit, so only the side the
normal points to is lit by a light in front of it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from rray.geometry.plane import Plane, hit_plane
    >>> floor = Plane(point=ti.math.vec3(0, 3, 0), normal=ti.math.vec3(0, -1, 0))
    >>> # Use hit_plane within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from .sphere import HitRecord

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Rays this close to parallel with the plane never hit it
PARALLEL_EPSILON = 1e-8


@ti.dataclass
class Plane:
    """An infinite plane through a point.

    Attributes:
        point: Any point on the plane (vec3).
        normal: The plane normal (vec3). Need not be unit length.
    """

    point: vec3
    normal: vec3


@ti.func
def hit_plane(
    ray_origin: vec3,
    ray_direction: vec3,
    plane: Plane,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitRecord:
    """Test for ray-plane intersection.

    Solves dot(ray_origin + t * ray_direction - point, normal) = 0 for t.
    Rays parallel to the plane (including a zero direction) miss.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        plane: The plane to test intersection against.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        A HitRecord. Check the hit field to determine if intersection occurred.
    """
    denom = tm.dot(plane.normal, ray_direction)

    did_hit = 0
    hit_t = 0.0
    hit_normal = vec3(0.0, 0.0, 0.0)

    if ti.abs(denom) > PARALLEL_EPSILON:
        t = tm.dot(plane.point - ray_origin, plane.normal) / denom
        if (t > t_min) and (t < t_max):
            did_hit = 1
            hit_t = t
            hit_normal = plane.normal

    return HitRecord(hit=did_hit, t=hit_t, normal=hit_normal)


@ti.func
def make_plane(point: vec3, normal: vec3) -> Plane:
    """Create a plane from a point and a normal."""
    return Plane(point=point, normal=normal)
