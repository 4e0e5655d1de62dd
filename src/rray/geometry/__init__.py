"""Geometry module for shape primitives.

This module provides the geometric primitives and their intersection
routines:

Components:
    sphere: Sphere primitive with ray-sphere intersection
    plane: Infinite plane primitive with ray-plane intersection

All intersection routines are Taichi functions (@ti.func) and share the
same calling pattern:
    record = hit_shape(ray_origin, ray_direction, shape, t_min, t_max)

Ray directions are not required to be normalized. A zero direction never
hits anything.
"""

from .plane import Plane, hit_plane, make_plane
from .sphere import HIT_EPSILON, MAX_DISTANCE, HitRecord, Sphere, hit_sphere, make_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
    "Plane",
    "hit_plane",
    "make_plane",
    "HIT_EPSILON",
    "MAX_DISTANCE",
]
