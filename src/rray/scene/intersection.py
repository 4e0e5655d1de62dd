"""Scene storage and ray-scene intersection.

This module copies a Scene into Taichi fields and provides the two
intersection levels used by the shader:

    intersect(primitive, ray_direction, ray_origin)
        Test one primitive. Dispatches on the primitive kind and rejects
        hits closer than HIT_EPSILON world units (behind the origin, or the
        surface the ray starts on), non-finite distances and zero directions.

    nearest_hit(ray_direction, ray_origin)
        Test every primitive in scene order and keep the closest hit.

Primitives are stored as one table in Structure-of-Arrays layout, so the
index reported in a hit record is the primitive's position in
Scene.primitives.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from rray.scene.intersection import load_scene, cast_ray
    >>> load_scene(scene)
    >>> cast_ray((0.0, 0.0, 1.0), (0.0, 0.0, 0.0))
    Intersection(distance=8.0, normal=(0.0, 0.0, -1.0), primitive=0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from rray.geometry.plane import Plane, hit_plane
from rray.geometry.sphere import HIT_EPSILON, MAX_DISTANCE, HitRecord, Sphere, hit_sphere
from rray.materials.phong import PhongMaterial
from rray.scene.model import PrimitiveKind, Scene
from rray.scene.model import Plane as PlaneSpec
from rray.scene.model import Sphere as SphereSpec

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any primitive (1 if hit, 0 if miss).
        distance: The ray parameter of the intersection. Only valid if hit == 1.
        normal: The surface normal at the intersection (not necessarily
            unit length). Only valid if hit == 1.
        primitive: Index of the hit primitive in scene order.
            -1 for a miss.
    """

    hit: ti.i32
    distance: ti.f32
    normal: vec3
    primitive: ti.i32


@dataclass(frozen=True)
class Intersection:
    """Python-side result of a ray query.

    Attributes:
        distance: Ray parameter of the hit.
        normal: Surface normal at the hit.
        primitive: Index of the hit primitive in Scene.primitives.
    """

    distance: float
    normal: tuple[float, float, float]
    primitive: int


# Maximum number of primitives and lights supported in the scene
MAX_PRIMITIVES = 1024
MAX_LIGHTS = 64

# Primitive storage: Structure of Arrays layout
# primitive_positions holds the sphere center or a point on the plane
primitive_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
primitive_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_radii = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
num_primitives = ti.field(dtype=ti.i32, shape=())

# Material storage, one material per primitive
material_diffuse = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
material_specular = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
material_shininess = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)

# Point lights
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_colours = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Ambient light colour
ambient_colour = ti.Vector.field(3, dtype=ti.f32, shape=())

# Scratch fields for Python-side ray queries
_query_hit = ti.field(dtype=ti.i32, shape=())
_query_distance = ti.field(dtype=ti.f32, shape=())
_query_normal = ti.Vector.field(3, dtype=ti.f32, shape=())
_query_primitive = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives and lights.

    Resets the counts and the ambient colour. The field data is not cleared
    but will be overwritten when a scene is loaded.
    """
    num_primitives[None] = 0
    num_lights[None] = 0
    ambient_colour[None] = [0.0, 0.0, 0.0]


def _store_material(idx: int, primitive: SphereSpec | PlaneSpec) -> None:
    material = primitive.material
    material_diffuse[idx] = list(material.diffuse)
    material_specular[idx] = list(material.specular)
    material_shininess[idx] = material.shininess


def add_sphere(sphere: SphereSpec) -> int:
    """Append a sphere to the primitive table.

    Args:
        sphere: The sphere and its material.

    Returns:
        The index of the added primitive.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
    """
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    primitive_kinds[idx] = int(PrimitiveKind.SPHERE)
    primitive_positions[idx] = list(sphere.center)
    primitive_normals[idx] = [0.0, 0.0, 0.0]
    primitive_radii[idx] = sphere.radius
    _store_material(idx, sphere)
    num_primitives[None] = idx + 1
    return idx


def add_plane(plane: PlaneSpec) -> int:
    """Append a plane to the primitive table.

    Args:
        plane: The plane and its material.

    Returns:
        The index of the added primitive.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
    """
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    primitive_kinds[idx] = int(PrimitiveKind.PLANE)
    primitive_positions[idx] = list(plane.point)
    primitive_normals[idx] = list(plane.normal)
    primitive_radii[idx] = 0.0
    _store_material(idx, plane)
    num_primitives[None] = idx + 1
    return idx


def add_light(position: tuple[float, float, float], colour: tuple[float, float, float]) -> int:
    """Append a point light.

    Args:
        position: The light position.
        colour: The emitted colour (RGB).

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = list(position)
    light_colours[idx] = list(colour)
    num_lights[None] = idx + 1
    return idx


def load_scene(scene: Scene) -> None:
    """Replace the stored scene with the primitives, lights and ambient of `scene`.

    Primitives keep their order, so hit records report indices into
    scene.primitives.

    Args:
        scene: The scene to load.

    Raises:
        RuntimeError: If the scene has more primitives or lights than the
            storage holds.
    """
    if len(scene.primitives) > MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    if len(scene.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    clear_scene()
    for primitive in scene.primitives:
        if isinstance(primitive, SphereSpec):
            add_sphere(primitive)
        else:
            add_plane(primitive)
    for light in scene.lights:
        add_light(light.position, light.colour)
    ambient_colour[None] = list(scene.ambient)


def get_primitive_count() -> int:
    """Get the number of primitives in the stored scene."""
    return int(num_primitives[None])


def get_light_count() -> int:
    """Get the number of lights in the stored scene."""
    return int(num_lights[None])


@ti.func
def get_material(primitive: ti.i32) -> PhongMaterial:
    """Get the material of a stored primitive."""
    return PhongMaterial(
        diffuse=material_diffuse[primitive],
        specular=material_specular[primitive],
        shininess=material_shininess[primitive],
    )


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        distance=0.0,
        normal=vec3(0.0, 0.0, 0.0),
        primitive=-1,
    )


@ti.func
def intersect(primitive: ti.i32, ray_direction: vec3, ray_origin: vec3) -> SceneHitRecord:
    """Test a ray against one stored primitive.

    Args:
        primitive: Index of the primitive in scene order.
        ray_direction: The direction vector of the ray (need not be normalized).
        ray_origin: The starting point of the ray.

    Returns:
        A SceneHitRecord for the primitive, or a miss record. Hits nearer
        than HIT_EPSILON world units to the origin are rejected, as are ray
        parameters at or beyond MAX_DISTANCE.
    """
    rec = HitRecord(hit=0, t=0.0, normal=vec3(0.0, 0.0, 0.0))

    # Cutoff in ray parameter units so it is HIT_EPSILON along the ray in world space
    t_min = HIT_EPSILON
    direction_length = tm.length(ray_direction)
    if direction_length > 0.0:
        t_min = HIT_EPSILON / direction_length

    kind = primitive_kinds[primitive]

    if kind == int(PrimitiveKind.SPHERE):
        sphere = Sphere(center=primitive_positions[primitive], radius=primitive_radii[primitive])
        rec = hit_sphere(ray_origin, ray_direction, sphere, t_min, MAX_DISTANCE)
    elif kind == int(PrimitiveKind.PLANE):
        plane = Plane(point=primitive_positions[primitive], normal=primitive_normals[primitive])
        rec = hit_plane(ray_origin, ray_direction, plane, t_min, MAX_DISTANCE)

    result = _make_miss_record()
    if rec.hit == 1:
        result = SceneHitRecord(hit=1, distance=rec.t, normal=rec.normal, primitive=primitive)
    return result


@ti.func
def nearest_hit(ray_direction: vec3, ray_origin: vec3) -> SceneHitRecord:
    """Find the closest intersection among all stored primitives.

    Scans every primitive in scene order and keeps the hit with the smallest
    distance. A later primitive replaces the current best only if it is
    strictly closer, so equal distances keep the earlier primitive.

    Args:
        ray_direction: The direction vector of the ray.
        ray_origin: The starting point of the ray.

    Returns:
        The closest SceneHitRecord, or a miss record if nothing was hit.
    """
    best = _make_miss_record()

    n = num_primitives[None]
    for i in range(n):
        rec = intersect(i, ray_direction, ray_origin)
        if rec.hit == 1:
            if best.hit == 0 or rec.distance < best.distance:
                best = rec

    return best


@ti.kernel
def _cast_ray_kernel(direction: vec3, origin: vec3):
    # One-iteration outer loop so the primitive scan is not the parallel loop
    for _ in range(1):
        rec = nearest_hit(direction, origin)
        _query_hit[None] = rec.hit
        _query_distance[None] = rec.distance
        _query_normal[None] = rec.normal
        _query_primitive[None] = rec.primitive


def cast_ray(
    direction: tuple[float, float, float],
    origin: tuple[float, float, float],
) -> Intersection | None:
    """Find the nearest hit of a ray against the loaded scene.

    Python-callable wrapper around nearest_hit() for scripts and tests.

    Args:
        direction: The ray direction.
        origin: The ray origin.

    Returns:
        The nearest Intersection, or None if the ray hits nothing.
    """
    _cast_ray_kernel(vec3(*direction), vec3(*origin))
    if _query_hit[None] == 0:
        return None
    normal = _query_normal[None]
    return Intersection(
        distance=float(_query_distance[None]),
        normal=(float(normal[0]), float(normal[1]), float(normal[2])),
        primitive=int(_query_primitive[None]),
    )
