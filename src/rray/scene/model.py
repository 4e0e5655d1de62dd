"""Scene description records.

The scene is an immutable value built once by the caller and read by every
stage of the renderer. Vectors and colours are plain (x, y, z) / (r, g, b)
float tuples; the renderer copies them into Taichi fields when a scene is
loaded.

Example:
    >>> from rray.scene.model import Light, Material, Scene, Sphere, validate_scene
    >>> red = Material(diffuse=(0.8, 0.1, 0.1), specular=(1.0, 1.0, 1.0), shininess=20.0)
    >>> scene = Scene(
    ...     width=64, height=48, fov=60.0,
    ...     camera=(0.0, 0.0, 0.0), view=(0.0, 0.0, 1.0), up=(0.0, -1.0, 0.0),
    ...     ambient=(0.1, 0.1, 0.1),
    ...     primitives=(Sphere(center=(0.0, 0.0, 10.0), radius=2.0, material=red),),
    ...     lights=(Light(position=(5.0, 5.0, 0.0), colour=(1.0, 1.0, 1.0)),),
    ... )
    >>> validate_scene(scene)
"""

import math
from dataclasses import dataclass, field, replace
from enum import IntEnum

import numpy as np

from rray.materials.phong import validate_material

Vec3 = tuple[float, float, float]


class DegenerateSceneError(ValueError):
    """The scene cannot be rendered (bad size, field of view or camera basis)."""


class PrimitiveKind(IntEnum):
    """Enumeration of supported primitive types.

    Used by the scene intersection routine to dispatch to the matching
    hit function.
    """

    SPHERE = 0
    PLANE = 1


@dataclass(frozen=True)
class Material:
    """Phong material attached to a primitive.

    Attributes:
        diffuse: Diffuse colour (R, G, B), non-negative.
        specular: Specular colour (R, G, B), non-negative.
        shininess: Specular exponent, non-negative.
    """

    diffuse: Vec3
    specular: Vec3 = (0.0, 0.0, 0.0)
    shininess: float = 1.0


@dataclass(frozen=True)
class Sphere:
    """A sphere primitive.

    Attributes:
        center: Center point (x, y, z).
        radius: Radius (positive).
        material: Surface material.
    """

    center: Vec3
    radius: float
    material: Material

    kind = PrimitiveKind.SPHERE


@dataclass(frozen=True)
class Plane:
    """An infinite plane primitive.

    Attributes:
        point: Any point on the plane (x, y, z).
        normal: Plane normal; the lit side is the one it points to.
        material: Surface material.
    """

    point: Vec3
    normal: Vec3
    material: Material

    kind = PrimitiveKind.PLANE


Primitive = Sphere | Plane


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: Light position (x, y, z).
        colour: Emitted colour (R, G, B).
    """

    position: Vec3
    colour: Vec3 = (1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Scene:
    """Everything needed to render one image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees, in (0, 180).
        camera: Camera position.
        view: View direction. Its length scales the distance to the image
            plane, so it is normally a unit vector.
        up: Image-plane vector along which the row index grows. Use a
            vector pointing down the screen (e.g. (0, -1, 0)) for an
            upright image.
        ambient: Ambient light colour, non-negative.
        primitives: Ordered primitives.
        lights: Ordered point lights.
    """

    width: int
    height: int
    fov: float
    camera: Vec3
    view: Vec3
    up: Vec3
    ambient: Vec3 = (0.0, 0.0, 0.0)
    primitives: tuple[Primitive, ...] = field(default_factory=tuple)
    lights: tuple[Light, ...] = field(default_factory=tuple)

    def replace_size(self, width: int, height: int) -> "Scene":
        """Return a copy of the scene with a different image size."""
        return replace(self, width=width, height=height)


def validate_scene(scene: Scene) -> None:
    """Check that a scene can be rendered.

    Rendering a scene that fails these checks would produce NaN-filled
    geometry, so the render driver calls this before any work starts.

    Args:
        scene: The scene to check.

    Raises:
        DegenerateSceneError: If the image size is not positive, the field
            of view is outside (0, 180), an ambient component is negative
            or NaN, the view or up vector is zero, or view and up are parallel.
        ValueError: If a primitive or material has invalid parameters.
    """
    if scene.width <= 0 or scene.height <= 0:
        raise DegenerateSceneError(
            f"Image dimensions must be positive, got {scene.width}x{scene.height}"
        )
    if not 0.0 < scene.fov < 180.0:
        raise DegenerateSceneError(f"Field of view = {scene.fov} is outside (0, 180) degrees")
    for i, component in enumerate(scene.ambient):
        if component < 0.0 or math.isnan(component):
            raise DegenerateSceneError(f"Ambient component {i} = {component} is negative or NaN")

    view = np.asarray(scene.view, dtype=np.float64)
    up = np.asarray(scene.up, dtype=np.float64)
    if np.linalg.norm(view) < 1e-12:
        raise DegenerateSceneError("View direction is the zero vector")
    if np.linalg.norm(up) < 1e-12:
        raise DegenerateSceneError("Up vector is the zero vector")
    if np.linalg.norm(np.cross(view, up)) < 1e-12 * np.linalg.norm(view) * np.linalg.norm(up):
        raise DegenerateSceneError("View direction and up vector are parallel")

    for i, primitive in enumerate(scene.primitives):
        material = primitive.material
        validate_material(material.diffuse, material.specular, material.shininess)
        if isinstance(primitive, Sphere) and primitive.radius <= 0.0:
            raise ValueError(f"Sphere {i} has non-positive radius {primitive.radius}")
        if isinstance(primitive, Plane) and np.linalg.norm(primitive.normal) < 1e-12:
            raise ValueError(f"Plane {i} has a zero normal")
