"""Reference test scene.

This module provides a factory for the scene rendered by the command line
example and used by the end-to-end tests.

The reference scene consists of:
- A grey floor plane below the camera
- A shiny red sphere in the middle
- A matte green sphere to the left and a blue sphere to the right
- A small white sphere in front, partly shadowing the floor
- Two point lights: a white key light above and a dim warm fill light

The camera sits at the origin looking down +z. The up vector points along
-y so that row 0 of the image is the top of the scene (world +y).

Example:
    >>> from rray.scene.reference import create_reference_scene
    >>> scene = create_reference_scene(width=160, height=120)
    >>> len(scene.primitives), len(scene.lights)
    (5, 2)
"""

from rray.scene.model import Light, Material, Plane, Scene, Sphere

# =============================================================================
# Camera
# =============================================================================

DEFAULT_WIDTH = 320
DEFAULT_HEIGHT = 240
FIELD_OF_VIEW = 60.0

CAMERA_POSITION = (0.0, 0.0, 0.0)
VIEW_DIRECTION = (0.0, 0.0, 1.0)
UP_VECTOR = (0.0, -1.0, 0.0)

AMBIENT = (0.1, 0.1, 0.1)

# =============================================================================
# Materials
# =============================================================================

FLOOR = Material(diffuse=(0.6, 0.6, 0.6), specular=(0.0, 0.0, 0.0), shininess=1.0)
SHINY_RED = Material(diffuse=(0.8, 0.1, 0.1), specular=(1.0, 1.0, 1.0), shininess=50.0)
MATTE_GREEN = Material(diffuse=(0.1, 0.7, 0.2), specular=(0.0, 0.0, 0.0), shininess=1.0)
GLOSSY_BLUE = Material(diffuse=(0.1, 0.2, 0.8), specular=(0.5, 0.5, 0.5), shininess=20.0)
WHITE = Material(diffuse=(0.9, 0.9, 0.9), specular=(0.3, 0.3, 0.3), shininess=10.0)


def create_reference_scene(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> Scene:
    """Create the reference scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The Scene. It is not validated here; render() validates it.
    """
    primitives = (
        Plane(point=(0.0, -3.0, 0.0), normal=(0.0, 1.0, 0.0), material=FLOOR),
        Sphere(center=(0.0, 0.0, 14.0), radius=3.0, material=SHINY_RED),
        Sphere(center=(-6.0, -1.0, 16.0), radius=2.0, material=MATTE_GREEN),
        Sphere(center=(6.0, -1.0, 12.0), radius=2.0, material=GLOSSY_BLUE),
        Sphere(center=(1.5, -2.0, 8.0), radius=1.0, material=WHITE),
    )

    lights = (
        # Key light, above and slightly behind the camera
        Light(position=(-4.0, 10.0, 2.0), colour=(1.0, 1.0, 1.0)),
        # Fill light
        Light(position=(8.0, 4.0, -2.0), colour=(0.3, 0.25, 0.2)),
    )

    return Scene(
        width=width,
        height=height,
        fov=FIELD_OF_VIEW,
        camera=CAMERA_POSITION,
        view=VIEW_DIRECTION,
        up=UP_VECTOR,
        ambient=AMBIENT,
        primitives=primitives,
        lights=lights,
    )
