"""Scene description, configuration, and intersection.

Components:
    model: Immutable scene records and validation
    config: Dictionary and JSON round-trip for scenes
    reference: The reference test scene
    intersection: Taichi scene storage and nearest-hit resolution

The intersection module declares Taichi fields, so it is not imported here;
import rray.scene.intersection after ti.init().
"""

from .config import (
    load_scene_file,
    primitive_from_dict,
    primitive_to_dict,
    save_scene_file,
    scene_from_dict,
    scene_to_dict,
)
from .model import (
    DegenerateSceneError,
    Light,
    Material,
    Plane,
    Primitive,
    PrimitiveKind,
    Scene,
    Sphere,
    validate_scene,
)
from .reference import create_reference_scene

__all__ = [
    # Records
    "Scene",
    "Sphere",
    "Plane",
    "Primitive",
    "PrimitiveKind",
    "Material",
    "Light",
    "DegenerateSceneError",
    "validate_scene",
    # Configuration
    "scene_to_dict",
    "scene_from_dict",
    "primitive_to_dict",
    "primitive_from_dict",
    "load_scene_file",
    "save_scene_file",
    # Reference scene
    "create_reference_scene",
]
