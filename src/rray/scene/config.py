"""Scene serialization to and from plain dictionaries and JSON files.

The dictionary layout mirrors the Scene records:

    {
        "width": 320, "height": 240, "fov": 60.0,
        "camera": [0, 0, 0], "view": [0, 0, 1], "up": [0, -1, 0],
        "ambient": [0.1, 0.1, 0.1],
        "primitives": [
            {"type": "sphere", "center": [0, 0, 10], "radius": 2,
             "material": {"diffuse": [1, 0, 0], "specular": [1, 1, 1], "shininess": 20}},
            {"type": "plane", "point": [0, -3, 0], "normal": [0, 1, 0],
             "material": {"diffuse": [0.5, 0.5, 0.5]}}
        ],
        "lights": [{"position": [5, 5, 0], "colour": [1, 1, 1]}]
    }

Missing optional keys fall back to the same defaults as the records.

Example:
    >>> from rray.scene.config import load_scene_file, save_scene_file
    >>> save_scene_file(scene, "scene.json")
    >>> assert load_scene_file("scene.json") == scene
"""

import json
from pathlib import Path
from typing import Any

from rray.scene.model import Light, Material, Plane, Primitive, Scene, Sphere, Vec3


def _vec3(values: Any, name: str) -> Vec3:
    """Convert a 3-element sequence to a float tuple."""
    if len(values) != 3:
        raise ValueError(f"'{name}' must have 3 components, got {len(values)}")
    return (float(values[0]), float(values[1]), float(values[2]))


def _material_to_dict(material: Material) -> dict[str, Any]:
    return {
        "diffuse": list(material.diffuse),
        "specular": list(material.specular),
        "shininess": material.shininess,
    }


def _material_from_dict(data: dict[str, Any]) -> Material:
    return Material(
        diffuse=_vec3(data.get("diffuse", [0.5, 0.5, 0.5]), "diffuse"),
        specular=_vec3(data.get("specular", [0.0, 0.0, 0.0]), "specular"),
        shininess=float(data.get("shininess", 1.0)),
    )


def primitive_to_dict(primitive: Primitive) -> dict[str, Any]:
    """Export one primitive to a dictionary."""
    if isinstance(primitive, Sphere):
        return {
            "type": "sphere",
            "center": list(primitive.center),
            "radius": primitive.radius,
            "material": _material_to_dict(primitive.material),
        }
    return {
        "type": "plane",
        "point": list(primitive.point),
        "normal": list(primitive.normal),
        "material": _material_to_dict(primitive.material),
    }


def primitive_from_dict(data: dict[str, Any]) -> Primitive:
    """Load one primitive from a dictionary.

    Raises:
        ValueError: If the primitive type is unknown or a vector is malformed.
    """
    prim_type = str(data.get("type", "")).lower()
    material = _material_from_dict(data.get("material", {}))
    if prim_type == "sphere":
        return Sphere(
            center=_vec3(data.get("center", [0.0, 0.0, 0.0]), "center"),
            radius=float(data.get("radius", 1.0)),
            material=material,
        )
    if prim_type == "plane":
        return Plane(
            point=_vec3(data.get("point", [0.0, 0.0, 0.0]), "point"),
            normal=_vec3(data.get("normal", [0.0, 1.0, 0.0]), "normal"),
            material=material,
        )
    raise ValueError(f"Unknown primitive type: {prim_type}")


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a scene to a dictionary (for JSON serialization).

    Returns:
        A dictionary representation of the scene.
    """
    return {
        "width": scene.width,
        "height": scene.height,
        "fov": scene.fov,
        "camera": list(scene.camera),
        "view": list(scene.view),
        "up": list(scene.up),
        "ambient": list(scene.ambient),
        "primitives": [primitive_to_dict(p) for p in scene.primitives],
        "lights": [
            {"position": list(light.position), "colour": list(light.colour)}
            for light in scene.lights
        ],
    }


def scene_from_dict(data: dict[str, Any]) -> Scene:
    """Load a scene from a dictionary.

    Args:
        data: Dictionary in the layout produced by scene_to_dict().

    Returns:
        The Scene.

    Raises:
        ValueError: If a required key is missing or a value is malformed.
    """
    for key in ("width", "height", "fov", "camera", "view", "up"):
        if key not in data:
            raise ValueError(f"Scene is missing required key '{key}'")

    lights = tuple(
        Light(
            position=_vec3(light.get("position", [0.0, 0.0, 0.0]), "position"),
            colour=_vec3(light.get("colour", [1.0, 1.0, 1.0]), "colour"),
        )
        for light in data.get("lights", [])
    )

    return Scene(
        width=int(data["width"]),
        height=int(data["height"]),
        fov=float(data["fov"]),
        camera=_vec3(data["camera"], "camera"),
        view=_vec3(data["view"], "view"),
        up=_vec3(data["up"], "up"),
        ambient=_vec3(data.get("ambient", [0.0, 0.0, 0.0]), "ambient"),
        primitives=tuple(primitive_from_dict(p) for p in data.get("primitives", [])),
        lights=lights,
    )


def load_scene_file(filepath: str | Path) -> Scene:
    """Load a scene from a JSON file."""
    with open(filepath, encoding="utf-8") as f:
        return scene_from_dict(json.load(f))


def save_scene_file(scene: Scene, filepath: str | Path) -> None:
    """Save a scene to a JSON file."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(scene_to_dict(scene), f, indent=2)
