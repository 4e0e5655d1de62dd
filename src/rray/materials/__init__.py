"""Material module for surface shading models.

Components:
    phong: Phong material with diffuse, specular and ambient terms

Every primitive carries one Phong material. Shading is purely local: the
colour at a hit point depends on the material, the surface normal, the
incoming ray direction and the unoccluded point lights.
"""

from .phong import (
    SHADING_EPSILON,
    PhongMaterial,
    ambient_term,
    diffuse_coefficient,
    phong_contribution,
    specular_coefficient,
    validate_material,
)

__all__ = [
    "PhongMaterial",
    "SHADING_EPSILON",
    "ambient_term",
    "diffuse_coefficient",
    "specular_coefficient",
    "phong_contribution",
    "validate_material",
]
