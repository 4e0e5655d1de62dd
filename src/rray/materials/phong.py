"""Phong material and local illumination terms.

A Phong material reflects light from each point light in two lobes:

    diffuse  = material.diffuse  * max(N . L) * light.colour
    specular = material.specular * |(R . V) ^ shininess| * light.colour

where N is the unit surface normal, L the unit vector from the surface
point to the light, R = L - 2 (N . L) N the mirror image of L about the
normal, and V the unit direction of the incoming ray. A lobe whose
coefficient does not exceed SHADING_EPSILON contributes nothing; this also
drops NaN coefficients from degenerate geometry.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from rray.materials.phong import PhongMaterial, phong_contribution
    >>> # Use within a Taichi kernel:
    >>> # diffuse, specular = phong_contribution(material, n, l, v, light_colour)
"""

import taichi as ti
import taichi.math as tm

from rray.core.ray import mul, reflect

# Type alias for 3D vectors
vec3 = tm.vec3

# Coefficients at or below this value are treated as zero
SHADING_EPSILON = 1e-6


@ti.dataclass
class PhongMaterial:
    """Phong material properties.

    Attributes:
        diffuse: The diffuse colour (RGB). Also scales the ambient term.
        specular: The specular highlight colour (RGB).
        shininess: The specular exponent. Larger values give smaller,
            sharper highlights.
    """

    diffuse: vec3
    specular: vec3
    shininess: ti.f32


@ti.func
def diffuse_coefficient(normal: vec3, to_light: vec3) -> ti.f32:
    """Cosine of the angle between the normal and the light direction.

    Args:
        normal: The unit surface normal.
        to_light: The unit vector from the surface point to the light.

    Returns:
        dot(normal, to_light). Negative when the light is behind the surface.
    """
    return tm.dot(normal, to_light)


@ti.func
def specular_coefficient(
    normal: vec3,
    to_light: vec3,
    view_direction: vec3,
    shininess: ti.f32,
) -> ti.f32:
    """Phong specular coefficient |(R . V) ^ shininess|.

    Args:
        normal: The unit surface normal.
        to_light: The unit vector from the surface point to the light.
        view_direction: The unit direction of the incoming ray.
        shininess: The specular exponent.

    Returns:
        The specular coefficient. NaN when R . V is negative and the
        exponent is not an integer.
    """
    reflected = reflect(to_light, normal)
    return ti.abs(tm.dot(reflected, view_direction) ** shininess)


@ti.func
def phong_contribution(
    material: PhongMaterial,
    normal: vec3,
    to_light: vec3,
    view_direction: vec3,
    light_colour: vec3,
):
    """Evaluate the diffuse and specular light reflected from one light.

    Args:
        material: The surface material.
        normal: The unit surface normal.
        to_light: The unit vector from the surface point to the light.
        view_direction: The unit direction of the incoming ray.
        light_colour: The light's emission colour.

    Returns:
        A tuple of (diffuse, specular) RGB contributions. Each is zero when
        its coefficient does not exceed SHADING_EPSILON.
    """
    diffuse = vec3(0.0, 0.0, 0.0)
    specular = vec3(0.0, 0.0, 0.0)

    diffuse_coef = diffuse_coefficient(normal, to_light)
    if diffuse_coef > SHADING_EPSILON:
        diffuse = mul(material.diffuse * diffuse_coef, light_colour)

    spec_coef = specular_coefficient(normal, to_light, view_direction, material.shininess)
    if spec_coef > SHADING_EPSILON:
        specular = mul(material.specular * spec_coef, light_colour)

    return diffuse, specular


@ti.func
def ambient_term(material: PhongMaterial, ambient: vec3) -> vec3:
    """Direction-independent light: ambient colour filtered by the diffuse colour."""
    return mul(ambient, material.diffuse)


def validate_material(
    diffuse: tuple[float, float, float],
    specular: tuple[float, float, float],
    shininess: float,
) -> None:
    """Check Phong material parameters before they are loaded.

    Args:
        diffuse: The diffuse colour as (R, G, B).
        specular: The specular colour as (R, G, B).
        shininess: The specular exponent.

    Raises:
        ValueError: If a colour does not have three components, has a
            negative component, or shininess is negative.
    """
    for name, colour in (("diffuse", diffuse), ("specular", specular)):
        if len(colour) != 3:
            raise ValueError(f"{name.capitalize()} colour must have 3 components, got {len(colour)}")
        for i, component in enumerate(colour):
            if component < 0.0:
                raise ValueError(f"{name.capitalize()} colour component {i} = {component} is negative.")
    if shininess < 0.0:
        raise ValueError(f"Shininess = {shininess} is negative.")
