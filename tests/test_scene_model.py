"""Unit tests for scene records and validation.

Tests cover:
- Record defaults and immutability
- Resizing a scene
- Rejection of degenerate scenes before rendering
"""

import dataclasses

import pytest


def _material():
    from rray.scene.model import Material

    return Material(diffuse=(0.5, 0.5, 0.5), specular=(1.0, 1.0, 1.0), shininess=10.0)


class TestSceneRecords:
    """Tests for the scene dataclasses."""

    def test_material_defaults(self):
        """Test a material without specular settings is purely diffuse."""
        from rray.scene.model import Material

        material = Material(diffuse=(1.0, 0.0, 0.0))
        assert material.specular == (0.0, 0.0, 0.0)
        assert material.shininess == 1.0

    def test_primitive_kinds(self):
        """Test each primitive record reports its kind."""
        from rray.scene.model import Plane, PrimitiveKind, Sphere

        sphere = Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=_material())
        plane = Plane(point=(0.0, -1.0, 0.0), normal=(0.0, 1.0, 0.0), material=_material())
        assert sphere.kind == PrimitiveKind.SPHERE
        assert plane.kind == PrimitiveKind.PLANE

    def test_scene_is_immutable(self, make_scene):
        """Test scene fields cannot be reassigned."""
        scene = make_scene()
        with pytest.raises(dataclasses.FrozenInstanceError):
            scene.width = 100

    def test_replace_size(self, make_scene):
        """Test replace_size changes only the image size."""
        scene = make_scene(width=21, height=21, ambient=(0.1, 0.1, 0.1))
        resized = scene.replace_size(64, 48)
        assert (resized.width, resized.height) == (64, 48)
        assert resized.ambient == scene.ambient
        assert (scene.width, scene.height) == (21, 21)


class TestValidateScene:
    """Tests for validate_scene()."""

    def test_valid_scene(self, make_scene):
        """Test a well-formed scene passes."""
        from rray.scene.model import Light, Plane, Sphere, validate_scene

        scene = make_scene(
            primitives=[
                Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=_material()),
                Plane(point=(0.0, -1.0, 0.0), normal=(0.0, 1.0, 0.0), material=_material()),
            ],
            lights=[Light(position=(0.0, 5.0, 0.0))],
            ambient=(0.1, 0.1, 0.1),
        )
        validate_scene(scene)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 10)])
    def test_non_positive_size(self, make_scene, width, height):
        """Test non-positive image dimensions are rejected."""
        from rray.scene.model import DegenerateSceneError, validate_scene

        with pytest.raises(DegenerateSceneError, match="dimensions"):
            validate_scene(make_scene(width=width, height=height))

    @pytest.mark.parametrize("fov", [0.0, 180.0, -30.0, 270.0])
    def test_field_of_view_out_of_range(self, make_scene, fov):
        """Test field of view must lie strictly between 0 and 180 degrees."""
        from rray.scene.model import DegenerateSceneError, validate_scene

        with pytest.raises(DegenerateSceneError, match="Field of view"):
            validate_scene(make_scene(fov=fov))

    def test_negative_ambient(self, make_scene):
        """Test negative ambient light is rejected."""
        from rray.scene.model import DegenerateSceneError, validate_scene

        with pytest.raises(DegenerateSceneError, match="Ambient"):
            validate_scene(make_scene(ambient=(0.1, -0.1, 0.1)))

    def test_nan_ambient(self, make_scene):
        """Test NaN ambient light is rejected with a message naming NaN."""
        from rray.scene.model import DegenerateSceneError, validate_scene

        with pytest.raises(DegenerateSceneError, match="negative or NaN"):
            validate_scene(make_scene(ambient=(0.1, float("nan"), 0.1)))

    def test_zero_up_vector(self, make_scene):
        """Test a zero up vector is rejected."""
        from rray.scene.model import DegenerateSceneError, validate_scene

        with pytest.raises(DegenerateSceneError, match="Up vector"):
            validate_scene(make_scene(up=(0.0, 0.0, 0.0)))

    def test_parallel_view_and_up(self, make_scene):
        """Test view and up vectors must not be parallel."""
        from rray.scene.model import DegenerateSceneError, validate_scene

        with pytest.raises(DegenerateSceneError, match="parallel"):
            validate_scene(make_scene(up=(0.0, 0.0, -2.0)))

    def test_degenerate_scene_is_value_error(self, make_scene):
        """Test DegenerateSceneError can be caught as ValueError."""
        from rray.scene.model import validate_scene

        with pytest.raises(ValueError):
            validate_scene(make_scene(width=0))

    def test_non_positive_radius(self, make_scene):
        """Test spheres must have a positive radius."""
        from rray.scene.model import Sphere, validate_scene

        scene = make_scene(primitives=[Sphere(center=(0.0, 0.0, 5.0), radius=0.0, material=_material())])
        with pytest.raises(ValueError, match="radius"):
            validate_scene(scene)

    def test_zero_plane_normal(self, make_scene):
        """Test planes must have a non-zero normal."""
        from rray.scene.model import Plane, validate_scene

        scene = make_scene(
            primitives=[Plane(point=(0.0, 0.0, 0.0), normal=(0.0, 0.0, 0.0), material=_material())]
        )
        with pytest.raises(ValueError, match="zero normal"):
            validate_scene(scene)

    def test_invalid_material(self, make_scene):
        """Test material validation runs for every primitive."""
        from rray.scene.model import Material, Sphere, validate_scene

        bad = Material(diffuse=(0.5, 0.5, 0.5), specular=(1.0, 1.0, 1.0), shininess=-5.0)
        scene = make_scene(primitives=[Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=bad)])
        with pytest.raises(ValueError, match="Shininess"):
            validate_scene(scene)
