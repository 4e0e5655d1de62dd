"""Unit tests for the Phong shading integrator.

Tests cover:
- Background colour for rays that hit nothing
- Ambient-only shading
- Direct diffuse lighting
- Hard shadows, including occluders beyond the light and specular highlights
- Colour quantization (clamping, truncation and NaN)
- Render target setup and readback
"""

import dataclasses

import pytest
import taichi as ti


def _material(diffuse, specular=(0.0, 0.0, 0.0), shininess=1.0):
    from rray.scene.model import Material

    return Material(diffuse=diffuse, specular=specular, shininess=shininess)


def _lit_floor_scene(make_scene, occluders=()):
    """A floor at y = -1 lit from directly above the point (0, -1, 1)."""
    from rray.scene.model import Light, Plane, Sphere

    floor = Plane(point=(0.0, -1.0, 0.0), normal=(0.0, 1.0, 0.0), material=_material((0.5, 0.5, 0.5)))
    spheres = [Sphere(center=c, radius=0.5, material=_material((1.0, 1.0, 1.0))) for c in occluders]
    return make_scene(
        primitives=[floor, *spheres],
        lights=[Light(position=(0.0, 5.0, 1.0), colour=(1.0, 1.0, 1.0))],
    )


class TestShading:
    """Tests for shade() through the shade_ray wrapper."""

    def test_miss_gives_background(self, make_scene):
        """Test a ray that hits nothing returns the background colour."""
        from rray.core.integrator import BACKGROUND_COLOR, shade_ray
        from rray.scene.intersection import load_scene

        load_scene(make_scene())
        colour = shade_ray((0.0, 0.0, 1.0), (0.0, 0.0, 0.0))
        assert colour == BACKGROUND_COLOR == (26, 26, 26)

    def test_ambient_only(self, make_scene):
        """Test a scene without lights shows ambient times diffuse."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene
        from rray.scene.model import Sphere

        sphere = Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=_material((1.0, 0.5, 0.25)))
        load_scene(make_scene(primitives=[sphere], ambient=(0.25, 0.25, 0.25)))

        # 255 * (0.25, 0.125, 0.0625) truncated
        assert shade_ray((0.0, 0.0, 1.0), (0.0, 0.0, 0.0)) == (63, 31, 15)

    def test_head_on_light(self, make_scene):
        """Test a light at the camera fully lights the facing point."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene
        from rray.scene.model import Light, Sphere

        sphere = Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=_material((0.5, 0.5, 0.5)))
        load_scene(make_scene(primitives=[sphere], lights=[Light(position=(0.0, 0.0, 0.0))]))

        # Diffuse coefficient 1, 255 * 0.5 truncated
        assert shade_ray((0.0, 0.0, 1.0), (0.0, 0.0, 0.0)) == (127, 127, 127)

    def test_specular_highlight_saturates(self, make_scene):
        """Test diffuse plus specular above 1 is clamped to 255."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene
        from rray.scene.model import Light, Sphere

        material = _material((0.5, 0.5, 0.5), specular=(1.0, 1.0, 1.0), shininess=10.0)
        sphere = Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=material)
        load_scene(make_scene(primitives=[sphere], lights=[Light(position=(0.0, 0.0, 0.0))]))

        assert shade_ray((0.0, 0.0, 1.0), (0.0, 0.0, 0.0)) == (255, 255, 255)

    def test_light_colour_filters_diffuse(self, make_scene):
        """Test the light colour multiplies the diffuse colour per channel."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene
        from rray.scene.model import Light, Sphere

        sphere = Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=_material((1.0, 1.0, 1.0)))
        light = Light(position=(0.0, 0.0, 0.0), colour=(1.0, 0.5, 0.0))
        load_scene(make_scene(primitives=[sphere], lights=[light]))

        assert shade_ray((0.0, 0.0, 1.0), (0.0, 0.0, 0.0)) == (255, 127, 0)

    def test_unoccluded_floor(self, make_scene):
        """Test the floor point below the light receives full diffuse light."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene

        load_scene(_lit_floor_scene(make_scene))
        # The ray hits the floor at (0, -1, 1), directly below the light
        assert shade_ray((0.0, -1.0, 1.0), (0.0, 0.0, 0.0)) == (127, 127, 127)

    def test_occluder_casts_shadow(self, make_scene):
        """Test an occluder between the point and the light removes its contribution."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene

        load_scene(_lit_floor_scene(make_scene, occluders=[(0.0, 2.0, 1.0)]))
        assert shade_ray((0.0, -1.0, 1.0), (0.0, 0.0, 0.0)) == (0, 0, 0)

    def test_occluder_beyond_light_casts_shadow(self, make_scene):
        """Test shadow rays are unbounded, so anything along them blocks the light."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene

        load_scene(_lit_floor_scene(make_scene, occluders=[(0.0, 10.0, 1.0)]))
        assert shade_ray((0.0, -1.0, 1.0), (0.0, 0.0, 0.0)) == (0, 0, 0)

    @pytest.mark.parametrize("blocked", [False, True])
    def test_occluder_removes_specular(self, make_scene, blocked):
        """Test a blocked light adds no specular highlight."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene
        from rray.scene.model import Light, Sphere

        material = _material((0.0, 0.0, 0.0), specular=(1.0, 1.0, 1.0), shininess=10.0)
        primitives = [Sphere(center=(0.0, 0.0, 5.0), radius=1.0, material=material)]
        if blocked:
            # Behind the camera, so only the shadow ray toward the light reaches it
            primitives.append(Sphere(center=(0.0, 0.0, -5.0), radius=1.0, material=material))
        load_scene(make_scene(primitives=primitives, lights=[Light(position=(0.0, 0.0, 0.0))]))

        colour = shade_ray((0.0, 0.0, 1.0), (0.0, 0.0, 0.0))
        if blocked:
            assert colour == (0, 0, 0)
        else:
            assert min(colour) > 200

    def test_shadow_keeps_ambient(self, make_scene):
        """Test shadowed points still receive ambient light."""
        from rray.core.integrator import shade_ray
        from rray.scene.intersection import load_scene

        scene = _lit_floor_scene(make_scene, occluders=[(0.0, 2.0, 1.0)])
        load_scene(dataclasses.replace(scene, ambient=(0.5, 0.5, 0.5)))
        # 255 * 0.5 * 0.5 truncated
        assert shade_ray((0.0, -1.0, 1.0), (0.0, 0.0, 0.0)) == (63, 63, 63)


class TestColourQuantization:
    """Tests for to_color()."""

    def test_clamp_truncate_and_nan(self):
        """Test channels are clamped, truncated and NaN becomes 0."""
        from rray.core.integrator import to_color, vec3

        zero = ti.field(dtype=ti.f32, shape=())
        result = ti.Vector.field(3, dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            z = zero[None]
            result[0] = to_color(vec3(z / z, 0.5, 2.0))
            result[1] = to_color(vec3(-1.0, 0.999, 1.0))

        zero[None] = 0.0
        test_kernel()
        first = result[0]
        second = result[1]
        assert (first[0], first[1], first[2]) == (0, 127, 255)
        assert (second[0], second[1], second[2]) == (0, 254, 255)


class TestRenderTarget:
    """Tests for render target setup and readback."""

    def test_setup_render_target(self):
        """Test setting up the render target records its size."""
        from rray.core.integrator import get_image_dimensions, get_image_numpy, setup_render_target

        setup_render_target(8, 6)
        assert get_image_dimensions() == (8, 6)
        image = get_image_numpy()
        assert image.shape == (6, 8, 3)
        assert image.dtype.name == "uint8"

    def test_render_target_too_large(self):
        """Test image sizes beyond the buffer capacity are rejected."""
        from rray.core.integrator import MAX_IMAGE_WIDTH, setup_render_target

        with pytest.raises(ValueError, match="exceed"):
            setup_render_target(MAX_IMAGE_WIDTH + 1, 10)

    def test_render_rows_fills_band(self, make_scene):
        """Test render_rows only writes the requested rows."""
        from rray.camera.view import setup_view
        from rray.core.integrator import get_image_numpy, render_rows, setup_render_target
        from rray.scene.intersection import load_scene

        scene = make_scene(width=4, height=4)
        load_scene(scene)
        setup_view(scene)
        setup_render_target(4, 4)

        render_rows(0, 2)
        image = get_image_numpy()
        assert (image[:2] == 26).all()
        assert (image[2:] == 0).all()
