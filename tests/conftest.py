"""Pytest configuration for ray caster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, fast_math=False)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so that Taichi is initialized before any field is declared
    from rray.core.integrator import clear_render_target
    from rray.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_render_target()

    _clear_all()
    yield
    _clear_all()


@pytest.fixture
def make_scene():
    """Factory for scenes with the camera at the origin looking down +z."""
    from rray.scene.model import Scene

    def _make_scene(
        width=21,
        height=21,
        fov=90.0,
        primitives=(),
        lights=(),
        ambient=(0.0, 0.0, 0.0),
        up=(0.0, 1.0, 0.0),
    ):
        return Scene(
            width=width,
            height=height,
            fov=fov,
            camera=(0.0, 0.0, 0.0),
            view=(0.0, 0.0, 1.0),
            up=up,
            ambient=ambient,
            primitives=tuple(primitives),
            lights=tuple(lights),
        )

    return _make_scene
