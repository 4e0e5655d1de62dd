"""Taichi-based Phong ray caster.

This package renders a scene of spheres and planes lit by point lights into
an 8-bit RGB image, with support for:
- One primary ray per pixel with nearest-hit resolution
- Phong shading (ambient, diffuse and specular) with hard shadows
- Parallel or serialised evaluation of the pixel grid
- PPM (P3) and PNG output

Subpackages:
    core: Ray utilities, pixel grid, shading kernels, and the render driver
    geometry: Sphere and plane intersection routines
    materials: Phong material model
    scene: Scene records, JSON configuration, and the reference scene
    camera: View setup and primary ray generation
    output: PPM and PNG writers

Modules that declare Taichi fields (scene.intersection, camera.view,
core.integrator, core.render) must be imported after ti.init().
"""

__version__ = "0.1.0"
