"""The default scene: three spheres on a large ground sphere.

Layout (camera at the origin looking down -z):
    - Ground: yellowish diffuse sphere of radius 100 under everything
    - Center: blue diffuse sphere
    - Left: hollow glass sphere (glass shell around an air bubble)
    - Right: fuzzy gold metal sphere

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.default_scene import create_default_camera, create_default_scene
    >>> image = create_default_camera(seed=1).render(create_default_scene())
"""

from __future__ import annotations

from typing import Any

from spheretrace.camera.camera import Camera
from spheretrace.geometry.sphere import Sphere
from spheretrace.materials import Dielectric, Lambertian, Metal
from spheretrace.scene.world import World

# Image size
DEFAULT_IMAGE_WIDTH = 800
DEFAULT_ASPECT_RATIO = 16.0 / 9.0

# Materials
GROUND_ALBEDO = (0.8, 0.8, 0.0)
CENTER_ALBEDO = (0.1, 0.2, 0.5)
METAL_ALBEDO = (0.8, 0.6, 0.2)
METAL_FUZZ = 1.0
GLASS_INDEX = 1.5


def create_default_scene() -> World:
    """Build the default five-sphere world.

    Returns:
        A World with the ground, center, glass shell, air bubble and metal
        spheres, in that order.
    """
    ground = Lambertian(GROUND_ALBEDO)
    center = Lambertian(CENTER_ALBEDO)
    glass = Dielectric(GLASS_INDEX)
    # Air inside glass: inverted index ratio
    bubble = Dielectric(1.0 / GLASS_INDEX)
    metal = Metal(METAL_ALBEDO, fuzz=METAL_FUZZ)

    world = World()
    world.add(Sphere((0.0, -100.5, -1.0), 100.0, ground))
    world.add(Sphere((0.0, 0.0, -1.2), 0.5, center))
    world.add(Sphere((-1.0, 0.0, -1.0), 0.5, glass))
    world.add(Sphere((-1.0, 0.0, -1.0), 0.4, bubble))
    world.add(Sphere((1.0, 0.0, -1.0), 0.5, metal))
    return world


def create_default_camera(**kwargs: Any) -> Camera:
    """Create the default 16:9 camera, 800 pixels wide.

    Keyword arguments are passed to Camera (samples_per_pixel, max_depth,
    seed, absorption).
    """
    return Camera.with_aspect_ratio(DEFAULT_IMAGE_WIDTH, DEFAULT_ASPECT_RATIO, **kwargs)
