"""Camera module for viewport setup, ray generation and rendering.

Components:
    camera: Fixed pinhole camera, jittered primary rays and the row-by-row
        render loop

Ray generation uses pixel coordinates:
    i in [0, width): left to right across the image
    j in [0, height): top to bottom across the image

The module declares Taichi fields, so import it after ``ti.init``.
"""

from .camera import (
    FOCAL_LENGTH,
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    VFOV_DEGREES,
    Camera,
    Viewport,
    compute_viewport,
    get_camera_info,
    get_ray,
    render,
    sample_ray_direction,
    setup_camera,
)

__all__ = [
    "Camera",
    "Viewport",
    "compute_viewport",
    "setup_camera",
    "get_camera_info",
    "get_ray",
    "sample_ray_direction",
    "render",
    "VFOV_DEGREES",
    "FOCAL_LENGTH",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
]
