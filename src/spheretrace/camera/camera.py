"""Camera model: viewport geometry, jittered rays, and the render loop.

The camera sits at the origin looking down -z with a fixed 90 degree
vertical field of view and unit focal length. The viewport is the rectangle
on the plane z = -1 that the image maps onto:

    viewport_height = 2 * tan(vfov / 2) * focal_length
    viewport_width  = viewport_height * width / height

Pixel (0, 0) is the top-left pixel; its sample center sits half a pixel in
from the viewport's upper-left corner. Each sample adds a random offset in
[-0.5, 0.5) pixels on both axes, so averaging samples antialiases edges.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.camera.camera import Camera
    >>> from spheretrace.scene.default_scene import create_default_scene
    >>> camera = Camera.with_aspect_ratio(400, 16.0 / 9.0, seed=7)
    >>> image = camera.render(create_default_scene())
    >>> image.save("image.ppm")
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, Any, Optional

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.core.integrator import AbsorptionPolicy, ray_color, set_absorption_policy
from spheretrace.core.ray import Ray
from spheretrace.core.sampler import sample_square, seed_sampler
from spheretrace.output.image import Image

if TYPE_CHECKING:
    from spheretrace.scene.world import World

logger = logging.getLogger(__name__)

vec3 = tm.vec3

# Fixed optics
VFOV_DEGREES = 90.0
FOCAL_LENGTH = 1.0
CAMERA_CENTER = (0.0, 0.0, 0.0)

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Viewport:
    """World-space geometry derived from the image dimensions.

    Attributes:
        center: Camera eye point.
        viewport_width: Viewport width in world units.
        viewport_height: Viewport height in world units.
        pixel_delta_u: Offset from one pixel to the next along a row.
        pixel_delta_v: Offset from one row to the next (points down).
        pixel00: Sample center of the top-left pixel.
    """

    center: npt.NDArray[np.float64]
    viewport_width: float
    viewport_height: float
    pixel_delta_u: npt.NDArray[np.float64]
    pixel_delta_v: npt.NDArray[np.float64]
    pixel00: npt.NDArray[np.float64]


def compute_viewport(width: int, height: int) -> Viewport:
    """Derive the viewport for an image size.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The Viewport for the fixed camera optics.
    """
    theta = math.radians(VFOV_DEGREES)
    h = math.tan(theta / 2.0)
    viewport_height = 2.0 * h * FOCAL_LENGTH
    viewport_width = viewport_height * (width / height)

    center = np.array(CAMERA_CENTER, dtype=np.float64)

    # Horizontal edge runs left to right, vertical edge runs top to bottom
    viewport_u = np.array([viewport_width, 0.0, 0.0])
    viewport_v = np.array([0.0, -viewport_height, 0.0])

    pixel_delta_u = viewport_u / width
    pixel_delta_v = viewport_v / height

    viewport_upper_left = (
        center - np.array([0.0, 0.0, FOCAL_LENGTH]) - viewport_u / 2.0 - viewport_v / 2.0
    )
    pixel00 = viewport_upper_left + 0.5 * (pixel_delta_u + pixel_delta_v)

    return Viewport(
        center=center,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
        pixel_delta_u=pixel_delta_u,
        pixel_delta_v=pixel_delta_v,
        pixel00=pixel00,
    )


@dataclass(frozen=True)
class Camera:
    """Render configuration.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Jittered samples averaged into each pixel.
        max_depth: Maximum ray segments followed per sample.
        seed: Sampler seed. None draws fresh entropy for every render.
        absorption: How absorbed rays are resolved (see AbsorptionPolicy).
    """

    width: int = 400
    height: int = 400
    samples_per_pixel: int = 16
    max_depth: int = 10
    seed: int | None = None
    absorption: AbsorptionPolicy = AbsorptionPolicy.BLACK

    def __post_init__(self) -> None:
        if not 1 <= self.width <= MAX_IMAGE_WIDTH:
            raise ValueError(f"Image width {self.width} is outside [1, {MAX_IMAGE_WIDTH}]")
        if not 1 <= self.height <= MAX_IMAGE_HEIGHT:
            raise ValueError(f"Image height {self.height} is outside [1, {MAX_IMAGE_HEIGHT}]")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def with_aspect_ratio(cls, width: int, aspect_ratio: float, **kwargs: Any) -> "Camera":
        """Create a camera whose height follows from width / aspect_ratio.

        The height is truncated and never less than one pixel.
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {aspect_ratio}")
        height = max(1, int(width / aspect_ratio))
        return cls(width=width, height=height, **kwargs)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @cached_property
    def viewport(self) -> Viewport:
        """Viewport geometry for this camera's image size."""
        return compute_viewport(self.width, self.height)

    def render(self, world: "World", callback: Optional[ProgressCallback] = None) -> Image:
        """Render a world with this camera. See ``render``."""
        return render(self, world, callback)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_center = ti.Vector.field(3, dtype=ti.f32, shape=())
_pixel00 = ti.Vector.field(3, dtype=ti.f32, shape=())
_pixel_delta_u = ti.Vector.field(3, dtype=ti.f32, shape=())
_pixel_delta_v = ti.Vector.field(3, dtype=ti.f32, shape=())

# Linear color of each pixel, indexed [column, row] with row 0 at the top
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def setup_camera(camera: Camera) -> Viewport:
    """Upload a camera's viewport to the kernel-side fields.

    Args:
        camera: The camera to activate.

    Returns:
        The uploaded viewport.
    """
    viewport = camera.viewport
    _camera_center[None] = viewport.center.tolist()
    _pixel00[None] = viewport.pixel00.tolist()
    _pixel_delta_u[None] = viewport.pixel_delta_u.tolist()
    _pixel_delta_v[None] = viewport.pixel_delta_v.tolist()
    return viewport


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded camera state for debugging.

    Returns:
        Dictionary with center, pixel00, pixel_delta_u, pixel_delta_v.
    """
    fields = {
        "center": _camera_center,
        "pixel00": _pixel00,
        "pixel_delta_u": _pixel_delta_u,
        "pixel_delta_v": _pixel_delta_v,
    }
    info = {}
    for name, field in fields.items():
        value = field[None]
        info[name] = (float(value[0]), float(value[1]), float(value[2]))
    return info


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_ray(i: ti.i32, j: ti.i32) -> Ray:
    """Generate a jittered camera ray through pixel (i, j).

    Args:
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).

    Returns:
        A ray from the camera center through a uniformly random point of
        the pixel's square. The direction is not normalized.
    """
    offset = sample_square()
    pixel_sample = (
        _pixel00[None]
        + (ti.cast(i, ti.f32) + offset.x) * _pixel_delta_u[None]
        + (ti.cast(j, ti.f32) + offset.y) * _pixel_delta_v[None]
    )
    origin = _camera_center[None]
    return Ray(origin=origin, direction=pixel_sample - origin)


@ti.kernel
def _sample_ray_direction_kernel(i: ti.i32, j: ti.i32) -> vec3:
    return get_ray(i, j).direction


def sample_ray_direction(i: int, j: int) -> tuple[float, float, float]:
    """Draw one jittered camera ray direction for pixel (i, j).

    Python-callable wrapper around ``get_ray`` for testing. The camera must
    already be set up.
    """
    d = _sample_ray_direction_kernel(i, j)
    return (float(d[0]), float(d[1]), float(d[2]))


# =============================================================================
# Rendering
# =============================================================================


@ti.kernel
def _render_row(j: ti.i32, width: ti.i32, samples_per_pixel: ti.i32, max_depth: ti.i32):
    """Render one image row into the color buffer.

    The loop is serialized so that pixels draw from the sampler in a fixed
    order and renders are reproducible.
    """
    ti.loop_config(serialize=True)
    for i in range(width):
        color = vec3(0.0, 0.0, 0.0)
        for _ in range(samples_per_pixel):
            color += ray_color(get_ray(i, j), max_depth)
        _color_buffer[i, j] = color * (1.0 / ti.cast(samples_per_pixel, ti.f32))


def render(camera: Camera, world: "World", callback: Optional[ProgressCallback] = None) -> Image:
    """Render a world to a linear-color image.

    Uploads the camera and world, reseeds the sampler from ``camera.seed``,
    then renders rows top to bottom.

    Args:
        camera: Image size, sampling and depth settings.
        world: The scene to render.
        callback: Optional function called after each row with
            (rows_done, total_rows).

    Returns:
        The rendered Image (linear colors, not yet gamma corrected).
    """
    width, height = camera.width, camera.height
    logger.info(
        "Rendering %dx%d image, %d samples per pixel, max depth %d, %d spheres",
        width,
        height,
        camera.samples_per_pixel,
        camera.max_depth,
        len(world),
    )

    setup_camera(camera)
    world.upload()
    seed_sampler(camera.seed)
    set_absorption_policy(camera.absorption)

    for j in range(height):
        _render_row(j, width, camera.samples_per_pixel, camera.max_depth)
        if callback is not None:
            callback(j + 1, height)

    # Buffer is indexed [column, row]; images are (row, column)
    pixels = _color_buffer.to_numpy()[:width, :height, :]
    return Image(width, height, np.transpose(pixels, (1, 0, 2)))
