"""Ray-color integrator.

Evaluates the light arriving along a ray by following it through the scene:
each hit asks the struck material for a scattered ray and an attenuation, and
the path continues until it escapes to the sky or the bounce budget runs out.

The recursion

    color(ray, depth) = attenuation * color(scattered, depth - 1)

is written as a loop carrying the product of attenuations (the throughput),
since Taichi functions cannot recurse.

Escaped rays pick up the sky gradient: white at the horizon blending to
(0.5, 0.7, 1.0) straight up. An exhausted budget contributes black.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.integrator import trace_ray
    >>> r, g, b = trace_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), max_depth=10)
    >>> # (r, g, b) is approximately (0.5, 0.7, 1.0): straight up, empty scene
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from spheretrace.core.interval import Interval
from spheretrace.core.ray import Ray, unit_vector
from spheretrace.core.sampler import random_unit_vector
from spheretrace.materials.material import scatter
from spheretrace.scene.world import hit_world

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Lower bound for hits; keeps scattered rays off the surface they leave
T_MIN = 0.001

# Sky gradient endpoints
SKY_HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
SKY_ZENITH_COLOR = vec3(0.5, 0.7, 1.0)

# Attenuation of the diffuse bounce used by AbsorptionPolicy.DIFFUSE_FALLBACK
FALLBACK_ATTENUATION = 0.5


class AbsorptionPolicy(IntEnum):
    """What happens when a material absorbs a ray (metal below the surface).

    BLACK ends the path with no contribution. DIFFUSE_FALLBACK instead
    bounces along normal + random_unit_vector() at half intensity, which is
    how early drafts of this renderer behaved.
    """

    BLACK = 0
    DIFFUSE_FALLBACK = 1


_absorption_policy = ti.field(dtype=ti.i32, shape=())


def set_absorption_policy(policy: AbsorptionPolicy) -> None:
    """Select how absorbed rays are resolved by subsequent renders."""
    _absorption_policy[None] = int(policy)


def get_absorption_policy() -> AbsorptionPolicy:
    """Return the active absorption policy."""
    return AbsorptionPolicy(int(_absorption_policy[None]))


@ti.func
def sky_color(direction: vec3) -> vec3:
    """Background color seen along a direction.

    Args:
        direction: Ray direction (any length).

    Returns:
        Linear blend between white (a = 0) and sky blue (a = 1) with
        a = 0.5 * (unit(direction).y + 1).
    """
    a = 0.5 * (unit_vector(direction).y + 1.0)
    return (1.0 - a) * SKY_HORIZON_COLOR + a * SKY_ZENITH_COLOR


@ti.func
def ray_color(ray: Ray, max_depth: ti.i32) -> vec3:
    """Estimate the color arriving along a ray.

    Args:
        ray: The ray to trace.
        max_depth: Maximum number of ray segments to follow. A path still
            bouncing after this many segments contributes black.

    Returns:
        The estimated linear color (RGB).
    """
    color = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    current = ray

    # Active flag for path continuation
    active = 1

    for _ in range(max_depth):
        if active == 1:
            rec = hit_world(current, Interval(lo=T_MIN, hi=tm.inf))

            if rec.hit == 0:
                color = throughput * sky_color(current.direction)
                active = 0
            else:
                scattered = scatter(rec.material_id, current, rec)

                if scattered.scattered == 1:
                    throughput *= scattered.attenuation
                    current = scattered.ray
                elif _absorption_policy[None] == int(AbsorptionPolicy.DIFFUSE_FALLBACK):
                    throughput *= FALLBACK_ATTENUATION
                    current = Ray(origin=rec.point, direction=rec.normal + random_unit_vector())
                else:
                    active = 0

    return color


@ti.kernel
def _trace_ray_kernel(
    ox: ti.f32, oy: ti.f32, oz: ti.f32, dx: ti.f32, dy: ti.f32, dz: ti.f32, max_depth: ti.i32
) -> vec3:
    return ray_color(Ray(origin=vec3(ox, oy, oz), direction=vec3(dx, dy, dz)), max_depth)


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    max_depth: int = 10,
) -> tuple[float, float, float]:
    """Trace a single ray through the uploaded scene.

    Python-callable wrapper around ``ray_color``, for testing and debugging.
    The world must already be uploaded.

    Args:
        origin: Ray origin.
        direction: Ray direction.
        max_depth: Bounce budget.

    Returns:
        Tuple of (R, G, B) linear color values.
    """
    color = _trace_ray_kernel(
        origin[0], origin[1], origin[2], direction[0], direction[1], direction[2], max_depth
    )
    return (float(color[0]), float(color[1]), float(color[2]))
