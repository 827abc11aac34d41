"""Core rendering module.

Components:
    ray: Ray data structure and vector helpers (reflect, refract, Schlick)
    interval: Parameter ranges for intersection queries
    sampler: Seedable uniform sampler and random directions
    integrator: The ray-color light transport loop

Only ``ray`` and ``interval`` are imported here. ``sampler`` and
``integrator`` declare Taichi fields, so import them directly once Taichi has
been initialized:
    from spheretrace.core.integrator import ray_color, trace_ray
"""

from .interval import (
    Interval,
    empty_interval,
    interval_clamp,
    interval_contains,
    interval_size,
    interval_surrounds,
    make_interval,
    universe_interval,
)
from .ray import (
    Ray,
    length_squared,
    make_ray,
    near_zero,
    ray_at,
    reflect,
    refract,
    schlick_reflectance,
    unit_vector,
    vec3,
)

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length_squared",
    "unit_vector",
    "near_zero",
    "reflect",
    "refract",
    "schlick_reflectance",
    "Interval",
    "make_interval",
    "empty_interval",
    "universe_interval",
    "interval_size",
    "interval_contains",
    "interval_surrounds",
    "interval_clamp",
]
