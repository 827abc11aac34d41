"""Lambertian (ideal diffuse) material.

Scattered directions are the surface normal plus a random unit vector, i.e. a
point on the unit sphere tangent to the surface at the hit point. That
distribution is cosine-weighted about the normal, so the attenuation is just
the albedo.

Example:
    >>> from spheretrace.materials.lambertian import Lambertian
    >>> ground = Lambertian(albedo=(0.8, 0.8, 0.0))
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, near_zero
from spheretrace.core.sampler import random_unit_vector
from spheretrace.geometry.sphere import HitRecord
from spheretrace.materials.base import MaterialKind, ScatterRecord, validate_color

vec3 = tm.vec3


@dataclass(frozen=True)
class Lambertian:
    """Ideal diffuse material.

    Attributes:
        albedo: Diffuse reflectance (R, G, B), each component in [0, 1].
    """

    albedo: tuple[float, float, float]

    kind = MaterialKind.LAMBERTIAN

    def __post_init__(self) -> None:
        validate_color("Albedo", self.albedo)


@ti.func
def scatter_lambertian(albedo: vec3, hit: HitRecord) -> ScatterRecord:
    """Scatter a ray off a diffuse surface.

    If the random offset nearly cancels the normal the direction would be
    degenerate, so the normal itself is used instead.

    Args:
        albedo: The diffuse reflectance color.
        hit: The intersection being shaded.

    Returns:
        A ScatterRecord that always scatters, with attenuation = albedo.
    """
    direction = hit.normal + random_unit_vector()

    if near_zero(direction):
        direction = hit.normal

    return ScatterRecord(
        scattered=1,
        ray=Ray(origin=hit.point, direction=direction),
        attenuation=albedo,
    )
