"""Dielectric (glass/water) material.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Total internal reflection when (n1 / n2) * sin(theta1) > 1
    - Schlick's approximation for the reflect-or-refract choice

Clear dielectrics never absorb: attenuation is always white.

Example:
    >>> from spheretrace.materials.dielectric import Dielectric
    >>> glass = Dielectric(refraction_index=1.5)
    >>> air_bubble = Dielectric(refraction_index=1.0 / 1.5)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, reflect, refract, schlick_reflectance, unit_vector
from spheretrace.core.sampler import random_float
from spheretrace.geometry.sphere import HitRecord
from spheretrace.materials.base import MaterialKind, ScatterRecord

vec3 = tm.vec3


@dataclass(frozen=True)
class Dielectric:
    """Transparent refractive material.

    Attributes:
        refraction_index: Refractive index relative to the enclosing medium.
            Common values: water 1.33, glass 1.5, diamond 2.4. Values below
            1 model a less dense pocket (an air bubble inside glass is
            ``1 / 1.5``).
    """

    refraction_index: float

    kind = MaterialKind.DIELECTRIC

    def __post_init__(self) -> None:
        if self.refraction_index <= 0.0:
            raise ValueError(
                f"Refraction index = {self.refraction_index} must be positive."
            )


@ti.func
def refraction_ratio(refraction_index: ti.f32, front_face: ti.i32) -> ti.f32:
    """Ratio n_incident / n_transmitted for the side the ray arrives from.

    Entering the material (front face) gives 1 / index; leaving it gives
    index.
    """
    ratio = refraction_index
    if front_face == 1:
        ratio = 1.0 / refraction_index
    return ratio


@ti.func
def cannot_refract(ratio: ti.f32, unit_direction: vec3, normal: vec3) -> ti.i32:
    """Return 1 if Snell's law has no solution (total internal reflection)."""
    cos_theta = tm.min(tm.dot(-unit_direction, normal), 1.0)
    sin_theta = ti.sqrt(1.0 - cos_theta * cos_theta)
    return ratio * sin_theta > 1.0


@ti.func
def scatter_dielectric(refraction_index: ti.f32, ray_in: Ray, hit: HitRecord) -> ScatterRecord:
    """Reflect or refract a ray at a dielectric boundary.

    Under total internal reflection the ray is always reflected and the
    sampler is not consulted. Otherwise one uniform draw is compared with
    the Schlick reflectance: below it reflects, at or above it refracts.

    Args:
        refraction_index: The material's refractive index.
        ray_in: The incoming ray.
        hit: The intersection being shaded.

    Returns:
        A ScatterRecord that always scatters, with white attenuation.
    """
    ratio = refraction_ratio(refraction_index, hit.front_face)
    unit_direction = unit_vector(ray_in.direction)
    cos_theta = tm.min(tm.dot(-unit_direction, hit.normal), 1.0)

    # Taichi does not short-circuit `or`, so the draw is kept in its own branch
    direction = reflect(unit_direction, hit.normal)
    if not cannot_refract(ratio, unit_direction, hit.normal):
        if random_float() >= schlick_reflectance(cos_theta, ratio):
            direction = refract(unit_direction, hit.normal, ratio)

    return ScatterRecord(
        scattered=1,
        ray=Ray(origin=hit.point, direction=direction),
        attenuation=vec3(1.0, 1.0, 1.0),
    )
