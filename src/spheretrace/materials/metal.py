"""Metal (specular reflective) material.

The incoming direction is mirrored about the normal:

    R = I - 2(I . N)N

then normalized and perturbed by ``fuzz * random_unit_vector()``. A fuzzed
reflection that ends up pointing into the surface is absorbed.

Example:
    >>> from spheretrace.materials.metal import Metal
    >>> brushed_gold = Metal(albedo=(0.8, 0.6, 0.2), fuzz=1.0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, reflect, unit_vector
from spheretrace.core.sampler import random_unit_vector
from spheretrace.geometry.sphere import HitRecord
from spheretrace.materials.base import MaterialKind, ScatterRecord, validate_color

vec3 = tm.vec3


@dataclass(frozen=True)
class Metal:
    """Reflective metal.

    Attributes:
        albedo: The reflective tint (R, G, B), each component in [0, 1].
        fuzz: Surface roughness in [0, 1]. 0 is a perfect mirror.
    """

    albedo: tuple[float, float, float]
    fuzz: float = 0.0

    kind = MaterialKind.METAL

    def __post_init__(self) -> None:
        validate_color("Albedo", self.albedo)
        if self.fuzz < 0.0 or self.fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {self.fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )


@ti.func
def scatter_metal(albedo: vec3, fuzz: ti.f32, ray_in: Ray, hit: HitRecord) -> ScatterRecord:
    """Scatter a ray off a metal surface.

    Args:
        albedo: The reflective tint.
        fuzz: Roughness in [0, 1].
        ray_in: The incoming ray.
        hit: The intersection being shaded.

    Returns:
        A ScatterRecord with attenuation = albedo. ``scattered`` is 0 when
        the fuzzed reflection points into the surface.
    """
    reflected = reflect(ray_in.direction, hit.normal)
    reflected = unit_vector(reflected) + fuzz * random_unit_vector()

    scattered = 1
    if tm.dot(reflected, hit.normal) <= 0.0:
        scattered = 0

    return ScatterRecord(
        scattered=scattered,
        ray=Ray(origin=hit.point, direction=reflected),
        attenuation=albedo,
    )
