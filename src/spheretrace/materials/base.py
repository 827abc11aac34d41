"""Types shared by every material model."""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray

vec3 = tm.vec3


class MaterialKind(IntEnum):
    """Tag selecting the scatter function for a material table entry."""

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


@ti.dataclass
class ScatterRecord:
    """Outcome of scattering a ray off a surface.

    Attributes:
        scattered: 1 if the material produced an outgoing ray, 0 if it
            absorbed the incoming one.
        ray: The outgoing ray (only meaningful when scattered == 1).
        attenuation: Per-channel color multiplier for the outgoing ray.
    """

    scattered: ti.i32
    ray: Ray
    attenuation: vec3


def validate_color(name: str, color: tuple[float, float, float]) -> None:
    """Check that a reflectance color is a 3-tuple with components in [0, 1].

    Raises:
        ValueError: If the color has the wrong length or a component would
            add energy to the scene.
    """
    if len(color) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(color)}")
    for i, component in enumerate(color):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"{name} component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
