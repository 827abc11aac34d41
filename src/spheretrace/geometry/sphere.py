"""Sphere primitive and ray-sphere intersection.

The host-side ``Sphere`` describes a sphere in a scene (center, radius and a
shared material object). The kernel-side ``SphereData`` carries the same
geometry with the material replaced by its index in the material table.

Intersection solves |origin + t * dir - center|^2 = r^2 with the half-b
substitution h = dir . (center - origin), which removes the factor of two
from the discriminant:

    a = dir . dir
    h = dir . (center - origin)
    c = |center - origin|^2 - r^2
    disc = h^2 - a * c
    t = (h -/+ sqrt(disc)) / a

Example:
    >>> from spheretrace.geometry.sphere import Sphere
    >>> from spheretrace.materials import Lambertian
    >>> ball = Sphere(center=(0.0, 0.0, -1.0), radius=0.5,
    ...               material=Lambertian(albedo=(0.1, 0.2, 0.5)))
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import taichi as ti
import taichi.math as tm

from spheretrace.core.interval import Interval, interval_surrounds
from spheretrace.core.ray import Ray, length_squared, ray_at

if TYPE_CHECKING:
    from spheretrace.materials.material import Material

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@dataclass(frozen=True)
class Sphere:
    """A sphere in a scene.

    Attributes:
        center: The center point (x, y, z).
        radius: The radius. Negative values are clamped to zero.
        material: The material of the surface. The same material object may
            be shared by any number of spheres.
    """

    center: tuple[float, float, float]
    radius: float
    material: "Material"

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", tuple(float(c) for c in self.center))
        object.__setattr__(self, "radius", max(0.0, float(self.radius)))


@ti.dataclass
class SphereData:
    """Kernel-side sphere.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (non-negative).
        material_id: Index of the sphere's material in the material table.
    """

    center: vec3
    radius: ti.f32
    material_id: ti.i32


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: 1 if the ray intersected the surface, 0 on a miss. The other
            fields are only meaningful when hit == 1.
        t: The ray parameter of the intersection.
        point: The intersection point.
        normal: Unit surface normal, always facing against the ray.
        front_face: 1 if the ray struck the outside of the surface, 0 if it
            struck from inside.
        material_id: Material table index of the struck surface (-1 on a
            miss).
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    front_face: ti.i32
    material_id: ti.i32


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        material_id=-1,
    )


@ti.func
def make_sphere(center: vec3, radius: ti.f32, material_id: ti.i32) -> SphereData:
    """Create a kernel-side sphere, clamping a negative radius to zero."""
    return SphereData(center=center, radius=tm.max(radius, 0.0), material_id=material_id)


@ti.func
def hit_sphere(ray: Ray, sphere: SphereData, interval: Interval) -> HitRecord:
    """Test a ray against a sphere.

    The nearer root is tried first; the first root lying strictly inside
    ``interval`` is reported. A ray starting inside the sphere therefore
    reports the far wall, with ``front_face == 0`` and the normal flipped to
    face back along the ray.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.
        interval: Open range of acceptable ray parameters.

    Returns:
        A HitRecord; check its ``hit`` field.
    """
    oc = sphere.center - ray.origin
    a = length_squared(ray.direction)
    h = tm.dot(ray.direction, oc)
    c = length_squared(oc) - sphere.radius * sphere.radius
    discriminant = h * h - a * c

    result = make_miss_record()

    # A zero-radius sphere has no surface normal, so it is never hit
    if discriminant >= 0.0 and sphere.radius > 0.0:
        sqrt_d = ti.sqrt(discriminant)

        root = (h - sqrt_d) / a
        valid = interval_surrounds(interval, root)
        if not valid:
            root = (h + sqrt_d) / a
            valid = interval_surrounds(interval, root)

        if valid:
            point = ray_at(ray, root)
            outward_normal = (point - sphere.center) / sphere.radius

            # Front face: ray direction opposes the outward normal
            front_face = 1
            normal = outward_normal
            if tm.dot(ray.direction, outward_normal) >= 0.0:
                front_face = 0
                normal = -outward_normal

            result = HitRecord(
                hit=1,
                t=root,
                point=point,
                normal=normal,
                front_face=front_face,
                material_id=sphere.material_id,
            )

    return result
