"""Ray data structure and vector utilities used inside Taichi kernels.

Everything here is a ``@ti.func`` (or a Taichi dataclass) so it can be
inlined into the rendering kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> # Inside a kernel: point = ray_at(ray, 5.0)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not required to be
            unit length; camera rays in particular are not normalized.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector."""
    return tm.dot(v, v)


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Normalize a vector to unit length."""
    return v / tm.length(v)


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Used to catch degenerate scatter directions.

    Args:
        v: The vector to check.

    Returns:
        1 if every component is below 1e-8 in magnitude, 0 otherwise.
    """
    s = 1e-8
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


@ti.func
def reflect(v: vec3, normal: vec3) -> vec3:
    """Reflect a vector about a normal.

    Args:
        v: The incoming direction (pointing toward the surface).
        normal: The unit surface normal.

    Returns:
        v - 2 (v . n) n
    """
    return v - 2.0 * tm.dot(v, normal) * normal


@ti.func
def refract(uv: vec3, normal: vec3, etai_over_etat: ti.f32) -> vec3:
    """Refract a unit vector through a surface using Snell's law.

    The refracted ray is built from its components perpendicular and
    parallel to the normal. The caller is responsible for ruling out total
    internal reflection first.

    Args:
        uv: The unit incoming direction.
        normal: The unit surface normal, facing against ``uv``.
        etai_over_etat: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction.
    """
    cos_theta = tm.min(tm.dot(-uv, normal), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * normal)
    r_out_parallel = -ti.sqrt(ti.abs(1.0 - length_squared(r_out_perp))) * normal
    return r_out_perp + r_out_parallel


@ti.func
def schlick_reflectance(cosine: ti.f32, refraction_ratio: ti.f32) -> ti.f32:
    """Angle-dependent reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between the incoming ray and the normal.
        refraction_ratio: Ratio of refractive indices at the boundary.

    Returns:
        r0 + (1 - r0)(1 - cosine)^5 where r0 = ((1 - ratio) / (1 + ratio))^2.
    """
    r0 = (1.0 - refraction_ratio) / (1.0 + refraction_ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)
