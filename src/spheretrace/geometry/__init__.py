"""Geometry module: the sphere primitive and its intersection routine.

Ray-object intersection follows the pattern:
    record = hit_sphere(ray, sphere, interval)

where ``record.hit`` tells whether a root was found strictly inside the
interval.
"""

from .sphere import HitRecord, Sphere, SphereData, hit_sphere, make_miss_record, make_sphere

__all__ = [
    "Sphere",
    "SphereData",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
    "make_miss_record",
]
