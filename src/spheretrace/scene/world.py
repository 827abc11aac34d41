"""The scene: an ordered collection of spheres and nearest-hit queries.

``World`` is the host-side container. Rendering reads the scene from
module-level Taichi fields in a Structure-of-Arrays layout; ``World.upload``
writes a world into those fields, so only one world is visible to the
kernels at a time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.world import World
    >>> from spheretrace.geometry import Sphere
    >>> from spheretrace.materials import Dielectric
    >>> glass = Dielectric(1.5)
    >>> world = World()
    >>> world.add(Sphere((-1.0, 0.0, -1.0), 0.5, glass))
    >>> world.add(Sphere((-1.0, 0.0, -1.0), 0.4, Dielectric(1.0 / 1.5)))
    >>> world.upload()
    >>> # Inside a kernel: rec = hit_world(ray, interval)
"""

import logging
from collections.abc import Iterator

import taichi as ti
import taichi.math as tm

from spheretrace.core.interval import Interval
from spheretrace.core.ray import Ray
from spheretrace.geometry.sphere import HitRecord, Sphere, SphereData, hit_sphere, make_miss_record
from spheretrace.materials.material import Material, add_material, clear_materials

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_world() -> None:
    """Remove every sphere and material from the kernel-side scene."""
    num_spheres[None] = 0
    clear_materials()


def get_sphere_count() -> int:
    """Get the number of spheres visible to the kernels."""
    return int(num_spheres[None])


def _write_sphere(center: tuple[float, float, float], radius: float, material_id: int) -> int:
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = vec3(center[0], center[1], center[2])
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


class World:
    """Insertion-ordered collection of spheres.

    Materials are shared by identity: spheres holding the same material
    object get the same material id on upload, while two equal but distinct
    material objects get separate entries.

    Attributes:
        spheres: The spheres, in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty world."""
        self.spheres: list[Sphere] = []

    def add(self, sphere: Sphere) -> None:
        """Append a sphere to the world."""
        self.spheres.append(sphere)

    def clear(self) -> None:
        """Remove all spheres."""
        self.spheres.clear()

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.spheres)

    def materials(self) -> list[Material]:
        """Distinct material objects, in order of first use."""
        seen: dict[int, Material] = {}
        for sphere in self.spheres:
            seen.setdefault(id(sphere.material), sphere.material)
        return list(seen.values())

    def upload(self) -> None:
        """Replace the kernel-side scene with this world's spheres.

        Raises:
            RuntimeError: If the world holds more spheres or distinct
                materials than the fields can store.
        """
        clear_world()
        material_ids: dict[int, int] = {}
        for sphere in self.spheres:
            key = id(sphere.material)
            if key not in material_ids:
                material_ids[key] = add_material(sphere.material)
            _write_sphere(sphere.center, sphere.radius, material_ids[key])

        logger.debug(
            "Uploaded %d spheres with %d materials", len(self.spheres), len(material_ids)
        )

    def __repr__(self) -> str:
        return f"World(spheres={len(self.spheres)})"


@ti.func
def hit_world(ray: Ray, interval: Interval) -> HitRecord:
    """Find the nearest intersection of a ray with the uploaded spheres.

    Scans the spheres in order, shrinking the upper bound to each accepted
    hit so that later spheres only count if they are strictly closer.

    Args:
        ray: The ray to trace.
        interval: Open range of acceptable ray parameters.

    Returns:
        The nearest HitRecord, or a miss record if nothing was hit.
    """
    closest = interval.hi
    result = make_miss_record()

    for i in range(num_spheres[None]):
        sphere = SphereData(
            center=sphere_centers[i],
            radius=sphere_radii[i],
            material_id=sphere_material_ids[i],
        )
        rec = hit_sphere(ray, sphere, Interval(lo=interval.lo, hi=closest))
        if rec.hit == 1:
            closest = rec.t
            result = rec

    return result
