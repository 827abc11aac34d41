"""Material table and scatter dispatch.

Materials live in a tagged-union table of Taichi fields: every entry stores
its ``MaterialKind`` plus the parameters of all three kinds (unused ones stay
zero). A sphere refers to its material by table index, so one material can
be shared by any number of spheres.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.materials.material import add_material
    >>> from spheretrace.materials import Dielectric
    >>> glass_id = add_material(Dielectric(1.5))
    >>> # Inside a kernel: rec = scatter(glass_id, ray, hit)
"""

from typing import Union

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray
from spheretrace.geometry.sphere import HitRecord
from spheretrace.materials.base import MaterialKind, ScatterRecord
from spheretrace.materials.dielectric import Dielectric, scatter_dielectric
from spheretrace.materials.lambertian import Lambertian, scatter_lambertian
from spheretrace.materials.metal import Metal, scatter_metal

vec3 = tm.vec3

Material = Union[Lambertian, Metal, Dielectric]

# Maximum number of distinct materials in the scene
MAX_MATERIALS = 256

# Tagged-union storage, indexed by material id
material_kinds = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_fuzz = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_refraction_indices = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear the material table.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material: Material) -> int:
    """Append a material to the table.

    Args:
        material: A Lambertian, Metal, or Dielectric instance.

    Returns:
        The material id to store on spheres using this material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        TypeError: If ``material`` is not a known material type.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    albedo = (0.0, 0.0, 0.0)
    fuzz = 0.0
    refraction_index = 0.0
    if isinstance(material, Lambertian):
        albedo = material.albedo
    elif isinstance(material, Metal):
        albedo = material.albedo
        fuzz = material.fuzz
    elif isinstance(material, Dielectric):
        refraction_index = material.refraction_index
    else:
        raise TypeError(f"Unsupported material type: {type(material).__name__}")

    material_kinds[idx] = int(material.kind)
    material_albedos[idx] = vec3(albedo[0], albedo[1], albedo[2])
    material_fuzz[idx] = fuzz
    material_refraction_indices[idx] = refraction_index
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the table."""
    return int(num_materials[None])


@ti.func
def get_material_kind(material_id: ti.i32) -> ti.i32:
    """Get the MaterialKind of a table entry, or -1 for an invalid id."""
    result = -1
    if 0 <= material_id < num_materials[None]:
        result = material_kinds[material_id]
    return result


@ti.func
def scatter(material_id: ti.i32, ray_in: Ray, hit: HitRecord) -> ScatterRecord:
    """Dispatch to the scatter function of the material's kind.

    Args:
        material_id: Index into the material table.
        ray_in: The incoming ray.
        hit: The intersection being shaded.

    Returns:
        The material's ScatterRecord. An invalid id absorbs the ray.
    """
    kind = get_material_kind(material_id)

    result = ScatterRecord(
        scattered=0,
        ray=ray_in,
        attenuation=vec3(0.0, 0.0, 0.0),
    )

    if kind == int(MaterialKind.LAMBERTIAN):
        result = scatter_lambertian(material_albedos[material_id], hit)
    elif kind == int(MaterialKind.METAL):
        result = scatter_metal(
            material_albedos[material_id], material_fuzz[material_id], ray_in, hit
        )
    elif kind == int(MaterialKind.DIELECTRIC):
        result = scatter_dielectric(material_refraction_indices[material_id], ray_in, hit)

    return result
