"""Material models for light scattering.

Components:
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like refraction with Schlick reflectance
    material: The material table and scatter dispatch

Each material provides a host-side frozen dataclass (the material's
parameters, shareable across spheres) and a ``@ti.func`` scatter function
returning a ``ScatterRecord``.
"""

from .base import MaterialKind, ScatterRecord
from .dielectric import Dielectric, scatter_dielectric
from .lambertian import Lambertian, scatter_lambertian
from .material import (
    MAX_MATERIALS,
    Material,
    add_material,
    clear_materials,
    get_material_count,
    scatter,
)
from .metal import Metal, scatter_metal

__all__ = [
    "MaterialKind",
    "ScatterRecord",
    "Material",
    "Lambertian",
    "Metal",
    "Dielectric",
    "scatter",
    "scatter_lambertian",
    "scatter_metal",
    "scatter_dielectric",
    "add_material",
    "clear_materials",
    "get_material_count",
    "MAX_MATERIALS",
]
