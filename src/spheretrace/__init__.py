"""Taichi-based CPU path tracer for scenes made of spheres.

Renders a still image of spheres lit by a sky gradient, using recursive
(depth-bounded) material scattering and multi-sample antialiasing.

Subpackages:
    core: Rays, intervals, the seedable sampler, and the ray-color integrator
    geometry: Sphere primitive and ray-sphere intersection
    materials: Lambertian, metal, and dielectric scattering
    scene: The sphere world and the default scene
    camera: Viewport derivation, jittered ray generation, and rendering
    output: Gamma/clamp conversion and PPM/PNG image writing

Taichi must be initialized (``ti.init``) before importing the subpackages
that declare Taichi fields (scene, materials, camera, core.sampler).
"""

__version__ = "0.1.0"
