"""Scene module: the sphere world and the default scene.

Components:
    world: Host-side World container, kernel-side sphere fields and the
        nearest-hit query
    default_scene: The default five-sphere scene and camera

Both modules declare or depend on Taichi fields; import them after
``ti.init``.
"""
