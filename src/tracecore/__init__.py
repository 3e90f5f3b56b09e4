"""Geometric core of a Taichi path tracer.

Given a ray and a scene of primitive shapes, this package finds the nearest
valid intersection, computes its surface attributes and decides how the ray
scatters off the hit material. Everything below runs as Taichi functions so a
renderer can call it from its own kernels on CPU or GPU.

Subpackages:
    core: Rays, vector helpers, intervals and intersection counters
    geometry: Hit records, bounding boxes, spheres, quads and the Shape type
    materials: Textures, Lambertian scattering and the Material type
    scene: Objects (shape + material) and the world registry

Call ``tracecore.config.init_tracer`` before importing ``core.stats`` or
``scene.world``; both declare Taichi fields.
"""

__version__ = "0.1.0"
