"""Seedable uniform sampler for use inside Taichi kernels.

``ti.random`` can only be seeded once per Taichi runtime (through
``ti.init``), which makes two renders in one process produce different
images. This module keeps its own xorshift32 state in a Taichi field instead,
so every render can be reseeded and replayed exactly. Pixel loops are
serialized, so a single shared state is enough.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.sampler import seed_sampler, random_float
    >>> seed_sampler(1234)
    >>> # Inside a kernel: u = random_float()  # uniform in [0, 1)
"""

import numpy as np
import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import length_squared

vec3 = tm.vec3

# Used when the seed sequence yields zero, which would lock xorshift at zero.
_FALLBACK_STATE = 0x9E3779B9

# 24 bits of mantissa give evenly spaced floats in [0, 1).
_INV_2_POW_24 = 1.0 / 16777216.0

_rng_state = ti.field(dtype=ti.u32, shape=())


def seed_sampler(seed: int | None = None) -> None:
    """Reset the generator state from a seed.

    Args:
        seed: Any non-negative integer. ``None`` draws fresh entropy from
            the operating system, giving a non-reproducible stream.
    """
    state = int(np.random.SeedSequence(seed).generate_state(1, dtype=np.uint32)[0])
    if state == 0:
        state = _FALLBACK_STATE
    _rng_state[None] = state


def get_sampler_state() -> int:
    """Return the raw generator state (changes on every draw)."""
    return int(_rng_state[None])


@ti.func
def _next_u32() -> ti.u32:
    x = _rng_state[None]
    x ^= x << ti.u32(13)
    x ^= x >> ti.u32(17)
    x ^= x << ti.u32(5)
    _rng_state[None] = x
    return x


@ti.func
def random_float() -> ti.f32:
    """Uniform float in [0, 1)."""
    return ti.cast(_next_u32() >> ti.u32(8), ti.f32) * _INV_2_POW_24


@ti.func
def random_range(lo: ti.f32, hi: ti.f32) -> ti.f32:
    """Uniform float in [lo, hi)."""
    return lo + (hi - lo) * random_float()


@ti.func
def sample_square() -> vec3:
    """Random offset in the unit square centered on the origin.

    Returns:
        (x, y, 0) with x and y uniform in [-0.5, 0.5).
    """
    return vec3(random_float() - 0.5, random_float() - 0.5, 0.0)


@ti.func
def random_unit_vector() -> vec3:
    """Generate a random unit vector uniformly distributed on the sphere.

    Rejection-samples points in the cube [-1, 1)^3 until one falls inside
    the unit ball (and is not vanishingly close to the center), then
    normalizes it.

    Returns:
        A random unit vector.
    """
    p = vec3(0.0, 0.0, 1.0)
    found = False
    # Rejection sampling loop
    for _ in range(100):  # Max iterations to avoid infinite loops
        if not found:
            candidate = vec3(
                random_range(-1.0, 1.0),
                random_range(-1.0, 1.0),
                random_range(-1.0, 1.0),
            )
            len_sq = length_squared(candidate)
            if 1e-30 < len_sq and len_sq <= 1.0:
                p = candidate / ti.sqrt(len_sq)
                found = True
    return p
