"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate every field declared by the package modules.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear the kernel-side scene and reset render settings around each test."""
    # Import here so Taichi is initialized first
    from spheretrace.core.integrator import AbsorptionPolicy, set_absorption_policy
    from spheretrace.core.sampler import seed_sampler
    from spheretrace.scene.world import clear_world

    def _clear_all():
        clear_world()
        set_absorption_policy(AbsorptionPolicy.BLACK)
        seed_sampler(0)

    _clear_all()

    yield

    _clear_all()
