"""Pytest configuration for tracecore tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest

from tracecore.config import TracerConfig, init_tracer


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate fields declared by modules imported earlier in the session.
    """
    init_tracer(TracerConfig(arch="cpu", random_seed=42))
    yield


@pytest.fixture(autouse=True)
def clear_world_state():
    """Clear the world and the intersection counters around each test."""
    # Import here so the field-declaring modules load after ti.init
    from tracecore.core.stats import reset_intersection_counts
    from tracecore.scene.world import clear_world

    clear_world()
    reset_intersection_counts()
    yield
    clear_world()
    reset_intersection_counts()
