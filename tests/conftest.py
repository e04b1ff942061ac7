"""Shared test fixtures for landscape tests."""

import numpy as np
import pytest

from landscape.terrain import GenerationResult, TerrainConfig, generate_terrain


@pytest.fixture
def slope_heights() -> np.ndarray:
    """10x10 field rising with x, below sea level for x <= 2.

    heights[z, x] = 0.1 * x - 0.25, so a walk from the east runs west.
    """
    xs = np.arange(10, dtype=np.float32)
    return np.tile(xs * np.float32(0.1) - np.float32(0.25), (10, 1)).astype(np.float32)


@pytest.fixture
def pit_heights() -> np.ndarray:
    """10x10 plateau with a single pit at (x=3, z=3)."""
    heights = np.ones((10, 10), dtype=np.float32)
    heights[3, 3] = 0.5
    return heights


@pytest.fixture
def small_result() -> GenerationResult:
    """32x32 island generated with a fixed seed."""
    return generate_terrain(TerrainConfig(size=32, scale=0.1, seed=7))
