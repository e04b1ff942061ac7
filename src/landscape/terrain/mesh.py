"""Grid mesh emission from a height field."""

import numpy as np
from numpy.typing import NDArray

from ..types import Mesh


def build_positions(heights: NDArray[np.float32]) -> NDArray[np.float32]:
    """Flatten a height field into (x, height, z) triples.

    Vertices are emitted row-major: z outer, x inner.

    Args:
        heights: Height field indexed [z, x].

    Returns:
        Flat float32 array of length 3 * size**2.
    """
    rows, cols = heights.shape
    zz, xx = np.meshgrid(
        np.arange(rows, dtype=np.float32),
        np.arange(cols, dtype=np.float32),
        indexing="ij",
    )
    triples = np.stack([xx, heights.astype(np.float32), zz], axis=-1)
    return triples.reshape(-1)


def build_indices(size: int) -> NDArray[np.uint32]:
    """Build the triangle index list for a size x size vertex grid.

    For each quad with top-left vertex i = z * size + x the triangles are
    (i, i+1, i+size) and (i+1, i+size+1, i+size), quads in row-major order.

    Args:
        size: Vertices per side.

    Returns:
        Flat uint32 array of length 6 * (size - 1)**2.
    """
    if size < 2:
        return np.zeros(0, dtype=np.uint32)

    quads = size - 1
    z, x = np.meshgrid(
        np.arange(quads, dtype=np.int64),
        np.arange(quads, dtype=np.int64),
        indexing="ij",
    )
    i = (z * size + x).reshape(-1)
    triangles = np.stack(
        [i, i + 1, i + size, i + 1, i + size + 1, i + size],
        axis=-1,
    )
    return triangles.reshape(-1).astype(np.uint32)


def build_mesh(heights: NDArray[np.float32]) -> Mesh:
    """Build the dense grid mesh for a square height field."""
    return Mesh(
        positions=build_positions(heights),
        indices=build_indices(heights.shape[0]),
    )
