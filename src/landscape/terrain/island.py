"""Island shaping: radial falloff toward the grid edge."""

import numpy as np
from numpy.typing import NDArray


def radial_mask(size: int) -> NDArray[np.float32]:
    """Compute the linear radial falloff mask.

    The mask is 1 at the grid centre and reaches 0 at normalized distance
    1.0, which is the grid edge along an axis.

    Args:
        size: Grid size in cells per side.

    Returns:
        2D array of shape (size, size) indexed [z, x], values in [0, 1].
    """
    center = size / 2
    coords = np.arange(size, dtype=np.float64)
    zz, xx = np.meshgrid(coords, coords, indexing="ij")

    dist = np.sqrt((xx - center) ** 2 + (zz - center) ** 2) / center
    return np.maximum(0.0, 1.0 - dist).astype(np.float32)


def apply_radial_falloff(heights: NDArray[np.float32]) -> NDArray[np.float32]:
    """Scale heights by the radial mask so the edges sink to zero.

    Args:
        heights: Square height field.

    Returns:
        New height field with falloff applied.
    """
    size = heights.shape[0]
    return (heights * radial_mask(size)).astype(np.float32)
