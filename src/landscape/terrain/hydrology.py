"""Hydrology: peak detection and steepest-descent river tracing."""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from .config import RiverConfig

# 4-neighbourhood offsets as (dx, dz): E, W, S, N
NEIGHBOR_DX = (1, -1, 0, 0)
NEIGHBOR_DZ = (0, 0, 1, -1)


@dataclass
class RiverTrace:
    """Represents a traced river with its carved height field."""

    path: list[tuple[int, int]]  # (x, z) coordinates, source first
    mouth: tuple[int, int]  # (x, z) where the walk stopped
    heights: NDArray[np.float32]  # Height field after carving
    reached_sea: bool = False  # Stopped on a first visit to a cell at or below sea level
    fallback_steps: list[int] = field(default_factory=list)  # Path indices left diagonally

    @property
    def midpoint(self) -> tuple[int, int] | None:
        """Path cell at index len(path) // 2, or None for an empty path."""
        if not self.path:
            return None
        return self.path[len(self.path) // 2]


def find_peak(heights: NDArray[np.float32]) -> tuple[int, int]:
    """Find the highest cell.

    Ties resolve to the first cell in row-major scan order (z outer, x inner).

    Args:
        heights: Height field indexed [z, x].

    Returns:
        (x, z) of the peak.
    """
    size = heights.shape[1]
    flat_index = int(np.argmax(heights))
    return flat_index % size, flat_index // size


def _in_interior(x: int, z: int, size: int) -> bool:
    """True while the walk may continue from (x, z)."""
    return 1 < x < size - 1 and 1 < z < size - 1


def _step_toward_center(coord: int, size: int) -> int:
    center = size // 2
    return coord + 1 if coord < center else coord - 1


def trace_river(
    heights: NDArray[np.float32],
    source: tuple[int, int],
    config: RiverConfig | None = None,
    max_length: int | None = None,
) -> RiverTrace:
    """Trace a river downhill from source, carving its bed.

    Each recorded cell is carved to sea_level - carve_depth. The walk stops
    when a cell was already at or below sea level, when the position leaves
    the interior (1 < coord < size - 1), or after max_length cells. A diagonal
    step back onto a carved cell records it a second time and stops the walk
    with reached_sea False. From each cell it moves to the lowest axis
    neighbour off the outer ring and off the path if that neighbour is
    strictly lower, otherwise one step diagonally toward the grid centre.

    Args:
        heights: Height field indexed [z, x]. Not modified.
        source: (x, z) start cell, normally the peak.
        config: River parameters (defaults to RiverConfig()).
        max_length: Maximum recorded cells (defaults to 2 * size).

    Returns:
        RiverTrace with the path, final position and carved heights.
    """
    if config is None:
        config = RiverConfig()
    size = heights.shape[0]
    if max_length is None:
        max_length = 2 * size

    carved = heights.copy()
    carved_level = np.float32(config.sea_level - config.carve_depth)

    path: list[tuple[int, int]] = []
    visited: set[tuple[int, int]] = set()
    fallback_steps: list[int] = []
    reached_sea = False
    x, z = source

    while _in_interior(x, z, size) and len(path) < max_length:
        current = float(carved[z, x])
        revisit = (x, z) in visited
        path.append((x, z))
        visited.add((x, z))
        carved[z, x] = carved_level

        # A revisited cell reads as already carved, not as sea
        if current <= config.sea_level:
            reached_sea = not revisit
            break

        best: tuple[int, int] | None = None
        best_height = current
        for dx, dz in zip(NEIGHBOR_DX, NEIGHBOR_DZ):
            nx, nz = x + dx, z + dz
            if not (0 < nx < size - 1 and 0 < nz < size - 1):
                continue
            if (nx, nz) in visited:
                continue
            neighbor_height = float(carved[nz, nx])
            if neighbor_height < best_height:
                best = (nx, nz)
                best_height = neighbor_height

        if best is not None:
            x, z = best
        else:
            # Local pit: nudge toward the centre
            fallback_steps.append(len(path) - 1)
            x = _step_toward_center(x, size)
            z = _step_toward_center(z, size)

    return RiverTrace(
        path=path,
        mouth=(x, z),
        heights=carved,
        reached_sea=reached_sea,
        fallback_steps=fallback_steps,
    )
