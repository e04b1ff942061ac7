"""Input parameter checks and post-generation validation."""

import math
from collections import Counter

import numpy as np

from ..exceptions import InvalidParameterError
from ..types import InterestKind, InterestPoint, Mesh

MIN_SIZE = 2
# Keeps positions (12 * size**2 bytes) plus indices (24 * (size - 1)**2 bytes)
# inside the 32-bit GLB length fields.
MAX_SIZE = 10_000
MAX_SEED = 2**32 - 1
# Largest noise sample coordinate; beyond it floats lose integer precision
# and the lattice cast to int64 overflows.
MAX_SAMPLE_COORD = 2.0**53


def validate_parameters(
    size: int,
    scale: float,
    seed: int,
    octaves: int = 4,
    lacunarity: float = 2.0,
) -> None:
    """Reject generation parameters outside the supported domain.

    Args:
        size: Grid size, 2 <= size <= MAX_SIZE.
        scale: Noise frequency, finite and > 0.
        seed: Unsigned 32-bit seed.
        octaves: Octave count, used to bound the highest sample coordinate.
        lacunarity: Frequency multiplier per octave.

    Raises:
        InvalidParameterError: If any parameter is out of range.
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidParameterError(f"size must be an integer, got {size!r}")
    if size < MIN_SIZE:
        raise InvalidParameterError(f"size must be at least {MIN_SIZE}, got {size}")
    if size > MAX_SIZE:
        raise InvalidParameterError(f"size must be at most {MAX_SIZE}, got {size}")

    try:
        scale_value = float(scale)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"scale must be a number, got {scale!r}") from e
    if not math.isfinite(scale_value) or scale_value <= 0:
        raise InvalidParameterError(f"scale must be finite and > 0, got {scale}")

    try:
        max_coord = scale_value * float(lacunarity) ** max(int(octaves) - 1, 0) * int(size)
    except OverflowError:
        max_coord = math.inf
    if not max_coord < MAX_SAMPLE_COORD:
        raise InvalidParameterError(
            f"scale {scale} samples noise up to {max_coord:.3g}, limit is {MAX_SAMPLE_COORD:.3g}"
        )

    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidParameterError(f"seed must be an integer, got {seed!r}")
    if not 0 <= seed <= MAX_SEED:
        raise InvalidParameterError(f"seed must be in [0, {MAX_SEED}], got {seed}")


class ValidationResult:
    """Result of mesh validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_mesh(mesh: Mesh, size: int) -> ValidationResult:
    """Check a generated mesh against the grid invariants.

    Args:
        mesh: Generated mesh.
        size: Grid size it was built for.

    Returns:
        ValidationResult with any errors.
    """
    result = ValidationResult()
    vertex_count = size * size

    expected_positions = 3 * vertex_count
    if len(mesh.positions) != expected_positions:
        result.add_error(
            f"positions length {len(mesh.positions)}, expected {expected_positions}"
        )

    expected_indices = 6 * (size - 1) ** 2
    if len(mesh.indices) != expected_indices:
        result.add_error(
            f"indices length {len(mesh.indices)}, expected {expected_indices}"
        )

    if len(mesh.indices) > 0 and int(mesh.indices.max()) >= vertex_count:
        result.add_error(
            f"index {int(mesh.indices.max())} out of range for {vertex_count} vertices"
        )

    if len(mesh.positions) > 0 and not np.all(np.isfinite(mesh.positions)):
        result.add_error("positions contain non-finite values")

    return result


def validate_interest_points(points: list[InterestPoint]) -> ValidationResult:
    """Check the interest point categories of one generation.

    Expects exactly one mountain, one river mouth and at most one forest.
    """
    result = ValidationResult()
    counts = Counter(point.kind for point in points)

    if counts[InterestKind.MOUNTAIN] != 1:
        result.add_error(f"expected 1 mountain, found {counts[InterestKind.MOUNTAIN]}")
    if counts[InterestKind.RIVER_MOUTH] != 1:
        result.add_error(
            f"expected 1 river_mouth, found {counts[InterestKind.RIVER_MOUTH]}"
        )
    if counts[InterestKind.FOREST] > 1:
        result.add_error(f"expected at most 1 forest, found {counts[InterestKind.FOREST]}")
    elif counts[InterestKind.FOREST] == 0:
        result.add_warning("no forest: river path is empty")

    return result
