"""Gradient noise and fractal summation for height synthesis.

The noise field is classic 2D Perlin noise: a seeded permutation table picks
one of eight gradients at every lattice corner and the corner contributions
are blended with a quintic fade curve.
"""

from typing import Protocol

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Eight unit-ish gradient directions (axis and diagonal)
GRADIENTS = np.array(
    [
        [1.0, 1.0],
        [-1.0, 1.0],
        [1.0, -1.0],
        [-1.0, -1.0],
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
    ],
    dtype=np.float64,
)

TABLE_SIZE = 256


class NoiseField(Protocol):
    """Deterministic coherent noise sampled at real coordinates."""

    def __call__(self, x: ArrayLike, z: ArrayLike) -> NDArray[np.float64]: ...


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


class GradientNoise:
    """Seeded 2D gradient noise with values in [-1, 1].

    The same seed and coordinates always give the same value.
    """

    def __init__(self, seed: int):
        self.seed = seed
        rng = np.random.default_rng(seed)
        perm = rng.permutation(TABLE_SIZE).astype(np.int64)
        # Doubled so corner lookups never need a wrap
        self._perm = np.concatenate([perm, perm])

    def _corner(
        self,
        xi: NDArray[np.int64],
        zi: NDArray[np.int64],
        dx: NDArray[np.float64],
        dz: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Dot product of the corner gradient with the offset to the sample."""
        h = self._perm[self._perm[xi & 255] + (zi & 255)] & 7
        return GRADIENTS[h, 0] * dx + GRADIENTS[h, 1] * dz

    def __call__(self, x: ArrayLike, z: ArrayLike) -> NDArray[np.float64]:
        x = np.asarray(x, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)

        x0 = np.floor(x)
        z0 = np.floor(z)
        fx = x - x0
        fz = z - z0
        xi = x0.astype(np.int64)
        zi = z0.astype(np.int64)

        n00 = self._corner(xi, zi, fx, fz)
        n10 = self._corner(xi + 1, zi, fx - 1.0, fz)
        n01 = self._corner(xi, zi + 1, fx, fz - 1.0)
        n11 = self._corner(xi + 1, zi + 1, fx - 1.0, fz - 1.0)

        u = _fade(fx)
        v = _fade(fz)
        nx0 = n00 + u * (n10 - n00)
        nx1 = n01 + u * (n11 - n01)
        return np.clip(nx0 + v * (nx1 - nx0), -1.0, 1.0)


def fbm_heights(
    size: int,
    scale: float,
    noise: NoiseField,
    octaves: int = 4,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> NDArray[np.float32]:
    """Sum octaves of noise over a size x size grid.

    Octave i samples at frequency scale * lacunarity**i and is weighted by
    gain**i. The sum is not normalized.

    Args:
        size: Grid size in cells per side.
        scale: Base frequency per grid step.
        noise: Noise field to sample.
        octaves: Number of noise layers to sum.
        lacunarity: Frequency multiplier between octaves.
        gain: Amplitude multiplier between octaves.

    Returns:
        2D array of shape (size, size) indexed [z, x].
    """
    zs, xs = np.meshgrid(
        np.arange(size, dtype=np.float64),
        np.arange(size, dtype=np.float64),
        indexing="ij",
    )
    result = np.zeros((size, size), dtype=np.float64)

    frequency = scale
    amplitude = 1.0
    for _ in range(octaves):
        result += amplitude * noise(xs * frequency, zs * frequency)
        frequency *= lacunarity
        amplitude *= gain

    return result.astype(np.float32)
