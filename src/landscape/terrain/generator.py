"""Main terrain generation orchestration."""

import numpy as np
import structlog
from numpy.typing import NDArray

from ..glb import encode
from ..types import InterestKind, InterestPoint, Mesh
from .config import TerrainConfig
from .hydrology import RiverTrace, find_peak, trace_river
from .island import apply_radial_falloff
from .mesh import build_mesh
from .noise import GradientNoise, fbm_heights
from .validation import validate_interest_points, validate_mesh, validate_parameters

logger = structlog.get_logger()


class GenerationResult:
    """Result of terrain generation with all intermediate data."""

    def __init__(
        self,
        config: TerrainConfig,
        raw_heights: NDArray[np.float32],
        heights: NDArray[np.float32],
        peak: tuple[int, int],
        river: RiverTrace,
        mesh: Mesh,
        interest_points: list[InterestPoint],
    ):
        self.config = config
        self.raw_heights = raw_heights
        self.heights = heights
        self.peak = peak
        self.river = river
        self.mesh = mesh
        self.interest_points = interest_points

    @property
    def carved_heights(self) -> NDArray[np.float32]:
        return self.river.heights


def place_interest_points(
    peak: tuple[int, int],
    river: RiverTrace,
) -> list[InterestPoint]:
    """Derive mountain, river mouth and forest points from the river walk."""
    points = [
        InterestPoint(x=peak[0], z=peak[1], kind=InterestKind.MOUNTAIN),
        InterestPoint(x=river.mouth[0], z=river.mouth[1], kind=InterestKind.RIVER_MOUTH),
    ]
    forest = river.midpoint
    if forest is not None:
        points.append(InterestPoint(x=forest[0], z=forest[1], kind=InterestKind.FOREST))
    return points


def generate_terrain(config: TerrainConfig) -> GenerationResult:
    """Generate the island mesh and interest points from configuration.

    Args:
        config: Terrain generation configuration.

    Returns:
        GenerationResult with mesh, interest points and intermediate fields.

    Raises:
        InvalidParameterError: If size, scale or seed are out of range.
    """
    validate_parameters(
        config.size,
        config.scale,
        config.seed,
        octaves=config.noise.octaves,
        lacunarity=config.noise.lacunarity,
    )
    size = config.size

    logger.debug("height_synthesis_started", size=size, scale=config.scale, seed=config.seed)
    noise = GradientNoise(config.seed)
    raw_heights = fbm_heights(
        size,
        config.scale,
        noise,
        octaves=config.noise.octaves,
        lacunarity=config.noise.lacunarity,
        gain=config.noise.gain,
    )
    heights = apply_radial_falloff(raw_heights)

    peak = find_peak(heights)
    river = trace_river(heights, peak, config.river)
    logger.debug(
        "river_traced",
        peak=peak,
        mouth=river.mouth,
        length=len(river.path),
        reached_sea=river.reached_sea,
        fallback_steps=len(river.fallback_steps),
    )

    mesh = build_mesh(river.heights)
    interest_points = place_interest_points(peak, river)

    for check in (validate_mesh(mesh, size), validate_interest_points(interest_points)):
        for error in check.errors:
            logger.error("terrain_validation_error", error=error)
        for warning in check.warnings:
            logger.warning("terrain_validation_warning", warning=warning)

    logger.info(
        "terrain_generated",
        size=size,
        seed=config.seed,
        vertices=mesh.vertex_count,
        triangles=mesh.triangle_count,
        peak_height=float(heights[peak[1], peak[0]]),
    )

    return GenerationResult(
        config=config,
        raw_heights=raw_heights,
        heights=heights,
        peak=peak,
        river=river,
        mesh=mesh,
        interest_points=interest_points,
    )


def synthesize(size: int, scale: float, seed: int) -> tuple[Mesh, list[InterestPoint]]:
    """Synthesize an island mesh and its interest points.

    Deterministic for fixed (size, scale, seed).

    Raises:
        InvalidParameterError: If size < 2, scale <= 0 or either is out of range.
    """
    validate_parameters(size, scale, seed)
    config = TerrainConfig(size=int(size), scale=float(scale), seed=int(seed))
    result = generate_terrain(config)
    return result.mesh, result.interest_points


def generate(size: int, scale: float, seed: int) -> tuple[bytes, list[InterestPoint]]:
    """Synthesize terrain and pack it into a GLB container."""
    mesh, points = synthesize(size, scale, seed)
    return encode(mesh.positions, mesh.indices), points
