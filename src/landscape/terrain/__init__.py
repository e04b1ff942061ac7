"""Procedural island terrain synthesis.

This package builds a noise height field with a radial island falloff,
traces a river down from the highest peak and emits a dense grid mesh with
mountain, river mouth and forest interest points.
"""

from .config import NoiseConfig, RiverConfig, TerrainConfig, load_config
from .generator import GenerationResult, generate, generate_terrain, synthesize
from .hydrology import RiverTrace, find_peak, trace_river
from .persistence import load_interest_points, save_glb, save_interest_points
from .validation import (
    MAX_SIZE,
    ValidationResult,
    validate_interest_points,
    validate_mesh,
    validate_parameters,
)

__all__ = [
    "GenerationResult",
    "MAX_SIZE",
    "NoiseConfig",
    "RiverConfig",
    "RiverTrace",
    "TerrainConfig",
    "ValidationResult",
    "find_peak",
    "generate",
    "generate_terrain",
    "load_config",
    "load_interest_points",
    "save_glb",
    "save_interest_points",
    "synthesize",
    "trace_river",
    "validate_interest_points",
    "validate_mesh",
    "validate_parameters",
]
