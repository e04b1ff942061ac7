"""Terrain generation configuration models."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class NoiseConfig(BaseModel):
    """Fractal noise parameters for the height field."""

    octaves: int = Field(default=4, ge=1, description="Number of octaves for fBm")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    gain: float = Field(default=0.5, description="Amplitude multiplier per octave")


class RiverConfig(BaseModel):
    """River tracing parameters."""

    sea_level: float = Field(default=0.0, description="Height at which a river ends")
    carve_depth: float = Field(
        default=0.02, description="Depth below sea level that river cells are carved to"
    )


class TerrainConfig(BaseModel):
    """Complete terrain generation configuration."""

    size: int = Field(default=256, description="Grid size (vertices per side)")
    scale: float = Field(default=0.1, description="Base noise frequency per grid step")
    seed: int = Field(default=0, description="Noise seed (unsigned 32-bit)")

    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    river: RiverConfig = Field(default_factory=RiverConfig)


def load_config(config_path: Path) -> TerrainConfig:
    """Load terrain configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed TerrainConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return TerrainConfig.model_validate(data)
