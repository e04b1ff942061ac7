"""Persistence of generated containers and interest points."""

import json
from pathlib import Path

import structlog

from ..types import InterestKind, InterestPoint

logger = structlog.get_logger()


def save_glb(path: Path, data: bytes) -> None:
    """Write a GLB container to disk, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("glb_saved", path=str(path), bytes=len(data))


def save_interest_points(path: Path, points: list[InterestPoint]) -> None:
    """Save interest points as a JSON array of {x, z, kind} objects.

    Args:
        path: Output path (should end with .json).
        points: Interest points from one generation.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([point.to_dict() for point in points], indent=2))
    logger.info("interest_points_saved", path=str(path), count=len(points))


def load_interest_points(path: Path) -> list[InterestPoint]:
    """Load interest points saved by save_interest_points.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If the file is not a list of {x, z, kind} objects.
    """
    if not path.exists():
        raise FileNotFoundError(f"Interest point file not found: {path}")

    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError(f"Invalid interest point file: expected a list, got {type(data).__name__}")

    try:
        return [
            InterestPoint(x=item["x"], z=item["z"], kind=InterestKind(item["kind"]))
            for item in data
        ]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid interest point entry: {e}") from e
