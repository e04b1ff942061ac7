"""Core types shared by the synthesizer and the GLB encoder."""

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel


class InterestKind(str, Enum):
    """Category tag of an interest point."""

    MOUNTAIN = "mountain"
    RIVER_MOUTH = "river_mouth"
    FOREST = "forest"


class InterestPoint(BaseModel, frozen=True):
    """Immutable grid coordinate with a category tag."""

    x: int
    z: int
    kind: InterestKind

    def to_dict(self) -> dict[str, int | str]:
        """Return the {x, z, kind} JSON object shape."""
        return {"x": self.x, "z": self.z, "kind": self.kind.value}

    def __str__(self) -> str:
        return f"{self.kind.value}({self.x}, {self.z})"


@dataclass(frozen=True, eq=False)
class Mesh:
    """Dense grid mesh with flat position and index arrays.

    positions holds (x, height, z) triples flattened into one float32 array,
    indices holds uint32 triangle corners, three per triangle.
    """

    positions: NDArray[np.float32]
    indices: NDArray[np.uint32]

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3
