"""Island terrain synthesis and GLB export."""

from .exceptions import ContainerFormatError, InvalidParameterError, LandscapeError
from .glb import decode, encode
from .terrain import generate, synthesize
from .types import InterestKind, InterestPoint, Mesh

__all__ = [
    # Core operations
    "synthesize",
    "encode",
    "decode",
    "generate",
    # Types
    "InterestKind",
    "InterestPoint",
    "Mesh",
    # Exceptions
    "LandscapeError",
    "InvalidParameterError",
    "ContainerFormatError",
]
