"""Binary glTF (GLB) container packing for grid meshes.

A container is a 12-byte header followed by a JSON chunk describing the
scene and a BIN chunk holding the vertex positions and triangle indices.
All integers are little-endian.
"""

import json
import struct
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import ContainerFormatError, InvalidParameterError

# Four-character codes, read as little-endian uint32
GLB_MAGIC = 0x46546C67  # "glTF"
GLB_VERSION = 2
CHUNK_JSON = 0x4E4F534A  # "JSON"
CHUNK_BIN = 0x004E4942  # "BIN\0"

HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
MAX_CONTAINER_LENGTH = 0xFFFFFFFF

# glTF enumerations
TARGET_ARRAY_BUFFER = 34962
TARGET_ELEMENT_ARRAY_BUFFER = 34963
COMPONENT_FLOAT = 5126
COMPONENT_UNSIGNED_INT = 5125
MODE_TRIANGLES = 4

MESH_NAME = "LandscapeMesh"

_COMPONENT_DTYPES = {
    COMPONENT_FLOAT: np.dtype("<f4"),
    COMPONENT_UNSIGNED_INT: np.dtype("<u4"),
}
_TYPE_WIDTHS = {"SCALAR": 1, "VEC3": 3}


def _pad4(length: int) -> int:
    """Round a byte length up to the next multiple of 4."""
    return (length + 3) & ~3


def build_document(
    positions: NDArray[np.float32],
    pos_bytes: int,
    idx_bytes: int,
    index_count: int,
) -> dict[str, Any]:
    """Build the glTF JSON document for one indexed triangle mesh.

    Args:
        positions: Flat float32 position array (used for the count and bounds).
        pos_bytes: Byte length of the position data.
        idx_bytes: Byte length of the index data.
        index_count: Number of indices.

    Returns:
        JSON-serializable glTF document.
    """
    position_accessor: dict[str, Any] = {
        "bufferView": 0,
        "byteOffset": 0,
        "componentType": COMPONENT_FLOAT,
        "count": len(positions) // 3,
        "type": "VEC3",
    }
    if len(positions) > 0:
        triples = positions.reshape(-1, 3)
        position_accessor["min"] = [float(v) for v in triples.min(axis=0)]
        position_accessor["max"] = [float(v) for v in triples.max(axis=0)]

    return {
        "asset": {"version": "2.0"},
        "buffers": [{"byteLength": pos_bytes + idx_bytes}],
        "bufferViews": [
            {
                "buffer": 0,
                "byteOffset": 0,
                "byteLength": pos_bytes,
                "byteStride": 12,
                "target": TARGET_ARRAY_BUFFER,
            },
            {
                "buffer": 0,
                "byteOffset": pos_bytes,
                "byteLength": idx_bytes,
                "target": TARGET_ELEMENT_ARRAY_BUFFER,
            },
        ],
        "accessors": [
            position_accessor,
            {
                "bufferView": 1,
                "byteOffset": 0,
                "componentType": COMPONENT_UNSIGNED_INT,
                "count": index_count,
                "type": "SCALAR",
            },
        ],
        "meshes": [
            {
                "name": MESH_NAME,
                "primitives": [
                    {
                        "attributes": {"POSITION": 0},
                        "indices": 1,
                        "mode": MODE_TRIANGLES,
                    }
                ],
            }
        ],
        "nodes": [{"mesh": 0}],
        "scenes": [{"nodes": [0]}],
        "scene": 0,
    }


def encode(positions: ArrayLike, indices: ArrayLike) -> bytes:
    """Pack a mesh into a GLB container.

    Args:
        positions: Flat sequence of position floats, three per vertex.
        indices: Flat sequence of triangle indices.

    Returns:
        The complete container bytes.

    Raises:
        InvalidParameterError: If positions is not a whole number of triples,
            contains NaN or infinity, indices are negative, or the container
            would not fit the 32-bit length fields.
    """
    pos = np.ascontiguousarray(positions, dtype="<f4").reshape(-1)
    idx_source = np.asarray(indices).reshape(-1)
    if len(pos) % 3 != 0:
        raise InvalidParameterError(
            f"positions length {len(pos)} is not a multiple of 3"
        )
    if not np.all(np.isfinite(pos)):
        raise InvalidParameterError("positions must be finite")
    if len(idx_source) > 0 and np.issubdtype(idx_source.dtype, np.signedinteger):
        if idx_source.min() < 0:
            raise InvalidParameterError("indices must be non-negative")
    idx = np.ascontiguousarray(idx_source, dtype="<u4")

    pos_bytes = pos.nbytes
    idx_bytes = idx.nbytes
    bin_length = _pad4(pos_bytes + idx_bytes)

    document = build_document(pos, pos_bytes, idx_bytes, len(idx))
    json_bytes = json.dumps(document, separators=(",", ":")).encode("utf-8")
    json_length = _pad4(len(json_bytes))

    total_length = (
        HEADER_SIZE + CHUNK_HEADER_SIZE + json_length + CHUNK_HEADER_SIZE + bin_length
    )
    if total_length > MAX_CONTAINER_LENGTH:
        raise InvalidParameterError(
            f"container length {total_length} exceeds {MAX_CONTAINER_LENGTH} bytes"
        )

    parts = [
        struct.pack("<III", GLB_MAGIC, GLB_VERSION, total_length),
        struct.pack("<II", json_length, CHUNK_JSON),
        json_bytes.ljust(json_length, b" "),
        struct.pack("<II", bin_length, CHUNK_BIN),
        pos.tobytes(),
        idx.tobytes(),
        b"\x00" * (bin_length - pos_bytes - idx_bytes),
    ]
    return b"".join(parts)


def _read_chunk(data: bytes, offset: int, expected_type: int) -> tuple[bytes, int]:
    """Read one chunk starting at offset, returning (payload, next offset)."""
    if offset + CHUNK_HEADER_SIZE > len(data):
        raise ContainerFormatError(f"truncated chunk header at offset {offset}")
    length, chunk_type = struct.unpack_from("<II", data, offset)
    if chunk_type != expected_type:
        raise ContainerFormatError(
            f"expected chunk type 0x{expected_type:08X}, got 0x{chunk_type:08X}"
        )
    start = offset + CHUNK_HEADER_SIZE
    end = start + length
    if end > len(data):
        raise ContainerFormatError(
            f"chunk at offset {offset} declares {length} bytes past end of data"
        )
    return data[start:end], end


def _read_accessor(
    document: dict[str, Any],
    binary: bytes,
    accessor_index: int,
) -> NDArray:
    """Materialize one accessor as a flat array."""
    accessor = document["accessors"][accessor_index]
    view = document["bufferViews"][accessor["bufferView"]]
    dtype = _COMPONENT_DTYPES.get(accessor["componentType"])
    width = _TYPE_WIDTHS.get(accessor["type"])
    if dtype is None or width is None:
        raise ContainerFormatError(
            f"unsupported accessor {accessor['componentType']}/{accessor['type']}"
        )

    count = accessor["count"] * width
    if count == 0:
        return np.empty(0, dtype=dtype)
    start = view.get("byteOffset", 0) + accessor.get("byteOffset", 0)
    end = start + count * dtype.itemsize
    if end > view.get("byteOffset", 0) + view["byteLength"] or end > len(binary):
        raise ContainerFormatError(
            f"accessor {accessor_index} reads past its buffer view"
        )
    return np.frombuffer(binary, dtype=dtype, count=count, offset=start).copy()


def decode(data: bytes) -> tuple[NDArray[np.float32], NDArray[np.uint32]]:
    """Unpack positions and indices from a container produced by encode.

    Args:
        data: Container bytes.

    Returns:
        Tuple of (flat float32 positions, flat uint32 indices).

    Raises:
        ContainerFormatError: If the header, chunk layout or JSON document
            is not a single-mesh GLB.
    """
    if len(data) < HEADER_SIZE:
        raise ContainerFormatError(f"container too short: {len(data)} bytes")

    magic, version, total_length = struct.unpack_from("<III", data, 0)
    if magic != GLB_MAGIC:
        raise ContainerFormatError(f"bad magic 0x{magic:08X}")
    if version != GLB_VERSION:
        raise ContainerFormatError(f"unsupported version {version}")
    if total_length != len(data):
        raise ContainerFormatError(
            f"header length {total_length} does not match data length {len(data)}"
        )

    json_chunk, offset = _read_chunk(data, HEADER_SIZE, CHUNK_JSON)
    binary, _ = _read_chunk(data, offset, CHUNK_BIN)

    try:
        document = json.loads(json_chunk.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ContainerFormatError(f"invalid JSON chunk: {e}") from e

    try:
        primitive = document["meshes"][0]["primitives"][0]
        positions = _read_accessor(document, binary, primitive["attributes"]["POSITION"])
        indices = _read_accessor(document, binary, primitive["indices"])
    except (KeyError, IndexError, TypeError) as e:
        raise ContainerFormatError(f"incomplete glTF document: {e}") from e

    return positions.astype(np.float32), indices.astype(np.uint32)


def chunk_lengths(data: bytes) -> tuple[int, int]:
    """Return the declared (json, bin) chunk lengths of a container.

    Raises:
        ContainerFormatError: If either chunk header lies past the end of data.
    """
    json_offset = HEADER_SIZE
    if json_offset + CHUNK_HEADER_SIZE > len(data):
        raise ContainerFormatError(f"container too short: {len(data)} bytes")
    json_length = struct.unpack_from("<I", data, json_offset)[0]

    bin_offset = json_offset + CHUNK_HEADER_SIZE + json_length
    if bin_offset + CHUNK_HEADER_SIZE > len(data):
        raise ContainerFormatError(f"truncated chunk header at offset {bin_offset}")
    bin_length = struct.unpack_from("<I", data, bin_offset)[0]
    return json_length, bin_length
