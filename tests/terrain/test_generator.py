"""Tests for terrain generation orchestration."""

import math

import numpy as np
import pytest

from landscape.exceptions import InvalidParameterError
from landscape.glb import chunk_lengths, decode
from landscape.terrain import (
    GenerationResult,
    MAX_SIZE,
    TerrainConfig,
    generate,
    generate_terrain,
    synthesize,
)
from landscape.types import InterestKind


def _points_by_kind(points):
    return {point.kind: point for point in points}


class TestSynthesize:
    """Tests for the synthesize operation."""

    @pytest.mark.parametrize("size", [2, 3, 8, 17, 40])
    def test_mesh_lengths(self, size: int) -> None:
        """Positions and indices have the grid lengths."""
        mesh, _ = synthesize(size, 0.1, 3)
        assert len(mesh.positions) == 3 * size * size
        assert len(mesh.indices) == 6 * (size - 1) ** 2

    @pytest.mark.parametrize("size", [2, 5, 31])
    def test_indices_in_range(self, size: int) -> None:
        mesh, _ = synthesize(size, 0.2, 11)
        assert int(mesh.indices.max()) < size * size

    def test_deterministic(self) -> None:
        """Same inputs give identical meshes and interest points."""
        mesh1, points1 = synthesize(24, 0.1, 42)
        mesh2, points2 = synthesize(24, 0.1, 42)
        np.testing.assert_array_equal(mesh1.positions, mesh2.positions)
        np.testing.assert_array_equal(mesh1.indices, mesh2.indices)
        assert points1 == points2

    def test_different_seed_different_heights(self) -> None:
        mesh1, _ = synthesize(24, 0.1, 1)
        mesh2, _ = synthesize(24, 0.1, 2)
        assert not np.array_equal(mesh1.positions, mesh2.positions)

    def test_grid_coordinates(self) -> None:
        """x and z components are the grid coordinates."""
        mesh, _ = synthesize(5, 0.1, 0)
        triples = mesh.positions.reshape(-1, 3)
        np.testing.assert_array_equal(triples[:, 0], np.tile(np.arange(5), 5))
        np.testing.assert_array_equal(triples[:, 2], np.repeat(np.arange(5), 5))

    def test_edges_at_zero(self) -> None:
        """Radial falloff pins the axis edge midpoints to zero height."""
        size = 20
        mesh, _ = synthesize(size, 0.1, 5)
        heights = mesh.positions.reshape(size, size, 3)[:, :, 1]
        assert heights[0, 0] == 0.0
        assert heights[10, 0] == 0.0
        assert heights[0, 10] == 0.0

    @pytest.mark.parametrize("seed", [0, 1, 7, 99, 2**32 - 1])
    def test_interest_point_categories(self, seed: int) -> None:
        """Exactly one mountain and river mouth, at most one forest."""
        _, points = synthesize(32, 0.1, seed)
        kinds = [point.kind for point in points]
        assert kinds.count(InterestKind.MOUNTAIN) == 1
        assert kinds.count(InterestKind.RIVER_MOUTH) == 1
        assert kinds.count(InterestKind.FOREST) <= 1


class TestGenerateTerrain:
    """Tests for generate_terrain intermediates."""

    def test_result_type(self, small_result: GenerationResult) -> None:
        assert isinstance(small_result, GenerationResult)
        assert small_result.heights.shape == (32, 32)

    def test_mountain_is_first_maximum(self, small_result: GenerationResult) -> None:
        """Mountain sits on the first maximum of the uncarved field."""
        heights = small_result.heights
        mountain = _points_by_kind(small_result.interest_points)[InterestKind.MOUNTAIN]

        peak_height = heights[mountain.z, mountain.x]
        assert peak_height == heights.max()
        first = int(np.argmax(heights.reshape(-1)))
        assert (mountain.x, mountain.z) == (first % 32, first // 32)

    def test_river_mouth_is_walk_end(self, small_result: GenerationResult) -> None:
        mouth = _points_by_kind(small_result.interest_points)[InterestKind.RIVER_MOUTH]
        assert (mouth.x, mouth.z) == small_result.river.mouth

    def test_forest_at_path_midpoint(self, small_result: GenerationResult) -> None:
        """Forest appears at path[len // 2] exactly when the path is non-empty."""
        points = _points_by_kind(small_result.interest_points)
        path = small_result.river.path
        if path:
            forest = points[InterestKind.FOREST]
            assert (forest.x, forest.z) == path[len(path) // 2]
        else:
            assert InterestKind.FOREST not in points

    def test_river_bounded(self, small_result: GenerationResult) -> None:
        assert len(small_result.river.path) <= 2 * 32

    def test_mesh_uses_carved_heights(self, small_result: GenerationResult) -> None:
        """River cells appear carved in the emitted positions."""
        triples = small_result.mesh.positions.reshape(-1, 3)
        for x, z in small_result.river.path:
            assert triples[z * 32 + x, 1] == np.float32(-0.02)

    def test_falloff_applied(self, small_result: GenerationResult) -> None:
        """Heights equal the raw noise times the radial mask."""
        from landscape.terrain.island import radial_mask

        expected = small_result.raw_heights * radial_mask(32)
        np.testing.assert_allclose(small_result.heights, expected, rtol=1e-6)

    def test_small_grid_has_empty_river(self) -> None:
        """A 3x3 grid has no interior, so the river is empty."""
        result = generate_terrain(TerrainConfig(size=3, scale=0.1, seed=1))
        assert result.river.path == []
        assert result.river.mouth == result.peak
        kinds = [point.kind for point in result.interest_points]
        assert kinds == [InterestKind.MOUNTAIN, InterestKind.RIVER_MOUTH]


class TestGenerate:
    """Tests for the synthesize + encode composition."""

    def test_size_three_container(self) -> None:
        """size=3, scale=0.1, seed=1 packs 9 vertices and 24 indices."""
        data, _ = generate(3, 0.1, 1)
        json_length, bin_length = chunk_lengths(data)

        assert bin_length == 9 * 12 + 24 * 4
        assert len(data) == 12 + 8 + json_length + 8 + bin_length
        assert json_length % 4 == 0

    def test_roundtrip(self) -> None:
        """Decoding the container reproduces the synthesized mesh."""
        mesh, _ = synthesize(12, 0.15, 8)
        data, _ = generate(12, 0.15, 8)
        positions, indices = decode(data)
        np.testing.assert_array_equal(positions, mesh.positions)
        np.testing.assert_array_equal(indices, mesh.indices)

    def test_same_points_as_synthesize(self) -> None:
        _, expected = synthesize(16, 0.1, 4)
        _, points = generate(16, 0.1, 4)
        assert points == expected


class TestInvalidParameters:
    """Tests for boundary rejection."""

    @pytest.mark.parametrize("size", [-1, 0, 1, MAX_SIZE + 1])
    def test_bad_size(self, size: int) -> None:
        with pytest.raises(InvalidParameterError):
            synthesize(size, 0.1, 0)

    @pytest.mark.parametrize("scale", [0.0, -0.1, math.nan, math.inf, 1e19, 1e308])
    def test_bad_scale(self, scale: float) -> None:
        with pytest.raises(InvalidParameterError):
            synthesize(8, scale, 0)

    @pytest.mark.parametrize("seed", [-1, 2**32])
    def test_bad_seed(self, seed: int) -> None:
        with pytest.raises(InvalidParameterError):
            synthesize(8, 0.1, seed)

    def test_generate_rejects(self) -> None:
        with pytest.raises(InvalidParameterError):
            generate(1, 0.1, 0)

    def test_generate_rejects_huge_scale(self) -> None:
        """No container is built from non-finite heights."""
        with pytest.raises(InvalidParameterError, match="scale"):
            generate(8, 1e308, 0)

    def test_generate_terrain_rejects_config(self) -> None:
        with pytest.raises(InvalidParameterError):
            generate_terrain(TerrainConfig(size=1))
