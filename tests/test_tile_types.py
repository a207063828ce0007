"""
Tests for tile types and wall decoration bands.
"""

import pytest

from cavegen.tiles.tile_types import TileType, WallVariant, decorate_walls, wall_variant_for


class TestWallVariantBands:
    @pytest.mark.parametrize("value,variant", [
        (0.0, WallVariant.CROSS),
        (0.29, WallVariant.CROSS),
        (0.3, WallVariant.SIGNS),
        (0.39, WallVariant.SIGNS),
        (0.4, WallVariant.BRICK),
        (0.59, WallVariant.BRICK),
        (0.6, WallVariant.CEMENT),
        (0.69, WallVariant.CEMENT),
        (0.7, WallVariant.MAT),
        (0.99, WallVariant.MAT),
    ])
    def test_band_boundaries(self, value, variant):
        assert wall_variant_for(value) is variant

    @pytest.mark.parametrize("value", [1.0, 1.5, -0.1])
    def test_out_of_band_falls_back_to_brick(self, value):
        assert wall_variant_for(value) is WallVariant.BRICK


class TestDecorateWalls:
    def test_only_walls_decorated(self):
        zoned = [[0, 1], [2, 0]]
        noise = [[0.1, 0.5], [0.5, 0.75]]
        assert decorate_walls(zoned, noise) == [
            [WallVariant.CROSS, None],
            [None, WallVariant.MAT],
        ]

    def test_dimension_mismatch(self):
        with pytest.raises(ValueError):
            decorate_walls([[0, 0]], [[0.1], [0.2]])
        with pytest.raises(ValueError):
            decorate_walls([[0, 0]], [[0.1]])


class TestTileType:
    def test_from_zone_id(self):
        assert TileType.from_zone_id(0) is TileType.WALL
        assert TileType.from_zone_id(3) is TileType.AIR
        assert TileType.WALL.is_solid
        assert not TileType.AIR.is_solid
