from .tile_types import TileType, WallVariant, wall_variant_for, decorate_walls

__all__ = [
    'TileType',
    'WallVariant',
    'wall_variant_for',
    'decorate_walls',
]
