from enum import Enum, IntEnum
from typing import List, Optional, Sequence

from cavegen.config import WALL_ZONE_ID


class TileType(IntEnum):
    """Enumeration of the cave tile types."""

    AIR = 0
    WALL = 1

    @property
    def is_solid(self) -> bool:
        """Return True if tile blocks movement completely."""
        return self == TileType.WALL

    @classmethod
    def from_zone_id(cls, zone_id: int) -> "TileType":
        return cls.WALL if zone_id == WALL_ZONE_ID else cls.AIR


class WallVariant(Enum):
    """Wall texture picked from the decoration noise value."""

    CROSS = "cross"
    SIGNS = "signs"
    BRICK = "brick"
    CEMENT = "cement"
    MAT = "mat"


# (upper bound, variant); lower bound is the previous entry's upper bound
_VARIANT_BANDS = (
    (0.3, WallVariant.CROSS),
    (0.4, WallVariant.SIGNS),
    (0.6, WallVariant.BRICK),
    (0.7, WallVariant.CEMENT),
    (1.0, WallVariant.MAT),
)

WallGrid = List[List[Optional[WallVariant]]]


def wall_variant_for(value: float) -> WallVariant:
    """Map a noise value to its wall variant; values outside [0, 1) fall back to BRICK."""
    if value < 0.0:
        return WallVariant.BRICK
    for upper, variant in _VARIANT_BANDS:
        if value < upper:
            return variant
    return WallVariant.BRICK


def decorate_walls(zoned_grid: Sequence[Sequence[int]],
                   noise: Sequence[Sequence[float]]) -> WallGrid:
    """
    Pick a wall variant for every wall cell.

    Args:
        zoned_grid: Zone ids per cell (0 = wall)
        noise: Noise field with the same dimensions

    Returns:
        Grid of WallVariant for walls and None for floor cells
    """
    if len(zoned_grid) != len(noise) or any(
            len(zrow) != len(nrow) for zrow, nrow in zip(zoned_grid, noise)):
        raise ValueError("zoned grid and noise field dimensions differ")

    return [
        [wall_variant_for(value) if zone_id == WALL_ZONE_ID else None
         for zone_id, value in zip(zrow, nrow)]
        for zrow, nrow in zip(zoned_grid, noise)
    ]
