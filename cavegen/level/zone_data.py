"""
Zone data structures - value types shared by segmentation, spawn/exit
selection and every consumer of the zoned grid.
"""

from dataclasses import dataclass, field
from typing import Set, Tuple


@dataclass(frozen=True, order=True)
class Location:
    """A (row, column) cell coordinate in grid space.

    Row 0 is the top edge of the map for every consumer. Ordering is by row,
    then column.
    """
    row: int
    col: int

    @property
    def is_defined(self) -> bool:
        """False only for the UNDEFINED sentinel."""
        return self != Location.UNDEFINED

    def offset(self, d_row: int, d_col: int) -> 'Location':
        """Return the location shifted by (d_row, d_col)."""
        return Location(self.row + d_row, self.col + d_col)

    def distance_squared(self, other: 'Location') -> int:
        """Squared Euclidean distance to another location."""
        return (self.row - other.row) ** 2 + (self.col - other.col) ** 2


# Marker for "not yet computed" (no spawn/exit selected, failed search)
Location.UNDEFINED = Location(-1, -1)

LocationPair = Tuple[Location, Location]
UNDEFINED_PAIR: LocationPair = (Location.UNDEFINED, Location.UNDEFINED)


@dataclass
class Zone:
    """
    A maximal 4-connected region of floor cells.

    Attributes:
        zone_id: Positive identifier (0 is reserved for walls)
        size: Number of tiles in the zone
        ground: Tiles with a wall or map edge directly below
        ceiling: Tiles with a wall or map edge directly above
        left: Tiles bounded by a wall or edge on the left
        right: Tiles bounded by a wall or edge on the right

    A tile may belong to several boundary sets (corners).
    """
    zone_id: int
    size: int = 0
    ground: Set[Location] = field(default_factory=set)
    ceiling: Set[Location] = field(default_factory=set)
    left: Set[Location] = field(default_factory=set)
    right: Set[Location] = field(default_factory=set)

    @property
    def num_ground_tiles(self) -> int:
        return len(self.ground)

    @property
    def num_ceiling_tiles(self) -> int:
        return len(self.ceiling)

    @property
    def num_left_tiles(self) -> int:
        return len(self.left)

    @property
    def num_right_tiles(self) -> int:
        return len(self.right)

    def is_side_bounded(self, location: Location) -> bool:
        """True if the tile touches a wall on its left, right or top."""
        return location in self.left or location in self.right or location in self.ceiling

    def sorted_ground(self):
        """Ground tiles ordered by (row, col): top-left first, bottom-right last."""
        return sorted(self.ground)
