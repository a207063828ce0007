"""
Zone Analyzer - segments a cave grid into connected floor zones, validates
the layout and picks spawn/exit locations.

The zoned grid mirrors the automaton grid cell for cell:
    0   wall
    -1  floor not yet assigned (only during segmentation)
    >=1 zone id, assigned in row-major discovery order
"""

import logging
from collections import deque
from enum import Enum
from typing import List, Optional

from cavegen.config import (
    WALL_ZONE_ID,
    UNASSIGNED_ZONE_ID,
    ZONE_VALIDITY_THRESHOLD,
    SPAWN_EXIT_MIN_DISTANCE,
)
from .cave_automaton import CaveAutomaton, GridIndexError
from .zone_data import Location, LocationPair, Zone, UNDEFINED_PAIR

logger = logging.getLogger(__name__)

ZonedGrid = List[List[int]]


class AnalyzerState(Enum):
    """Lifecycle of one analyzer over a generation attempt."""
    UNINITIALIZED = "uninitialized"
    BOUNDARY_ENFORCED = "boundary_enforced"
    SEGMENTED = "segmented"
    VALID = "valid"
    INVALID = "invalid"
    SPAWN_EXIT_SELECTED = "spawn_exit_selected"
    SPAWN_EXIT_FAILED = "spawn_exit_failed"
    STALE = "stale"


class ZoneAnalyzer:
    """Flood-fill segmentation and spawn/exit placement over a CaveAutomaton grid."""

    def __init__(self, automaton: CaveAutomaton):
        self.automaton = automaton
        self.zoned_grid: ZonedGrid = []
        self.zones: List[Zone] = []
        self.spawn: Location = Location.UNDEFINED
        self.exit: Location = Location.UNDEFINED
        self.state = AnalyzerState.UNINITIALIZED

        self.initialize_from_grid()

    @property
    def height(self) -> int:
        return self.automaton.height

    @property
    def width(self) -> int:
        return self.automaton.width

    @property
    def locations(self) -> LocationPair:
        """Current (spawn, exit) pair; UNDEFINED until selection succeeds."""
        return self.spawn, self.exit

    @property
    def is_stale(self) -> bool:
        return self.state == AnalyzerState.STALE

    def initialize_from_grid(self) -> None:
        """Rebuild the zoned grid from the automaton grid and clear all zones."""
        grid = self.automaton.grid
        self.zoned_grid = [
            [WALL_ZONE_ID if cell else UNASSIGNED_ZONE_ID for cell in row]
            for row in grid
        ]
        self.zones = []
        if self.state == AnalyzerState.STALE:
            self.state = AnalyzerState.BOUNDARY_ENFORCED

    def enforce_boundary(self) -> None:
        """Force the outermost ring of rows and columns to wall in both grids."""
        height, width = self.height, self.width
        if len(self.zoned_grid) != height or any(len(row) != width for row in self.zoned_grid):
            # Grid was resized since the last rebuild
            self.initialize_from_grid()

        if height == 0 or width == 0:
            self.state = AnalyzerState.BOUNDARY_ENFORCED
            return

        grid = self.automaton.grid
        for i in range(height):
            for j in (0, width - 1):
                grid[i][j] = True
                self.zoned_grid[i][j] = WALL_ZONE_ID
        for j in range(width):
            for i in (0, height - 1):
                grid[i][j] = True
                self.zoned_grid[i][j] = WALL_ZONE_ID

        self.state = AnalyzerState.BOUNDARY_ENFORCED

    def segment(self) -> List[Zone]:
        """
        Assign every unassigned floor cell to a zone.

        Cells are scanned row-major; each unassigned floor cell seeds a
        breadth-first flood fill over 4-connected floor neighbours.

        Returns:
            The zone list, ordered by zone id
        """
        for i in range(self.height):
            for j in range(self.width):
                if self.zoned_grid[i][j] == UNASSIGNED_ZONE_ID:
                    self._flood_fill(Location(i, j))

        # A stale analyzer stays stale until the zoned grid is rebuilt
        if self.state != AnalyzerState.STALE:
            self.state = AnalyzerState.SEGMENTED
        logger.debug("Segmented %dx%d grid into %d zones", self.height, self.width, len(self.zones))
        return self.zones

    def _flood_fill(self, start: Location) -> Zone:
        grid = self.automaton.grid
        zoned = self.zoned_grid
        height, width = self.height, self.width

        zone = Zone(zone_id=len(self.zones) + 1)
        zoned[start.row][start.col] = zone.zone_id
        queue = deque([start])

        while queue:
            current = queue.popleft()
            r, c = current.row, current.col

            for dr, dc in ((0, -1), (0, 1), (-1, 0), (1, 0)):
                nr, nc = r + dr, c + dc
                if (0 <= nr < height and 0 <= nc < width and
                        not grid[nr][nc] and zoned[nr][nc] == UNASSIGNED_ZONE_ID):
                    # Mark on discovery so a cell is queued only once
                    zoned[nr][nc] = zone.zone_id
                    queue.append(Location(nr, nc))

            self._classify_boundaries(current, zone)
            zone.size += 1

        # On a re-segmentation the chosen spawn/exit are markers, not open ground;
        # they stay out of the size as well, as after selection
        if self.spawn.is_defined and self.exit.is_defined:
            if self._holds(zone, self.spawn) and self._holds(zone, self.exit):
                zone.ground.discard(self.spawn)
                zone.ground.discard(self.exit)
                zone.size -= 2

        self.zones.append(zone)
        return zone

    def _holds(self, zone: Zone, location: Location) -> bool:
        row, col = location.row, location.col
        if not (0 <= row < self.height and 0 <= col < self.width):
            return False
        return self.zoned_grid[row][col] == zone.zone_id

    def _is_solid(self, row: int, col: int) -> bool:
        # Map edges count as solid, matching the automaton's edge rule
        if not (0 <= row < self.height and 0 <= col < self.width):
            return True
        return self.automaton.grid[row][col]

    def _classify_boundaries(self, location: Location, zone: Zone) -> None:
        r, c = location.row, location.col
        if self._is_solid(r, c - 1):
            zone.left.add(location)
        if self._is_solid(r, c + 1):
            zone.right.add(location)
        if self._is_solid(r - 1, c):
            zone.ceiling.add(location)
        if self._is_solid(r + 1, c):
            zone.ground.add(location)

    def largest_zone(self) -> Optional[Zone]:
        """Zone with the most tiles; ties go to the lowest id."""
        largest = None
        for zone in self.zones:
            if largest is None or zone.size > largest.size:
                largest = zone
        return largest

    def is_valid(self, threshold: float = ZONE_VALIDITY_THRESHOLD) -> Optional[Zone]:
        """
        Check that one zone dominates the open space.

        Args:
            threshold: Minimum share of all floor tiles the largest zone must hold

        Returns:
            The largest zone when the layout is valid, otherwise None
        """
        largest = self.largest_zone()
        total = sum(zone.size for zone in self.zones)

        if largest is None or total == 0 or largest.size / total < threshold:
            self.state = AnalyzerState.INVALID
            return None

        self.state = AnalyzerState.VALID
        return largest

    def _has_open_neighbours(self, zone: Zone, location: Location) -> bool:
        # Both same-row neighbours are ground with no wall directly above
        for side in (location.offset(0, -1), location.offset(0, 1)):
            if side not in zone.ground or side in zone.ceiling:
                return False
        return True

    def _is_spawn_candidate(self, zone: Zone, location: Location) -> bool:
        # Open alcove floor, one tile tall and three wide
        if zone.is_side_bounded(location):
            return False
        return self._has_open_neighbours(zone, location)

    def _is_exit_candidate(self, zone: Zone, location: Location) -> bool:
        # Taller alcove: two tiles of headroom across the exit's width
        if zone.is_side_bounded(location):
            return False
        if not self._has_open_neighbours(zone, location):
            return False
        for above in (location.offset(-1, -1), location.offset(-1, 0), location.offset(-1, 1)):
            if above in zone.ceiling:
                return False
        return True

    def select_spawn_exit(self, zone: Zone,
                          min_distance: float = SPAWN_EXIT_MIN_DISTANCE) -> LocationPair:
        """
        Pick spawn and exit ground tiles in `zone`, searching from the extremities inward.

        Ground tiles are ordered by (row, col). For each start index i from the
        top-left, end indices j run from the bottom-right back to i + 1; the
        first pair passing the alcove checks and the distance check wins.

        Args:
            zone: Zone to search (normally the one returned by is_valid)
            min_distance: Minimum Euclidean distance between spawn and exit

        Returns:
            (spawn, exit), or (UNDEFINED, UNDEFINED) when no pair qualifies
        """
        ordered = zone.sorted_ground()
        count = len(ordered)
        min_distance_sq = min_distance * min_distance

        start_ok = [self._is_spawn_candidate(zone, loc) for loc in ordered]
        end_ok = [self._is_exit_candidate(zone, loc) for loc in ordered]

        for i in range(count):
            if not start_ok[i]:
                continue
            start = ordered[i]
            for j in range(count - 1, i, -1):
                if not end_ok[j]:
                    continue
                end = ordered[j]
                if start.distance_squared(end) < min_distance_sq:
                    continue

                zone.ground.discard(start)
                zone.ground.discard(end)
                zone.size -= 2
                self.spawn, self.exit = start, end
                self.state = AnalyzerState.SPAWN_EXIT_SELECTED
                logger.debug("Selected spawn %s and exit %s in zone %d", start, end, zone.zone_id)
                return start, end

        self.state = AnalyzerState.SPAWN_EXIT_FAILED
        return UNDEFINED_PAIR

    def mutate_grid(self, col: int, row: int, wall: bool) -> None:
        """
        Change one cell of the underlying grid (e.g. a wall destroyed by an explosion).

        The zoned grid is stale afterwards; call resegment() before reading it.
        """
        self.automaton.mark(row, col, wall)
        self.state = AnalyzerState.STALE

    def resegment(self) -> List[Zone]:
        """Rebuild the zoned grid and zones from the current grid."""
        self.initialize_from_grid()
        return self.segment()

    def zone_at(self, row: int, col: int) -> Optional[Zone]:
        """Zone containing the cell, or None for walls."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise GridIndexError(row, col, self.height, self.width)
        zone_id = self.zoned_grid[row][col]
        if zone_id < 1 or zone_id > len(self.zones):
            return None
        return self.zones[zone_id - 1]

    def wall_count(self) -> int:
        return sum(1 for row in self.zoned_grid for cell in row if cell == WALL_ZONE_ID)

    def to_ascii(self) -> str:
        """Render the zoned grid: '#' wall, '.' floor, 'S' spawn, 'E' exit."""
        lines = []
        for i, row in enumerate(self.zoned_grid):
            chars = []
            for j, cell in enumerate(row):
                here = Location(i, j)
                if here == self.spawn:
                    chars.append("S")
                elif here == self.exit:
                    chars.append("E")
                elif cell == WALL_ZONE_ID:
                    chars.append("#")
                else:
                    chars.append(".")
            lines.append("".join(chars))
        return "\n".join(lines)
