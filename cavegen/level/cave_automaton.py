"""
Cave Automaton - grows wall/floor cave topology with cellular automaton rules
"""

import logging
import random
from typing import List, Optional

from cavegen.config import (
    CHANCE_TO_START_ALIVE,
    BIRTH_LIMIT,
    STARVATION_LIMIT,
)

logger = logging.getLogger(__name__)

Grid = List[List[bool]]


class GridIndexError(IndexError):
    """Raised when a grid coordinate lies outside [0, height) x [0, width)."""

    def __init__(self, row: int, col: int, height: int, width: int):
        super().__init__(
            f"cell ({row}, {col}) is outside a {height}x{width} grid"
        )
        self.row = row
        self.col = col


class CaveAutomaton:
    """Cellular automaton over a boolean grid (True = wall, False = floor)."""

    def __init__(self, height: int, width: int,
                 alive_probability: float = CHANCE_TO_START_ALIVE,
                 birth_limit: int = BIRTH_LIMIT,
                 starvation_limit: int = STARVATION_LIMIT,
                 rng: Optional[random.Random] = None):
        """
        Create a randomly seeded grid.

        Args:
            height: Number of rows
            width: Number of columns
            alive_probability: Chance (0-1) that a cell starts as wall
            birth_limit: Floor becomes wall when wall neighbours exceed this
            starvation_limit: Wall survives when wall neighbours reach this
            rng: Random source; a fresh unseeded one is used when omitted
        """
        if height < 0 or width < 0:
            raise ValueError(f"grid dimensions must be non-negative, got {height}x{width}")
        if not 0.0 <= alive_probability <= 1.0:
            raise ValueError(f"alive_probability must be within [0, 1], got {alive_probability}")

        self.height = height
        self.width = width
        self.alive_probability = alive_probability
        self.birth_limit = birth_limit
        self.starvation_limit = starvation_limit
        self.rng = rng or random.Random()

        self._grid: Grid = [[False] * width for _ in range(height)]
        self.initialize()

    @property
    def grid(self) -> Grid:
        """The live wall/floor matrix, indexed grid[row][col]."""
        return self._grid

    def initialize(self) -> None:
        """Re-randomize every cell using alive_probability."""
        for row in self._grid:
            for j in range(self.width):
                row[j] = self.rng.random() < self.alive_probability

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise GridIndexError(row, col, self.height, self.width)

    def is_wall(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self._grid[row][col]

    def mark(self, row: int, col: int, value: bool) -> None:
        """Set a single cell to wall (True) or floor (False)."""
        self._check_bounds(row, col)
        self._grid[row][col] = value

    def count_wall_neighbors(self, row: int, col: int) -> int:
        """Count walls in the 8-cell Moore neighbourhood; off-grid counts as wall."""
        self._check_bounds(row, col)
        return self._count_walls(self._grid, row, col)

    def _count_walls(self, grid: Grid, row: int, col: int) -> int:
        count = 0
        for dr in (-1, 0, 1):
            nr = row + dr
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nc = col + dc
                if 0 <= nr < self.height and 0 <= nc < self.width:
                    if grid[nr][nc]:
                        count += 1
                else:
                    # Out of bounds counts as wall
                    count += 1
        return count

    def step(self) -> None:
        """Apply one synchronous birth/starvation update to every cell."""
        grid = self._grid
        new_grid = [[False] * self.width for _ in range(self.height)]

        for i in range(self.height):
            for j in range(self.width):
                wall_count = self._count_walls(grid, i, j)
                if grid[i][j]:
                    new_grid[i][j] = wall_count >= self.starvation_limit
                else:
                    new_grid[i][j] = wall_count > self.birth_limit

        self._grid = new_grid

    def simulate(self, steps: int) -> None:
        """Run `steps` automaton steps in sequence."""
        for _ in range(steps):
            self.step()
        logger.debug("Simulated %d automaton steps on %dx%d grid", steps, self.height, self.width)

    def resize(self, height: int, width: int, reinitialize: bool = False) -> None:
        """
        Change grid dimensions.

        Shrinking drops trailing rows/columns, growing appends floor cells.
        Non-positive dimensions leave the grid untouched.

        Args:
            height: New row count
            width: New column count
            reinitialize: Re-randomize the whole grid after resizing
        """
        if height <= 0 or width <= 0:
            logger.debug("Ignoring resize to non-positive dimensions %dx%d", height, width)
            return

        rows = self._grid[:height]
        for k, row in enumerate(rows):
            if len(row) > width:
                rows[k] = row[:width]
            elif len(row) < width:
                rows[k] = row + [False] * (width - len(row))
        while len(rows) < height:
            rows.append([False] * width)

        self._grid = rows
        self.height = height
        self.width = width

        if reinitialize:
            self.initialize()

    def to_ascii(self) -> str:
        """Render the grid as text: '#' wall, '.' floor."""
        return "\n".join("".join("#" if cell else "." for cell in row) for row in self._grid)
