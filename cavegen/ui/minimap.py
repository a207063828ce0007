"""
Minimap - renders a zoned grid as an RGBA pixel buffer, one pixel per tile.
"""

from typing import Sequence

import pygame

from cavegen.config import (
    WALL_ZONE_ID,
    MINIMAP_WALL_COLOR,
    MINIMAP_FLOOR_COLOR,
    MINIMAP_SPAWN_COLOR,
    MINIMAP_EXIT_COLOR,
)
from cavegen.level.cave_automaton import GridIndexError
from cavegen.level.zone_data import Location

ZonedGrid = Sequence[Sequence[int]]


def export_rgba(zoned_grid: ZonedGrid, spawn: Location = Location.UNDEFINED,
                exit: Location = Location.UNDEFINED) -> bytes:
    """
    Build a row-major R,G,B,A buffer for the zoned grid.

    Walls are black, every other cell white; spawn and exit cells are then
    painted with their marker colours. Undefined markers are not drawn.

    Raises:
        GridIndexError: a defined marker lies outside the grid
    """
    height = len(zoned_grid)
    width = len(zoned_grid[0]) if height else 0

    buffer = bytearray(height * width * 4)
    wall = bytes(MINIMAP_WALL_COLOR)
    floor = bytes(MINIMAP_FLOOR_COLOR)
    offset = 0
    for row in zoned_grid:
        for cell in row:
            buffer[offset:offset + 4] = wall if cell == WALL_ZONE_ID else floor
            offset += 4

    for marker, color in ((spawn, MINIMAP_SPAWN_COLOR), (exit, MINIMAP_EXIT_COLOR)):
        if not marker.is_defined:
            continue
        if not (0 <= marker.row < height and 0 <= marker.col < width):
            raise GridIndexError(marker.row, marker.col, height, width)
        index = (marker.row * width + marker.col) * 4
        buffer[index:index + 4] = bytes(color)

    return bytes(buffer)


def minimap_surface(zoned_grid: ZonedGrid, spawn: Location = Location.UNDEFINED,
                    exit: Location = Location.UNDEFINED) -> pygame.Surface:
    """Minimap as a pygame Surface (width x height pixels)."""
    height = len(zoned_grid)
    width = len(zoned_grid[0]) if height else 0
    if width == 0 or height == 0:
        return pygame.Surface((0, 0), pygame.SRCALPHA)

    data = export_rgba(zoned_grid, spawn, exit)
    # frombuffer shares memory with `data`; copy so the surface owns its pixels
    return pygame.image.frombuffer(data, (width, height), "RGBA").copy()


def save_minimap(path: str, zoned_grid: ZonedGrid, spawn: Location = Location.UNDEFINED,
                 exit: Location = Location.UNDEFINED, scale: int = 1) -> pygame.Surface:
    """Render the minimap and write it to `path` (format from the extension)."""
    surface = minimap_surface(zoned_grid, spawn, exit)
    if scale > 1:
        surface = pygame.transform.scale(
            surface, (surface.get_width() * scale, surface.get_height() * scale))
    pygame.image.save(surface, path)
    return surface
