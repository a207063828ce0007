#!/usr/bin/env python3
"""Generate cave levels and check their structural invariants.

Checks:
- outer ring is wall in grid and zoned grid
- zoned grid agrees with the wall grid, no unassigned cells left
- zone sizes plus wall count cover the whole grid
- spawn and exit share a zone and are far enough apart
- noise values stay within [0, 1]
- spikes sit on floor, turret tiles are wall

Usage: python tools/level_validate.py [--count N] [--seed S] [--config PATH]
"""
import argparse
import logging
import sys

from cavegen.config import UNASSIGNED_ZONE_ID, WALL_ZONE_ID
from cavegen.level import HazardKind, LevelGenerator, LevelGenerationError, load_generation_config

logger = logging.getLogger(__name__)


def check_level(level, min_distance):
    """Return a list of invariant violations for one generated level."""
    errors = []
    grid = level.automaton.grid
    zoned = level.zoned_grid
    height, width = level.height, level.width

    for i in range(height):
        for j in range(width):
            on_ring = i in (0, height - 1) or j in (0, width - 1)
            if on_ring and (not grid[i][j] or zoned[i][j] != WALL_ZONE_ID):
                errors.append(f"boundary cell ({i}, {j}) is not wall")
            if zoned[i][j] == UNASSIGNED_ZONE_ID:
                errors.append(f"cell ({i}, {j}) left unassigned")
            elif (zoned[i][j] == WALL_ZONE_ID) != grid[i][j]:
                errors.append(f"cell ({i}, {j}) zoned grid disagrees with wall grid")

    # Spawn and exit were taken out of the main zone's size
    total = sum(zone.size for zone in level.zones) + 2 + level.analyzer.wall_count()
    if total != height * width:
        errors.append(f"zone sizes and walls cover {total} cells, expected {height * width}")

    spawn, exit_ = level.spawn, level.exit
    zone = level.zone
    if zone is None:
        errors.append(f"spawn {spawn} is not on floor")
    elif level.analyzer.zone_at(exit_.row, exit_.col) is not zone:
        errors.append(f"exit {exit_} is not in the spawn zone")
    if spawn.distance_squared(exit_) < min_distance * min_distance:
        errors.append(f"spawn {spawn} and exit {exit_} are too close")

    for hazard in level.hazards:
        loc = hazard.location
        if (hazard.kind == HazardKind.TURRET) != grid[loc.row][loc.col]:
            errors.append(f"{hazard.kind.value} at {loc} sits on the wrong tile type")

    if any(not 0.0 <= value <= 1.0 for row in level.noise for value in row):
        errors.append("noise value outside [0, 1]")

    return errors


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate generated cave levels")
    parser.add_argument("--count", type=int, default=5)
    parser.add_argument("--seed", type=int, default=0, help="First world seed")
    parser.add_argument("--config", help="Path to a generation config JSON file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    config = load_generation_config(args.config)

    failures = 0
    for seed in range(args.seed, args.seed + args.count):
        config.seed = seed
        try:
            level = LevelGenerator(config).generate()
        except LevelGenerationError as e:
            logger.error("Seed %d: generation failed after %d attempts", seed, e.attempts)
            failures += 1
            continue

        errors = check_level(level, config.min_spawn_exit_distance)
        if errors:
            failures += 1
            logger.error("Seed %d: validation FAILED:", seed)
            for e in errors:
                logger.error(" - %s", e)

    if failures:
        return 2

    print(f"Validation OK: {args.count} levels passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
