import argparse
import logging
import sys

from cavegen.level.generation_config import load_generation_config
from cavegen.level.level_generator import LevelGenerator, LevelGenerationError


def print_level(level):
    """Prints a textual representation of the level with spawn and exit."""
    stats = level.get_generation_stats()
    print(f"Level Size: {level.height}x{level.width}")
    print(f"Seed: {stats['seed']}  Attempts: {stats['attempts']}  Threshold: {stats['threshold']:.2f}")
    print(f"Zones: {stats['zones']}  Main zone tiles: {stats['zone_size']}")
    print(f"Spawn: {stats['spawn']}  Exit: {stats['exit']}  Hazards: {stats['hazards']}")

    print("-" * (level.width + 2))
    for line in level.to_ascii().splitlines():
        print("|" + line + "|")
    print("-" * (level.width + 2))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a cave level and print it")
    parser.add_argument("--config", help="Path to a generation config JSON file")
    parser.add_argument("--seed", type=int, help="World seed override")
    parser.add_argument("--minimap", help="Write the minimap image to this path")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    config = load_generation_config(args.config)
    if args.seed is not None:
        config.seed = args.seed

    print("--- Generating Procedural Cave Demo ---")
    try:
        level = LevelGenerator(config).generate()
    except LevelGenerationError as e:
        print(f"Generation failed after {e.attempts} attempts: {e}")
        return 1

    print_level(level)

    if args.minimap:
        from cavegen.ui.minimap import save_minimap
        save_minimap(args.minimap, level.zoned_grid, level.spawn, level.exit, scale=4)
        print(f"Minimap written to {args.minimap}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
