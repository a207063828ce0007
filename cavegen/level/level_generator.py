"""
Level Generator - Main orchestrator for procedural cave generation

One attempt runs: noise field -> cave automaton -> boundary -> segmentation ->
validity check -> spawn/exit selection. Failed attempts are retried with fresh
sub-seeds; after a round of failures the validity threshold is relaxed.
"""

import dataclasses
import logging
import threading
import time
from concurrent.futures import Executor, Future
from typing import List, Optional

from cavegen.config import BLAST_RADIUS
from cavegen.tiles.tile_types import WallGrid, decorate_walls
from .cave_automaton import CaveAutomaton, GridIndexError
from .generation_config import GenerationConfig, load_generation_config
from .hazard_placement import Hazard, place_hazards
from .noise_field import NoiseField, NoiseGrid
from .seed_manager import SeedManager
from .zone_analyzer import ZoneAnalyzer
from .zone_data import Location, Zone

logger = logging.getLogger(__name__)


class LevelGenerationError(RuntimeError):
    """Raised when no valid level was found within the retry schedule."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class GeneratedLevel:
    """
    A finished cave level.

    Reads through the properties below hold the level lock, so they never see
    a half-rebuilt zoned grid; grid and zone list come back as snapshots.
    Going through `analyzer` directly bypasses the lock.

    Attributes:
        automaton: Wall/floor grid owner
        analyzer: Segmentation of the grid (zoned grid, zones, spawn/exit)
        noise: Decoration noise, same dimensions as the grid
        hazards: Spikes and turrets placed in the level
        attempts: Number of attempts it took to produce this level
        seed: World seed the level was generated from
        threshold: Validity threshold in effect when the level was accepted
    """

    def __init__(self, automaton: CaveAutomaton, analyzer: ZoneAnalyzer, noise: NoiseGrid,
                 attempts: int, seed: int, threshold: float,
                 hazards: Optional[List[Hazard]] = None):
        self.automaton = automaton
        self.analyzer = analyzer
        self.noise = noise
        self.hazards = hazards or []
        self.attempts = attempts
        self.seed = seed
        self.threshold = threshold
        self.generation_time_ms = 0.0

        # Serializes grid mutation with re-segmentation and reads
        self._lock = threading.RLock()

    @property
    def height(self) -> int:
        return self.automaton.height

    @property
    def width(self) -> int:
        return self.automaton.width

    @property
    def spawn(self) -> Location:
        return self.analyzer.spawn

    @property
    def exit(self) -> Location:
        return self.analyzer.exit

    @property
    def zone(self) -> Optional[Zone]:
        """The zone currently holding the spawn tile."""
        with self._lock:
            return self.analyzer.zone_at(self.spawn.row, self.spawn.col)

    @property
    def zoned_grid(self) -> List[List[int]]:
        with self._lock:
            return [row[:] for row in self.analyzer.zoned_grid]

    @property
    def zones(self) -> List[Zone]:
        with self._lock:
            return list(self.analyzer.zones)

    def _on_border(self, row: int, col: int) -> bool:
        return row in (0, self.height - 1) or col in (0, self.width - 1)

    def remove_wall(self, row: int, col: int) -> bool:
        """
        Turn one wall cell into floor and re-segment.

        The outer ring of the map is never removed.

        Returns:
            True if the cell was an interior wall and got removed
        """
        with self._lock:
            if not self.automaton.is_wall(row, col) or self._on_border(row, col):
                return False
            self.analyzer.mutate_grid(col, row, False)
            self.analyzer.resegment()
        return True

    def carve_blast(self, row: int, col: int, radius: int = BLAST_RADIUS) -> List[Location]:
        """
        Clear walls in a diamond around (row, col), as an explosion would.

        The outer ring of the map is never touched. The zoned grid is
        re-segmented before the lock is released.

        Args:
            row: Blast centre row
            col: Blast centre column
            radius: Manhattan radius of the blast

        Returns:
            Locations that were walls and are now floor, in row-major order
        """
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")

        cleared: List[Location] = []
        with self._lock:
            if not self.automaton.in_bounds(row, col):
                raise GridIndexError(row, col, self.height, self.width)
            for r in range(row - radius, row + radius + 1):
                span = radius - abs(r - row)
                for c in range(col - span, col + span + 1):
                    if not self.automaton.in_bounds(r, c) or self._on_border(r, c):
                        continue
                    if self.automaton.is_wall(r, c):
                        self.analyzer.mutate_grid(c, r, False)
                        cleared.append(Location(r, c))

            if cleared:
                self.analyzer.resegment()

        logger.debug("Blast at (%d, %d) radius %d cleared %d walls", row, col, radius, len(cleared))
        return cleared

    def wall_decorations(self) -> WallGrid:
        """Wall variant per cell (None for floor), derived from the noise field."""
        with self._lock:
            return decorate_walls(self.analyzer.zoned_grid, self.noise)

    def to_ascii(self) -> str:
        with self._lock:
            return self.analyzer.to_ascii()

    def get_generation_stats(self) -> dict:
        with self._lock:
            zone = self.zone
            return {
                'seed': self.seed,
                'attempts': self.attempts,
                'threshold': self.threshold,
                'zones': len(self.analyzer.zones),
                'zone_size': zone.size if zone is not None else 0,
                'spawn': (self.spawn.row, self.spawn.col),
                'exit': (self.exit.row, self.exit.col),
                'hazards': len(self.hazards),
                'generation_time_ms': self.generation_time_ms,
            }


class LevelGenerator:
    """Main level generation orchestrator"""

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()
        self.config.validate()
        self.seed_manager = SeedManager(self.config.seed)

        # Performance tracking
        self.generation_time_ms = 0.0
        self.total_attempts = 0

    def generate(self) -> GeneratedLevel:
        """
        Generate a level, retrying until one passes validation.

        Returns:
            GeneratedLevel instance

        Raises:
            LevelGenerationError: the relaxation schedule was exhausted
        """
        start_time = time.time()
        config = self.config
        threshold = config.validity_threshold
        attempt_index = 0

        while True:
            for _ in range(config.max_attempts):
                level = self._attempt(attempt_index, threshold)
                attempt_index += 1
                if level is not None:
                    self.total_attempts = attempt_index
                    self.generation_time_ms = (time.time() - start_time) * 1000
                    level.generation_time_ms = self.generation_time_ms
                    logger.info(
                        "Generated %dx%d level (seed %d) after %d attempts: %d zones, spawn %s, exit %s",
                        config.height, config.width, self.seed_manager.world_seed, attempt_index,
                        len(level.zones), level.spawn, level.exit,
                    )
                    return level

            relaxed = round(threshold - config.threshold_relaxation, 6)
            if config.threshold_relaxation <= 0 or relaxed < config.min_validity_threshold:
                self.total_attempts = attempt_index
                raise LevelGenerationError(
                    f"No valid level after {attempt_index} attempts "
                    f"(threshold reached {threshold:.2f})",
                    attempt_index,
                )
            logger.warning("Relaxing validity threshold from %.2f to %.2f after %d attempts",
                           threshold, relaxed, attempt_index)
            threshold = relaxed

    def _attempt(self, attempt_index: int, threshold: float) -> Optional[GeneratedLevel]:
        config = self.config
        self.seed_manager.generate_attempt_seed(attempt_index)

        noise = NoiseField(config.height, config.width).generate(
            config.octave_count,
            config.interpolation_kind,
            rng=self.seed_manager.get_random('noise'),
        )

        automaton = CaveAutomaton(
            config.height, config.width,
            alive_probability=config.alive_probability,
            birth_limit=config.birth_limit,
            starvation_limit=config.starvation_limit,
            rng=self.seed_manager.get_random('structure'),
        )
        automaton.simulate(config.simulation_steps)

        analyzer = ZoneAnalyzer(automaton)
        analyzer.enforce_boundary()
        analyzer.segment()

        zone = analyzer.is_valid(threshold)
        if zone is None:
            logger.debug("Attempt %d: layout invalid at threshold %.2f", attempt_index, threshold)
            return None

        spawn, exit_ = analyzer.select_spawn_exit(zone, config.min_spawn_exit_distance)
        if not spawn.is_defined:
            logger.debug("Attempt %d: no spawn/exit pair in zone %d", attempt_index, zone.zone_id)
            return None

        hazards = place_hazards(analyzer, self.seed_manager.get_random('hazards'),
                                spike_ratio=config.spike_ratio,
                                turret_ratio=config.turret_ratio)
        if analyzer.zone_at(spawn.row, spawn.col) is not analyzer.zone_at(exit_.row, exit_.col):
            logger.debug("Attempt %d: turrets cut the exit off from the spawn", attempt_index)
            return None

        return GeneratedLevel(automaton, analyzer, noise,
                              attempts=attempt_index + 1,
                              seed=self.seed_manager.world_seed,
                              threshold=threshold,
                              hazards=hazards)

    def submit(self, executor: Executor) -> "Future[GeneratedLevel]":
        """Run generate() on a caller-supplied executor."""
        return executor.submit(self.generate)


def generate_level(config: Optional[GenerationConfig] = None,
                   seed: Optional[int] = None) -> GeneratedLevel:
    """
    Convenience function to generate a level.

    Args:
        config: Generation settings; loaded from config/generation_config.json when omitted
        seed: Overrides config.seed when given
    """
    config = config or load_generation_config()
    if seed is not None:
        config = dataclasses.replace(config, seed=seed)
    return LevelGenerator(config).generate()
