"""Generation configuration and its JSON loader.

Every numeric input of the pipeline lives on GenerationConfig; the loader
reads overrides from config/generation_config.json (or an explicit path).
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional
import json
import logging
import os

from cavegen import config as defaults
from .noise_field import Interpolation

logger = logging.getLogger(__name__)


@dataclass
class GenerationConfig:
    """Configuration for one level generation run."""
    height: int = defaults.GRID_HEIGHT
    width: int = defaults.GRID_WIDTH

    # Cave automaton
    alive_probability: float = defaults.CHANCE_TO_START_ALIVE
    birth_limit: int = defaults.BIRTH_LIMIT
    starvation_limit: int = defaults.STARVATION_LIMIT
    simulation_steps: int = defaults.SIMULATION_STEPS

    # Validation and spawn/exit
    validity_threshold: float = defaults.ZONE_VALIDITY_THRESHOLD
    min_spawn_exit_distance: float = defaults.SPAWN_EXIT_MIN_DISTANCE

    # Decoration noise
    octave_count: int = defaults.NOISE_OCTAVES
    interpolation: str = defaults.NOISE_INTERPOLATION

    # Hazards
    spike_ratio: float = defaults.SPIKE_RATIO
    turret_ratio: float = defaults.TURRET_RATIO

    # Retry schedule
    max_attempts: int = defaults.MAX_ATTEMPTS
    threshold_relaxation: float = defaults.THRESHOLD_RELAXATION
    min_validity_threshold: float = defaults.MIN_VALIDITY_THRESHOLD

    seed: Optional[int] = None

    @property
    def interpolation_kind(self) -> Interpolation:
        return Interpolation(self.interpolation)

    def validate(self) -> None:
        """Raise ValueError for settings the pipeline cannot run with."""
        if self.height <= 0 or self.width <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.height}x{self.width}")
        if not 0.0 <= self.alive_probability <= 1.0:
            raise ValueError(f"alive_probability must be within [0, 1], got {self.alive_probability}")
        if self.simulation_steps < 0:
            raise ValueError("simulation_steps must be non-negative")
        if not 0.0 < self.validity_threshold <= 1.0:
            raise ValueError(f"validity_threshold must be within (0, 1], got {self.validity_threshold}")
        if self.min_spawn_exit_distance < 0:
            raise ValueError("min_spawn_exit_distance must be non-negative")
        if self.octave_count < 1:
            raise ValueError("octave_count must be at least 1")
        for name in ("spike_ratio", "turret_ratio"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {getattr(self, name)}")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.threshold_relaxation < 0:
            raise ValueError("threshold_relaxation must be non-negative")
        if self.min_validity_threshold > self.validity_threshold:
            raise ValueError("min_validity_threshold cannot exceed validity_threshold")
        try:
            Interpolation(self.interpolation)
        except ValueError:
            raise ValueError(f"Unknown interpolation kind: {self.interpolation!r}") from None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationConfig":
        """Build a config from a dict, ignoring (and logging) unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown generation config keys: %s", ", ".join(unknown))
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.validate()
        return config

    def save_to_json(self, filepath: str) -> None:
        """Save config to a JSON file."""
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def load_generation_config(path: Optional[str] = None) -> GenerationConfig:
    """
    Load GenerationConfig from JSON.

    Args:
        path: File to read; defaults to config/generation_config.json

    Returns:
        Loaded config, or defaults when the file does not exist
    """
    path = path or defaults.DEFAULT_CONFIG_PATH
    if not os.path.exists(path):
        logger.debug("No generation config at %s, using defaults", path)
        return GenerationConfig()

    with open(path, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Generation config in {path} must be a JSON object")
    return GenerationConfig.from_dict(data)
