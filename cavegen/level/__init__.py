from .cave_automaton import CaveAutomaton, GridIndexError
from .zone_data import Location, Zone, UNDEFINED_PAIR
from .zone_analyzer import ZoneAnalyzer, AnalyzerState
from .noise_field import NoiseField, Interpolation, generate_noise_field
from .seed_manager import SeedManager
from .generation_config import GenerationConfig, load_generation_config
from .hazard_placement import Hazard, HazardKind, Facing, place_hazards
from .level_generator import GeneratedLevel, LevelGenerator, LevelGenerationError, generate_level

__all__ = [
    'CaveAutomaton',
    'GridIndexError',
    'Location',
    'Zone',
    'UNDEFINED_PAIR',
    'ZoneAnalyzer',
    'AnalyzerState',
    'NoiseField',
    'Interpolation',
    'generate_noise_field',
    'SeedManager',
    'GenerationConfig',
    'load_generation_config',
    'Hazard',
    'HazardKind',
    'Facing',
    'place_hazards',
    'GeneratedLevel',
    'LevelGenerator',
    'LevelGenerationError',
    'generate_level',
]
