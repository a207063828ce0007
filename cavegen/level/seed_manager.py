"""
Seed Manager - deterministic seeds for each generation attempt and component
"""

import hashlib
import random
from typing import Dict, Optional

COMPONENTS = ('structure', 'noise', 'hazards')


def _hash_seed(seed_string: str) -> int:
    seed_hash = hashlib.md5(seed_string.encode()).hexdigest()
    return int(seed_hash[:8], 16)


class SeedManager:
    """Derives per-attempt, per-component random sources from one world seed"""

    def __init__(self, world_seed: Optional[int] = None):
        """
        Args:
            world_seed: Master seed for the level. If None, a random one is drawn.
        """
        self.world_seed = world_seed if world_seed is not None else random.randint(0, 2**31 - 1)
        self.current_attempt_seed: Optional[int] = None
        self.sub_seeds: Dict[str, int] = {}
        self._rng_instances: Dict[str, random.Random] = {}

    def generate_attempt_seed(self, attempt_index: int) -> int:
        """
        Seed for one generation attempt. Resets the component sub-seeds.

        Args:
            attempt_index: Zero-based attempt counter

        Returns:
            Deterministic seed for this attempt
        """
        attempt_seed = _hash_seed(f"{self.world_seed}_attempt_{attempt_index}")

        self.current_attempt_seed = attempt_seed
        self.sub_seeds = {
            component: _hash_seed(f"{attempt_seed}_{component}")
            for component in COMPONENTS
        }
        self._rng_instances = {}
        return attempt_seed

    def get_random(self, component: str) -> random.Random:
        """
        Random instance for a component of the current attempt.

        Args:
            component: 'structure' (automaton), 'noise' (decoration field) or 'hazards'
        """
        if self.current_attempt_seed is None:
            self.generate_attempt_seed(0)

        if component not in self._rng_instances:
            if component not in self.sub_seeds:
                self.sub_seeds[component] = _hash_seed(f"{self.current_attempt_seed}_{component}")
            self._rng_instances[component] = random.Random(self.sub_seeds[component])

        return self._rng_instances[component]

    def get_seed_info(self) -> Dict[str, object]:
        info = {
            'world_seed': self.world_seed,
            'sub_seeds': self.sub_seeds.copy(),
        }
        if self.current_attempt_seed is not None:
            info['attempt_seed'] = self.current_attempt_seed
        return info
