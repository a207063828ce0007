"""
Noise Field - octave-blended value noise used for wall decoration.

The field is built from a single base layer of uniform random values; each
octave resamples that layer on a coarser lattice (period 2**octave, wrapping
toroidally) and the octaves are combined with geometric amplitude falloff.
"""

import math
import random
from enum import Enum
from typing import Callable, List, Optional

from cavegen.config import NOISE_PERSISTENCE

NoiseGrid = List[List[float]]


class Interpolation(Enum):
    """Blend curve used between lattice samples."""
    LINEAR = "linear"
    COSINE = "cosine"


def linear_interpolate(x0: float, x1: float, alpha: float) -> float:
    return x0 * (1 - alpha) + x1 * alpha


def cosine_interpolate(x0: float, x1: float, alpha: float) -> float:
    adjusted = (1 - math.cos(alpha * math.pi)) / 2
    return x0 * (1 - adjusted) + x1 * adjusted


_INTERPOLATORS = {
    Interpolation.LINEAR: linear_interpolate,
    Interpolation.COSINE: cosine_interpolate,
}


class NoiseField:
    """Perlin-style value noise generator for a height x width field"""

    def __init__(self, height: int, width: int, persistence: float = NOISE_PERSISTENCE):
        self.height = height
        self.width = width
        self.persistence = persistence

    def generate_white_noise(self, rng: random.Random) -> NoiseGrid:
        """Base layer of independent uniform values in [0, 1)."""
        return [[rng.random() for _ in range(self.width)] for _ in range(self.height)]

    def generate_smooth_noise(self, base_noise: NoiseGrid, octave: int,
                              interpolation: Interpolation = Interpolation.LINEAR) -> NoiseGrid:
        """
        Resample the base layer at period 2**octave.

        Args:
            base_noise: White noise layer (height x width)
            octave: Octave index; the lattice period is 2**octave
            interpolation: Blend curve between lattice points

        Returns:
            Smoothed layer, same dimensions as base_noise
        """
        blend: Callable[[float, float, float], float] = _INTERPOLATORS[interpolation]
        period = 1 << octave
        frequency = 1.0 / period

        smooth: NoiseGrid = []
        for i in range(self.height):
            v0 = (i // period) * period
            v1 = (v0 + period) % self.height
            vertical = (i - v0) * frequency

            row = []
            for j in range(self.width):
                h0 = (j // period) * period
                h1 = (h0 + period) % self.width
                horizontal = (j - h0) * frequency

                top = blend(base_noise[v0][h0], base_noise[v0][h1], horizontal)
                bottom = blend(base_noise[v1][h0], base_noise[v1][h1], horizontal)
                row.append(blend(top, bottom, vertical))
            smooth.append(row)

        return smooth

    def generate(self, octave_count: int,
                 interpolation: Interpolation = Interpolation.LINEAR,
                 rng: Optional[random.Random] = None,
                 base_noise: Optional[NoiseGrid] = None) -> NoiseGrid:
        """
        Generate the combined noise field.

        Args:
            octave_count: Number of octaves to blend (>= 1)
            interpolation: Blend curve between lattice points
            rng: Random source for the base layer (ignored when base_noise is given)
            base_noise: Pre-built base layer; output is fully determined by it

        Returns:
            height x width grid of floats in [0, 1]; empty for a zero-sized field
        """
        if octave_count < 1:
            raise ValueError(f"octave_count must be at least 1, got {octave_count}")
        if self.height <= 0 or self.width <= 0:
            return []

        if base_noise is None:
            base_noise = self.generate_white_noise(rng or random.Random())
        elif len(base_noise) != self.height or any(len(row) != self.width for row in base_noise):
            raise ValueError("base_noise dimensions do not match the field")

        octaves = [
            self.generate_smooth_noise(base_noise, octave, interpolation)
            for octave in range(octave_count)
        ]

        field = [[0.0] * self.width for _ in range(self.height)]
        amplitude = 1.0
        total_amplitude = 0.0

        # Coarsest octave first, each finer one weighted less
        for octave in range(octave_count - 1, -1, -1):
            amplitude *= self.persistence
            total_amplitude += amplitude
            layer = octaves[octave]
            for i in range(self.height):
                row = field[i]
                src = layer[i]
                for j in range(self.width):
                    row[j] += src[j] * amplitude

        for row in field:
            for j in range(self.width):
                row[j] = min(1.0, max(0.0, row[j] / total_amplitude))

        return field


def generate_noise_field(height: int, width: int, octave_count: int,
                         interpolation: Interpolation = Interpolation.LINEAR,
                         rng: Optional[random.Random] = None,
                         base_noise: Optional[NoiseGrid] = None) -> NoiseGrid:
    """Convenience wrapper around NoiseField(height, width).generate(...)."""
    return NoiseField(height, width).generate(octave_count, interpolation, rng=rng, base_noise=base_noise)
