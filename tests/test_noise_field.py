"""
Tests for octave value noise.
"""

import math
import random

import pytest

from cavegen.level.noise_field import (
    Interpolation,
    NoiseField,
    cosine_interpolate,
    generate_noise_field,
    linear_interpolate,
)


class TestInterpolation:
    def test_linear_endpoints_and_midpoint(self):
        assert linear_interpolate(2.0, 6.0, 0.0) == 2.0
        assert linear_interpolate(2.0, 6.0, 1.0) == 6.0
        assert linear_interpolate(2.0, 6.0, 0.5) == 4.0

    def test_cosine_endpoints_and_midpoint(self):
        assert cosine_interpolate(2.0, 6.0, 0.0) == pytest.approx(2.0)
        assert cosine_interpolate(2.0, 6.0, 1.0) == pytest.approx(6.0)
        assert cosine_interpolate(2.0, 6.0, 0.5) == pytest.approx(4.0)

    def test_cosine_eases_near_start(self):
        assert cosine_interpolate(0.0, 1.0, 0.25) < linear_interpolate(0.0, 1.0, 0.25)


class TestSmoothNoise:
    def test_octave_zero_is_base(self):
        base = [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]]
        field = NoiseField(2, 3)
        assert field.generate_smooth_noise(base, 0) == base

    def test_period_two_blends_and_wraps(self):
        base = [
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 0.0],
        ]
        smooth = NoiseField(2, 4).generate_smooth_noise(base, 1)
        # Column 1 blends columns 0 and 2; column 3 wraps back to column 0
        assert smooth[0][1] == pytest.approx(0.5)
        assert smooth[0][3] == pytest.approx(0.5)
        # Row 1 blends rows 0 and (0 + 2) % 2 == 0
        assert smooth[1][1] == pytest.approx(0.5)


class TestGenerate:
    @pytest.mark.parametrize("height,width,octaves", [(1, 1, 1), (7, 13, 3), (32, 32, 5), (10, 10, 6)])
    def test_values_in_unit_range(self, height, width, octaves):
        for kind in Interpolation:
            field = NoiseField(height, width).generate(octaves, kind, rng=random.Random(11))
            assert len(field) == height
            assert all(len(row) == width for row in field)
            assert all(0.0 <= v <= 1.0 for row in field for v in row)

    def test_reproducible_from_base(self):
        rng = random.Random(5)
        base = NoiseField(16, 16).generate_white_noise(rng)
        a = generate_noise_field(16, 16, 4, base_noise=base)
        b = generate_noise_field(16, 16, 4, base_noise=[row[:] for row in base])
        assert a == b

    def test_reproducible_from_seed(self):
        a = NoiseField(20, 24).generate(5, Interpolation.COSINE, rng=random.Random(99))
        b = NoiseField(20, 24).generate(5, Interpolation.COSINE, rng=random.Random(99))
        assert a == b

    def test_constant_base_stays_constant(self):
        base = [[0.7] * 8 for _ in range(8)]
        field = NoiseField(8, 8).generate(3, base_noise=base)
        assert all(math.isclose(v, 0.7) for row in field for v in row)

    def test_single_octave_is_base(self):
        base = NoiseField(4, 5).generate_white_noise(random.Random(1))
        field = NoiseField(4, 5).generate(1, base_noise=base)
        for row, base_row in zip(field, base):
            assert row == pytest.approx(base_row)

    def test_zero_octaves_rejected(self):
        with pytest.raises(ValueError):
            NoiseField(4, 4).generate(0)

    def test_empty_field(self):
        assert NoiseField(0, 5).generate(3) == []

    def test_base_dimension_mismatch(self):
        with pytest.raises(ValueError):
            NoiseField(4, 4).generate(2, base_noise=[[0.5] * 3 for _ in range(4)])
