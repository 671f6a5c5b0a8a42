"""Tests for pattern corruption and similarity utilities."""

import pytest
import torch

from hopfield.errors import DimensionMismatchError
from hopfield.utils import add_noise, flip_bits, hamming_distance, overlap


@pytest.fixture
def pattern():
    return torch.tensor([1.0, -1.0, 1.0, 1.0, -1.0, -1.0, 1.0, -1.0, 1.0, 1.0])


class TestFlipBits:
    """Test flip_bits."""

    @pytest.mark.parametrize("num_flips", [0, 1, 4, 10])
    def test_exact_flip_count(self, pattern, num_flips):
        """Test that exactly num_flips distinct positions change."""
        noisy = flip_bits(pattern, num_flips, generator=torch.Generator().manual_seed(0))

        assert hamming_distance(pattern, noisy) == num_flips
        assert torch.equal(noisy.abs(), pattern.abs())

    def test_input_unchanged(self, pattern):
        """Test that the original pattern is not modified."""
        original = pattern.clone()
        flip_bits(pattern, 5)

        assert torch.equal(pattern, original)

    def test_reproducible(self, pattern):
        """Test that a seeded generator fixes the flipped positions."""
        first = flip_bits(pattern, 3, generator=torch.Generator().manual_seed(9))
        second = flip_bits(pattern, 3, generator=torch.Generator().manual_seed(9))

        assert torch.equal(first, second)

    @pytest.mark.parametrize("num_flips", [-1, 11])
    def test_out_of_range(self, pattern, num_flips):
        """Test that the flip count must fit the pattern."""
        with pytest.raises(ValueError, match="num_flips must be in"):
            flip_bits(pattern, num_flips)


class TestAddNoise:
    """Test add_noise."""

    def test_flip_fraction(self, pattern):
        """Test that int(p * N) bits are flipped."""
        noisy = add_noise(pattern, p=0.35)
        assert hamming_distance(pattern, noisy) == 3

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_invalid_probability(self, pattern, p):
        """Test that p must be a fraction."""
        with pytest.raises(ValueError, match="p must be in"):
            add_noise(pattern, p=p)


class TestSimilarity:
    """Test similarity measures."""

    def test_hamming_distance(self, pattern):
        """Test distance to itself and to its inverse."""
        assert hamming_distance(pattern, pattern) == 0
        assert hamming_distance(pattern, -pattern) == pattern.numel()

    def test_overlap(self, pattern):
        """Test overlap bounds and a partial overlap."""
        assert overlap(pattern, pattern) == pytest.approx(1.0)
        assert overlap(pattern, -pattern) == pytest.approx(-1.0)

        noisy = pattern.clone()
        noisy[:2] = -noisy[:2]
        assert overlap(pattern, noisy) == pytest.approx(0.6)

    def test_shape_mismatch(self, pattern):
        """Test that both patterns must have the same shape."""
        with pytest.raises(DimensionMismatchError, match="Shape mismatch"):
            hamming_distance(pattern, pattern[:5])
        with pytest.raises(DimensionMismatchError):
            overlap(pattern, pattern[:5])
