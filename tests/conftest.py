"""Pytest configuration and shared fixtures."""

# Add project root to path for imports
import sys
from pathlib import Path

import pytest
import torch

sys.path.insert(0, str(Path(__file__).parent.parent))

# Test constants
TOLERANCE_ENERGY = 1e-9
NOISY_RECALL_FLIPS = 4


def hadamard(order: int) -> torch.Tensor:
    """Sylvester Hadamard matrix; rows are mutually orthogonal bipolar patterns."""
    matrix = torch.ones(1, 1, dtype=torch.float64)
    while matrix.shape[0] < order:
        matrix = torch.cat(
            [torch.cat([matrix, matrix], dim=1), torch.cat([matrix, -matrix], dim=1)]
        )
    return matrix


def random_symmetric_weight(dimension: int, seed: int) -> torch.Tensor:
    """Random symmetric zero-diagonal matrix for dynamics tests."""
    generator = torch.Generator().manual_seed(seed)
    a = torch.randn(dimension, dimension, generator=generator, dtype=torch.float64)
    weight = 0.5 * (a + a.T)
    weight.fill_diagonal_(0)
    return weight


@pytest.fixture
def device():
    """Get test device (CPU for reproducibility)."""
    return torch.device("cpu")


@pytest.fixture
def seed():
    """Set random seed for reproducibility."""
    seed_value = 42
    torch.manual_seed(seed_value)
    return seed_value


@pytest.fixture
def dimension():
    """Standard network dimension for tests."""
    return 64


@pytest.fixture
def patterns(dimension):
    """Three orthogonal patterns; pairwise Hamming distance is N/2."""
    return hadamard(dimension)[[5, 22, 41]]


@pytest.fixture
def alternating():
    """The four-neuron alternating pattern."""
    return [1, -1, 1, -1]
