"""Tests for Hebbian weight-matrix construction."""

import pytest
import torch

from hopfield.errors import DimensionMismatchError, EmptyPatternSetError, InvalidValueError
from hopfield.nn.modules import WeightMatrixBuilder, WorkerPool
from hopfield.utils import StateGenerator
from tests.conftest import hadamard


@pytest.fixture
def pool():
    with WorkerPool(4) as worker_pool:
        yield worker_pool


class TestWeightMatrixBuilder:
    """Test WeightMatrixBuilder."""

    def test_symmetric_zero_diagonal(self, pool):
        """Test the weight-matrix invariants on random patterns."""
        patterns = StateGenerator(32, seed=11).create_state_collection(10)
        weight = WeightMatrixBuilder(32, pool).build(patterns)

        assert weight.shape == (32, 32)
        assert torch.equal(weight, weight.T)
        assert torch.all(torch.diagonal(weight) == 0)

    def test_hebbian_rule(self, pool):
        """Test W = Σ p pᵀ with the diagonal removed."""
        patterns = StateGenerator(16, seed=5).create_state_collection(6)
        expected = sum(torch.outer(p, p) for p in patterns)
        expected.fill_diagonal_(0)

        assert torch.equal(WeightMatrixBuilder(16, pool).build(patterns), expected)

    def test_integer_sums(self, pool):
        """Test that the matrix holds exact integer pattern sums."""
        patterns = StateGenerator(7, seed=30).create_state_collection(5)
        weight = WeightMatrixBuilder(7, pool).build(patterns)

        assert torch.equal(weight, weight.round())
        assert weight.abs().max().item() <= 5

    @pytest.mark.parametrize("workers", [1, 2, 3, 8, 32])
    def test_independent_of_worker_count(self, workers):
        """Test that the chunked reduction equals the serial one."""
        patterns = StateGenerator(24, seed=3).create_state_collection(17)
        with WorkerPool(1) as serial, WorkerPool(workers) as parallel:
            expected = WeightMatrixBuilder(24, serial).build(patterns)
            actual = WeightMatrixBuilder(24, parallel).build(patterns)

        assert torch.equal(actual, expected)

    def test_repeatable(self, pool):
        """Test that rebuilding gives bit-identical matrices."""
        patterns = StateGenerator(20, seed=8).create_state_collection(9)
        builder = WeightMatrixBuilder(20, pool)

        assert torch.equal(builder.build(patterns), builder.build(patterns))

    def test_returns_fresh_tensor(self, pool):
        """Test that a later build never touches an earlier result."""
        builder = WeightMatrixBuilder(8, pool)
        first = builder.build(hadamard(8)[[1]])
        snapshot = first.clone()
        second = builder.build(hadamard(8)[[2]])

        assert second is not first
        assert torch.equal(first, snapshot)

    def test_integer_patterns(self, pool):
        """Test that integer input is promoted to a floating matrix."""
        weight = WeightMatrixBuilder(4, pool).build(torch.tensor([[1, -1, 1, -1]]))

        assert weight.is_floating_point()
        assert weight[0, 1].item() == -1.0

    @pytest.mark.parametrize(
        "empty", [torch.empty(0, 4), torch.tensor([])], ids=["zero_rows", "flat"]
    )
    def test_empty_pattern_set(self, pool, empty):
        """Test that training on nothing fails."""
        with pytest.raises(EmptyPatternSetError):
            WeightMatrixBuilder(4, pool).build(empty)

    def test_wrong_length(self, pool):
        """Test that rows must have length N."""
        with pytest.raises(DimensionMismatchError):
            WeightMatrixBuilder(4, pool).build(torch.ones(2, 5))

    def test_wrong_rank(self, pool):
        """Test that a single unbatched pattern is rejected."""
        with pytest.raises(DimensionMismatchError):
            WeightMatrixBuilder(4, pool).build(torch.ones(4))

    def test_non_bipolar(self, pool):
        """Test that non-bipolar values are rejected."""
        with pytest.raises(InvalidValueError):
            WeightMatrixBuilder(3, pool).build(torch.tensor([[1.0, 0.0, -1.0]]))
