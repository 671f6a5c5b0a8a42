"""Hebbian weight-matrix construction.

The Hebbian rule W = Σ_p p pᵀ is a commutative reduction over patterns, so
the pattern set is split into one contiguous chunk per worker, each worker
accumulates its chunk's outer products into a partial N×N matrix, and the
partial matrices are merged in worker order. The result holds exact integer
sums; normalization by N is applied later, on fields and energies.

Classes:
    WeightMatrixBuilder: Builds symmetric zero-diagonal weight matrices
"""

import logging

import torch
from torch import Tensor

from ...errors import DimensionMismatchError, EmptyPatternSetError, InvalidValueError
from ..functional import finalize_weights, hebbian_outer_sum
from .parallel import WorkerPool, partition
from .patterns import BATCH_DIM, is_bipolar

logger = logging.getLogger(__name__)


class WeightMatrixBuilder:
    """Hebbian outer-product weight builder.

    Attributes:
        dimension: Network dimension N
        pool: Worker pool used for the partial sums
    """

    def __init__(self, dimension: int, pool: WorkerPool) -> None:
        self.dimension = dimension
        self.pool = pool

    def _validate(self, patterns: Tensor) -> None:
        if patterns.dim() != BATCH_DIM:
            raise DimensionMismatchError(
                f"patterns must be 2D (num_patterns, {self.dimension}), "
                f"got shape {tuple(patterns.shape)}"
            )
        if patterns.shape[0] == 0:
            raise EmptyPatternSetError("cannot build weights from an empty pattern set")
        if patterns.shape[1] != self.dimension:
            raise DimensionMismatchError(
                f"pattern length must be {self.dimension}, got {patterns.shape[1]}"
            )
        if not is_bipolar(patterns):
            raise InvalidValueError("patterns must contain only +1 and -1 values")

    def build(self, patterns: Tensor) -> Tensor:
        """Build a new weight matrix from a [P, N] pattern batch.

        Args:
            patterns: Bipolar patterns, one per row

        Returns:
            Fresh symmetric [N, N] tensor with a zero diagonal. No tensor
            handed out earlier is modified.

        Raises:
            EmptyPatternSetError: If ``patterns`` has no rows
            DimensionMismatchError: If rows are not of length N
            InvalidValueError: If any element is not +1 or -1
        """
        if patterns.numel() == 0 and patterns.dim() <= 1:
            raise EmptyPatternSetError("cannot build weights from an empty pattern set")
        self._validate(patterns)
        if not patterns.is_floating_point():
            patterns = patterns.to(torch.get_default_dtype())

        chunks = partition(patterns.shape[0], self.pool.num_workers)
        partials = self.pool.map(lambda chunk: hebbian_outer_sum(patterns[chunk]), chunks)

        accumulator = partials[0]
        for partial in partials[1:]:
            accumulator = accumulator + partial

        logger.debug(
            f"Merged {len(partials)} partial sums over {patterns.shape[0]} patterns"
        )
        return finalize_weights(accumulator)
