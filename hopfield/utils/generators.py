"""Seeded generation of random bipolar states.

Classes:
    StateGenerator: Reproducible source of uniformly random bipolar states
"""

import torch
from torch import Tensor

from ..errors import InvalidDimensionError


class StateGenerator:
    """Generator of uniformly random bipolar states.

    Every element is +1 or -1 with equal probability. When no seed is given a
    seed is drawn once and kept in ``seed``, so any run can be repeated.

    Attributes:
        dimension: Length of generated states
        seed: Seed of the underlying torch generator

    Example:
        >>> generator = StateGenerator(16, seed=7)
        >>> states = generator.create_state_collection(4)
        >>> states.shape
        torch.Size([4, 16])
    """

    def __init__(
        self,
        dimension: int,
        seed: int | None = None,
        dtype: torch.dtype = torch.float64,
    ) -> None:
        if dimension <= 0:
            raise InvalidDimensionError(f"dimension must be positive, got {dimension}")
        self.dimension = dimension
        self.dtype = dtype
        self.generator = torch.Generator()
        if seed is None:
            seed = self.generator.seed()
        else:
            self.generator.manual_seed(seed)
        self.seed = seed

    def next_state(self) -> Tensor:
        """Draw one state of shape [dimension]."""
        bits = torch.randint(0, 2, (self.dimension,), generator=self.generator)
        return (2 * bits - 1).to(self.dtype)

    def create_state_collection(self, num_states: int) -> Tensor:
        """Draw ``num_states`` states stacked into [num_states, dimension]."""
        if num_states < 0:
            raise ValueError(f"num_states must be non-negative, got {num_states}")
        bits = torch.randint(
            0, 2, (num_states, self.dimension), generator=self.generator
        )
        return (2 * bits - 1).to(self.dtype)

    def __repr__(self) -> str:
        return f"StateGenerator(dimension={self.dimension}, seed={self.seed})"
