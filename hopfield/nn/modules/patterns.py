"""Bipolar pattern validation and storage.

Classes:
    PatternStore: Accumulates validated patterns for the next training call
"""

from collections.abc import Sequence

import torch
from torch import Tensor

from ...errors import DimensionMismatchError, InvalidValueError

VECTOR_DIM = 1
BATCH_DIM = 2


def validate_vector(
    values: Tensor | Sequence[float],
    dimension: int,
    name: str = "vector",
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> Tensor:
    """Convert ``values`` to a 1-D tensor of length ``dimension``.

    Raises:
        DimensionMismatchError: If the input is not 1-D or has the wrong length
    """
    tensor = torch.as_tensor(values, dtype=dtype, device=device)
    if tensor.dim() != VECTOR_DIM:
        raise DimensionMismatchError(
            f"{name} must be 1D, got shape {tuple(tensor.shape)}"
        )
    if tensor.shape[0] != dimension:
        raise DimensionMismatchError(
            f"{name} length must be {dimension}, got {tensor.shape[0]}"
        )
    return tensor


def is_bipolar(tensor: Tensor) -> bool:
    """Return True if every element is exactly +1 or -1."""
    return bool(((tensor == 1) | (tensor == -1)).all().item())


def validate_bipolar(
    values: Tensor | Sequence[float],
    dimension: int,
    name: str = "pattern",
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> Tensor:
    """Convert ``values`` to a validated bipolar vector.

    Args:
        values: Sequence or tensor of length ``dimension``
        dimension: Expected length N
        name: Name used in error messages
        dtype: Target dtype of the returned tensor
        device: Target device of the returned tensor

    Returns:
        1-D tensor with values in {-1, +1}. The input is never aliased.

    Raises:
        DimensionMismatchError: If the length differs from ``dimension``
        InvalidValueError: If any element is not +1 or -1
    """
    tensor = validate_vector(values, dimension, name, dtype, device)
    if not is_bipolar(tensor):
        raise InvalidValueError(f"{name} must contain only +1 and -1 values")
    return tensor.clone()


class PatternStore:
    """Ordered set of validated bipolar patterns.

    Attributes:
        dimension: Length N every stored pattern has
    """

    def __init__(
        self,
        dimension: int,
        dtype: torch.dtype | None = None,
        device: torch.device | None = None,
    ) -> None:
        self.dimension = dimension
        self.dtype = dtype
        self.device = device
        self._patterns: list[Tensor] = []

    def add_pattern(self, values: Tensor | Sequence[float]) -> None:
        """Validate and append one pattern."""
        self._patterns.append(
            validate_bipolar(values, self.dimension, "pattern", self.dtype, self.device)
        )

    def add_patterns(self, values: Tensor | Sequence[Sequence[float]]) -> None:
        """Validate and append every row of a 2-D batch.

        The batch is validated as a whole first, so a bad row leaves the store
        unchanged.
        """
        batch = [
            validate_bipolar(row, self.dimension, "pattern", self.dtype, self.device)
            for row in values
        ]
        self._patterns.extend(batch)

    def clear(self) -> None:
        self._patterns.clear()

    @property
    def patterns(self) -> Tensor:
        """Stored patterns stacked into a [P, N] tensor."""
        if not self._patterns:
            return torch.empty(0, self.dimension, dtype=self.dtype, device=self.device)
        return torch.stack(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"PatternStore(dimension={self.dimension}, num_patterns={len(self)})"
