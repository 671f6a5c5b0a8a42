"""Hopfield Memory - discrete Hopfield associative memory on PyTorch tensors."""

__version__ = "0.1.0"

from .errors import (
    CorruptDataError,
    DimensionMismatchError,
    EmptyPatternSetError,
    HopfieldError,
    InvalidDimensionError,
    InvalidValueError,
    NotTrainedError,
)
from .nn.modules import (
    HopfieldConfig,
    HopfieldNetwork,
    RecallConfig,
    RecallResult,
    RecallStatus,
)

__all__ = [
    "CorruptDataError",
    "DimensionMismatchError",
    "EmptyPatternSetError",
    "HopfieldConfig",
    "HopfieldError",
    "HopfieldNetwork",
    "InvalidDimensionError",
    "InvalidValueError",
    "NotTrainedError",
    "RecallConfig",
    "RecallResult",
    "RecallStatus",
]
