"""Binary persistence for Hopfield weight matrices.

File layout, all little-endian:

- 8-byte signed integer: dimension N
- N*N float64 values: the weight matrix in row-major order

A loaded matrix must be finite, symmetric and have a zero diagonal, otherwise
``CorruptDataError`` is raised.
"""

import logging
import struct
from pathlib import Path

import numpy as np
import torch
from torch import Tensor

from ..errors import CorruptDataError

logger = logging.getLogger(__name__)

HEADER_FORMAT = "<q"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
VALUE_DTYPE = np.dtype("<f8")
VALUE_SIZE = VALUE_DTYPE.itemsize
MATRIX_DIM = 2


def save_weights(path: str | Path, weight: Tensor) -> None:
    """Write a square weight matrix to ``path``.

    Args:
        path: Destination file
        weight: Square weight matrix [N, N]
    """
    if weight.dim() != MATRIX_DIM or weight.shape[0] != weight.shape[1]:
        raise ValueError(f"weight must be a square matrix, got shape {tuple(weight.shape)}")
    dimension = weight.shape[0]
    values = weight.detach().to("cpu", torch.float64).contiguous().numpy()
    payload = values.astype(VALUE_DTYPE, copy=False).tobytes(order="C")
    Path(path).write_bytes(struct.pack(HEADER_FORMAT, dimension) + payload)
    logger.debug(f"Saved {dimension}x{dimension} weight matrix to {path}")


def load_weights(path: str | Path, dtype: torch.dtype = torch.float64) -> Tensor:
    """Read and validate a weight matrix written by ``save_weights``.

    Args:
        path: Source file
        dtype: Dtype of the returned tensor

    Returns:
        Weight matrix [N, N]

    Raises:
        CorruptDataError: If the header or payload is malformed, or the matrix
            is not finite, symmetric and zero on the diagonal
    """
    data = Path(path).read_bytes()
    if len(data) < HEADER_SIZE:
        raise CorruptDataError(f"{path}: file too short for header ({len(data)} bytes)")

    (dimension,) = struct.unpack_from(HEADER_FORMAT, data)
    if dimension <= 0:
        raise CorruptDataError(f"{path}: dimension must be positive, got {dimension}")

    expected = HEADER_SIZE + dimension * dimension * VALUE_SIZE
    if len(data) != expected:
        raise CorruptDataError(
            f"{path}: expected {expected} bytes for dimension {dimension}, got {len(data)}"
        )

    values = np.frombuffer(data, dtype=VALUE_DTYPE, offset=HEADER_SIZE)
    weight = torch.from_numpy(values.astype(np.float64)).reshape(dimension, dimension)
    if not torch.isfinite(weight).all():
        raise CorruptDataError(f"{path}: weight matrix contains non-finite values")
    if not torch.equal(weight, weight.T):
        raise CorruptDataError(f"{path}: weight matrix is not symmetric")
    if torch.any(torch.diagonal(weight) != 0):
        raise CorruptDataError(f"{path}: weight matrix has a non-zero diagonal")

    return weight.to(dtype)
