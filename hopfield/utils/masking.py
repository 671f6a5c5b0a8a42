"""Corruption and similarity utilities for bipolar patterns.

This module provides the helpers used to probe associative recall: flipping
bits of a stored pattern to build a noisy cue, and measuring how far a
recalled state is from a reference pattern.
"""

import torch
from torch import Tensor

from ..errors import DimensionMismatchError


def flip_bits(
    pattern: Tensor,
    num_flips: int,
    generator: torch.Generator | None = None,
) -> Tensor:
    """Negate exactly ``num_flips`` distinct, randomly chosen positions.

    Args:
        pattern: Bipolar pattern [N]
        num_flips: Number of positions to flip, in [0, N]
        generator: Optional torch generator for reproducibility

    Returns:
        Flipped copy of ``pattern``

    Example:
        >>> noisy = flip_bits(torch.ones(8), 2)
        >>> int((noisy == -1).sum())
        2
    """
    if not 0 <= num_flips <= pattern.numel():
        raise ValueError(f"num_flips must be in [0, {pattern.numel()}], got {num_flips}")
    noisy = pattern.clone()
    indices = torch.randperm(pattern.numel(), generator=generator)[:num_flips]
    noisy[indices] = -noisy[indices]
    return noisy


def add_noise(
    pattern: Tensor,
    p: float = 0.1,
    generator: torch.Generator | None = None,
) -> Tensor:
    """Flip ``int(p * N)`` bits of a bipolar pattern."""
    if not 0 <= p <= 1:
        raise ValueError(f"p must be in [0, 1], got {p}")
    return flip_bits(pattern, int(p * pattern.numel()), generator=generator)


def _check_pair(a: Tensor, b: Tensor) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"Shape mismatch: {tuple(a.shape)} vs {tuple(b.shape)}"
        )


def hamming_distance(a: Tensor, b: Tensor) -> int:
    """Number of positions where two patterns differ."""
    _check_pair(a, b)
    return int((a != b).sum().item())


def overlap(a: Tensor, b: Tensor) -> float:
    """Normalized dot product in [-1, 1]; 1 means identical, -1 inverted."""
    _check_pair(a, b)
    return torch.dot(a.flatten().double(), b.flatten().double()).item() / a.numel()
