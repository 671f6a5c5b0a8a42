"""Functional implementations for discrete Hopfield networks.

All functions are pure: they never modify their tensor arguments.
"""

import torch
from torch import Tensor


def local_field(
    weight: Tensor,
    state: Tensor,
    bias: Tensor | None = None,
    normalizer: float = 1.0,
) -> Tensor:
    """Compute the thresholded local field of every neuron.

    The division by ``normalizer`` happens after the matrix-vector product,
    so an exactly zero sum stays exactly zero and no sign ever changes.

    Args:
        weight: Weight matrix [N, N] (or a row slice [n, N])
        state: Bipolar state [N]
        bias: Optional threshold vector matching the rows of ``weight``
        normalizer: Positive divisor of ``W s``, N for normalized networks

    Returns:
        Field ``W s / normalizer - bias`` with one entry per row of ``weight``
    """
    field = torch.mv(weight, state)
    if normalizer != 1:
        field = field / normalizer
    if bias is not None:
        field = field - bias
    return field


def bipolar_sign(field: Tensor, current: Tensor) -> Tensor:
    """Map a local field to bipolar activations.

    A neuron whose field is exactly zero keeps its current value, so ties
    never cause a flip.

    Args:
        field: Thresholded local field [n]
        current: Current activations of the same neurons [n]

    Returns:
        New activations in {-1, +1}
    """
    ones = torch.ones_like(current)
    return torch.where(field > 0, ones, torch.where(field < 0, -ones, current))


def hebbian_outer_sum(patterns: Tensor) -> Tensor:
    """Sum of outer products ``p pᵀ`` over the rows of ``patterns``.

    Args:
        patterns: Bipolar patterns [P, N]

    Returns:
        Unnormalized accumulator [N, N] with the diagonal still set
    """
    return patterns.T @ patterns


def finalize_weights(accumulator: Tensor) -> Tensor:
    """Turn a Hebbian accumulator into a valid weight matrix.

    Args:
        accumulator: Sum of pattern outer products [N, N]

    Returns:
        New symmetric weight matrix with a zero diagonal
    """
    weight = 0.5 * (accumulator + accumulator.T)
    weight.fill_diagonal_(0)
    return weight


def energy(
    weight: Tensor,
    state: Tensor,
    bias: Tensor | None = None,
    normalizer: float = 1.0,
) -> Tensor:
    """Compute Hopfield network energy.

    E(s) = -1/2 * sᵀ W s / normalizer + biasᵀ s

    Args:
        weight: Symmetric weight matrix [N, N]
        state: Bipolar state [N]
        bias: Optional threshold vector [N]
        normalizer: Positive divisor of the quadratic term

    Returns:
        Energy scalar
    """
    value = -0.5 * torch.dot(state, torch.mv(weight, state)) / normalizer
    if bias is not None:
        value = value + torch.dot(bias, state)
    return value


def unit_energies(
    weight: Tensor,
    state: Tensor,
    bias: Tensor | None = None,
    normalizer: float = 1.0,
) -> Tensor:
    """Per-neuron energy contributions ``-s_i (Σ_j W_ij s_j / normalizer - bias_i)``.

    A positive entry marks an unstable neuron: flipping it lowers the energy.

    Args:
        weight: Symmetric weight matrix [N, N]
        state: Bipolar state [N]
        bias: Optional threshold vector [N]
        normalizer: Positive divisor of ``W s``

    Returns:
        Energy of each unit [N]
    """
    return -state * local_field(weight, state, bias, normalizer)


def unstable_units(
    weight: Tensor,
    state: Tensor,
    bias: Tensor | None = None,
    normalizer: float = 1.0,
) -> int:
    """Count neurons whose update would change the state."""
    return int((unit_energies(weight, state, bias, normalizer) > 0).sum().item())
