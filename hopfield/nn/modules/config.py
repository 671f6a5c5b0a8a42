"""Configuration classes for discrete Hopfield networks.

This module provides dataclass configurations for the two phases of a
Hopfield network's life: construction/training, and recall.

Classes:
    HopfieldConfig: Configuration for weight construction and the worker pool
    RecallConfig: Configuration for the update dynamics used during recall
"""

import os
from collections.abc import Sequence
from dataclasses import dataclass

from torch import Tensor

UPDATE_MODES = {"sync", "async", "relaxed_async"}
SWEEP_ORDERS = {"sequential", "random"}


@dataclass(frozen=True)
class HopfieldConfig:
    """Configuration for Hopfield network construction.

    Attributes:
        normalize: Scale the Hebbian couplings by 1/N. The stored weight
            matrix keeps its integer sums; fields and energies are divided by
            N after the matrix-vector product. Without a bias, recall
            follows exactly the same trajectory as an unnormalized network
            and only the energy scale changes. A bias is compared against
            the normalized field.
        num_workers: Size of the worker thread pool shared by training and
            synchronous recall. ``None`` uses ``os.cpu_count()``.
    """

    normalize: bool = False
    num_workers: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization."""
        if self.num_workers is not None and self.num_workers <= 0:
            raise ValueError(f"num_workers must be positive, got {self.num_workers}")

    @property
    def resolved_workers(self) -> int:
        """Number of worker threads actually used."""
        if self.num_workers is None:
            return os.cpu_count() or 1
        return self.num_workers


@dataclass(frozen=True)
class RecallConfig:
    """Configuration for a single recall.

    Attributes:
        mode: Update dynamics. ``"sync"`` updates every neuron from the same
            snapshot, ``"async"`` updates one neuron at a time with each
            update immediately visible, ``"relaxed_async"`` runs asynchronous
            sweeps inside independent neuron blocks in parallel, each block
            reading the other blocks from the snapshot taken at the start of
            the sweep. Energy is non-increasing per block under this mode, not
            per neuron.
        sweep_order: Neuron visiting order for the asynchronous modes,
            ``"sequential"`` (0..N-1) or ``"random"`` (a fresh permutation
            every sweep). Ignored in ``"sync"`` mode.
        max_iterations: Maximum number of steps (sync) or sweeps (async).
        bias: Optional per-neuron threshold vector of length N, stored as a
            tuple of floats so the config stays hashable.
        seed: Seed for the random sweep order. ``None`` draws from torch's
            default generator.
        track_energy: Record the energy after every state-changing step.
    """

    mode: str = "async"
    sweep_order: str = "random"
    max_iterations: int = 100
    bias: Tensor | Sequence[float] | None = None
    seed: int | None = None
    track_energy: bool = False

    def __post_init__(self) -> None:
        """Validate recall configuration parameters."""
        if self.bias is not None:
            values = self.bias.tolist() if isinstance(self.bias, Tensor) else self.bias
            object.__setattr__(self, "bias", tuple(values))
        if self.mode not in UPDATE_MODES:
            raise ValueError(f"mode must be one of {UPDATE_MODES}, got {self.mode}")
        if self.sweep_order not in SWEEP_ORDERS:
            raise ValueError(
                f"sweep_order must be one of {SWEEP_ORDERS}, got {self.sweep_order}"
            )
        if self.max_iterations <= 0:
            raise ValueError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )
