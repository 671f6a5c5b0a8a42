"""Discrete Hopfield network.

This module implements the classical binary (bipolar) Hopfield network: a
content-addressable memory that stores patterns in a symmetric weight matrix
with the Hebbian rule and retrieves them by iterating sign-threshold updates
until a fixed point of the energy function is reached.

Classes:
    HopfieldNetwork: Pattern storage, training, recall and energy
"""

import dataclasses
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import torch
from torch import Tensor, nn
from tqdm import tqdm

from ...errors import InvalidDimensionError, NotTrainedError
from ...utils.persistence import load_weights, save_weights
from .. import functional
from .builder import WeightMatrixBuilder
from .config import HopfieldConfig, RecallConfig
from .dynamics import RecallResult, UpdateEngine
from .parallel import WorkerPool
from .patterns import PatternStore, validate_bipolar, validate_vector

logger = logging.getLogger(__name__)


class HopfieldNetwork(nn.Module):
    """Bipolar Hopfield associative memory.

    Training builds a new weight matrix and publishes it by replacing the
    ``weight`` buffer; a recall holds on to the matrix it started with.
    Training and recall on the same instance must not overlap: the network
    is single-writer and callers synchronize externally.

    Calling the module runs ``recall``.

    Attributes:
        dimension: Number of neurons N
        config: Construction configuration
        weight: Buffer holding the Hebbian weight matrix [N, N], or None
            before training. Entries are unnormalized sums.
        normalizer: N when ``config.normalize`` is set, else 1
        pool: Worker pool shared by training and recall
    """

    def __init__(
        self,
        dimension: int,
        config: HopfieldConfig | None = None,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        """Initialize an untrained network.

        Args:
            dimension: Number of neurons N, must be positive
            config: Hopfield configuration object. Defaults to HopfieldConfig() if None
            device: Device to place tensors on. Defaults to None (CPU).
            dtype: Floating dtype of weights and states. Defaults to torch.float64.

        Raises:
            InvalidDimensionError: If ``dimension`` is not a positive integer
        """
        if isinstance(dimension, bool) or not isinstance(dimension, int) or dimension <= 0:
            raise InvalidDimensionError(
                f"dimension must be a positive integer, got {dimension}"
            )

        super().__init__()
        self.dimension = dimension
        self.config = config or HopfieldConfig()
        self.factory_kwargs = {"device": device, "dtype": dtype or torch.float64}
        self.pool = WorkerPool(self.config.resolved_workers)
        self.normalizer = float(dimension) if self.config.normalize else 1.0
        self.builder = WeightMatrixBuilder(dimension, self.pool)
        self.store = PatternStore(dimension, **self.factory_kwargs)
        self.register_buffer("weight", None)

    @property
    def is_trained(self) -> bool:
        return self.weight is not None

    @property
    def num_patterns(self) -> int:
        """Number of patterns waiting in the store."""
        return len(self.store)

    def add_pattern(self, values: Tensor | Sequence[float]) -> None:
        """Store a pattern for the next ``train()`` call."""
        self.store.add_pattern(values)

    def add_patterns(self, values: Tensor | Sequence[Sequence[float]]) -> None:
        """Store every row of a [P, N] batch for the next ``train()`` call."""
        self.store.add_patterns(values)

    def clear_patterns(self) -> None:
        """Empty the pattern store. The current weight matrix is kept."""
        self.store.clear()

    def _pattern_batch(self, patterns: Tensor | Sequence[Sequence[float]]) -> Tensor:
        if isinstance(patterns, Tensor):
            return patterns.to(**self.factory_kwargs)
        rows = [self._state(row, "pattern") for row in patterns]
        if not rows:
            return torch.empty(0, self.dimension, **self.factory_kwargs)
        return torch.stack(rows)

    def train(
        self, patterns: Tensor | Sequence[Sequence[float]] | bool | None = None
    ) -> "HopfieldNetwork":
        """Build and publish a new weight matrix.

        A boolean argument keeps the ``nn.Module`` meaning and only switches
        training mode, so ``eval()`` works as usual.

        Args:
            patterns: [P, N] bipolar patterns. If None, the stored patterns
                are used.

        Returns:
            self

        Raises:
            EmptyPatternSetError: If there are no patterns
            DimensionMismatchError: If a pattern does not have length N
            InvalidValueError: If a pattern is not bipolar
        """
        if isinstance(patterns, bool):
            return super().train(patterns)
        batch = self.store.patterns if patterns is None else self._pattern_batch(patterns)
        weight = self.builder.build(batch)
        self.weight = weight
        logger.info(
            f"Trained {self.dimension}-neuron network on {batch.shape[0]} patterns"
        )
        return self

    def _require_weight(self) -> Tensor:
        weight = self.weight
        if weight is None:
            raise NotTrainedError("network has not been trained")
        return weight

    def _state(self, values: Tensor | Sequence[float], name: str = "state") -> Tensor:
        return validate_bipolar(values, self.dimension, name, **self.factory_kwargs)

    def _bias(self, bias: Tensor | Sequence[float] | None) -> Tensor | None:
        if bias is None:
            return None
        return validate_vector(bias, self.dimension, "bias", **self.factory_kwargs)

    def recall(
        self,
        initial: Tensor | Sequence[float],
        config: RecallConfig | None = None,
    ) -> RecallResult:
        """Relax ``initial`` towards a stored pattern.

        Args:
            initial: Bipolar start state of length N
            config: Recall configuration. Defaults to RecallConfig() if None

        Returns:
            RecallResult with the final state, counted steps, convergence
            flag and final energy

        Raises:
            NotTrainedError: If ``train`` has not been called
            DimensionMismatchError: If the state or bias length is not N
            InvalidValueError: If the state is not bipolar
        """
        weight = self._require_weight()
        config = config or RecallConfig()
        state = self._state(initial)
        engine = UpdateEngine(
            weight,
            config,
            self.pool,
            bias=self._bias(config.bias),
            normalizer=self.normalizer,
        )
        return engine.run(state)

    def forward(
        self,
        initial: Tensor | Sequence[float],
        config: RecallConfig | None = None,
    ) -> RecallResult:
        return self.recall(initial, config)

    def recall_many(
        self,
        states: Iterable[Tensor | Sequence[float]],
        config: RecallConfig | None = None,
        progress: bool = False,
    ) -> list[RecallResult]:
        """Recall a collection of states, returning results in input order.

        States are spread over the worker pool, one recall per job. Each
        recall runs its own steps inline with the same neuron blocking as
        ``recall``, so for the same seed every result equals the one ``recall``
        would return.
        With a seeded config, state ``i`` uses seed ``config.seed + i`` so
        every state gets its own reproducible sweep order.

        Args:
            states: Bipolar start states
            config: Recall configuration shared by all states
            progress: Show a tqdm progress bar

        Returns:
            One RecallResult per input state
        """
        weight = self._require_weight()
        config = config or RecallConfig()
        validated = [self._state(state) for state in states]
        bias = self._bias(config.bias)
        inline = WorkerPool(1)

        with tqdm(
            total=len(validated), desc="recall", unit="state", disable=not progress
        ) as progress_bar:

            def relax(job: tuple[int, Tensor]) -> RecallResult:
                index, state = job
                state_config = config
                if config.seed is not None:
                    state_config = dataclasses.replace(config, seed=config.seed + index)
                engine = UpdateEngine(
                    weight,
                    state_config,
                    inline,
                    bias=bias,
                    normalizer=self.normalizer,
                    num_blocks=self.pool.num_workers,
                )
                result = engine.run(state)
                progress_bar.update(1)
                return result

            results = self.pool.map(relax, enumerate(validated))

        logger.debug(f"Recalled {len(results)} states on {self.pool.num_workers} workers")
        return results

    def energy(
        self,
        state: Tensor | Sequence[float],
        bias: Tensor | Sequence[float] | None = None,
    ) -> float:
        """Energy ``-1/2 sᵀ W s + biasᵀ s`` of a bipolar state.

        Raises:
            NotTrainedError: If ``train`` has not been called
            DimensionMismatchError: If the state or bias length is not N
            InvalidValueError: If the state is not bipolar
        """
        weight = self._require_weight()
        value = functional.energy(
            weight, self._state(state), self._bias(bias), self.normalizer
        )
        return value.item()

    def unit_energies(
        self,
        state: Tensor | Sequence[float],
        bias: Tensor | Sequence[float] | None = None,
    ) -> Tensor:
        """Per-neuron energies; positive entries are unstable neurons."""
        weight = self._require_weight()
        return functional.unit_energies(
            weight, self._state(state), self._bias(bias), self.normalizer
        )

    def save(self, path: str | Path) -> None:
        """Write the weight matrix in the binary weight format."""
        save_weights(path, self._require_weight())

    @classmethod
    def load(
        cls,
        path: str | Path,
        config: HopfieldConfig | None = None,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> "HopfieldNetwork":
        """Create a trained network from a saved weight matrix.

        Raises:
            CorruptDataError: If the file fails validation
        """
        weight = load_weights(path)
        network = cls(weight.shape[0], config=config, device=device, dtype=dtype)
        network.weight = weight.to(**network.factory_kwargs)
        logger.info(f"Loaded {network.dimension}-neuron network from {path}")
        return network

    def close(self) -> None:
        """Shut down the worker pool."""
        self.pool.shutdown()

    def __enter__(self) -> "HopfieldNetwork":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def extra_repr(self) -> str:
        return (
            f"dimension={self.dimension}, normalize={self.config.normalize}, "
            f"num_workers={self.pool.num_workers}, trained={self.is_trained}"
        )
