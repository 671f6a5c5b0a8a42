"""Recall dynamics for discrete Hopfield networks.

A recall is a small state machine. It starts ``RUNNING``; after every update
step the new state is compared with the previous one. An unchanged state
ends the recall as ``CONVERGED``, otherwise reaching the iteration budget
ends it as ``ITERATION_LIMIT``. Both are normal outcomes.

Three update modes are supported:

- ``sync``: every neuron is recomputed from the state at the start of the
  step. Row slices of the weight matrix are processed on the worker pool and
  joined before the merged state is used.
- ``async``: one neuron at a time, each update visible to the next. One
  sweep touches all N neurons in sequential or per-sweep random order. Energy
  never increases.
- ``relaxed_async``: neurons are split into one block per worker; each block
  sweeps its own neurons asynchronously against a snapshot of the other
  blocks taken at the start of the sweep. Energy is non-increasing within
  each block's sweep, not across the merged update.

Classes:
    RecallStatus: States of the recall state machine
    RecallResult: Immutable outcome of a recall
    ConvergenceDetector: Fixed-point test and termination rule
    UpdateEngine: Runs the dynamics for one weight matrix and configuration
"""

import logging
from dataclasses import dataclass
from enum import Enum

import torch
from torch import Tensor

from ..functional import bipolar_sign, energy, local_field
from .config import RecallConfig
from .parallel import WorkerPool, partition

logger = logging.getLogger(__name__)


class RecallStatus(Enum):
    """States of the recall state machine."""

    RUNNING = "running"
    CONVERGED = "converged"
    ITERATION_LIMIT = "iteration_limit"


@dataclass(frozen=True)
class RecallResult:
    """Result of a recall.

    Attributes:
        state: Final bipolar state
        steps: Number of update steps (sync) or sweeps (async) that changed
            the state. The step that confirms a fixed point is not counted,
            so recalling a stored pattern gives 0.
        converged: Whether a fixed point was reached
        energy: Energy of the final state
        status: Terminal state of the recall
        energy_history: Energy of the initial state followed by the energy
            after each counted step, if tracking was requested
    """

    state: Tensor
    steps: int
    converged: bool
    energy: float
    status: RecallStatus
    energy_history: list[float] | None = None


class ConvergenceDetector:
    """Decides when a recall stops.

    Attributes:
        max_iterations: Step budget. Exhausting it is not an error.
    """

    def __init__(self, max_iterations: int) -> None:
        if max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")
        self.max_iterations = max_iterations

    @staticmethod
    def has_converged(prev_state: Tensor, new_state: Tensor) -> bool:
        """Exact element-wise equality; states are discrete so no tolerance."""
        return torch.equal(prev_state, new_state)

    def transition(self, prev_state: Tensor, new_state: Tensor, iteration: int) -> RecallStatus:
        """Next status after the ``iteration``-th step (1-based)."""
        if self.has_converged(prev_state, new_state):
            return RecallStatus.CONVERGED
        if iteration >= self.max_iterations:
            return RecallStatus.ITERATION_LIMIT
        return RecallStatus.RUNNING


class UpdateEngine:
    """Applies update steps for a fixed weight matrix.

    The engine reads ``weight`` and ``bias`` but never writes them, so
    workers share them without locking.

    Attributes:
        weight: Weight matrix [N, N]
        bias: Threshold vector [N] or None
        normalizer: Divisor of ``W s``; N for normalized networks, else 1
        config: Recall configuration
        pool: Worker pool for the parallel modes
        num_blocks: Number of neuron blocks for ``sync`` and
            ``relaxed_async`` steps
        detector: Termination rule
    """

    def __init__(
        self,
        weight: Tensor,
        config: RecallConfig,
        pool: WorkerPool,
        bias: Tensor | None = None,
        normalizer: float = 1.0,
        num_blocks: int | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            weight: Weight matrix [N, N]
            config: Recall configuration
            pool: Worker pool that runs the blocks
            bias: Optional threshold vector [N]
            normalizer: Positive divisor of ``W s``
            num_blocks: Block count. Defaults to ``pool.num_workers``; set
                it when a single-worker pool must reproduce the blocking of
                a larger one.
        """
        self.weight = weight
        self.bias = bias
        self.normalizer = normalizer
        self.config = config
        self.pool = pool
        self.num_blocks = num_blocks or pool.num_workers
        self.detector = ConvergenceDetector(config.max_iterations)
        self.dimension = weight.shape[0]
        self._thresholds = bias.tolist() if bias is not None else [0.0] * self.dimension
        self.generator = torch.Generator()
        if config.seed is None:
            self.generator.seed()
        else:
            self.generator.manual_seed(config.seed)

    def _sweep_order(self) -> list[int]:
        if self.config.sweep_order == "random":
            return torch.randperm(self.dimension, generator=self.generator).tolist()
        return list(range(self.dimension))

    def _sweep(self, state: Tensor, order: list[int]) -> None:
        """Asynchronous updates in ``order``, written into ``state`` in place."""
        for i in order:
            field = torch.dot(self.weight[i], state).item() / self.normalizer
            threshold = self._thresholds[i]
            if field > threshold:
                state[i] = 1
            elif field < threshold:
                state[i] = -1

    def _sync_rows(self, state: Tensor, rows: slice) -> Tensor:
        bias = self.bias[rows] if self.bias is not None else None
        field = local_field(self.weight[rows], state, bias, self.normalizer)
        return bipolar_sign(field, state[rows])

    def sync_step(self, state: Tensor) -> Tensor:
        """One synchronous step; returns a new state."""
        blocks = partition(self.dimension, self.num_blocks)
        slices = self.pool.map(lambda rows: self._sync_rows(state, rows), blocks)
        return torch.cat(slices)

    def async_step(self, state: Tensor) -> Tensor:
        """One asynchronous sweep; returns a new state."""
        new_state = state.clone()
        self._sweep(new_state, self._sweep_order())
        return new_state

    def relaxed_async_step(self, state: Tensor) -> Tensor:
        """One blocked asynchronous sweep with a start-of-sweep snapshot."""
        order = self._sweep_order()
        blocks = partition(self.dimension, self.num_blocks)
        jobs = [
            (block, [i for i in order if block.start <= i < block.stop])
            for block in blocks
        ]

        def run_block(job: tuple[slice, list[int]]) -> Tensor:
            block, block_order = job
            local = state.clone()
            self._sweep(local, block_order)
            return local[block]

        return torch.cat(self.pool.map(run_block, jobs))

    def step(self, state: Tensor) -> Tensor:
        """Apply one step of the configured mode."""
        if self.config.mode == "sync":
            return self.sync_step(state)
        if self.config.mode == "relaxed_async":
            return self.relaxed_async_step(state)
        return self.async_step(state)

    def energy(self, state: Tensor) -> float:
        return energy(self.weight, state, self.bias, self.normalizer).item()

    def run(self, initial_state: Tensor) -> RecallResult:
        """Iterate from ``initial_state`` until a terminal status.

        Args:
            initial_state: Validated bipolar state [N]; not modified

        Returns:
            RecallResult for the terminal state
        """
        state = initial_state.clone()
        history = [self.energy(state)] if self.config.track_energy else None
        status = RecallStatus.RUNNING
        steps = 0
        iteration = 0

        while status is RecallStatus.RUNNING:
            iteration += 1
            new_state = self.step(state)
            status = self.detector.transition(state, new_state, iteration)
            if status is not RecallStatus.CONVERGED:
                steps += 1
                state = new_state
                if history is not None:
                    history.append(self.energy(state))

        if status is RecallStatus.ITERATION_LIMIT:
            logger.info(
                f"Recall stopped after {steps} {self.config.mode} steps without a fixed point"
            )
        else:
            logger.debug(f"Recall converged after {steps} {self.config.mode} steps")

        return RecallResult(
            state=state,
            steps=steps,
            converged=status is RecallStatus.CONVERGED,
            energy=self.energy(state),
            status=status,
            energy_history=history,
        )
