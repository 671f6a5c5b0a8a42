"""Network modules for discrete Hopfield associative memories.

This module provides the building blocks of a bipolar Hopfield network and
the network itself:

- Configuration classes for construction and recall
- Pattern validation and storage
- Hebbian weight-matrix construction with a parallel pattern reduction
- Synchronous, asynchronous and relaxed block-parallel update dynamics
- The convergence rule and immutable recall results
- A worker thread pool shared by training and recall
"""

from .builder import WeightMatrixBuilder
from .config import HopfieldConfig, RecallConfig
from .dynamics import ConvergenceDetector, RecallResult, RecallStatus, UpdateEngine
from .network import HopfieldNetwork
from .parallel import WorkerPool, partition
from .patterns import PatternStore, validate_bipolar

__all__ = [
    "ConvergenceDetector",
    # Configuration classes
    "HopfieldConfig",
    # Network
    "HopfieldNetwork",
    # Patterns
    "PatternStore",
    "RecallConfig",
    # Dynamics
    "RecallResult",
    "RecallStatus",
    "UpdateEngine",
    # Training
    "WeightMatrixBuilder",
    # Concurrency
    "WorkerPool",
    "partition",
    "validate_bipolar",
]
