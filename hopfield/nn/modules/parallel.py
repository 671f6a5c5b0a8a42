"""Worker thread pool shared by weight construction and recall.

Torch releases the GIL inside its matrix kernels, so short CPU-bound tensor
jobs on plain threads run concurrently. Every call to ``WorkerPool.map``
waits for all of its jobs before returning; that join is the barrier between
consecutive update steps.

Classes:
    WorkerPool: Fixed-size, lazily started thread pool with ordered map
"""

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def partition(size: int, parts: int) -> list[slice]:
    """Split ``range(size)`` into contiguous, near-equal slices.

    Never returns more slices than items, and never an empty slice.

    Args:
        size: Number of items
        parts: Requested number of slices

    Returns:
        List of ``min(size, parts)`` slices covering ``range(size)`` in order

    Example:
        >>> partition(10, 3)
        [slice(0, 4, None), slice(4, 7, None), slice(7, 10, None)]
    """
    if size <= 0:
        return []
    if parts <= 0:
        raise ValueError(f"parts must be positive, got {parts}")
    parts = min(parts, size)
    base, extra = divmod(size, parts)
    slices = []
    start = 0
    for i in range(parts):
        stop = start + base + (1 if i < extra else 0)
        slices.append(slice(start, stop))
        start = stop
    return slices


class WorkerPool:
    """Fixed-size thread pool returning results in submission order.

    Attributes:
        num_workers: Number of threads, and the number of partitions callers
            should split their work into
    """

    def __init__(self, num_workers: int) -> None:
        if num_workers <= 0:
            raise ValueError(f"num_workers must be positive, got {num_workers}")
        self.num_workers = num_workers
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                logger.debug(f"Starting worker pool with {self.num_workers} threads")
                self._executor = ThreadPoolExecutor(
                    max_workers=self.num_workers, thread_name_prefix="hopfield"
                )
            return self._executor

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
        """Apply ``fn`` to every item, returning results in item order.

        Runs inline when the pool has a single worker or there is a single
        item. Exceptions raised by a job propagate to the caller after all
        jobs have finished.
        """
        items = list(items)
        if self.num_workers == 1 or len(items) <= 1:
            return [fn(item) for item in items]
        executor = self._get_executor()
        futures = [executor.submit(fn, item) for item in items]
        # Join every job before inspecting any result
        for future in futures:
            future.exception()
        return [future.result() for future in futures]

    def shutdown(self) -> None:
        """Stop the worker threads. The pool restarts on next use."""
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return f"WorkerPool(num_workers={self.num_workers})"
