"""Tests for the worker pool and work partitioning."""

import threading

import pytest

from hopfield.nn.modules import WorkerPool, partition


class TestPartition:
    """Test contiguous partitioning."""

    @pytest.mark.parametrize(("size", "parts"), [(10, 3), (7, 7), (5, 8), (64, 4), (1, 3)])
    def test_covers_range_in_order(self, size, parts):
        """Test that slices tile range(size) without gaps or overlaps."""
        slices = partition(size, parts)
        covered = [i for s in slices for i in range(s.start, s.stop)]

        assert covered == list(range(size))
        assert len(slices) == min(size, parts)

    def test_near_equal_sizes(self):
        """Test that slice lengths differ by at most one."""
        lengths = [s.stop - s.start for s in partition(103, 8)]

        assert max(lengths) - min(lengths) <= 1
        assert all(length > 0 for length in lengths)

    def test_empty_range(self):
        """Test that nothing to split yields no slices."""
        assert partition(0, 4) == []

    def test_invalid_parts(self):
        """Test that parts must be positive."""
        with pytest.raises(ValueError, match="parts must be positive"):
            partition(5, 0)


class TestWorkerPool:
    """Test the ordered thread pool."""

    def test_invalid_size(self):
        """Test that the pool needs at least one worker."""
        with pytest.raises(ValueError, match="num_workers must be positive"):
            WorkerPool(0)

    def test_results_in_submission_order(self):
        """Test that results follow item order, not completion order."""
        with WorkerPool(4) as pool:
            results = pool.map(lambda x: x * x, range(20))

        assert results == [x * x for x in range(20)]

    def test_single_worker_runs_inline(self):
        """Test that a one-worker pool uses the caller's thread."""
        caller = threading.get_ident()
        with WorkerPool(1) as pool:
            threads = pool.map(lambda _: threading.get_ident(), range(3))

        assert threads == [caller] * 3

    def test_exceptions_propagate(self):
        """Test that a failing job raises in the caller."""

        def job(x):
            if x == 2:
                raise RuntimeError("boom")
            return x

        with WorkerPool(3) as pool, pytest.raises(RuntimeError, match="boom"):
            pool.map(job, range(5))

    def test_restart_after_shutdown(self):
        """Test that the pool can be reused after shutdown."""
        pool = WorkerPool(2)
        assert pool.map(lambda x: x + 1, [1, 2]) == [2, 3]
        pool.shutdown()
        assert pool.map(lambda x: x + 1, [3, 4]) == [4, 5]
        pool.shutdown()
