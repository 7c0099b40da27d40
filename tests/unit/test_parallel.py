"""
Unit tests for company_match.utils.parallel module.
"""

import time

import pytest

from company_match.utils.parallel import execute_ordered
from company_match.utils.stats import ExecutionStats


class TestExecuteOrdered:
    """Test ordered parallel execution."""

    def test_order_preserved_when_workers_finish_out_of_order(self):
        """Test that later items finishing first don't reorder results."""

        def slow_for_small(n):
            time.sleep(0.01 * (5 - n))
            return n * 10

        results = execute_ordered(range(5), slow_for_small, max_workers=5, show_progress=False)
        assert [item for item, _, _ in results] == [0, 1, 2, 3, 4]
        assert [result for _, result, _ in results] == [0, 10, 20, 30, 40]

    @pytest.mark.parametrize("workers", [1, 3])
    def test_errors_captured(self, workers):
        def worker(n):
            if n == 2:
                raise ValueError("boom")
            return n

        stats = ExecutionStats(done=0, failed=0)
        results = execute_ordered(
            [1, 2, 3], worker, max_workers=workers, show_progress=False, stats=stats, stats_key="done"
        )
        assert results[0] == (1, 1, None)
        assert results[1][1] is None
        assert isinstance(results[1][2], ValueError)
        assert results[2] == (3, 3, None)
        assert stats.to_dict() == {"done": 2, "failed": 1}

    def test_empty(self):
        assert execute_ordered([], lambda x: x, show_progress=False) == []

    def test_with_progress_bar(self):
        results = execute_ordered(["a", "b"], str.upper, max_workers=2, show_progress=True)
        assert [r for _, r, _ in results] == ["A", "B"]
