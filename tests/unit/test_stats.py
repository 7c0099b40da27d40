"""
Unit tests for company_match.utils.stats module.
"""

import threading

from company_match.utils.stats import ExecutionStats


class TestExecutionStats:
    """Test ExecutionStats class."""

    def test_initialization(self):
        """Test stats initialization with initial values."""
        stats = ExecutionStats(confident=0, failed=0, completed=5)
        assert stats.get("confident") == 0
        assert stats.get("failed") == 0
        assert stats.get("completed") == 5

    def test_increment(self):
        stats = ExecutionStats(confident=0)
        stats.increment("confident")
        stats.increment("confident", amount=2)
        assert stats.get("confident") == 3

    def test_increment_unknown_key(self):
        """Test that new counters start from zero."""
        stats = ExecutionStats()
        stats.increment("failed")
        assert stats["failed"] == 1

    def test_thread_safety(self):
        """Test that increments are thread-safe."""
        stats = ExecutionStats(counter=0)

        def increment_many():
            for _ in range(1000):
                stats.increment("counter")

        threads = [threading.Thread(target=increment_many) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Should be exactly 10000 (10 threads * 1000 increments)
        assert stats.get("counter") == 10000

    def test_to_dict_is_copy(self):
        stats = ExecutionStats(confident=10, failed=5)
        stats_dict = stats.to_dict()
        assert stats_dict == {"confident": 10, "failed": 5}
        stats_dict["new"] = 1
        assert "new" not in stats.to_dict()

    def test_get_with_default(self):
        stats = ExecutionStats(confident=5)
        assert stats.get("nonexistent") == 0
        assert stats.get("nonexistent", default=99) == 99

    def test_repr(self):
        assert repr(ExecutionStats(b=2, a=1)) == "ExecutionStats(a=1, b=2)"
