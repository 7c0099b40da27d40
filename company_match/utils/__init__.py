"""Shared utilities: thread-safe counters and ordered parallel execution."""
