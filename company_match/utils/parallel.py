"""
Ordered parallel execution with progress tracking.

Results are collected into index-preserving slots, so the output lines up
with the input no matter in which order the workers finish.
"""

import logging
import sys
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from tqdm import tqdm

from company_match.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)

T = TypeVar("T")  # Input type
R = TypeVar("R")  # Result type


def execute_ordered(
    items: Iterable[T],
    worker_func: Callable[[T], R],
    max_workers: int = 8,
    desc: str = "Processing",
    unit: str = "item",
    show_progress: bool = True,
    stats: ExecutionStats | None = None,
    stats_key: str | None = None,
) -> list[tuple[T, R | None, Exception | None]]:
    """
    Execute a function across items on a bounded thread pool, keeping input order.

    Args:
        items: Iterable of items to process
        worker_func: Function to call for each item (takes item, returns result)
        max_workers: Maximum number of parallel workers (1 = run inline)
        desc: Progress bar description
        unit: Progress bar unit name
        show_progress: Whether to show progress bar
        stats: Optional ExecutionStats instance for tracking
        stats_key: Optional key to increment in stats on success

    Returns:
        List of tuples (item, result, exception), one per item, in input order

    Example:
        results = execute_ordered(queries, matcher.match, max_workers=8)
        for query, outcome, error in results:
            ...
    """
    items_list = list(items)
    total = len(items_list)

    if total == 0:
        return []

    slots: list[tuple[T, R | None, Exception | None] | None] = [None] * total

    progress_bar = None
    if show_progress:
        progress_bar = tqdm(
            total=total,
            desc=desc,
            unit=unit,
            file=sys.stderr,  # Use stderr to avoid conflicts
            mininterval=1.0,  # Update at most once per second
            dynamic_ncols=True,
        )

    def _record(position: int, result: R | None, error: Exception | None):
        item = items_list[position]
        if error is None:
            if stats and stats_key:
                stats.increment(stats_key)
        else:
            logger.debug(f"Error processing {item}: {error}")
            if stats:
                stats.increment("failed")
        slots[position] = (item, result, error)
        if progress_bar:
            progress_bar.update(1)

    try:
        if max_workers <= 1:
            for position, item in enumerate(items_list):
                try:
                    _record(position, worker_func(item), None)
                except Exception as e:
                    _record(position, None, e)
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                future_to_position = {
                    executor.submit(worker_func, item): position
                    for position, item in enumerate(items_list)
                }
                for future in as_completed(future_to_position):
                    position = future_to_position[future]
                    try:
                        _record(position, future.result(), None)
                    except Exception as e:
                        _record(position, None, e)
    finally:
        if progress_bar:
            progress_bar.close()

    return [slot for slot in slots if slot is not None]
