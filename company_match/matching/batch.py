"""
Batch matching and evaluation.

Applies match() to a sequence of queries, independently and in input order,
and aggregates the confident-match rate. Used to evaluate the engine against
a labeled sample of queries.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from company_match.errors import IngestionSourceMissing
from company_match.matching.matcher import Matcher, MatchOutcome
from company_match.models import Query
from company_match.utils.parallel import execute_ordered
from company_match.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)

# Column names of the labeled sample file
SAMPLE_COLUMNS = {
    "name": "input name",
    "phone": "input phone",
    "website": "input website",
    "facebook": "input_facebook",
}


@dataclass(frozen=True)
class QueryEvaluation:
    """Outcome (or error) of one query in a batch."""

    query: Query
    outcome: MatchOutcome | None
    error: Exception | None = None

    @property
    def matched(self) -> bool:
        return self.outcome is not None and self.outcome.confident

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "inputName": self.query.name,
            "inputPhone": self.query.phone,
            "inputWebsite": self.query.website,
            "inputFacebook": self.query.facebook,
            "matched": self.matched,
        }
        if self.matched:
            top = self.outcome.top
            result.update(
                {
                    "confidence": top.confidence,
                    "score": top.score,
                    "matchedDomain": top.domain,
                    "matchedName": top.commercial_name,
                }
            )
        if self.error is not None:
            result["error"] = str(self.error)
        return result


@dataclass(frozen=True)
class EvaluationReport:
    """Aggregate of a batch evaluation."""

    results: tuple[QueryEvaluation, ...]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def confident_matches(self) -> int:
        return sum(1 for r in self.results if r.matched)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.error is not None)

    @property
    def match_rate(self) -> float:
        """confident_matches / total_queries (0.0 for an empty batch)."""
        if self.total == 0:
            return 0.0
        return self.confident_matches / self.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTestCases": self.total,
            "matchesFound": self.confident_matches,
            "matchRate": f"{self.match_rate * 100:.2f}%",
            "results": [r.to_dict() for r in self.results],
        }


def match_many(
    matcher: Matcher,
    queries: Iterable[Query | Mapping[str, Any]],
    max_workers: int = 1,
    show_progress: bool = False,
) -> list[QueryEvaluation]:
    """
    Run match() for every query, preserving input order.

    Per-query errors (e.g. an empty query) are captured in the result instead
    of aborting the batch.

    Args:
        matcher: Matcher to use
        queries: Queries or mappings
        max_workers: Thread pool size (1 = sequential)
        show_progress: Whether to show a progress bar

    Returns:
        One QueryEvaluation per query, in input order
    """
    prepared = [q if isinstance(q, Query) else Query.from_dict(dict(q)) for q in queries]
    stats = ExecutionStats(completed=0, confident=0, failed=0)

    def _match(query: Query) -> MatchOutcome:
        outcome = matcher.match(query)
        if outcome.confident:
            stats.increment("confident")
        return outcome

    rows = execute_ordered(
        prepared,
        _match,
        max_workers=max_workers,
        desc="Matching",
        unit="query",
        show_progress=show_progress,
        stats=stats,
        stats_key="completed",
    )
    logger.debug(f"Batch finished: {stats}")
    return [QueryEvaluation(query=q, outcome=outcome, error=error) for q, outcome, error in rows]


def evaluate(
    matcher: Matcher,
    queries: Iterable[Query | Mapping[str, Any]],
    max_workers: int = 1,
    show_progress: bool = False,
) -> EvaluationReport:
    """Match a batch and compute the aggregate match rate."""
    report = EvaluationReport(
        results=tuple(match_many(matcher, queries, max_workers, show_progress))
    )
    logger.info(
        f"Evaluated {report.total} queries: {report.confident_matches} confident matches "
        f"({report.match_rate * 100:.2f}%)"
    )
    return report


def read_evaluation_sample(path: Path) -> list[Query]:
    """
    Read labeled queries from the sample CSV.

    Raises:
        IngestionSourceMissing: If the sample file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise IngestionSourceMissing(path)
    with open(path, newline="", encoding="utf-8-sig") as f:
        return [
            Query(**{field: row.get(column) or None for field, column in SAMPLE_COLUMNS.items()})
            for row in csv.DictReader(f)
        ]


def evaluate_sample(
    matcher: Matcher,
    path: Path,
    max_workers: int = 1,
    show_progress: bool = False,
) -> EvaluationReport:
    """Evaluate the matcher against the labeled sample file."""
    return evaluate(matcher, read_evaluation_sample(path), max_workers, show_progress)
