"""
Matcher.

Orchestrates one resolution call:
1. Validate and normalize the query
2. Generate candidates from the index (union over signals)
3. Score every candidate
4. Rank, gate on confidence and explain the top result

The matcher holds no per-call state. Each call reads the store's current
generation exactly once and uses that snapshot throughout, so concurrent
calls and generation swaps never interfere.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from company_match.constants import (
    DEFAULT_SEARCH_LIMIT,
    MAX_ALTERNATIVES,
    MAX_POTENTIAL_MATCHES,
)
from company_match.errors import InvalidQuery
from company_match.matching.candidates import (
    CandidateSource,
    PreparedQuery,
    generate_candidates,
    prepare_query,
)
from company_match.matching.explain import explain_match
from company_match.matching.scoring import (
    Contribution,
    SignalScorer,
    confidence_from_score,
    is_confident,
    score_record,
)
from company_match.models import CompanyRecord, Query
from company_match.store import Generation, RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate record with its total score and contributions."""

    record: CompanyRecord
    score: int
    contributions: tuple[Contribution, ...]


@dataclass(frozen=True)
class Ranking:
    """Ranked candidates for one query, read from one generation."""

    query: Query
    generation: int
    candidates: tuple[ScoredCandidate, ...]
    skipped: tuple[str, ...] = ()

    @property
    def top(self) -> ScoredCandidate | None:
        return self.candidates[0] if self.candidates else None


@dataclass(frozen=True)
class MatchResult:
    """A ranked company with score, confidence and explanation."""

    domain: str
    commercial_name: str
    legal_name: str
    all_available_names: str
    phone_numbers: tuple[str, ...]
    social_media_links: tuple[str, ...]
    addresses: tuple[str, ...]
    emails: tuple[str, ...]
    score: int
    confidence: int
    matched_fields: tuple[str, ...]
    contributions: tuple[Contribution, ...] = ()
    generation: int = 0

    @classmethod
    def from_candidate(
        cls, candidate: ScoredCandidate, query: Query, generation: int
    ) -> MatchResult:
        record = candidate.record
        return cls(
            domain=record.domain,
            commercial_name=record.commercial_name,
            legal_name=record.legal_name,
            all_available_names=record.all_available_names,
            phone_numbers=record.phone_numbers,
            social_media_links=record.social_media_links,
            addresses=record.addresses,
            emails=record.emails,
            score=candidate.score,
            confidence=confidence_from_score(candidate.score),
            matched_fields=tuple(explain_match(query, record)),
            contributions=candidate.contributions,
            generation=generation,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "domain": self.domain,
            "company_commercial_name": self.commercial_name,
            "company_legal_name": self.legal_name,
            "company_all_available_names": self.all_available_names,
            "phoneNumbers": list(self.phone_numbers),
            "socialMediaLinks": list(self.social_media_links),
            "addresses": list(self.addresses),
            "emails": list(self.emails),
            "score": self.score,
            "confidence": self.confidence,
            "matchedFields": list(self.matched_fields),
            "contributions": [c.to_dict() for c in self.contributions],
        }


@dataclass(frozen=True)
class MatchOutcome:
    """
    Result of match().

    When confident, top holds the best match and alternatives the next
    ones. Otherwise top is None and potential lists the best candidates for
    review.
    """

    confident: bool
    top: MatchResult | None = None
    alternatives: tuple[MatchResult, ...] = ()
    potential: tuple[MatchResult, ...] = ()
    generation: int = 0
    skipped: tuple[str, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        if self.confident and self.top is not None:
            return {
                "success": True,
                "match": self.top.to_dict(),
                "confidence": self.top.confidence,
                "score": self.top.score,
                "matchDetails": {
                    "score": self.top.score,
                    "matchingFields": list(self.top.matched_fields),
                },
                "alternatives": [a.to_dict() for a in self.alternatives],
            }
        return {
            "success": False,
            "message": "No confident match found",
            "potentialMatches": [p.to_dict() for p in self.potential],
        }


def coerce_query(query: Query | Mapping[str, Any]) -> Query:
    """Accept a Query or a plain mapping and validate it."""
    if not isinstance(query, Query):
        query = Query.from_dict(dict(query))
    return query.validate()


class Matcher:
    """
    Resolves identity queries against the store's published corpus.

    Configurable with custom candidate sources and scorers.
    """

    def __init__(
        self,
        store: RecordStore,
        sources: list[CandidateSource] | None = None,
        scorers: list[SignalScorer] | None = None,
        default_limit: int = DEFAULT_SEARCH_LIMIT,
    ):
        """
        Initialize matcher.

        Args:
            store: Record store to read generations from
            sources: Candidate sources (default: one per signal)
            scorers: Signal scorers (default: one per signal)
            default_limit: Result count for search() when no limit is given
        """
        self.store = store
        self.sources = tuple(sources) if sources is not None else None
        self.scorers = tuple(scorers) if scorers is not None else None
        self.default_limit = default_limit

    def rank(self, query: Query | Mapping[str, Any]) -> Ranking:
        """
        Rank every candidate for a query.

        Raises:
            InvalidQuery: If no query field is present
            CorpusUnavailable: If no generation has been published
        """
        query = coerce_query(query)
        generation = self.store.current()
        return self._rank(prepare_query(query), generation)

    def _rank(self, prepared: PreparedQuery, generation: Generation) -> Ranking:
        index = generation.index
        scored: list[ScoredCandidate] = []
        for domain in generate_candidates(prepared, index, self.sources):
            record = index.by_domain[domain]
            score, contributions = score_record(prepared, record, index, self.scorers)
            if score > 0:
                scored.append(ScoredCandidate(record, score, contributions))

        # Stable sort keeps first-surfaced order among equal scores
        scored.sort(key=lambda c: -c.score)
        return Ranking(
            query=prepared.query,
            generation=generation.number,
            candidates=tuple(scored),
            skipped=prepared.skipped,
        )

    def match(self, query: Query | Mapping[str, Any]) -> MatchOutcome:
        """
        Find the best matching company.

        Args:
            query: Query or mapping with any of name, website, phone, facebook

        Returns:
            MatchOutcome (confident with top and alternatives, or potential matches)

        Raises:
            InvalidQuery: If no query field is present
            CorpusUnavailable: If no generation has been published
        """
        ranking = self.rank(query)
        query = ranking.query

        def _result(candidate: ScoredCandidate) -> MatchResult:
            return MatchResult.from_candidate(candidate, query, ranking.generation)

        top = ranking.top
        if top is not None and is_confident(top.score):
            outcome = MatchOutcome(
                confident=True,
                top=_result(top),
                alternatives=tuple(
                    _result(c) for c in ranking.candidates[1 : 1 + MAX_ALTERNATIVES]
                ),
                generation=ranking.generation,
                skipped=ranking.skipped,
            )
            logger.debug(
                f"Match found: {top.record.commercial_name} ({top.record.domain}) "
                f"with score {top.score}"
            )
            return outcome

        potential = tuple(_result(c) for c in ranking.candidates[:MAX_POTENTIAL_MATCHES])
        logger.debug(f"No confident match. Potential matches: {[p.domain for p in potential]}")
        return MatchOutcome(
            confident=False,
            potential=potential,
            generation=ranking.generation,
            skipped=ranking.skipped,
        )

    def search(
        self, query: Query | Mapping[str, Any], limit: int | None = None
    ) -> list[MatchResult]:
        """
        Return up to limit ranked candidates, without confidence gating.

        Raises:
            InvalidQuery: If no query field is present or limit < 1
            CorpusUnavailable: If no generation has been published
        """
        if limit is None:
            limit = self.default_limit
        if limit < 1:
            raise InvalidQuery(f"limit must be >= 1, got {limit}")
        ranking = self.rank(query)
        return [
            MatchResult.from_candidate(c, ranking.query, ranking.generation)
            for c in ranking.candidates[:limit]
        ]

    def get_company(self, domain: str) -> CompanyRecord | None:
        """Look up a company profile by domain."""
        return self.store.get(domain)
