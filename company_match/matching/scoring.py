"""
Candidate Scoring Module.

Scores a candidate record against a prepared query. Every satisfied
condition adds its weight once, and conditions from different signals
compound. Each scorer is isolated and testable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from company_match.constants import (
    CONFIDENCE_SCALE,
    CONFIDENT_SCORE_THRESHOLD,
    MAX_CONFIDENCE,
    PHONE_SUFFIX_LENGTH,
    WEIGHT_FACEBOOK_ANY,
    WEIGHT_FACEBOOK_HANDLE,
    WEIGHT_NAME_EXACT_COMMERCIAL,
    WEIGHT_NAME_EXACT_LEGAL,
    WEIGHT_NAME_TOKEN_ALIASES,
    WEIGHT_NAME_TOKEN_COMMERCIAL,
    WEIGHT_NAME_TOKEN_LEGAL,
    WEIGHT_PHONE_DIGITS,
    WEIGHT_PHONE_RAW,
    WEIGHT_PHONE_SUFFIX,
    WEIGHT_WEBSITE_EXACT,
    WEIGHT_WEBSITE_PREFIX,
    WEIGHT_WEBSITE_SUBSTRING,
)
from company_match.index import CorpusIndex, name_key
from company_match.matching.candidates import PreparedQuery
from company_match.models import CompanyRecord


class Condition(Enum):
    """Scoring conditions, one per row of the weight table."""

    WEBSITE_EXACT = "website_exact"
    PHONE_DIGITS = "phone_digits"
    PHONE_RAW = "phone_raw"
    FACEBOOK_HANDLE = "facebook_handle"
    NAME_EXACT_COMMERCIAL = "name_exact_commercial"
    WEBSITE_SUBSTRING = "website_substring"
    NAME_EXACT_LEGAL = "name_exact_legal"
    PHONE_SUFFIX = "phone_suffix"
    NAME_TOKEN_COMMERCIAL = "name_token_commercial"
    WEBSITE_PREFIX = "website_prefix"
    FACEBOOK_ANY = "facebook_any"
    NAME_TOKEN_LEGAL = "name_token_legal"
    NAME_TOKEN_ALIASES = "name_token_aliases"


WEIGHTS: dict[Condition, int] = {
    Condition.WEBSITE_EXACT: WEIGHT_WEBSITE_EXACT,
    Condition.PHONE_DIGITS: WEIGHT_PHONE_DIGITS,
    Condition.PHONE_RAW: WEIGHT_PHONE_RAW,
    Condition.FACEBOOK_HANDLE: WEIGHT_FACEBOOK_HANDLE,
    Condition.NAME_EXACT_COMMERCIAL: WEIGHT_NAME_EXACT_COMMERCIAL,
    Condition.WEBSITE_SUBSTRING: WEIGHT_WEBSITE_SUBSTRING,
    Condition.NAME_EXACT_LEGAL: WEIGHT_NAME_EXACT_LEGAL,
    Condition.PHONE_SUFFIX: WEIGHT_PHONE_SUFFIX,
    Condition.NAME_TOKEN_COMMERCIAL: WEIGHT_NAME_TOKEN_COMMERCIAL,
    Condition.WEBSITE_PREFIX: WEIGHT_WEBSITE_PREFIX,
    Condition.FACEBOOK_ANY: WEIGHT_FACEBOOK_ANY,
    Condition.NAME_TOKEN_LEGAL: WEIGHT_NAME_TOKEN_LEGAL,
    Condition.NAME_TOKEN_ALIASES: WEIGHT_NAME_TOKEN_ALIASES,
}


@dataclass(frozen=True)
class Contribution:
    """One satisfied condition and the weight it added."""

    signal: str
    condition: Condition
    weight: int

    def to_dict(self) -> dict:
        return {"signal": self.signal, "condition": self.condition.value, "weight": self.weight}


def _contribution(signal: str, condition: Condition) -> Contribution:
    return Contribution(signal=signal, condition=condition, weight=WEIGHTS[condition])


class SignalScorer(ABC):
    """Abstract base class for per-signal scorers."""

    @abstractmethod
    def score(
        self,
        prepared: PreparedQuery,
        record: CompanyRecord,
        index: CorpusIndex,
    ) -> list[Contribution]:
        """
        Evaluate every condition of the signal against a record.

        Returns:
            Contributions for the satisfied conditions (empty if none)
        """
        ...

    @property
    @abstractmethod
    def signal(self) -> str:
        ...


class NameScorer(SignalScorer):
    """Exact full-name matches and token matches per name field."""

    @property
    def signal(self) -> str:
        return "name"

    def score(self, prepared, record, index):
        if prepared.name is None:
            return []
        found: list[Contribution] = []

        if name_key(record.commercial_name) == prepared.name_key:
            found.append(_contribution(self.signal, Condition.NAME_EXACT_COMMERCIAL))
        if record.legal_name and name_key(record.legal_name) == prepared.name_key:
            found.append(_contribution(self.signal, Condition.NAME_EXACT_LEGAL))

        query_tokens = set(prepared.name_tokens)
        tokens = index.name_tokens.get(record.domain)
        if tokens is not None and query_tokens:
            if query_tokens & tokens.commercial:
                found.append(_contribution(self.signal, Condition.NAME_TOKEN_COMMERCIAL))
            if query_tokens & tokens.legal:
                found.append(_contribution(self.signal, Condition.NAME_TOKEN_LEGAL))
            if query_tokens & tokens.aliases:
                found.append(_contribution(self.signal, Condition.NAME_TOKEN_ALIASES))
        return found


class WebsiteScorer(SignalScorer):
    """Exact domain, substring either direction, and prefix-before-dot."""

    @property
    def signal(self) -> str:
        return "website"

    def score(self, prepared, record, index):
        domain = prepared.domain
        if domain is None:
            return []
        found: list[Contribution] = []
        if record.domain == domain:
            found.append(_contribution(self.signal, Condition.WEBSITE_EXACT))
        if domain in record.domain or record.domain in domain:
            found.append(_contribution(self.signal, Condition.WEBSITE_SUBSTRING))
        if prepared.domain_prefix and record.domain.startswith(prepared.domain_prefix):
            found.append(_contribution(self.signal, Condition.WEBSITE_PREFIX))
        return found


class PhoneScorer(SignalScorer):
    """
    Phone matches against the record's phone set.

    The normalized digits and the raw query string are each looked up in the
    record's raw phone strings; the suffix condition compares the last seven
    normalized digits.
    """

    @property
    def signal(self) -> str:
        return "phone"

    def score(self, prepared, record, index):
        digits = prepared.phone_digits
        if digits is None:
            return []
        found: list[Contribution] = []
        if digits in record.phone_numbers:
            found.append(_contribution(self.signal, Condition.PHONE_DIGITS))
        if prepared.phone_raw in record.phone_numbers:
            found.append(_contribution(self.signal, Condition.PHONE_RAW))
        suffix = digits[-PHONE_SUFFIX_LENGTH:]
        normalized = index.normalized_phones.get(record.domain, frozenset())
        if any(
            len(phone) >= PHONE_SUFFIX_LENGTH and phone[-PHONE_SUFFIX_LENGTH:] == suffix
            for phone in normalized
        ):
            found.append(_contribution(self.signal, Condition.PHONE_SUFFIX))
        return found


class FacebookScorer(SignalScorer):
    """Handle embedded in a facebook link, or any facebook link at all."""

    @property
    def signal(self) -> str:
        return "facebook"

    def score(self, prepared, record, index):
        if prepared.facebook_raw is None:
            return []
        links = index.facebook_links.get(record.domain, ())
        if not links:
            return []
        found: list[Contribution] = []
        handle = prepared.facebook_handle.lower()
        if handle and any(handle in link.lower() for link in links):
            found.append(_contribution(self.signal, Condition.FACEBOOK_HANDLE))
        found.append(_contribution(self.signal, Condition.FACEBOOK_ANY))
        return found


DEFAULT_SCORERS: tuple[SignalScorer, ...] = (
    NameScorer(),
    WebsiteScorer(),
    PhoneScorer(),
    FacebookScorer(),
)


def score_record(
    prepared: PreparedQuery,
    record: CompanyRecord,
    index: CorpusIndex,
    scorers: tuple[SignalScorer, ...] | list[SignalScorer] | None = None,
) -> tuple[int, tuple[Contribution, ...]]:
    """
    Score a record against every signal of a query.

    Returns:
        Tuple of (total score, contributions in scorer order)
    """
    if scorers is None:
        scorers = DEFAULT_SCORERS

    contributions: list[Contribution] = []
    for scorer in scorers:
        contributions.extend(scorer.score(prepared, record, index))
    return sum(c.weight for c in contributions), tuple(contributions)


def confidence_from_score(score: float) -> int:
    """
    Rescale a score to a 0-100 confidence.

    Saturating linear rescale, not a probability.
    """
    return min(MAX_CONFIDENCE, round(score * CONFIDENCE_SCALE))


def is_confident(score: float) -> bool:
    """A top score counts as a confident match only above the threshold."""
    return score > CONFIDENT_SCORE_THRESHOLD
