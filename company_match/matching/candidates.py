"""
Candidate Generation Module.

Turns a query into normalized signals and surfaces candidate domains from
the index, one source per signal. The matcher takes the union of all
sources; scoring decides which candidates survive.

Each source yields domains in a deterministic order (posting lists and scans
both follow corpus order), which the matcher uses as its tie-breaker.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field

from company_match.constants import MIN_WEBSITE_PREFIX_LENGTH
from company_match.errors import UnresolvableNormalization
from company_match.index import CorpusIndex, name_key
from company_match.models import Query
from company_match.normalization import (
    canonical_phone,
    canonical_website,
    extract_facebook_handle,
)
from company_match.tokenizer import iter_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedQuery:
    """A query with every signal normalized once up front."""

    query: Query
    name: str | None = None
    name_key: str = ""
    name_tokens: tuple[str, ...] = ()
    domain: str | None = None
    domain_prefix: str | None = None
    phone_raw: str | None = None
    phone_digits: str | None = None
    facebook_raw: str | None = None
    facebook_handle: str = ""
    skipped: tuple[str, ...] = field(default=())


def prepare_query(query: Query) -> PreparedQuery:
    """
    Normalize every present signal of a query.

    A website or phone that cannot be normalized is dropped (and reported in
    PreparedQuery.skipped) instead of failing the query.
    """
    values: dict = {"query": query}
    skipped: list[str] = []

    if query.name:
        values["name"] = query.name
        values["name_key"] = name_key(query.name)
        values["name_tokens"] = tuple(dict.fromkeys(iter_tokens(query.name)))

    if query.website:
        try:
            domain = canonical_website(query.website)
        except UnresolvableNormalization as e:
            logger.debug(f"Dropping website signal: {e}")
            skipped.append("website")
        else:
            values["domain"] = domain
            prefix = domain.split(".", 1)[0]
            if len(prefix) >= MIN_WEBSITE_PREFIX_LENGTH:
                values["domain_prefix"] = prefix

    if query.phone:
        try:
            digits = canonical_phone(query.phone)
        except UnresolvableNormalization as e:
            logger.debug(f"Dropping phone signal: {e}")
            skipped.append("phone")
        else:
            values["phone_raw"] = query.phone
            values["phone_digits"] = digits

    if query.facebook:
        values["facebook_raw"] = query.facebook
        values["facebook_handle"] = extract_facebook_handle(query.facebook)

    return PreparedQuery(skipped=tuple(skipped), **values)


class CandidateSource(ABC):
    """Abstract base class for per-signal candidate lookups."""

    @abstractmethod
    def candidates(self, prepared: PreparedQuery, index: CorpusIndex) -> Iterator[str]:
        """Yield candidate domains for the signal (duplicates allowed)."""
        ...

    @property
    @abstractmethod
    def signal(self) -> str:
        """Name of the signal this source serves."""
        ...


class NameCandidates(CandidateSource):
    """
    Keyword candidates from the inverted index, plus exact full-name matches.
    """

    @property
    def signal(self) -> str:
        return "name"

    def candidates(self, prepared: PreparedQuery, index: CorpusIndex) -> Iterator[str]:
        if prepared.name is None:
            return
        for token in prepared.name_tokens:
            yield from index.lookup_token(token)
        yield from index.lookup_name(prepared.name)


class WebsiteCandidates(CandidateSource):
    """
    Exact domain lookup, then substring and prefix scans over all domains.
    """

    @property
    def signal(self) -> str:
        return "website"

    def candidates(self, prepared: PreparedQuery, index: CorpusIndex) -> Iterator[str]:
        domain = prepared.domain
        if domain is None:
            return
        if domain in index.by_domain:
            yield domain
        for candidate in index.domains:
            if domain in candidate or candidate in domain:
                yield candidate
        if prepared.domain_prefix:
            for candidate in index.domains:
                if candidate.startswith(prepared.domain_prefix):
                    yield candidate


class PhoneCandidates(CandidateSource):
    """
    Phone lookup by the last seven normalized digits.

    Any record whose phone equals the query (raw or normalized) shares the
    suffix, so the suffix index surfaces every phone candidate.
    """

    @property
    def signal(self) -> str:
        return "phone"

    def candidates(self, prepared: PreparedQuery, index: CorpusIndex) -> Iterator[str]:
        if prepared.phone_digits is None:
            return
        yield from index.lookup_phone_suffix(prepared.phone_digits)


class FacebookCandidates(CandidateSource):
    """Every record with at least one facebook-hosted link."""

    @property
    def signal(self) -> str:
        return "facebook"

    def candidates(self, prepared: PreparedQuery, index: CorpusIndex) -> Iterator[str]:
        if prepared.facebook_raw is None:
            return
        yield from index.facebook_links


DEFAULT_SOURCES: tuple[CandidateSource, ...] = (
    NameCandidates(),
    WebsiteCandidates(),
    PhoneCandidates(),
    FacebookCandidates(),
)


def generate_candidates(
    prepared: PreparedQuery,
    index: CorpusIndex,
    sources: tuple[CandidateSource, ...] | list[CandidateSource] | None = None,
) -> list[str]:
    """
    Union the candidates of all sources, keeping first-surfaced order.

    Args:
        prepared: Normalized query
        index: Index of the generation being read
        sources: Candidate sources (default: one per signal)

    Returns:
        Unique candidate domains in the order they were first surfaced
    """
    if sources is None:
        sources = DEFAULT_SOURCES

    surfaced: dict[str, None] = {}
    for source in sources:
        for domain in source.candidates(prepared, index):
            surfaced.setdefault(domain, None)
    return list(surfaced)
