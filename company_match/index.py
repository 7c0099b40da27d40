"""
Derived lookup structures over one corpus.

A CorpusIndex is built in a single pass over an ordered list of records and
is never mutated afterwards. The record store publishes it together with the
records it was built from, so every structure below always belongs to the
same generation.

Posting lists are tuples of domains in corpus order, which gives the matcher
a deterministic candidate order without any extra sort key.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from company_match.constants import MIN_PHONE_DIGITS, PHONE_SUFFIX_LENGTH
from company_match.models import CompanyRecord
from company_match.normalization import is_facebook_url, normalize_phone
from company_match.tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NameTokens:
    """Token sets of the three name fields of one record."""

    commercial: frozenset[str]
    legal: frozenset[str]
    aliases: frozenset[str]


@dataclass(frozen=True)
class CorpusIndex:
    """Read-only index over one corpus generation."""

    by_domain: Mapping[str, CompanyRecord]
    by_token: Mapping[str, tuple[str, ...]]
    by_phone_suffix: Mapping[str, tuple[str, ...]]
    by_name: Mapping[str, tuple[str, ...]]
    facebook_links: Mapping[str, tuple[str, ...]]
    normalized_phones: Mapping[str, frozenset[str]]
    name_tokens: Mapping[str, NameTokens]
    domains: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.domains)

    def lookup_token(self, token: str) -> tuple[str, ...]:
        return self.by_token.get(token, ())

    def lookup_phone_suffix(self, digits: str) -> tuple[str, ...]:
        """Domains with a phone ending in the same last seven digits."""
        if len(digits) < PHONE_SUFFIX_LENGTH:
            return ()
        return self.by_phone_suffix.get(digits[-PHONE_SUFFIX_LENGTH:], ())

    def lookup_name(self, name: str) -> tuple[str, ...]:
        """Domains whose commercial or legal name equals name (case-insensitive)."""
        return self.by_name.get(name_key(name), ())


def name_key(name: str) -> str:
    """Key used for exact, case-insensitive full-name comparison."""
    return name.strip().lower()


def _freeze(postings: dict[str, dict[str, None]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({key: tuple(domains) for key, domains in postings.items()})


def build_index(records: Iterable[CompanyRecord]) -> CorpusIndex:
    """
    Build every lookup structure for a corpus.

    Args:
        records: Records in corpus order

    Returns:
        A fully built, immutable CorpusIndex

    Raises:
        ValueError: If two records share a domain
    """
    by_domain: dict[str, CompanyRecord] = {}
    by_token: dict[str, dict[str, None]] = {}
    by_phone_suffix: dict[str, dict[str, None]] = {}
    by_name: dict[str, dict[str, None]] = {}
    facebook_links: dict[str, tuple[str, ...]] = {}
    normalized_phones: dict[str, frozenset[str]] = {}
    name_tokens: dict[str, NameTokens] = {}

    for record in records:
        domain = record.domain
        if domain in by_domain:
            raise ValueError(f"duplicate domain in corpus: {domain}")
        by_domain[domain] = record

        for token in record.search_tokens:
            by_token.setdefault(token, {})[domain] = None

        digits_set = set()
        for phone in record.phone_numbers:
            digits = normalize_phone(phone)
            if not digits:
                continue
            digits_set.add(digits)
            if len(digits) >= MIN_PHONE_DIGITS:
                suffix = digits[-PHONE_SUFFIX_LENGTH:]
                by_phone_suffix.setdefault(suffix, {})[domain] = None
        normalized_phones[domain] = frozenset(digits_set)

        for name in (record.commercial_name, record.legal_name):
            if name and name.strip():
                by_name.setdefault(name_key(name), {})[domain] = None

        links = tuple(link for link in record.social_media_links if is_facebook_url(link))
        if links:
            facebook_links[domain] = links

        name_tokens[domain] = NameTokens(
            commercial=frozenset(tokenize(record.commercial_name)),
            legal=frozenset(tokenize(record.legal_name)),
            aliases=frozenset(tokenize(record.all_available_names)),
        )

    index = CorpusIndex(
        by_domain=MappingProxyType(by_domain),
        by_token=_freeze(by_token),
        by_phone_suffix=_freeze(by_phone_suffix),
        by_name=_freeze(by_name),
        facebook_links=MappingProxyType(facebook_links),
        normalized_phones=MappingProxyType(normalized_phones),
        name_tokens=MappingProxyType(name_tokens),
        domains=tuple(by_domain),
    )
    logger.debug(
        f"Built index: {len(index)} domains, {len(by_token)} tokens, "
        f"{len(by_phone_suffix)} phone suffixes, {len(facebook_links)} with facebook"
    )
    return index
