"""
Record store with generation swapping.

The store owns the corpus lifecycle. Each ingestion run hands it a complete
new list of records; the store builds the index for that list and publishes
records and index together as one immutable Generation by a single attribute
assignment. Readers grab the current generation once per call and never see
a mix of two generations.

Writers are serialized by a lock. Readers never take it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from company_match.errors import CorpusUnavailable
from company_match.index import CorpusIndex, build_index
from company_match.models import CompanyRecord
from company_match.normalization import normalize_website

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Generation:
    """One complete corpus and its index, published as a unit."""

    number: int
    records: tuple[CompanyRecord, ...]
    index: CorpusIndex
    published_at: str

    def __len__(self) -> int:
        return len(self.records)

    def get(self, domain: str) -> CompanyRecord | None:
        return self.index.by_domain.get(domain)


def _fill_rate(count: int, total: int) -> str:
    if total == 0:
        return "0.00%"
    return f"{count / total * 100:.2f}%"


def compute_corpus_stats(records: Iterable[CompanyRecord]) -> dict[str, Any]:
    """
    Count how many records carry each kind of contact data.

    Returns:
        Dict with totals per field and fill-rate percentages
    """
    records = list(records)
    total = len(records)
    with_phone = sum(1 for r in records if r.phone_numbers)
    with_social = sum(1 for r in records if r.social_media_links)
    with_address = sum(1 for r in records if r.addresses)
    with_email = sum(1 for r in records if r.emails)
    with_contact = sum(1 for r in records if r.has_contact_data)

    return {
        "total_companies": total,
        "companies_with_phone": with_phone,
        "companies_with_social": with_social,
        "companies_with_address": with_address,
        "companies_with_email": with_email,
        "companies_with_contact_data": with_contact,
        "fill_rates": {
            "phone": _fill_rate(with_phone, total),
            "social": _fill_rate(with_social, total),
            "address": _fill_rate(with_address, total),
            "email": _fill_rate(with_email, total),
            "contact_data": _fill_rate(with_contact, total),
        },
    }


class RecordStore:
    """
    Holds the currently published corpus generation.

    Example:
        store = RecordStore()
        store.replace_all(records)
        generation = store.current()
    """

    def __init__(self):
        self._generation: Generation | None = None
        self._write_lock = threading.Lock()
        self._last_number = 0

    @property
    def is_published(self) -> bool:
        """True once at least one generation has been published."""
        return self._generation is not None

    def current(self) -> Generation:
        """
        Get the published generation.

        Raises:
            CorpusUnavailable: If nothing has been published yet
        """
        generation = self._generation
        if generation is None:
            raise CorpusUnavailable("no corpus generation has been published yet")
        return generation

    def replace_all(self, records: Iterable[CompanyRecord]) -> Generation:
        """
        Replace the whole corpus with a new generation.

        The index is built before the swap; if building fails the previous
        generation stays published.

        Args:
            records: Complete new corpus in order

        Returns:
            The newly published generation
        """
        records = tuple(records)
        with self._write_lock:
            index = build_index(records)
            generation = Generation(
                number=self._last_number + 1,
                records=records,
                index=index,
                published_at=datetime.now(UTC).isoformat(),
            )
            self._generation = generation
            self._last_number = generation.number

        logger.info(f"Published corpus generation {generation.number} ({len(records)} companies)")
        return generation

    def snapshot(self) -> tuple[CompanyRecord, ...]:
        """All records of the published generation, in corpus order."""
        return self.current().records

    def get(self, domain: str) -> CompanyRecord | None:
        """
        Look up a company by domain.

        The domain is normalized first, so "https://www.acme.com/" finds
        "acme.com".
        """
        generation = self.current()
        record = generation.get(domain)
        if record is None:
            record = generation.get(normalize_website(domain))
        return record

    def corpus_stats(self) -> dict[str, Any]:
        """Fill rates of the published generation."""
        generation = self.current()
        stats = compute_corpus_stats(generation.records)
        stats["generation"] = generation.number
        return stats
