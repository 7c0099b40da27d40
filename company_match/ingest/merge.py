"""
Merge step of the ingestion pipeline.

Left-joins the name registry with the contact-extraction rows on canonical
domain. The registry drives the join: every registry row with a usable domain
becomes exactly one CompanyRecord, and contact rows without a registry entry
are dropped.
"""

from __future__ import annotations

import logging
import sys

from tqdm import tqdm

from company_match.constants import MULTI_VALUE_DELIMITER
from company_match.models import CompanyRecord, IngestionReport
from company_match.normalization import is_valid_domain, normalize_website

logger = logging.getLogger(__name__)

_TRUTHY = {"true", "1", "yes", "y", "t"}


def split_multi_value(value: str | None) -> tuple[str, ...]:
    """
    Split a delimiter-joined field into an ordered set.

    Entries are trimmed, empty entries dropped, duplicates removed keeping
    the first occurrence.

    Examples:
        "a, b, a" -> ("a", "b")
        "" -> ()
    """
    if not value:
        return ()
    seen: dict[str, None] = {}
    for part in value.split(MULTI_VALUE_DELIMITER):
        part = part.strip()
        if part:
            seen.setdefault(part, None)
    return tuple(seen)


def parse_success_flag(value) -> bool:
    """Interpret a boolean-like success column ("true", "1", True, ...)."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def merge_records(
    name_rows: list[dict],
    contact_rows: list[dict] | None,
    show_progress: bool = False,
) -> tuple[list[CompanyRecord], IngestionReport]:
    """
    Join names with contact data and build the corpus.

    Args:
        name_rows: Name registry rows (driving set)
        contact_rows: Contact-extraction rows, or None when the dataset is absent
        show_progress: Whether to show a progress bar

    Returns:
        Tuple of (records in registry order, IngestionReport)
    """
    report = IngestionReport(
        names_loaded=len(name_rows),
        contacts_loaded=len(contact_rows or ()),
        contact_source_present=contact_rows is not None,
    )

    # Later rows for the same domain replace earlier ones
    contacts_by_domain: dict[str, dict] = {}
    for row in contact_rows or ():
        domain = normalize_website(row.get("domain"))
        if domain:
            contacts_by_domain[domain] = row

    records: list[CompanyRecord] = []
    seen_domains: set[str] = set()

    for row in tqdm(
        name_rows,
        desc="Merging companies",
        unit="company",
        file=sys.stderr,
        disable=not show_progress,
    ):
        raw_domain = row.get("domain", "")
        domain = normalize_website(raw_domain)
        if not domain:
            report.skipped_rows += 1
            logger.warning(f"⚠ Skipping registry row without a usable domain: {raw_domain!r}")
            continue
        if domain in seen_domains:
            report.duplicate_domains += 1
            logger.warning(f"⚠ Duplicate registry domain {domain}; keeping the first row")
            continue
        seen_domains.add(domain)

        if not is_valid_domain(domain):
            report.invalid_domains.append(domain)

        contact = contacts_by_domain.get(domain)
        if contact is not None:
            report.joined += 1
        else:
            contact = {}

        records.append(
            CompanyRecord.build(
                domain=domain,
                commercial_name=row.get("company_commercial_name", "").strip(),
                legal_name=row.get("company_legal_name", "").strip(),
                all_available_names=row.get("company_all_available_names", "").strip(),
                phone_numbers=split_multi_value(contact.get("phoneNumbers")),
                social_media_links=split_multi_value(contact.get("socialMediaLinks")),
                addresses=split_multi_value(contact.get("addresses")),
                emails=split_multi_value(contact.get("emails")),
                has_contact_data=bool(contact) and parse_success_flag(contact.get("success")),
            )
        )

    report.orphan_contacts = len(set(contacts_by_domain) - seen_domains)
    report.records_built = len(records)

    if report.invalid_domains:
        logger.debug(f"Domains without a public suffix: {report.invalid_domains[:20]}")

    return records, report
