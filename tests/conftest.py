"""
Pytest configuration and shared fixtures for company_match tests.
"""

import csv
from pathlib import Path

import pytest

from company_match.config import get_settings
from company_match.matching import Matcher
from company_match.models import CompanyRecord
from company_match.store import RecordStore


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so env changes in one test don't leak into another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def write_csv():
    """Return a helper that writes rows to a CSV file and returns its path."""

    def _write(path: Path, header: list[str], rows: list[list[str]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write


@pytest.fixture
def sample_records() -> list[CompanyRecord]:
    """A small corpus covering every signal."""
    return [
        CompanyRecord.build(
            domain="acme.com",
            commercial_name="Acme Inc",
            legal_name="Acme Incorporated LLC",
            all_available_names="Acme Inc | Acme Widgets Group",
            phone_numbers=("(212) 555-0199",),
            social_media_links=(
                "https://www.facebook.com/acmeinc",
                "https://twitter.com/acmeinc",
            ),
            addresses=("100 Main Street New York",),
            emails=("info@acme.com",),
            has_contact_data=True,
        ),
        CompanyRecord.build(
            domain="globex.net",
            commercial_name="Globex",
            legal_name="Globex Corporation",
            all_available_names="Globex | Globex Corp",
            phone_numbers=("2125550100", "+1 415 555 0123"),
            social_media_links=("https://facebook.com/globexcorp",),
            has_contact_data=True,
        ),
        CompanyRecord.build(
            domain="initech.io",
            commercial_name="Initech",
            all_available_names="Initech | Initech Software",
        ),
        CompanyRecord.build(
            domain="blue-one.com",
            commercial_name="Blue Widgets",
            all_available_names="BW Holdings",
        ),
        CompanyRecord.build(
            domain="blue-two.com",
            commercial_name="Blue Gadgets",
            all_available_names="BG Holdings",
        ),
    ]


@pytest.fixture
def store(sample_records) -> RecordStore:
    """A record store with the sample corpus published."""
    record_store = RecordStore()
    record_store.replace_all(sample_records)
    return record_store


@pytest.fixture
def matcher(store) -> Matcher:
    return Matcher(store)


@pytest.fixture
def records_by_domain(sample_records) -> dict[str, CompanyRecord]:
    return {record.domain: record for record in sample_records}
