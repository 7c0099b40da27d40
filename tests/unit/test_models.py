"""
Unit tests for company_match.models module.
"""

import pytest

from company_match.errors import CompanyMatchError, InvalidQuery
from company_match.models import CompanyRecord, IngestionReport, Query
from company_match.tokenizer import tokenize


class TestCompanyRecord:
    """Test CompanyRecord construction and serialization."""

    def test_build_derives_search_tokens(self):
        """Test that search tokens cover names, domain and contact fields."""
        record = CompanyRecord.build(
            domain="acme.com",
            commercial_name="Acme Inc",
            phone_numbers=("(212) 555-0199",),
            emails=("info@acme.com",),
        )
        tokens = set(record.search_tokens)
        assert {"acme", "inc", "com", "212", "555", "0199", "info"} <= tokens
        assert all(len(token) >= 2 for token in tokens)

    def test_search_tokens_superset(self, sample_records):
        """Test that every record's tokens include each field's tokens."""
        for record in sample_records:
            tokens = set(record.search_tokens)
            texts = [
                record.commercial_name,
                record.legal_name,
                record.all_available_names,
                record.domain,
                *record.phone_numbers,
                *record.social_media_links,
                *record.addresses,
                *record.emails,
            ]
            for text in texts:
                assert tokenize(text) <= tokens

    def test_empty_domain_rejected(self):
        with pytest.raises(ValueError):
            CompanyRecord.build(domain="")

    def test_frozen(self, records_by_domain):
        record = records_by_domain["acme.com"]
        with pytest.raises(AttributeError):
            record.domain = "other.com"

    def test_to_dict_layout(self, records_by_domain):
        """Test the external column names."""
        data = records_by_domain["acme.com"].to_dict()
        assert data["domain"] == "acme.com"
        assert data["company_commercial_name"] == "Acme Inc"
        assert data["phoneNumbers"] == ["(212) 555-0199"]
        assert data["success"] is True
        assert "searchTokens" in data

    def test_from_dict_rebuilds_equal_record(self, records_by_domain):
        record = records_by_domain["globex.net"]
        assert CompanyRecord.from_dict(record.to_dict()) == record

    def test_from_dict_tolerates_missing_fields(self):
        record = CompanyRecord.from_dict({"domain": "initech.io"})
        assert record.commercial_name == ""
        assert record.phone_numbers == ()
        assert record.has_contact_data is False


class TestQuery:
    """Test the query contract."""

    def test_blank_values_are_absent(self):
        query = Query(name="  ", website="", phone=None, facebook="fb.com/acme")
        assert query.name is None
        assert query.website is None
        assert query.present_fields == ["facebook"]

    def test_values_are_stripped(self):
        assert Query(name="  Acme  ").name == "Acme"

    def test_validate_requires_a_field(self):
        """Test that a query with nothing usable is rejected."""
        with pytest.raises(InvalidQuery) as exc_info:
            Query(name=" ").validate()
        assert "At least one search parameter" in str(exc_info.value)

    def test_invalid_query_in_error_family(self):
        with pytest.raises(CompanyMatchError):
            Query().validate()

    def test_validate_returns_self(self):
        query = Query(phone="212-555-0199")
        assert query.validate() is query

    def test_from_dict_ignores_unknown_keys(self):
        query = Query.from_dict({"name": "Acme", "country": "US"})
        assert query.to_dict() == {"name": "Acme", "website": None, "phone": None, "facebook": None}


class TestIngestionReport:
    """Test the ingestion report container."""

    def test_defaults(self):
        report = IngestionReport()
        assert report.records_built == 0
        assert report.contact_source_present is True
        assert report.to_dict()["invalid_domains"] == []

    def test_invalid_domains_not_shared(self):
        first = IngestionReport()
        first.invalid_domains.append("bad")
        assert IngestionReport().invalid_domains == []
