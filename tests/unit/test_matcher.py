"""
Unit tests for company_match.matching.matcher and explain modules.
"""

import pytest

from company_match.errors import CorpusUnavailable, InvalidQuery
from company_match.matching import Matcher, explain_match
from company_match.models import CompanyRecord, Query
from company_match.normalization import normalize_website
from company_match.store import RecordStore


def _matcher(records):
    store = RecordStore()
    store.replace_all(records)
    return Matcher(store)


class TestMatch:
    """Test match(): ranking, confidence gating and explanation."""

    def test_exact_website(self):
        """Test the single-record website example end to end."""
        matcher = _matcher(
            [CompanyRecord.build(domain="acme.com", commercial_name="Acme Inc", phone_numbers=("2125550199",))]
        )
        outcome = matcher.match({"website": "acme.com"})
        assert outcome.confident is True
        assert outcome.top.domain == "acme.com"
        assert outcome.top.score == 18
        assert outcome.top.confidence == 100
        assert "domain" in outcome.top.matched_fields

    @pytest.mark.parametrize("domain", ["café.fr", "my_shop.com", "www.com"])
    def test_stored_domain_found_by_its_own_value(self, domain):
        """Test that any domain ingestion stores can be queried back by website."""
        matcher = _matcher([CompanyRecord.build(domain=normalize_website(domain), commercial_name="Shop")])
        outcome = matcher.match({"website": domain})
        assert outcome.skipped == ()
        assert outcome.confident is True
        assert outcome.top.domain == normalize_website(domain)
        assert "domain" in outcome.top.matched_fields

    def test_no_candidates(self, matcher):
        outcome = matcher.match({"name": "Zzqqxx Nonexistent"})
        assert outcome.confident is False
        assert outcome.top is None
        assert outcome.potential == ()

    def test_name_match(self, matcher):
        outcome = matcher.match(Query(name="Acme Inc"))
        assert outcome.confident
        assert outcome.top.domain == "acme.com"
        assert outcome.top.score == 11
        assert outcome.top.matched_fields == ("name",)
        assert outcome.alternatives == ()

    def test_low_score_is_not_confident(self, matcher):
        """Test that a score of exactly three yields potential matches only."""
        outcome = matcher.match({"name": "Blue"})
        assert outcome.confident is False
        assert [p.domain for p in outcome.potential] == ["blue-one.com", "blue-two.com"]
        assert all(p.score == 3 and p.confidence == 30 for p in outcome.potential)

    def test_phone_suffix_alone_is_confident(self, matcher):
        outcome = matcher.match({"phone": "212-555-0199"})
        assert outcome.confident
        assert outcome.top.domain == "acme.com"
        assert outcome.top.confidence == 40
        assert outcome.top.matched_fields == ("phone",)

    def test_facebook_alternatives(self, matcher):
        outcome = matcher.match({"facebook": "facebook.com/acmeinc"})
        assert outcome.top.domain == "acme.com"
        assert outcome.top.score == 9
        assert outcome.top.matched_fields == ("facebook",)
        assert [a.domain for a in outcome.alternatives] == ["globex.net"]
        assert outcome.alternatives[0].score == 3

    def test_exact_website_outranks_name_tokens(self, matcher):
        """Test that website evidence beats a record surfaced earlier by name."""
        outcome = matcher.match({"name": "Blue", "website": "blue-two.com"})
        assert outcome.top.domain == "blue-two.com"
        assert outcome.top.score == 3 + 18
        assert [a.domain for a in outcome.alternatives] == ["blue-one.com"]

    def test_all_fields_explained(self, matcher):
        outcome = matcher.match(
            {
                "name": "Globex",
                "website": "www.globex.net",
                "phone": "212-555-0100",
                "facebook": "https://facebook.com/globexcorp",
            }
        )
        assert outcome.top.domain == "globex.net"
        assert outcome.top.matched_fields == ("name", "domain", "phone", "facebook")

    def test_alternatives_capped_at_two(self):
        matcher = _matcher(
            [CompanyRecord.build(domain=f"shop{i}.com", commercial_name=f"Shop {i}") for i in range(5)]
        )
        outcome = matcher.match({"name": "Shop 0", "website": "shop0.com"})
        assert outcome.top.domain == "shop0.com"
        assert [a.domain for a in outcome.alternatives] == ["shop1.com", "shop2.com"]

    def test_potential_capped_at_three(self):
        matcher = _matcher(
            [CompanyRecord.build(domain=f"shop{i}.com", commercial_name=f"Shop {i}") for i in range(5)]
        )
        outcome = matcher.match({"name": "shop"})
        assert outcome.confident is False
        assert [p.domain for p in outcome.potential] == ["shop0.com", "shop1.com", "shop2.com"]

    def test_skipped_signal_reported(self, matcher):
        """Test that an unusable website is dropped while the name still matches."""
        outcome = matcher.match({"name": "Acme Inc", "website": "!!!"})
        assert outcome.confident
        assert outcome.top.domain == "acme.com"
        assert outcome.skipped == ("website",)

    def test_only_unusable_signals(self, matcher):
        outcome = matcher.match({"phone": "555-01"})
        assert outcome.confident is False
        assert outcome.potential == ()
        assert outcome.skipped == ("phone",)

    def test_empty_query_rejected(self, matcher):
        with pytest.raises(InvalidQuery):
            matcher.match({})
        with pytest.raises(InvalidQuery):
            matcher.match({"name": "   ", "website": ""})

    def test_corpus_unavailable(self):
        with pytest.raises(CorpusUnavailable):
            Matcher(RecordStore()).match({"name": "Acme"})

    def test_generation_recorded(self, store, matcher, sample_records):
        assert matcher.match({"name": "Acme Inc"}).generation == 1
        store.replace_all(sample_records)
        assert matcher.match({"name": "Acme Inc"}).top.generation == 2

    def test_deterministic(self, matcher):
        query = {"name": "Blue", "facebook": "facebook.com/x"}
        assert matcher.match(query) == matcher.match(query)


class TestOutcomeSerialization:
    """Test the response layout of match outcomes."""

    def test_confident_dict(self, matcher):
        data = matcher.match({"website": "acme.com"}).to_dict()
        assert data["success"] is True
        assert data["match"]["domain"] == "acme.com"
        assert data["confidence"] == 100
        assert data["matchDetails"] == {"score": 18, "matchingFields": ["domain"]}
        assert data["alternatives"] == []

    def test_unconfident_dict(self, matcher):
        data = matcher.match({"name": "Blue"}).to_dict()
        assert data["success"] is False
        assert data["message"] == "No confident match found"
        assert [p["domain"] for p in data["potentialMatches"]] == ["blue-one.com", "blue-two.com"]


class TestSearch:
    """Test search(): ranked results without gating."""

    def test_ties_keep_corpus_order(self, matcher):
        results = matcher.search({"name": "Blue"})
        assert [r.domain for r in results] == ["blue-one.com", "blue-two.com"]

    def test_tie_order_follows_corpus(self, sample_records):
        """Test that reversing the corpus reverses equal-score results."""
        matcher = _matcher(list(reversed(sample_records)))
        results = matcher.search({"name": "Blue"})
        assert [r.domain for r in results] == ["blue-two.com", "blue-one.com"]

    def test_limit(self, matcher):
        assert [r.domain for r in matcher.search({"name": "Blue"}, limit=1)] == ["blue-one.com"]

    def test_default_limit(self, store):
        matcher = Matcher(store, default_limit=1)
        assert len(matcher.search({"facebook": "facebook.com/x"})) == 1

    def test_invalid_limit(self, matcher):
        with pytest.raises(InvalidQuery):
            matcher.search({"name": "Blue"}, limit=0)

    def test_scores_descending(self, matcher):
        results = matcher.search({"name": "Acme Globex", "facebook": "facebook.com/globexcorp"})
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert all(r.confidence == min(100, r.score * 10) for r in results)

    def test_zero_score_candidates_dropped(self, matcher):
        results = matcher.search({"name": "Zzqqxx"})
        assert results == []


class TestGetCompany:
    """Test profile lookup through the matcher."""

    def test_found(self, matcher):
        assert matcher.get_company("www.globex.net").commercial_name == "Globex"

    def test_missing(self, matcher):
        assert matcher.get_company("nobody.com") is None


class TestExplainMatch:
    """Test the field-level explanation."""

    def test_name_containment(self, records_by_domain):
        assert explain_match(Query(name="acme"), records_by_domain["acme.com"]) == ["name"]
        assert explain_match(Query(name="incorporated"), records_by_domain["acme.com"]) == ["name"]

    def test_domain(self, records_by_domain):
        assert explain_match(Query(website="HTTPS://ACME.com/x"), records_by_domain["acme.com"]) == ["domain"]

    def test_phone(self, records_by_domain):
        assert explain_match(Query(phone="212 555 0199"), records_by_domain["acme.com"]) == ["phone"]

    def test_facebook_only_counts_facebook_links(self, records_by_domain):
        record = records_by_domain["acme.com"]
        assert explain_match(Query(facebook="facebook.com/acmeinc"), record) == ["facebook"]
        assert explain_match(Query(facebook="twitter.com/acmeinc"), record) == []

    def test_nothing_agrees(self, records_by_domain):
        query = Query(name="Globex", website="globex.net", phone="4155550123")
        assert explain_match(query, records_by_domain["acme.com"]) == []
