"""
Unit tests for company_match.matching.batch module.
"""

import pytest

from company_match.errors import IngestionSourceMissing, InvalidQuery
from company_match.matching import evaluate, evaluate_sample, match_many
from company_match.matching.batch import SAMPLE_COLUMNS, read_evaluation_sample
from company_match.models import Query

QUERIES = [
    {"website": "acme.com"},
    {"name": "Blue"},
    {"phone": "212.555.0100"},
    {"name": "Zzqqxx Nonexistent"},
    {"name": "Initech"},
]


class TestMatchMany:
    """Test batch matching."""

    @pytest.mark.parametrize("workers", [1, 4])
    def test_preserves_input_order(self, matcher, workers):
        results = match_many(matcher, QUERIES, max_workers=workers)
        assert [r.query for r in results] == [Query.from_dict(q) for q in QUERIES]
        assert [r.matched for r in results] == [True, False, True, False, True]

    def test_matches_single_calls(self, matcher):
        """Test that batch outcomes equal independent match() calls."""
        results = match_many(matcher, QUERIES, max_workers=4)
        assert [r.outcome for r in results] == [matcher.match(q) for q in QUERIES]

    def test_errors_captured_per_query(self, matcher):
        results = match_many(matcher, [{}, {"website": "acme.com"}])
        assert isinstance(results[0].error, InvalidQuery)
        assert results[0].outcome is None
        assert results[0].matched is False
        assert results[1].matched is True

    def test_empty_batch(self, matcher):
        assert match_many(matcher, []) == []


class TestEvaluate:
    """Test the aggregate report."""

    def test_match_rate(self, matcher):
        report = evaluate(matcher, QUERIES, max_workers=2)
        assert report.total == 5
        assert report.confident_matches == 3
        assert report.errors == 0
        assert report.match_rate == pytest.approx(0.6)

    def test_empty_batch_rate(self, matcher):
        report = evaluate(matcher, [])
        assert report.match_rate == 0.0
        assert report.to_dict()["matchRate"] == "0.00%"

    def test_report_dict(self, matcher):
        data = evaluate(matcher, QUERIES[:2]).to_dict()
        assert data["totalTestCases"] == 2
        assert data["matchesFound"] == 1
        assert data["matchRate"] == "50.00%"
        first, second = data["results"]
        assert first["matched"] is True
        assert first["matchedDomain"] == "acme.com"
        assert first["inputWebsite"] == "acme.com"
        assert second["matched"] is False
        assert "matchedDomain" not in second

    def test_error_in_report(self, matcher):
        data = evaluate(matcher, [{}]).to_dict()
        assert data["results"][0]["matched"] is False
        assert "At least one search parameter" in data["results"][0]["error"]


class TestEvaluationSample:
    """Test reading the labeled sample file."""

    def test_read_sample(self, tmp_path, write_csv):
        path = write_csv(
            tmp_path / "sample.csv",
            [SAMPLE_COLUMNS[f] for f in ("name", "phone", "website", "facebook")],
            [
                ["Acme Inc", "", "acme.com", ""],
                ["", "(212) 555-0100", "", ""],
            ],
        )
        queries = read_evaluation_sample(path)
        assert queries == [
            Query(name="Acme Inc", website="acme.com"),
            Query(phone="(212) 555-0100"),
        ]

    def test_evaluate_sample(self, tmp_path, write_csv, matcher):
        path = write_csv(
            tmp_path / "sample.csv",
            ["input name", "input phone", "input website", "input_facebook"],
            [["", "", "", "facebook.com/acmeinc"], ["Blue", "", "", ""]],
        )
        report = evaluate_sample(matcher, path)
        assert report.total == 2
        assert report.confident_matches == 1

    def test_missing_sample(self, tmp_path, matcher):
        with pytest.raises(IngestionSourceMissing):
            evaluate_sample(matcher, tmp_path / "missing.csv")
