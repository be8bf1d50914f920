import pytest
from datetime import date, datetime, timezone
from types import SimpleNamespace

from performance_app.services.quarters import quarter_for, quarter_from_date, summarize


def _evaluation(score, regular="", coverage_from=None, submitted_at=None):
    return SimpleNamespace(
        overall_score=score,
        review_type_regular=regular,
        coverage_from=coverage_from,
        submitted_at=submitted_at,
    )


class TestQuarters:
    @pytest.mark.parametrize("value,label", [
        (date(2024, 1, 1), "Q1 2024"),
        (date(2024, 3, 31), "Q1 2024"),
        (date(2024, 4, 1), "Q2 2024"),
        (date(2024, 12, 31), "Q4 2024"),
        (None, "Unknown"),
    ])
    def test_quarter_from_date(self, value, label):
        assert quarter_from_date(value) == label

    def test_regular_review_type_wins(self):
        ev = _evaluation(4, regular="Q3", coverage_from=date(2024, 1, 1),
                         submitted_at=datetime(2025, 2, 1, tzinfo=timezone.utc))
        assert quarter_for(ev) == "Q3 2024"

    def test_falls_back_to_submission_date(self):
        ev = _evaluation(4, submitted_at=datetime(2025, 5, 10, tzinfo=timezone.utc))
        assert quarter_for(ev) == "Q2 2025"


class TestSummary:
    def test_empty(self):
        result = summarize([])
        assert result["count"] == 0
        assert result["average"] == 0.0
        assert result["rating"] is None
        assert result["quarters"] == {}

    def test_groups_by_quarter_oldest_first(self):
        evaluations = [
            _evaluation("4.0", regular="Q2", coverage_from=date(2024, 4, 1)),
            _evaluation("2.0", regular="Q1", coverage_from=date(2024, 1, 1)),
            _evaluation("3.0", regular="Q1", coverage_from=date(2024, 1, 1)),
            _evaluation("5.0"),
        ]
        result = summarize(evaluations)

        assert result["count"] == 4
        assert result["sum"] == 14.0
        assert result["average"] == 3.5
        assert result["rating"] == "Meets Expectations"
        assert list(result["quarters"]) == ["Q1 2024", "Q2 2024", "Unknown"]
        assert result["quarters"]["Q1 2024"] == {"count": 2, "average": 2.5, "rating": "Needs Improvement"}
