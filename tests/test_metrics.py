"""Unit tests for MetricsAggregator."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from callreview.middleware.error_handler import StorageError
from callreview.models import CallType
from callreview.services.metrics import MetricsAggregator, percentage, round_half_up


class TestRounding:
    def test_percentage_rounds_half_up(self):
        assert percentage(2, 3) == 67
        assert percentage(1, 8) == 13  # 12.5
        assert percentage(1, 3) == 33

    def test_percentage_of_nothing_is_zero(self):
        assert percentage(0, 0) == 0

    def test_round_half_up_two_places(self):
        assert round_half_up(0.125) == 0.13
        assert round_half_up(1 / 3) == 0.33
        assert round_half_up(60.0) == 60.0


class TestEmptyScope:
    def test_all_metrics_zero_without_calls(self, db):
        result = MetricsAggregator(db).get_clinic_metrics("all")

        assert result.metrics.total_calls == 0
        assert result.metrics.avg_score == 0
        assert result.metrics.success_rate == 0
        assert result.metrics.human_eval_percentage == 0
        assert result.metrics.outcome_match_percentage == 0
        assert result.charts.call_type_distribution == []
        assert result.charts.sentiment_distribution == []
        assert result.charts.has_llm_evaluations is False

    def test_unknown_clinic_is_an_empty_scope(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"score": 90})

        result = MetricsAggregator(db).get_clinic_metrics("no-such-clinic")

        assert result.metrics.total_calls == 0
        assert result.metrics.success_rate == 0
        assert result.charts.assistant_performance == []


class TestSummary:
    def test_ai_only_calls(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"score": 80, "outcome": True})
        seed.call(ava, ai={"score": 60, "outcome": False})
        seed.call(ava, ai={"score": 40, "outcome": True})

        result = MetricsAggregator(db).get_clinic_metrics("all")

        assert result.metrics.total_calls == 3
        assert result.metrics.avg_score == 60.0
        assert result.metrics.success_rate == 67
        assert result.metrics.human_eval_percentage == 0
        assert result.metrics.outcome_match_percentage == 0
        assert result.charts.has_llm_evaluations is True

    def test_success_when_either_evaluator_says_so(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"outcome": False}, human={"outcome": True})
        seed.call(ava, ai={"outcome": True}, human={"outcome": False})
        seed.call(ava, ai={"outcome": False}, human={"outcome": False})
        seed.call(ava)

        result = MetricsAggregator(db).get_clinic_metrics("all")

        assert result.metrics.total_calls == 4
        assert result.metrics.success_rate == 50
        assert result.metrics.human_eval_percentage == 75

    def test_outcome_mismatch(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"outcome": False}, human={"outcome": True})

        result = MetricsAggregator(db).get_clinic_metrics("all")

        assert result.metrics.outcome_match_percentage == 0
        assert result.metrics.success_rate == 100

    def test_outcome_match_ignores_calls_with_one_evaluation(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"outcome": True}, human={"outcome": True})
        seed.call(ava, ai={"outcome": True}, human={"outcome": False})

        before = MetricsAggregator(db).get_clinic_metrics("all").metrics.outcome_match_percentage

        seed.call(ava, ai={"outcome": False})
        seed.call(ava, human={"outcome": True})
        db.expire_all()

        after = MetricsAggregator(db).get_clinic_metrics("all").metrics.outcome_match_percentage

        assert before == 50
        assert after == 50

    def test_avg_score_skips_evaluations_without_score(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"score": 91})
        seed.call(ava, ai={"score": 70})
        seed.call(ava, ai={"score": None, "sentiment": "positive"})

        result = MetricsAggregator(db).get_clinic_metrics("all")

        assert result.metrics.avg_score == 80.5

    def test_no_scores_means_no_llm_charts(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"score": None, "sentiment": "positive"})

        result = MetricsAggregator(db).get_clinic_metrics("all")

        assert result.metrics.avg_score == 0
        assert result.charts.has_llm_evaluations is False
        assert result.charts.sentiment_distribution == []


class TestScope:
    @pytest.fixture
    def two_clinics(self, seed):
        north = seed.clinic("North")
        south = seed.clinic("South")
        ava = seed.assistant(north, "Ava")
        ben = seed.assistant(north, "Ben")
        cy = seed.assistant(south, "Cy")
        seed.call(ava, ai={"score": 90, "outcome": True})
        seed.call(ava, ai={"score": 70, "outcome": False})
        seed.call(ben, ai={"score": 50, "outcome": False})
        seed.call(cy, ai={"score": 10, "outcome": False})
        return {"north": north, "south": south, "ava": ava, "ben": ben, "cy": cy}

    def test_clinic_filter(self, two_clinics, db):
        result = MetricsAggregator(db).get_clinic_metrics(two_clinics["north"].id)

        assert result.metrics.total_calls == 3
        assert result.metrics.avg_score == 70.0
        assert result.metrics.success_rate == 33
        assert [row.name for row in result.charts.assistant_performance] == [
            "Ava (North)",
            "Ben (North)",
        ]

    def test_assistant_filter_narrows_summary_not_performance_chart(self, two_clinics, db):
        result = MetricsAggregator(db).get_clinic_metrics(
            two_clinics["north"].id, two_clinics["ava"].id
        )

        assert result.metrics.total_calls == 2
        assert result.metrics.avg_score == 80.0
        assert len(result.charts.assistant_performance) == 2

    def test_all_assistant_sentinel(self, two_clinics, db):
        result = MetricsAggregator(db).get_clinic_metrics(two_clinics["north"].id, "all")

        assert result.metrics.total_calls == 3

    def test_global_scope_lists_every_assistant(self, two_clinics, db):
        result = MetricsAggregator(db).get_clinic_metrics("all")

        assert result.metrics.total_calls == 4
        assert [row.name for row in result.charts.assistant_performance] == [
            "Ava (North)",
            "Ben (North)",
            "Cy (South)",
        ]


class TestAssistantPerformance:
    def test_success_rate_is_a_fraction(self, seed, db):
        clinic = seed.clinic("Downtown")
        ava = seed.assistant(clinic, "Ava")
        seed.call(ava, ai={"score": 80, "outcome": True})
        seed.call(ava, ai={"score": 65, "outcome": False})

        result = MetricsAggregator(db).get_clinic_metrics("all")
        row = result.charts.assistant_performance[0]

        assert row.name == "Ava (Downtown)"
        assert row.total_calls == 2
        assert row.score == 72.5
        assert row.success_rate == 0.5
        assert result.metrics.success_rate == 50

    def test_assistant_without_calls(self, seed, db):
        clinic = seed.clinic("Downtown")
        seed.assistant(clinic, "Idle")

        row = MetricsAggregator(db).get_clinic_metrics("all").charts.assistant_performance[0]

        assert row.total_calls == 0
        assert row.score == 0
        assert row.success_rate == 0


class TestDistributions:
    def test_call_types_from_ai_evaluations(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"call_type": CallType.BILLING}, human={"call_type": CallType.MISSED_CALL})
        seed.call(ava, ai={"call_type": CallType.BILLING})
        seed.call(ava, ai={"call_type": None})

        rows = MetricsAggregator(db).get_clinic_metrics("all").charts.call_type_distribution
        counts = {row.type: row.count for row in rows}

        assert counts == {"BILLING": 2, "UNKNOWN": 1}

    def test_call_types_fall_back_to_human_evaluations(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, human={"call_type": CallType.MISSED_CALL})
        seed.call(ava, human={"call_type": CallType.MISSED_CALL})
        seed.call(ava, human={"call_type": CallType.TIME_SENSITIVE})

        rows = MetricsAggregator(db).get_clinic_metrics("all").charts.call_type_distribution

        assert [(row.type, row.count) for row in rows] == [
            ("MISSED_CALL", 2),
            ("TIME_SENSITIVE", 1),
        ]

    def test_call_types_respect_scope(self, seed, db):
        north = seed.clinic("North")
        south = seed.clinic("South")
        seed.call(seed.assistant(north), ai={"call_type": CallType.BILLING})
        seed.call(seed.assistant(south), human={"call_type": CallType.MISSED_CALL})

        rows = MetricsAggregator(db).get_clinic_metrics(south.id).charts.call_type_distribution

        # No AI evaluations inside South, so its human evaluations are used
        assert [(row.type, row.count) for row in rows] == [("MISSED_CALL", 1)]

    def test_sentiment_excludes_missing(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"sentiment": "positive"})
        seed.call(ava, ai={"sentiment": "positive"})
        seed.call(ava, ai={"sentiment": "negative"})
        seed.call(ava, ai={"sentiment": None})

        rows = MetricsAggregator(db).get_clinic_metrics("all").charts.sentiment_distribution

        assert [(row.sentiment, row.count) for row in rows] == [
            ("positive", 2),
            ("negative", 1),
        ]


class TestDashboardMetrics:
    def test_unrounded_percentages(self, seed, db):
        clinic = seed.clinic()
        ava = seed.assistant(clinic)
        seed.call(ava, ai={"score": 90, "outcome": True}, human={"outcome": True})
        seed.call(ava, ai={"score": 61, "outcome": True})
        seed.call(ava)

        result = MetricsAggregator(db).get_dashboard_metrics()

        assert result.total_calls == 3
        assert result.avg_score == pytest.approx(75.5)
        assert result.human_eval_percentage == pytest.approx(100 / 3)
        assert result.outcome_match_percentage == 100

    def test_empty_store(self, db):
        result = MetricsAggregator(db).get_dashboard_metrics()

        assert result.total_calls == 0
        assert result.avg_score == 0
        assert result.human_eval_percentage == 0
        assert result.outcome_match_percentage == 0


class TestStorageFailure:
    def test_query_failure_raises_storage_error(self):
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(StorageError) as exc_info:
            MetricsAggregator(session).get_clinic_metrics("all")

        assert exc_info.value.status_code == 500
        assert "connection lost" not in exc_info.value.message

    def test_dashboard_failure_raises_storage_error(self):
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(StorageError):
            MetricsAggregator(session).get_dashboard_metrics()
