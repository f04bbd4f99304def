"""Metrics aggregation for the review dashboard.

Joins calls with their human and AI evaluations and reduces them to
headline rates plus chart-ready breakdowns. Two success-rate scales
coexist: MetricsSummary.success_rate is a whole percentage while
AssistantPerformance.success_rate is a 0-1 fraction.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from callreview.middleware.error_handler import StorageError
from callreview.models import AIEvaluation, Assistant, Call, HumanEvaluation
from callreview.schemas.metrics import (
    AssistantPerformance,
    CallTypeCount,
    ClinicMetrics,
    DashboardMetrics,
    MetricsCharts,
    MetricsSummary,
    SentimentCount,
)

logger = structlog.get_logger()

ALL_SCOPE = "all"
UNKNOWN_LABEL = "UNKNOWN"


def percentage(part: int, whole: int) -> int:
    """part/whole as a whole percentage, halves rounded up. 0 when whole is 0."""
    if whole == 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def round_half_up(value: float, places: int = 2) -> float:
    """Round the exact binary value of `value` to `places` decimals, halves up."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def average_score(calls: Iterable[Call]) -> float:
    """Mean AI score over calls that have one, two decimals. 0 if none do."""
    scores = [call.ai_evaluation.score for call in calls if call.has_ai_score]
    if not scores:
        return 0.0
    return round_half_up(sum(scores) / len(scores))


def outcome_agreement(calls: Iterable[Call]) -> tuple[int, int]:
    """(matches, compared) over calls carrying both evaluation kinds.

    The authoritative human evaluation is compared to the AI outcome.
    """
    both = [call for call in calls if call.evaluations and call.ai_evaluation is not None]
    matches = sum(
        1 for call in both
        if call.human_evaluation.outcome == call.ai_evaluation.outcome
    )
    return matches, len(both)


def _count_rows(rows, empty_label: str = UNKNOWN_LABEL) -> list[tuple[str, int]]:
    counted = [
        (getattr(label, "value", label) or empty_label, count)
        for label, count in rows
    ]
    return sorted(counted, key=lambda row: (-row[1], row[0]))


class MetricsAggregator:
    """Computes summary statistics for all calls or one clinic/assistant."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _scope_criteria(clinic_id: str, assistant_id: Optional[str]) -> list:
        criteria = []
        if clinic_id and clinic_id != ALL_SCOPE:
            clinic_assistants = select(Assistant.id).where(Assistant.clinic_id == clinic_id)
            criteria.append(Call.assistant_id.in_(clinic_assistants))
        if assistant_id and assistant_id != ALL_SCOPE:
            criteria.append(Call.assistant_id == assistant_id)
        return criteria

    def get_clinic_metrics(self, clinic_id: str = ALL_SCOPE, assistant_id: Optional[str] = None) -> ClinicMetrics:
        """Metrics and chart series for a scope.

        Args:
            clinic_id: "all" or a clinic id
            assistant_id: None, "all", or an assistant id

        Raises:
            StorageError: If any query fails
        """
        criteria = self._scope_criteria(clinic_id, assistant_id)

        try:
            calls = (
                self.db.query(Call)
                .options(
                    selectinload(Call.evaluations),
                    selectinload(Call.ai_evaluation),
                )
                .filter(*criteria)
                .all()
            )

            total_calls = len(calls)
            successful_calls = sum(1 for call in calls if call.is_successful)
            calls_with_human_eval = sum(1 for call in calls if call.evaluations)
            matches, compared = outcome_agreement(calls)
            has_llm_evaluations = any(call.has_ai_score for call in calls)

            metrics = MetricsSummary(
                total_calls=total_calls,
                avg_score=average_score(calls),
                success_rate=percentage(successful_calls, total_calls),
                human_eval_percentage=percentage(calls_with_human_eval, total_calls),
                outcome_match_percentage=percentage(matches, compared),
            )

            scoped_call_ids = select(Call.id).where(*criteria)
            charts = MetricsCharts(
                assistant_performance=self._assistant_performance(clinic_id),
                call_type_distribution=self._call_type_distribution(scoped_call_ids),
                sentiment_distribution=(
                    self._sentiment_distribution(scoped_call_ids) if has_llm_evaluations else []
                ),
                has_llm_evaluations=has_llm_evaluations,
            )
        except SQLAlchemyError as e:
            logger.error(
                "Error fetching clinic metrics",
                clinic_id=clinic_id,
                assistant_id=assistant_id,
                error=str(e),
            )
            raise StorageError("Failed to fetch clinic metrics") from e

        logger.debug(
            "Clinic metrics computed",
            clinic_id=clinic_id,
            assistant_id=assistant_id,
            total_calls=total_calls,
        )
        return ClinicMetrics(metrics=metrics, charts=charts)

    def _assistant_performance(self, clinic_id: str) -> list[AssistantPerformance]:
        # Scoped to the clinic only; the assistant filter does not narrow this chart
        query = self.db.query(Assistant).options(
            joinedload(Assistant.clinic),
            selectinload(Assistant.calls).selectinload(Call.evaluations),
            selectinload(Assistant.calls).selectinload(Call.ai_evaluation),
        )
        if clinic_id and clinic_id != ALL_SCOPE:
            query = query.filter(Assistant.clinic_id == clinic_id)

        rows = []
        for assistant in query.order_by(Assistant.name).all():
            calls = assistant.calls
            total_calls = len(calls)
            successful_calls = sum(1 for call in calls if call.is_successful)
            rows.append(
                AssistantPerformance(
                    name=assistant.display_name,
                    score=average_score(calls),
                    success_rate=(
                        round_half_up(successful_calls / total_calls) if total_calls else 0
                    ),
                    total_calls=total_calls,
                )
            )
        return rows

    def _call_type_distribution(self, scoped_call_ids) -> list[CallTypeCount]:
        """Group AI evaluations by call type, or human ones when there are no AI ones."""
        ai_rows = (
            self.db.query(AIEvaluation.call_type, func.count(AIEvaluation.id))
            .filter(AIEvaluation.call_id.in_(scoped_call_ids))
            .group_by(AIEvaluation.call_type)
            .all()
        )
        rows = ai_rows
        if not ai_rows:
            rows = (
                self.db.query(HumanEvaluation.call_type, func.count(HumanEvaluation.id))
                .filter(HumanEvaluation.call_id.in_(scoped_call_ids))
                .group_by(HumanEvaluation.call_type)
                .all()
            )
        return [CallTypeCount(type=label, count=count) for label, count in _count_rows(rows)]

    def _sentiment_distribution(self, scoped_call_ids) -> list[SentimentCount]:
        rows = (
            self.db.query(AIEvaluation.sentiment, func.count(AIEvaluation.id))
            .filter(
                AIEvaluation.call_id.in_(scoped_call_ids),
                AIEvaluation.sentiment.isnot(None),
            )
            .group_by(AIEvaluation.sentiment)
            .all()
        )
        return [SentimentCount(sentiment=label, count=count) for label, count in _count_rows(rows)]

    def get_dashboard_metrics(self) -> DashboardMetrics:
        """Unfiltered landing-page numbers.

        avg_score averages every AI evaluation in the store; percentages
        are left unrounded.

        Raises:
            StorageError: If any query fails
        """
        try:
            total_calls = self.db.query(func.count(Call.id)).scalar() or 0
            avg_score = self.db.query(func.avg(AIEvaluation.score)).scalar()
            calls_with_human_eval = (
                self.db.query(func.count(Call.id))
                .filter(Call.evaluations.any())
                .scalar()
            ) or 0
            compared_calls = (
                self.db.query(Call)
                .options(
                    selectinload(Call.evaluations),
                    selectinload(Call.ai_evaluation),
                )
                .filter(Call.evaluations.any(), Call.ai_evaluation.has())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Error fetching dashboard metrics", error=str(e))
            raise StorageError("Failed to fetch dashboard metrics") from e

        matches, compared = outcome_agreement(compared_calls)

        return DashboardMetrics(
            total_calls=total_calls,
            avg_score=float(avg_score or 0),
            human_eval_percentage=(
                calls_with_human_eval / total_calls * 100 if total_calls else 0
            ),
            outcome_match_percentage=matches / compared * 100 if compared else 0,
        )
