"""Pydantic schemas for dashboard metrics and chart series."""

from .base import CamelModel


class MetricsSummary(CamelModel):
    """Headline numbers for a scope.

    success_rate, human_eval_percentage and outcome_match_percentage are
    whole-number percentages (0-100).
    """

    total_calls: int = 0
    avg_score: float = 0
    success_rate: int = 0
    human_eval_percentage: int = 0
    outcome_match_percentage: int = 0


class AssistantPerformance(CamelModel):
    """One bar on the assistant performance chart.

    success_rate here is a 0-1 fraction, unlike MetricsSummary.success_rate.
    """

    name: str
    score: float = 0
    success_rate: float = 0
    total_calls: int = 0


class CallTypeCount(CamelModel):
    type: str
    count: int


class SentimentCount(CamelModel):
    sentiment: str
    count: int


class MetricsCharts(CamelModel):
    assistant_performance: list[AssistantPerformance] = []
    call_type_distribution: list[CallTypeCount] = []
    sentiment_distribution: list[SentimentCount] = []
    has_llm_evaluations: bool = False


class ClinicMetrics(CamelModel):
    """Response of the filtered metrics query."""

    metrics: MetricsSummary
    charts: MetricsCharts


class DashboardMetrics(CamelModel):
    """Unfiltered landing-page numbers (percentages are not rounded)."""

    total_calls: int = 0
    avg_score: float = 0
    human_eval_percentage: float = 0
    outcome_match_percentage: float = 0
