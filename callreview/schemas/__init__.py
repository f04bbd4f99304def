"""Pydantic schemas for API request/response validation.

All schemas use CamelCase for JSON field names (via alias_generator).
"""

from .base import CamelModel, ErrorResponse

from .clinics import ClinicListItem, AssistantListItem
from .calls import (
    ClinicSummary,
    AssistantSummary,
    HumanEvaluationResponse,
    AIEvaluationResponse,
    CallResponse,
)
from .evaluations import (
    HumanEvaluationCreate,
    HumanEvaluationUpdate,
    AIEvaluationReviewUpdate,
)
from .metrics import (
    MetricsSummary,
    AssistantPerformance,
    CallTypeCount,
    SentimentCount,
    MetricsCharts,
    ClinicMetrics,
    DashboardMetrics,
)
from .transcription import TranscriptSegment, Transcript

__all__ = [
    # Base
    "CamelModel",
    "ErrorResponse",
    # Directory
    "ClinicListItem",
    "AssistantListItem",
    # Calls
    "ClinicSummary",
    "AssistantSummary",
    "HumanEvaluationResponse",
    "AIEvaluationResponse",
    "CallResponse",
    # Evaluations
    "HumanEvaluationCreate",
    "HumanEvaluationUpdate",
    "AIEvaluationReviewUpdate",
    # Metrics
    "MetricsSummary",
    "AssistantPerformance",
    "CallTypeCount",
    "SentimentCount",
    "MetricsCharts",
    "ClinicMetrics",
    "DashboardMetrics",
    # Transcription
    "TranscriptSegment",
    "Transcript",
]
