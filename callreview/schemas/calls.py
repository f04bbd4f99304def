"""Pydantic schemas for call endpoints."""

from datetime import datetime
from typing import Optional, Literal

from callreview.models.enums import CallType
from .base import CamelModel


class ClinicSummary(CamelModel):
    id: str
    name: str


class AssistantSummary(CamelModel):
    """Assistant with its clinic nested."""

    id: str
    name: str
    clinic_id: str
    clinic: ClinicSummary


class HumanEvaluationResponse(CamelModel):
    """Schema for a reviewer's evaluation."""

    id: str
    call_id: str
    reviewer_name: str
    outcome: bool
    feedback: Optional[str] = ""
    call_type: Optional[CallType] = None
    tags: list[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AIEvaluationResponse(CamelModel):
    """Schema for an AI evaluation and its human review."""

    id: str
    call_id: str
    score: Optional[float] = None
    score_tier: Optional[Literal["high", "medium", "low"]] = None
    outcome: bool
    llm_feedback: Optional[str] = None
    call_type: Optional[CallType] = None
    tags: list[str] = []
    sentiment: Optional[str] = None
    protocol_adherence: Optional[float] = None
    approved: Optional[bool] = None
    reviewer_name: Optional[str] = None
    review_comment: Optional[str] = None


class CallResponse(CamelModel):
    """
    Schema for a call with everything the list and detail views render.

    `evaluations` is the full collection; `human_evaluation` is the
    authoritative entry from it.
    """

    id: str
    assistant_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    duration_display: Optional[str] = None
    recording_url: Optional[str] = None
    review_status: Literal["human_reviewed", "ai_only", "unreviewed"]
    assistant: AssistantSummary
    evaluations: list[HumanEvaluationResponse] = []
    human_evaluation: Optional[HumanEvaluationResponse] = None
    ai_evaluation: Optional[AIEvaluationResponse] = None
