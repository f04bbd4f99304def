"""Pydantic schemas for evaluation writes."""

from typing import Optional

from pydantic import field_validator

from callreview.models.enums import CallType, HUMAN_EVALUATION_TAGS
from .base import CamelModel


class HumanEvaluationBase(CamelModel):
    """Fields a reviewer fills in."""

    reviewer_name: str
    outcome: bool
    feedback: Optional[str] = ""
    call_type: CallType
    tags: list[str] = []

    @field_validator("reviewer_name")
    @classmethod
    def reviewer_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Reviewer name is required")
        return value

    @field_validator("feedback")
    @classmethod
    def default_feedback(cls, value: Optional[str]) -> str:
        return value or ""

    @field_validator("tags")
    @classmethod
    def known_tags(cls, value: list[str]) -> list[str]:
        unknown = [tag for tag in value if tag not in HUMAN_EVALUATION_TAGS]
        if unknown:
            raise ValueError(f"Unknown tags: {', '.join(unknown)}")
        # Tags are a set; keep first occurrence order
        return list(dict.fromkeys(value))


class HumanEvaluationCreate(HumanEvaluationBase):
    """Schema for creating a human evaluation."""


class HumanEvaluationUpdate(HumanEvaluationBase):
    """Schema for overwriting a human evaluation (all fields required)."""


class AIEvaluationReviewUpdate(CamelModel):
    """Schema for a reviewer's verdict on an AI evaluation."""

    approved: bool
    reviewer_name: str
    review_comment: Optional[str] = ""

    @field_validator("reviewer_name")
    @classmethod
    def reviewer_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Reviewer name is required")
        return value
