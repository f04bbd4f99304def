"""AI evaluation model for LLM-generated call assessments."""

from sqlalchemy import Column, String, Boolean, Float, Text, ForeignKey, JSON, Enum
from sqlalchemy.orm import relationship

from callreview.config.database import Base
from .base import TimestampMixin, generate_id
from .enums import CallType


class AIEvaluation(Base, TimestampMixin):
    """
    LLM assessment of a call, plus a human's review of that assessment.

    The assessment fields are written by the evaluation pipeline. Only the
    reviewer fields (approved, reviewer_name, review_comment) change here.
    """

    __tablename__ = "ai_evaluations"

    id = Column(String(36), primary_key=True, default=generate_id)
    call_id = Column(
        String(36),
        ForeignKey("calls.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # AI-generated assessment
    score = Column(Float, nullable=True)  # 0-100
    outcome = Column(Boolean, nullable=False)
    llm_feedback = Column(Text, nullable=True)
    call_type = Column(Enum(CallType, name="call_type"), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    sentiment = Column(String(50), nullable=True)
    protocol_adherence = Column(Float, nullable=True)  # 0-100

    # Human review of the assessment
    approved = Column(Boolean, nullable=True)
    reviewer_name = Column(String(255), nullable=True)
    review_comment = Column(Text, nullable=True)

    # Relationships
    call = relationship("Call", back_populates="ai_evaluation")

    @property
    def score_tier(self) -> str | None:
        """Badge tier for the score."""
        if self.score is None:
            return None
        if self.score >= 80:
            return "high"
        if self.score >= 50:
            return "medium"
        return "low"

    def __repr__(self) -> str:
        return f"<AIEvaluation(id={self.id}, call_id={self.call_id}, score={self.score})>"
