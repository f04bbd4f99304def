"""Call model for recorded phone calls."""

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from callreview.config.database import Base
from .base import generate_id


class Call(Base):
    """
    A recorded call handled by an assistant.

    Ingested from the calling platform. Human and AI reviews hang off it.
    """

    __tablename__ = "calls"

    id = Column(String(36), primary_key=True, default=generate_id)
    assistant_id = Column(
        String(36),
        ForeignKey("assistants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    recording_url = Column(Text, nullable=True)

    # Relationships
    assistant = relationship("Assistant", back_populates="calls")
    evaluations = relationship(
        "HumanEvaluation",
        back_populates="call",
        order_by="HumanEvaluation.created_at",
    )
    ai_evaluation = relationship("AIEvaluation", back_populates="call", uselist=False)

    @property
    def human_evaluation(self):
        """The authoritative human evaluation, if any."""
        return self.evaluations[0] if self.evaluations else None

    @property
    def is_successful(self) -> bool:
        """A call succeeded if the AI or any human reviewer said so."""
        ai_success = self.ai_evaluation is not None and self.ai_evaluation.outcome is True
        human_success = any(evaluation.outcome is True for evaluation in self.evaluations)
        return ai_success or human_success

    @property
    def has_ai_score(self) -> bool:
        return self.ai_evaluation is not None and self.ai_evaluation.score is not None

    @property
    def review_status(self) -> str:
        if self.evaluations:
            return "human_reviewed"
        if self.ai_evaluation is not None:
            return "ai_only"
        return "unreviewed"

    @property
    def duration_display(self) -> str | None:
        """Duration as M:SS."""
        if self.duration is None:
            return None
        minutes, seconds = divmod(self.duration, 60)
        return f"{minutes}:{seconds:02d}"

    def __repr__(self) -> str:
        return f"<Call(id={self.id}, assistant_id={self.assistant_id})>"
