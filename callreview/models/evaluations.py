"""Human evaluation model for reviewer verdicts on calls."""

from sqlalchemy import Column, String, Boolean, Text, ForeignKey, JSON, Enum, UniqueConstraint
from sqlalchemy.orm import relationship

from callreview.config.database import Base
from .base import TimestampMixin, generate_id
from .enums import CallType


class HumanEvaluation(Base, TimestampMixin):
    """
    A reviewer's verdict on a call.

    One per call: the unique constraint on call_id keeps the "first
    evaluation is authoritative" reading unambiguous.
    """

    __tablename__ = "evaluations"
    __table_args__ = (UniqueConstraint("call_id", name="uq_evaluations_call_id"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    call_id = Column(
        String(36),
        ForeignKey("calls.id", ondelete="CASCADE"),
        nullable=False,
    )

    reviewer_name = Column(String(255), nullable=False)
    outcome = Column(Boolean, nullable=False)  # True = call succeeded
    feedback = Column(Text, nullable=False, default="")
    call_type = Column(Enum(CallType, name="call_type"), nullable=False)
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    call = relationship("Call", back_populates="evaluations")

    def __repr__(self) -> str:
        return f"<HumanEvaluation(id={self.id}, call_id={self.call_id}, outcome={self.outcome})>"
