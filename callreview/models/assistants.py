"""Assistant model for AI phone assistants."""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from callreview.config.database import Base
from .base import generate_id


class Assistant(Base):
    """
    An AI assistant deployed at exactly one clinic.
    """

    __tablename__ = "assistants"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    clinic_id = Column(
        String(36),
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    clinic = relationship("Clinic", back_populates="assistants")
    calls = relationship("Call", back_populates="assistant")

    @property
    def display_name(self) -> str:
        """Label used on charts: "<assistant> (<clinic>)"."""
        return f"{self.name} ({self.clinic.name})"

    def __repr__(self) -> str:
        return f"<Assistant(id={self.id}, name={self.name}, clinic_id={self.clinic_id})>"
