"""Clinic model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from callreview.config.database import Base
from .base import generate_id


class Clinic(Base):
    """
    A clinic whose phone lines are answered by AI assistants.

    Populated by the ingestion side; read-only here.
    """

    __tablename__ = "clinics"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)

    # Relationships
    assistants = relationship("Assistant", back_populates="clinic")

    def __repr__(self) -> str:
        return f"<Clinic(id={self.id}, name={self.name})>"
