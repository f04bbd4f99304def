"""SQLAlchemy ORM models for the Call Review dashboard.

All models are imported here to ensure they're registered with Base.metadata
before any database operations.
"""

# Import base first
from callreview.config.database import Base

from .enums import CallType, HUMAN_EVALUATION_TAGS
from .clinics import Clinic
from .assistants import Assistant
from .calls import Call
from .evaluations import HumanEvaluation
from .ai_evaluations import AIEvaluation

__all__ = [
    "Base",
    # Vocabularies
    "CallType",
    "HUMAN_EVALUATION_TAGS",
    # Ingested entities
    "Clinic",
    "Assistant",
    "Call",
    # Reviews
    "HumanEvaluation",
    "AIEvaluation",
]
