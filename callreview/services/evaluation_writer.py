"""Create and update reviewer-owned evaluation data.

Every successful write reports the views it made stale to an
invalidation callback: the call's detail view and the call list.
"""

from typing import Callable

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from callreview.middleware.error_handler import ConflictError, NotFoundError, StorageError
from callreview.models import AIEvaluation, Call, HumanEvaluation
from callreview.schemas.evaluations import (
    AIEvaluationReviewUpdate,
    HumanEvaluationCreate,
    HumanEvaluationUpdate,
)

logger = structlog.get_logger()

Invalidator = Callable[[list[str]], None]


def log_invalidation(paths: list[str]) -> None:
    """Default invalidator: record which views went stale."""
    logger.info("Views invalidated", paths=paths)


def stale_paths(call_id: str) -> list[str]:
    return [f"/calls/{call_id}", "/calls"]


class EvaluationWriter:
    """Writes human evaluations and reviews of AI evaluations."""

    def __init__(self, db: Session, invalidate: Invalidator = log_invalidation):
        self.db = db
        self.invalidate = invalidate

    def create_human_evaluation(self, call_id: str, data: HumanEvaluationCreate) -> HumanEvaluation:
        """Attach a reviewer's evaluation to a call.

        Raises:
            NotFoundError: If the call does not exist
            ConflictError: If the call already has a human evaluation
            StorageError: If the write fails
        """
        try:
            call = self.db.query(Call).filter(Call.id == call_id).first()
            if not call:
                raise NotFoundError("Call", call_id)

            existing = (
                self.db.query(HumanEvaluation.id)
                .filter(HumanEvaluation.call_id == call_id)
                .first()
            )
            if existing:
                raise ConflictError(
                    "Call already has a human evaluation",
                    details={"callId": call_id, "evaluationId": existing.id},
                )

            evaluation = HumanEvaluation(call=call, **data.model_dump())
            self.db.add(evaluation)
            self.db.commit()
            self.db.refresh(evaluation)
        except IntegrityError as e:
            # Lost a race with another reviewer on the unique call_id
            self.db.rollback()
            logger.warning("Duplicate human evaluation rejected", call_id=call_id, error=str(e))
            raise ConflictError(
                "Call already has a human evaluation",
                details={"callId": call_id},
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Error creating evaluation", call_id=call_id, error=str(e))
            raise StorageError("Failed to create evaluation") from e

        logger.info(
            "Human evaluation created",
            id=evaluation.id,
            call_id=call_id,
            outcome=evaluation.outcome,
        )
        self.invalidate(stale_paths(call_id))
        return evaluation

    def update_human_evaluation(self, evaluation_id: str, data: HumanEvaluationUpdate) -> HumanEvaluation:
        """Overwrite every mutable field of a human evaluation.

        Raises:
            NotFoundError: If the evaluation does not exist
            StorageError: If the write fails
        """
        try:
            evaluation = (
                self.db.query(HumanEvaluation)
                .filter(HumanEvaluation.id == evaluation_id)
                .first()
            )
            if not evaluation:
                raise NotFoundError("Evaluation", evaluation_id)

            for key, value in data.model_dump().items():
                setattr(evaluation, key, value)

            self.db.commit()
            self.db.refresh(evaluation)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Error updating evaluation", id=evaluation_id, error=str(e))
            raise StorageError("Failed to update evaluation") from e

        logger.info("Human evaluation updated", id=evaluation.id, call_id=evaluation.call_id)
        self.invalidate(stale_paths(evaluation.call_id))
        return evaluation

    def update_ai_evaluation_review(self, evaluation_id: str, data: AIEvaluationReviewUpdate) -> AIEvaluation:
        """Record a reviewer's verdict on an AI evaluation.

        Only approved, reviewer_name and review_comment change; the
        AI-generated assessment is left untouched.

        Raises:
            NotFoundError: If the AI evaluation does not exist
            StorageError: If the write fails
        """
        try:
            evaluation = (
                self.db.query(AIEvaluation)
                .filter(AIEvaluation.id == evaluation_id)
                .first()
            )
            if not evaluation:
                raise NotFoundError("AI evaluation", evaluation_id)

            evaluation.approved = data.approved
            evaluation.reviewer_name = data.reviewer_name
            evaluation.review_comment = data.review_comment

            self.db.commit()
            self.db.refresh(evaluation)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Error updating AI evaluation", id=evaluation_id, error=str(e))
            raise StorageError("Failed to update AI evaluation") from e

        logger.info(
            "AI evaluation reviewed",
            id=evaluation.id,
            call_id=evaluation.call_id,
            approved=evaluation.approved,
        )
        self.invalidate(stale_paths(evaluation.call_id))
        return evaluation
