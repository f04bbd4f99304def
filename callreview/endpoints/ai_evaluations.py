"""Review endpoint for AI evaluations."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from callreview.config.database import get_db
from callreview.schemas.base import ErrorResponse
from callreview.schemas.calls import AIEvaluationResponse
from callreview.schemas.evaluations import AIEvaluationReviewUpdate
from callreview.services.evaluation_writer import EvaluationWriter

router = APIRouter()


@router.put(
    "/{evaluation_id}/review",
    response_model=AIEvaluationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def review_ai_evaluation(
    evaluation_id: str,
    data: AIEvaluationReviewUpdate,
    db: Session = Depends(get_db),
):
    """Approve or reject an AI evaluation with a comment."""
    evaluation = EvaluationWriter(db).update_ai_evaluation_review(evaluation_id, data)
    return AIEvaluationResponse.model_validate(evaluation)
