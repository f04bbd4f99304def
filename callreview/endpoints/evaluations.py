"""Human evaluation endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from callreview.config.database import get_db
from callreview.schemas.base import ErrorResponse
from callreview.schemas.calls import HumanEvaluationResponse
from callreview.schemas.evaluations import HumanEvaluationUpdate
from callreview.services.evaluation_writer import EvaluationWriter

router = APIRouter()


@router.put("/{evaluation_id}", response_model=HumanEvaluationResponse, responses={404: {"model": ErrorResponse}})
async def update_human_evaluation(
    evaluation_id: str,
    data: HumanEvaluationUpdate,
    db: Session = Depends(get_db),
):
    """Overwrite a human evaluation."""
    evaluation = EvaluationWriter(db).update_human_evaluation(evaluation_id, data)
    return HumanEvaluationResponse.model_validate(evaluation)
