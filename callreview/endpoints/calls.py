"""Call list, call detail, and per-call actions."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from callreview.config.database import get_db
from callreview.integrations.transcription import TranscriptionClient, get_transcription_client
from callreview.middleware.error_handler import ValidationError
from callreview.schemas.base import ErrorResponse
from callreview.schemas.calls import CallResponse, HumanEvaluationResponse
from callreview.schemas.evaluations import HumanEvaluationCreate
from callreview.schemas.transcription import Transcript
from callreview.services.call_repository import CallRepository
from callreview.services.evaluation_writer import EvaluationWriter

router = APIRouter()


@router.get("", response_model=list[CallResponse])
async def list_calls(
    response: Response,
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None),
    clinic_id: Optional[str] = Query(None, alias="clinicId"),
    assistant_id: Optional[str] = Query(None, alias="assistantId"),
):
    """List all calls, newest first (no pagination)."""
    calls = CallRepository(db).list_calls(
        search=search,
        clinic_id=clinic_id,
        assistant_id=assistant_id,
    )
    response.headers["Cache-Control"] = "no-store"
    return [CallResponse.model_validate(c) for c in calls]


@router.get("/{call_id}", response_model=CallResponse, responses={404: {"model": ErrorResponse}})
async def get_call(
    call_id: str,
    response: Response,
    db: Session = Depends(get_db),
):
    """Get a call with its evaluations."""
    call = CallRepository(db).get_call(call_id)
    response.headers["Cache-Control"] = "no-store"
    return CallResponse.model_validate(call)


@router.post(
    "/{call_id}/evaluations",
    response_model=HumanEvaluationResponse,
    status_code=201,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_human_evaluation(
    call_id: str,
    data: HumanEvaluationCreate,
    db: Session = Depends(get_db),
):
    """Record a reviewer's evaluation of a call."""
    evaluation = EvaluationWriter(db).create_human_evaluation(call_id, data)
    return HumanEvaluationResponse.model_validate(evaluation)


@router.post("/{call_id}/transcript", response_model=Transcript)
async def transcribe_call(
    call_id: str,
    db: Session = Depends(get_db),
    client: TranscriptionClient = Depends(get_transcription_client),
):
    """Transcribe the call's recording."""
    call = CallRepository(db).get_call(call_id)
    if not call.recording_url:
        raise ValidationError("Call has no recording", field="recordingUrl")

    return await client.transcribe_url(call.recording_url)
