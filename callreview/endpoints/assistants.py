"""Assistant directory endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from callreview.config.database import get_db
from callreview.middleware.error_handler import ValidationError
from callreview.schemas.clinics import AssistantListItem
from callreview.services.call_repository import CallRepository

router = APIRouter()


@router.get("", response_model=list[AssistantListItem])
async def list_assistants(
    db: Session = Depends(get_db),
    clinic_id: Optional[str] = Query(None, alias="clinicId"),
):
    """List the assistants of one clinic."""
    if not clinic_id:
        raise ValidationError("Clinic ID is required", field="clinicId")

    assistants = CallRepository(db).list_assistants(clinic_id)
    return [AssistantListItem.model_validate(a) for a in assistants]
