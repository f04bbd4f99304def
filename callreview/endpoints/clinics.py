"""Clinic directory endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from callreview.config.database import get_db
from callreview.schemas.clinics import ClinicListItem
from callreview.services.call_repository import CallRepository

router = APIRouter()


@router.get("", response_model=list[ClinicListItem])
async def list_clinics(db: Session = Depends(get_db)):
    """List clinics for the dashboard filter."""
    clinics = CallRepository(db).list_clinics()
    return [ClinicListItem.model_validate(c) for c in clinics]
