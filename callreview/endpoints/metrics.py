"""Dashboard metrics endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from callreview.config.database import get_db
from callreview.schemas.metrics import ClinicMetrics, DashboardMetrics
from callreview.services.metrics import ALL_SCOPE, MetricsAggregator

router = APIRouter()


@router.get("", response_model=ClinicMetrics)
async def get_clinic_metrics(
    response: Response,
    db: Session = Depends(get_db),
    clinic_id: str = Query(ALL_SCOPE, alias="clinicId"),
    assistant_id: Optional[str] = Query(None, alias="assistantId"),
):
    """Metrics and charts for all calls or one clinic/assistant."""
    result = MetricsAggregator(db).get_clinic_metrics(clinic_id, assistant_id)
    response.headers["Cache-Control"] = "no-store"
    return result


@router.get("/dashboard", response_model=DashboardMetrics)
async def get_dashboard_metrics(
    response: Response,
    db: Session = Depends(get_db),
):
    """Unfiltered landing-page metrics."""
    result = MetricsAggregator(db).get_dashboard_metrics()
    response.headers["Cache-Control"] = "no-store"
    return result
