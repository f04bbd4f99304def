"""API endpoints for the Call Review dashboard."""

from fastapi import APIRouter

from .health import router as health_router
from .clinics import router as clinics_router
from .assistants import router as assistants_router
from .calls import router as calls_router
from .evaluations import router as evaluations_router
from .ai_evaluations import router as ai_evaluations_router
from .metrics import router as metrics_router
from .transcribe import router as transcribe_router

# Create main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(clinics_router, prefix="/clinics", tags=["Directory"])
api_router.include_router(assistants_router, prefix="/assistants", tags=["Directory"])
api_router.include_router(calls_router, prefix="/calls", tags=["Calls"])
api_router.include_router(evaluations_router, prefix="/evaluations", tags=["Evaluations"])
api_router.include_router(ai_evaluations_router, prefix="/ai-evaluations", tags=["Evaluations"])
api_router.include_router(metrics_router, prefix="/metrics", tags=["Metrics"])
api_router.include_router(transcribe_router, prefix="/transcribe", tags=["Transcription"])

__all__ = ["api_router"]
