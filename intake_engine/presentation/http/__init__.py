"""HTTP presentation layer - REST API routes."""

from fastapi import APIRouter

from intake_engine.presentation.http.health import router as health_router
from intake_engine.presentation.http.intake import router as intake_router
from intake_engine.presentation.http.mastery import router as mastery_router
from intake_engine.presentation.http.recommendations import router as recommendations_router

# Main API router
api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(intake_router)
api_router.include_router(mastery_router)
api_router.include_router(recommendations_router)

__all__ = ["api_router"]
