"""API endpoints for the Seating Rules service."""

from fastapi import APIRouter
from .seat_rules import router as seat_rules_router

# Create main API router
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(seat_rules_router)

__all__ = ["api_router"]
