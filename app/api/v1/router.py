"""
API v1 router.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import accesses, health, identifiers

api_router = APIRouter()

# Health check endpoint (no prefix, so it's /api/v1/health)
api_router.include_router(health.router, tags=["health"])

api_router.include_router(identifiers.router, prefix="/identifiers", tags=["identifiers"])
api_router.include_router(accesses.router, prefix="/accesses", tags=["accesses"])
