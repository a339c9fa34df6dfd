"""
Health check endpoint for monitoring and diagnostics.
"""
from fastapi import APIRouter

from app.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    The service holds no state and has no backing store, so being able to
    answer is the whole check.

    Returns:
        {
            "ok": true,
            "environment": "<APP_ENV>"
        }
    """
    return {
        "ok": True,
        "environment": settings.APP_ENV,
    }
