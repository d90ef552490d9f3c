"""
Health check endpoint.
The service has no backing stores, so being able to answer is being healthy.
"""
from fastapi import APIRouter

from imghost import __version__
from imghost.config import settings

router = APIRouter()


@router.get("")
async def health_check():
    """Liveness probe for the desktop shell."""
    return {
        "status": "healthy",
        "version": __version__,
        "environment": settings.environment
    }
