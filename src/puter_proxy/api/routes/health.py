"""
Routes API pour le health check.
"""
from fastapi import APIRouter, Depends

from ...config.settings import Settings
from ..dependencies import get_settings

router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check: état de la configuration (jamais le token lui-même)."""
    return {
        "status": "ok",
        "token_configured": settings.token_configured,
        "base_url": settings.base_url,
    }
