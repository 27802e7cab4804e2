from fastapi import APIRouter

from statement_extractor import __version__
from statement_extractor.config import settings
from statement_extractor.parsers.factory import get_orchestrator

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Basic health check."""
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.app_env,
        "providers": [p.value for p in get_orchestrator().get_registered_providers()],
    }
