from fastapi import APIRouter

from ..settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {
        "status": "ok",
        "store_backend": settings.store_backend,
        "store_configured": settings.store_backend == "sql" or bool(settings.store_url),
        "gemini_configured": bool(settings.gemini_api_key),
    }
