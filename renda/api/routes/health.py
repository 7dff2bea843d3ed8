from fastapi import APIRouter, Depends

from renda.api.deps import get_cache
from renda.services.quote_cache import QuoteCache

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", summary="Health check")
async def health_check(cache: QuoteCache = Depends(get_cache)) -> dict:
    """
    Basic health check.
    Also reports the cache size so we know the process-wide store is alive.
    """
    return {
        "service": "renda",
        "status": "ok",
        "cache_entries": len(cache),
    }
