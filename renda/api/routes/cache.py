from fastapi import APIRouter, Depends

from renda.api.deps import get_cache
from renda.api.schemas import CacheStatsResponse
from renda.services.quote_cache import QuoteCache

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/stats", response_model=CacheStatsResponse)
def cache_stats(cache: QuoteCache = Depends(get_cache)) -> CacheStatsResponse:
    """Hit/miss counters since process start plus current entry count."""
    return CacheStatsResponse(**cache.stats())
