from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from renda.api.routes.cache import router as cache_router
from renda.api.routes.health import router as health_router
from renda.api.routes.quotes import router as quotes_router
from renda.api.routes.simulations import router as simulations_router
from renda.infra.log_setup import setup_logging
from renda.infra.settings import Settings, settings as default_settings
from renda.services.brapi_client import BrapiClient
from renda.services.market_data import QuoteFetcher
from renda.services.quote_cache import QuoteCache


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    cfg = settings or default_settings
    setup_logging(cfg.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # One cache and one upstream client per process; reset on restart
        cache = QuoteCache(ttl_ms=cfg.cache_ttl_ms, max_entries=cfg.cache_max_entries)
        client = BrapiClient.from_settings(cfg)
        app.state.cache = cache
        app.state.fetcher = QuoteFetcher(client, cache)
        try:
            yield
        finally:
            await client.aclose()
            cache.clear()

    app = FastAPI(
        title="Renda Service",
        version="0.1.0",
        description="Renda: BrAPI quotes, dividend history, passive income projections.",
        lifespan=lifespan,
    )
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(quotes_router)
    app.include_router(simulations_router)
    app.include_router(cache_router)

    @app.get("/", tags=["meta"])
    async def root() -> dict:
        return {"service": "renda", "status": "running"}

    return app


app = create_app()
