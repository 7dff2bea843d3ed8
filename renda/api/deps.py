from fastapi import Request

from renda.infra.settings import Settings
from renda.services.market_data import QuoteFetcher
from renda.services.quote_cache import QuoteCache


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> QuoteCache:
    """The process-wide quote cache created in the app lifespan."""
    return request.app.state.cache


def get_fetcher(request: Request) -> QuoteFetcher:
    return request.app.state.fetcher
