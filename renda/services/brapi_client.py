from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from renda.infra.settings import Settings


class BrapiClient:
    """Async client for the BrAPI quote endpoint."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        # If no token is provided, BrAPI may restrict some tickers or modules
        self.token = token
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BrapiClient":
        return cls(
            base_url=settings.brapi_base_url,
            token=settings.brapi_token,
            timeout=settings.upstream_timeout_seconds,
        )

    async def __aenter__(self) -> "BrapiClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _params(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        out = dict(params or {})
        if self.token:
            out["token"] = self.token
        return out

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        resp = await self._client.get(
            path,
            params=self._params(params),
            headers={"Accept": "application/json"},
        )
        resp.raise_for_status()
        return resp.json()

    async def get_quote(self, ticker: str, **params: Any) -> List[Dict[str, Any]]:
        """
        Wrapper for GET /quote/{ticker}.

        Returns the raw `results` array (possibly empty). HTTP errors surface
        as httpx.HTTPStatusError, transport problems as httpx.RequestError.
        """
        # one path segment; "/", "?" and "#" must not reach the upstream URL raw
        data = await self._get(f"/quote/{quote(ticker, safe='')}", params=params)
        results = data.get("results") if isinstance(data, dict) else None
        return results if isinstance(results, list) else []
