from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from papersearch.config import Settings

logger = logging.getLogger(__name__)


class IndexQueryError(Exception):
    """A call to the search index failed or returned something unusable."""


@dataclass(frozen=True)
class IndexQuery:
    text: Optional[str] = None
    filter: Optional[str] = None
    limit: int = 20
    offset: int = 0
    facets: List[str] = field(default_factory=list)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"limit": self.limit, "offset": self.offset}
        if self.text is not None:
            body["q"] = self.text
        if self.filter:
            body["filter"] = self.filter
        if self.facets:
            body["facets"] = list(self.facets)
        return body


class MeiliSearchClient:
    """
    Thin async client for the Meilisearch REST API.

    One instance wraps one httpx.AsyncClient and is shared by every request;
    it holds no per-request state.
    """

    def __init__(self, http: httpx.AsyncClient, index: str = "papers"):
        self.http = http
        self.index = index

    @classmethod
    def from_settings(cls, settings: Settings) -> MeiliSearchClient:
        headers = {"Content-Type": "application/json"}
        if settings.meili.api_key:
            headers["Authorization"] = f"Bearer {settings.meili.api_key}"
        http = httpx.AsyncClient(
            base_url=settings.meili.url,
            headers=headers,
            timeout=settings.meili.timeout,
        )
        return cls(http, index=settings.meili.index)

    async def search(self, query: IndexQuery) -> Dict[str, Any]:
        """
        Run one search against the index.

        Raises:
            IndexQueryError: transport error, non-2xx status or a body that
                is not a JSON object.
        """
        return await self._request(
            "POST", f"/indexes/{self.index}/search", json=query.to_body()
        )

    async def get_settings(self) -> Dict[str, Any]:
        return await self._request("GET", f"/indexes/{self.index}/settings")

    async def close(self) -> None:
        await self.http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise IndexQueryError(f"index request failed: {e}") from e

        if response.is_error:
            raise IndexQueryError(_error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            raise IndexQueryError("index returned invalid JSON") from e

        if not isinstance(data, dict):
            raise IndexQueryError("index returned an unexpected payload")
        return data


def _error_message(response: httpx.Response) -> str:
    # Meilisearch errors look like {"message": ..., "code": ..., "type": ...}
    try:
        detail = response.json().get("message")
    except (ValueError, AttributeError):
        detail = None
    return f"index returned HTTP {response.status_code}" + (f": {detail}" if detail else "")
