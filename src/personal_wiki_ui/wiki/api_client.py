import logging
from typing import Any, Optional

import httpx

from ..config import settings
from ..api.models import (
    CREATE_OR_UPDATE_KEYS,
    DELETE_KEYS,
    CreateOrUpdateWikiRequest,
    DeleteWikiRequest,
    ParseResult,
    parse_action_response,
)

logger = logging.getLogger("wiki.client")


class WikiResourceClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        wikis_path: Optional[str] = None,
        public_wiki_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = str(base_url or settings.endpoint_base_url).rstrip("/")
        self.wikis_path = wikis_path or settings.wikis_path
        self.public_wiki_base_url = (
            public_wiki_base_url or settings.public_wiki_base_url
        ).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport

    @property
    def wikis_url(self) -> str:
        return f"{self.base_url}{self.wikis_path}"

    def wiki_page_url(self, username: str) -> str:
        """Public link to a user's rendered wiki."""
        return f"{self.public_wiki_base_url}/{username}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _request(self, method: str, body: dict[str, Any]) -> Any:
        """
        Send one JSON request to the wikis resource and decode the reply.

        Raises httpx.HTTPStatusError on a non-2xx status, httpx.RequestError
        when the endpoint cannot be reached, and ValueError when the body is
        not JSON.
        """
        async with self._client() as client:
            resp = await client.request(
                method,
                self.wikis_url,
                json=body,
                headers={"Content-Type": "application/json"},
            )
        resp.raise_for_status()
        logger.debug("%s %s -> %s", method, self.wikis_url, resp.status_code)
        return resp.json()

    async def create_wiki(self, req: CreateOrUpdateWikiRequest) -> ParseResult:
        data = await self._request("POST", req.model_dump())
        return parse_action_response(data, CREATE_OR_UPDATE_KEYS)

    async def update_wiki(self, req: CreateOrUpdateWikiRequest) -> ParseResult:
        data = await self._request("PATCH", req.model_dump())
        return parse_action_response(data, CREATE_OR_UPDATE_KEYS)

    async def delete_wiki(self, req: DeleteWikiRequest) -> ParseResult:
        data = await self._request("DELETE", req.model_dump())
        return parse_action_response(data, DELETE_KEYS)

    async def fetch_wiki_page(self, username: str) -> str:
        """Returns the rendered HTML page served for a user's wiki."""
        async with self._client() as client:
            resp = await client.get(f"{self.wikis_url}/{username}")
        resp.raise_for_status()
        return resp.text
