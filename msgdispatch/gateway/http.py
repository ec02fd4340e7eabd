"""HTTP transport — httpx client with bot authorization."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from msgdispatch.config import DispatchConfig
from msgdispatch.errors import TransportError
from msgdispatch.gateway.base import Transport
from msgdispatch.messages.encoding import EncodedBody
from msgdispatch.messages.models import MessageResponse

logger = logging.getLogger(__name__)


class HttpTransport(Transport):
    def __init__(
        self,
        base_url: str,
        app_id: str = "",
        token: str = "",
        timeout: float = 15.0,
        client_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._app_id = app_id
        self._token = token
        self._timeout = timeout
        self._client_transport = client_transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: DispatchConfig) -> HttpTransport:
        return cls(config.api_url, config.app_id, config.token, config.timeout)

    def _auth_headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bot {self._app_id}.{self._token}"}

    def _get_client(self) -> httpx.AsyncClient:
        if not self._client:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._auth_headers(),
                transport=self._client_transport,
            )
        return self._client

    async def connect(self) -> None:
        self._get_client()
        logger.info("HTTP transport ready for %s", self._base_url)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def post(self, path: str, body: EncodedBody) -> MessageResponse:
        client = self._get_client()
        try:
            if body.is_multipart:
                resp = await client.post(path, content=body.content, headers=body.headers)
            else:
                resp = await client.post(path, json=body.json, headers=body.headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"POST {path} failed with {e.response.status_code}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"POST {path} failed: {e}") from e

        # Delivered by now, but the reply must still parse
        try:
            return MessageResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise TransportError(
                f"POST {path} returned an unreadable reply",
                status_code=resp.status_code,
                body=resp.text,
            ) from e
