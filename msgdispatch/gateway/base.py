"""Transport abstraction consumed by the dispatcher."""

from __future__ import annotations

import abc

from msgdispatch.messages.encoding import EncodedBody
from msgdispatch.messages.models import MessageResponse


class Transport(abc.ABC):
    @abc.abstractmethod
    async def post(self, path: str, body: EncodedBody) -> MessageResponse:
        """POST an encoded body to ``path`` and return the created message."""

    async def connect(self) -> None:
        """Open underlying connections (optional override)."""

    async def close(self) -> None:
        """Teardown (optional override)."""

    async def __aenter__(self) -> Transport:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
