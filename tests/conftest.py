"""Shared fixtures: an in-memory transport that records every POST."""

from __future__ import annotations

import asyncio

import pytest

from msgdispatch.errors import TransportError
from msgdispatch.gateway.base import Transport
from msgdispatch.messages.encoding import EncodedBody
from msgdispatch.messages.models import MessageResponse


class RecordingTransport(Transport):
    """Answers each POST with a response named after the path's identifier."""

    def __init__(self, delays: dict[str, float] | None = None, fail_on: set[str] | None = None) -> None:
        self.delays = delays or {}
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, EncodedBody]] = []
        self.completed: list[str] = []

    @property
    def paths(self) -> list[str]:
        return [path for path, _ in self.calls]

    async def post(self, path: str, body: EncodedBody) -> MessageResponse:
        self.calls.append((path, body))
        identifier = path.split("/")[2]
        await asyncio.sleep(self.delays.get(identifier, 0))
        self.completed.append(identifier)
        if identifier in self.fail_on:
            raise TransportError(f"POST {path} failed with 500", status_code=500)
        return MessageResponse(id=f"resp-{identifier}", channel_id=identifier)


@pytest.fixture
def transport():
    return RecordingTransport()
