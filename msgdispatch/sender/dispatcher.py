"""Dispatcher — one POST per identifier of a resolved target."""

from __future__ import annotations

import asyncio
import logging
import time

from msgdispatch.errors import EmptyTargetError, UnsupportedCategoryError
from msgdispatch.gateway.base import Transport
from msgdispatch.messages.encoding import EncodedBody, select_encoding
from msgdispatch.messages.models import MessageRequest, MessageResponse, Target
from msgdispatch.observability.metrics import DispatchMetrics
from msgdispatch.types import SEGMENTS

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, transport: Transport, metrics: DispatchMetrics | None = None) -> None:
        self._transport = transport
        self._metrics = metrics

    @staticmethod
    def segment_for(target: Target) -> str:
        segment = SEGMENTS.get(target.type)
        if segment is None:
            raise UnsupportedCategoryError(target.type)
        return segment

    def submit(self, target: Target, request: MessageRequest) -> list[asyncio.Task[MessageResponse]]:
        """Encode ``request`` and schedule a POST per identifier, in identifier order."""
        return self.submit_encoded(target, select_encoding(request))

    def submit_encoded(self, target: Target, body: EncodedBody) -> list[asyncio.Task[MessageResponse]]:
        """Schedule a POST of an already encoded body per identifier.

        Must be called from a running event loop. Nothing is awaited here.
        """
        segment = self.segment_for(target)
        identifiers = target.identifiers
        if not identifiers and target.ids is None:
            raise EmptyTargetError()

        return [
            asyncio.create_task(self._post(target.type, f"/{segment}/{identifier}/messages", body))
            for identifier in identifiers
        ]

    async def dispatch(
        self, target: Target, request: MessageRequest,
    ) -> MessageResponse | list[MessageResponse]:
        tasks = self.submit(target, request)
        results = await asyncio.gather(*tasks)
        if target.ids is not None:
            return list(results)
        return results[0]

    async def _post(self, category: str, path: str, body: EncodedBody) -> MessageResponse:
        start = time.monotonic()
        logger.debug("POST %s multipart=%s", path, body.is_multipart)
        try:
            response = await self._transport.post(path, body)
        except Exception as e:
            logger.warning("POST %s failed: %s", path, e)
            if self._metrics:
                self._metrics.record_post(category, ok=False)
            raise
        if self._metrics:
            latency_ms = int((time.monotonic() - start) * 1000)
            self._metrics.record_post(category, latency_ms=latency_ms)
        return response
