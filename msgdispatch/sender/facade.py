"""Sender facade — the callable entry point for sending messages.

Example::

    config = DispatchConfig.from_yaml()
    setup_logging(config.log_level)

    async with HttpTransport.from_config(config) as transport:
        sender = create_sender(transport)
        await sender.channel("channel-id", "hello")
        await sender.channel(["channel-a", "channel-b"], "hello")
        await sender({"type": "private", "id": "guild-id"}, {"markdown": "**hi**"})
        await sender.channel.reply(message.id, message.channel_id, "pong")
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from msgdispatch.errors import DispatchError, UnsupportedCategoryError
from msgdispatch.gateway.base import Transport
from msgdispatch.messages.encoding import EncodedBody, select_encoding
from msgdispatch.messages.models import MessageResponse, Target
from msgdispatch.messages.normalize import RequestInput, normalize_request
from msgdispatch.observability.metrics import DispatchMetrics
from msgdispatch.sender.dispatcher import Dispatcher
from msgdispatch.sender.targets import TargetInput, resolve_target
from msgdispatch.types import TargetType

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of one POST in a fanned-out send."""

    target: Target
    identifier: str
    response: MessageResponse | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Sender:
    """Callable sender, optionally narrowed to one target category."""

    def __init__(
        self,
        transport: Transport,
        category: TargetType | str | None = None,
        metrics: DispatchMetrics | None = None,
    ) -> None:
        self._transport = transport
        self._category = _as_category(category) if category else None
        self._metrics = metrics
        self._dispatcher = Dispatcher(transport, metrics)

    @property
    def category(self) -> TargetType | None:
        return self._category

    def narrow(self, category: TargetType | str) -> Sender:
        return Sender(self._transport, category, self._metrics)

    @property
    def private(self) -> Sender:
        return self.narrow(TargetType.PRIVATE)

    @property
    def channel(self) -> Sender:
        return self.narrow(TargetType.CHANNEL)

    async def __call__(
        self, target: TargetInput, request: RequestInput,
    ) -> MessageResponse | list[MessageResponse]:
        """Send to one target (single response) or a list of targets (flat list of responses)."""
        targets = resolve_target(target, self._category)
        req = normalize_request(request)
        if isinstance(targets, Target):
            return await self._dispatcher.dispatch(targets, req)
        return await self._fan_out(targets, select_encoding(req))

    async def reply(
        self, msg_id: str, target: TargetInput, request: RequestInput,
    ) -> MessageResponse | list[MessageResponse]:
        req = normalize_request(request).model_copy(update={"msg_id": msg_id})
        return await self(target, req)

    async def send_all(self, target: TargetInput, request: RequestInput) -> list[DispatchResult]:
        """Like calling the sender, but report each POST's outcome instead of failing as a whole."""
        resolved = resolve_target(target, self._category)
        targets = [resolved] if isinstance(resolved, Target) else resolved
        body = select_encoding(normalize_request(request))

        entries: list[tuple[Target, str, asyncio.Task[MessageResponse] | DispatchError]] = []
        for t in targets:
            try:
                tasks = self._dispatcher.submit_encoded(t, body)
            except DispatchError as e:
                entries.extend((t, identifier, e) for identifier in t.identifiers)
                continue
            entries.extend(zip([t] * len(tasks), t.identifiers, tasks))

        await asyncio.gather(
            *(outcome for _, _, outcome in entries if isinstance(outcome, asyncio.Task)),
            return_exceptions=True,
        )

        results: list[DispatchResult] = []
        for t, identifier, outcome in entries:
            if not isinstance(outcome, asyncio.Task):
                results.append(DispatchResult(t, identifier, error=outcome))
            elif outcome.cancelled():
                results.append(DispatchResult(t, identifier, error=asyncio.CancelledError()))
            elif outcome.exception() is not None:
                results.append(DispatchResult(t, identifier, error=outcome.exception()))
            else:
                results.append(DispatchResult(t, identifier, response=outcome.result()))

        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.warning("send_all: %d of %d posts failed", failed, len(results))
        return results

    async def _fan_out(self, targets: list[Target], body: EncodedBody) -> list[MessageResponse]:
        tasks: list[asyncio.Task[MessageResponse]] = []
        try:
            for target in targets:
                tasks.extend(self._dispatcher.submit_encoded(target, body))
        except DispatchError:
            # Posts already issued for earlier targets still run to completion
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return list(await asyncio.gather(*tasks))

    def __repr__(self) -> str:
        category = self._category.value if self._category else None
        return f"Sender(category={category!r})"


def _as_category(value: TargetType | str) -> TargetType:
    try:
        return TargetType(value)
    except ValueError:
        raise UnsupportedCategoryError(str(value)) from None


def create_sender(
    transport: Transport,
    category: TargetType | str | None = None,
    metrics: DispatchMetrics | None = None,
) -> Sender:
    return Sender(transport, category, metrics)
