"""Coerce loosely typed request input into a canonical MessageRequest."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from msgdispatch.messages.models import Markdown, MessageRequest

RequestInput = Union[str, Mapping[str, Any], MessageRequest]


def normalize_request(req: RequestInput) -> MessageRequest:
    """Plain text becomes ``content``; a bare-string ``markdown`` becomes ``Markdown(content=...)``.

    The input is never mutated; a ``MessageRequest`` is copied when it needs changing.
    """
    if isinstance(req, str):
        return MessageRequest.from_content(req)
    if isinstance(req, MessageRequest):
        if isinstance(req.markdown, str):
            return req.model_copy(update={"markdown": Markdown(content=req.markdown)})
        return req
    return MessageRequest.model_validate(dict(req))
