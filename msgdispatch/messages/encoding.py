"""Pick the outbound body encoding: JSON, or multipart when a binary image is attached."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from msgdispatch import __version__
from msgdispatch.messages.models import MessageRequest
from msgdispatch.messages.wire import to_wire_key

IMAGE_FIELD = "file_image"
IMAGE_FILENAME = "image.png"
IMAGE_MIME_TYPE = "image/png"

# Fixed headers sent alongside multipart uploads
MULTIPART_HEADERS = {
    "Accept": "*/*",
    "Accept-Encoding": "gzip,deflate",
    "Connection": "close",
    "User-Agent": f"msgdispatch/{__version__}",
}

_FORM_URL = "http://multipart.invalid/"


@dataclass
class EncodedBody:
    headers: dict[str, str]
    json: dict[str, Any] | None = None
    content: bytes | None = field(default=None, repr=False)

    @property
    def is_multipart(self) -> bool:
        return self.content is not None


def _form_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def select_encoding(request: MessageRequest) -> EncodedBody:
    """JSON body, or a multipart form when ``file_image`` is set.

    A file object in ``file_image`` is read to the end synchronously, on the
    calling thread. Pass bytes, or read large files off the event loop first.
    """
    if not request.has_file_image:
        return EncodedBody(headers={"Content-Type": "application/json"}, json=request.to_wire())

    data = {to_wire_key(key): _form_value(value) for key, value in request.to_wire().items()}
    files = {to_wire_key(IMAGE_FIELD): (IMAGE_FILENAME, request.file_image, IMAGE_MIME_TYPE)}

    # Let httpx build the form, then keep the bytes so the body can be reused per id
    form = httpx.Request("POST", _FORM_URL, data=data, files=files)
    content = form.read()

    headers = dict(MULTIPART_HEADERS)
    headers["Content-Type"] = form.headers["Content-Type"]
    return EncodedBody(headers=headers, content=content)
