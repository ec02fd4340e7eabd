"""Errors raised while resolving and dispatching messages."""

from __future__ import annotations


class DispatchError(Exception):
    """Base class for all msgdispatch errors."""


class MissingCategoryError(DispatchError):
    def __init__(self, target: str, reason: str = "needs a category (private or channel)") -> None:
        super().__init__(f"target {target!r} {reason}")
        self.target = target


class EmptyTargetError(DispatchError):
    def __init__(self) -> None:
        super().__init__("target.ids or target.id is required")


class UnsupportedCategoryError(DispatchError):
    def __init__(self, category: str) -> None:
        super().__init__(f"target.type {category} is not supported")
        self.category = category


class TransportError(DispatchError):
    """An HTTP call failed: non-2xx status or network failure."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
