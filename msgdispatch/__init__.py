"""msgdispatch — message dispatch for the bot open API."""

__version__ = "0.1.0"

from msgdispatch.errors import (  # noqa: E402
    DispatchError,
    EmptyTargetError,
    MissingCategoryError,
    TransportError,
    UnsupportedCategoryError,
)
from msgdispatch.messages.models import MessageRequest, MessageResponse, Target  # noqa: E402
from msgdispatch.sender.facade import DispatchResult, Sender, create_sender  # noqa: E402
from msgdispatch.types import TargetType  # noqa: E402

__all__ = [
    "DispatchError",
    "DispatchResult",
    "EmptyTargetError",
    "MessageRequest",
    "MessageResponse",
    "MissingCategoryError",
    "Sender",
    "Target",
    "TargetType",
    "TransportError",
    "UnsupportedCategoryError",
    "create_sender",
]
