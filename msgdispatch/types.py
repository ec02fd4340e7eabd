"""Shared enums and type aliases."""

from enum import Enum


class TargetType(str, Enum):
    PRIVATE = "private"
    CHANNEL = "channel"


# Endpoint path segment per target category
SEGMENTS: dict[str, str] = {
    TargetType.PRIVATE.value: "dms",
    TargetType.CHANNEL.value: "channels",
}
