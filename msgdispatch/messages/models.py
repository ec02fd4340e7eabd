"""Message payloads and targets exchanged with the open API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from msgdispatch.messages.wire import to_wire_key
from msgdispatch.types import TargetType


class WireModel(BaseModel):
    """Snake_case fields that also accept the platform's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(WireModel):
    id: str = ""
    username: str = ""
    avatar: str = ""
    bot: bool = False


class Member(WireModel):
    nick: str = ""
    roles: list[str] = Field(default_factory=list)
    joined_at: datetime | None = None


class ArkObjKv(WireModel):
    key: str = ""
    value: str = ""


class ArkObj(WireModel):
    obj_kv: list[ArkObjKv] = Field(default_factory=list)


class ArkKv(WireModel):
    key: str = ""
    value: str | None = None
    obj: list[ArkObj] | None = None


class Ark(WireModel):
    template_id: int | None = None
    kv: list[ArkKv] = Field(default_factory=list)


class EmbedField(WireModel):
    name: str = ""
    value: str = ""


class Embed(WireModel):
    title: str = ""
    description: str = ""
    prompt: str = ""
    timestamp: datetime | None = None
    fields: list[EmbedField] = Field(default_factory=list)


class MarkdownParams(WireModel):
    key: str = ""
    values: list[str] = Field(default_factory=list)


class Markdown(WireModel):
    template_id: int | None = None
    params: list[MarkdownParams] | None = None
    # Raw markdown; mutually exclusive with template_id/params on the server side
    content: str | None = None


class Reference(WireModel):
    message_id: str = ""
    ignore_get_message_error: bool | None = None


class MessageRequest(WireModel):
    """Outbound payload. Fields not modelled here are kept and sent as given."""

    model_config = ConfigDict(extra="allow")

    content: str | None = None
    embed: Embed | None = None
    ark: Ark | None = None
    message_reference: Reference | None = None
    image: str | None = None  # URL, the platform re-hosts it
    file_image: Any = Field(default=None, repr=False)  # bytes or binary file object
    msg_id: str | None = None
    event_id: str | None = None
    markdown: Markdown | None = None

    @field_validator("markdown", mode="before")
    @classmethod
    def _markdown_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"content": value}
        return value

    @classmethod
    def from_content(cls, text: str) -> MessageRequest:
        return cls(content=text)

    @property
    def has_file_image(self) -> bool:
        return self.file_image is not None

    def to_wire(self) -> dict[str, Any]:
        """JSON body fields, keyed by wire name, without the binary image."""
        dumped = self.model_dump(mode="json", exclude_none=True, exclude={"file_image"})
        return {to_wire_key(key): value for key, value in dumped.items()}


class MessageResponse(WireModel):
    """Created message as echoed by the server. Unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    id: str = ""
    author: User | None = None
    content: str | None = None
    guild_id: str | None = None
    channel_id: str | None = None
    timestamp: datetime | None = None
    edited_timestamp: datetime | None = None
    mention_everyone: bool = False
    embeds: list[Embed] = Field(default_factory=list)
    mentions: list[User] | None = None
    member: Member | None = None
    ark: Ark | None = None
    seq_in_channel: str | None = None
    message_reference: Reference | None = None
    src_guild_id: str | None = None
    tts: bool = False
    type: int = 0
    flags: int = 0
    pinned: bool = False


class Target(WireModel):
    """A resolved destination: a category plus one id or an ordered id list."""

    type: str
    id: str | None = None
    ids: list[str] | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _category_value(cls, value: Any) -> Any:
        if isinstance(value, TargetType):
            return value.value
        return value

    @classmethod
    def from_identifier(cls, category: TargetType | str, identifier: str) -> Target:
        return cls(type=category, id=identifier)

    @classmethod
    def from_identifiers(cls, category: TargetType | str, ids: list[str]) -> Target:
        return cls(type=category, ids=list(ids))

    @property
    def identifiers(self) -> list[str]:
        if self.ids is not None:
            return list(self.ids)
        return [self.id] if self.id is not None else []
