"""Test request normalization."""

from msgdispatch.messages.models import Markdown, MessageRequest
from msgdispatch.messages.normalize import normalize_request


def test_plain_string():
    req = normalize_request("hello")
    assert req.content == "hello"
    assert req.to_wire() == {"content": "hello"}


def test_markdown_shorthand():
    req = normalize_request({"markdown": "hi"})
    assert req.markdown == Markdown(content="hi")
    assert req.to_wire() == {"markdown": {"content": "hi"}}


def test_structured_markdown_unchanged():
    req = normalize_request({"content": "x", "markdown": {"templateId": 1}})
    assert req.content == "x"
    assert req.markdown.template_id == 1
    assert req.to_wire() == {"content": "x", "markdown": {"template_id": 1}}


def test_request_object_passes_through():
    original = MessageRequest(content="x", msg_id="m1")
    assert normalize_request(original) is original


def test_constructed_markdown_string_is_copied():
    original = MessageRequest.model_construct(markdown="raw")
    req = normalize_request(original)
    assert req.markdown == Markdown(content="raw")
    assert original.markdown == "raw"


def test_camel_case_fields():
    req = normalize_request({
        "content": "quote",
        "msgId": "m1",
        "eventId": "e1",
        "messageReference": {"messageId": "m0", "ignoreGetMessageError": True},
    })
    assert req.to_wire() == {
        "content": "quote",
        "msg_id": "m1",
        "event_id": "e1",
        "message_reference": {"message_id": "m0", "ignore_get_message_error": True},
    }


def test_unmodelled_fields_are_kept():
    req = normalize_request({"content": "x", "keyboard": {"id": "kb1"}, "replyMarkup": "none"})
    assert req.to_wire() == {"content": "x", "keyboard": {"id": "kb1"}, "reply_markup": "none"}


def test_unmodelled_fields_survive_reply_copy():
    req = normalize_request({"keyboard": {"id": "kb1"}}).model_copy(update={"msg_id": "m1"})
    assert req.to_wire() == {"keyboard": {"id": "kb1"}, "msg_id": "m1"}
