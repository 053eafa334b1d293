import dataclasses

import pytest

from streamtransform.streaming import CONTENT_TYPE, Message


def test_message_is_frozen():
    message = Message(payload="hello", headers={"a": 1})
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.payload = "other"


def test_headers_are_read_only_copy():
    headers = {CONTENT_TYPE: "text/plain"}
    message = Message(payload=b"hello", headers=headers)
    headers["late"] = "value"
    assert "late" not in message.headers
    with pytest.raises(TypeError):
        message.headers["x"] = "y"


def test_with_payload_returns_new_message():
    original = Message(payload=b"hello", headers={CONTENT_TYPE: "text/plain", "id": "42"})
    updated = original.with_payload("hello")
    assert updated is not original
    assert updated.payload == "hello"
    assert original.payload == b"hello"
    assert dict(updated.headers) == {CONTENT_TYPE: "text/plain", "id": "42"}


def test_content_type_property():
    assert Message(payload=b"", headers={CONTENT_TYPE: "text/csv"}).content_type == "text/csv"
    assert Message(payload=b"").content_type is None
