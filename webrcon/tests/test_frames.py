import json
from datetime import datetime, timezone

import pytest

from webrcon.errors import DecodeFailure
from webrcon.models import (
    ChatEvent,
    CommandFrame,
    GenericFrame,
    MessageType,
    decode_chat,
    decode_frame,
    encode_command,
)


def test_decode_frame_reads_wire_fields():
    raw = json.dumps(
        {"Message": "hostname: test", "Identifier": 42, "Type": "Generic", "Stacktrace": "at Foo()"}
    )

    frame = decode_frame(raw)

    assert frame.message == "hostname: test"
    assert frame.identifier == 42
    assert frame.type == MessageType.generic.value
    assert frame.stacktrace == "at Foo()"
    assert not frame.is_unsolicited
    assert not frame.is_chat


def test_decode_frame_defaults_missing_fields():
    frame = decode_frame(b'{"Message": "server tick", "Stacktrace": null}')

    assert frame.identifier == 0
    assert frame.is_unsolicited
    assert frame.type == ""
    assert frame.stacktrace is None


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2, 3]",
        '{"Identifier": "abc", "Message": "x"}',
        '{"Message": {"nested": true}}',
    ],
)
def test_decode_frame_rejects_malformed_input(raw):
    with pytest.raises(DecodeFailure):
        decode_frame(raw)


def test_decode_chat_reads_nested_payload():
    payload = {
        "Channel": 1,
        "Message": "hello there",
        "UserId": 76561198000000001,
        "Username": "raider",
        "Color": "#5af",
        "Time": 1700000000,
    }
    frame = GenericFrame(message=json.dumps(payload), identifier=0, type="Chat")

    event = decode_chat(frame)

    assert frame.is_chat
    assert event.channel == 1
    assert event.message == "hello there"
    assert event.user_id == "76561198000000001"
    assert event.username == "raider"
    assert event.color == "#5af"
    assert event.timestamp == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_decode_chat_rejects_plain_text_body():
    frame = GenericFrame(message="[CHAT] raider: hello", type="Chat")

    with pytest.raises(DecodeFailure):
        decode_chat(frame)


def test_encode_command_uses_wire_names():
    encoded = encode_command(CommandFrame(identifier=5, message="status"))

    assert json.loads(encoded) == {"Identifier": 5, "Message": "status", "Name": "RCON"}


def test_command_frame_defaults_to_uncorrelated():
    frame = CommandFrame(message="say hi")

    assert frame.identifier == 0
    assert frame.name == "RCON"


def test_chat_event_accepts_wire_aliases_and_field_names():
    by_alias = ChatEvent.model_validate({"Username": "a", "Time": 1})
    by_name = ChatEvent(username="a", time=1)

    assert by_alias == by_name
