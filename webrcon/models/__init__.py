from .codec import decode_chat, decode_frame, encode_command
from .frames import (
    PROTOCOL_NAME,
    UNSOLICITED_IDENTIFIER,
    ChatEvent,
    CommandFrame,
    GenericFrame,
    MessageType,
)

__all__ = [
    "PROTOCOL_NAME",
    "UNSOLICITED_IDENTIFIER",
    "ChatEvent",
    "CommandFrame",
    "GenericFrame",
    "MessageType",
    "decode_chat",
    "decode_frame",
    "encode_command",
]
