"""Wire records exchanged with the server's WebRCON endpoint."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PROTOCOL_NAME = "RCON"
UNSOLICITED_IDENTIFIER = 0


class MessageType(str, enum.Enum):
    """Type tags the server is known to emit."""

    generic = "Generic"
    error = "Error"
    warning = "Warning"
    chat = "Chat"
    report = "Report"


class GenericFrame(BaseModel):
    """Inbound envelope: a reply to a command or an unsolicited event."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="", alias="Message")
    identifier: int = Field(default=UNSOLICITED_IDENTIFIER, alias="Identifier")
    type: str = Field(default="", alias="Type")
    stacktrace: Optional[str] = Field(default=None, alias="Stacktrace")

    @property
    def is_unsolicited(self) -> bool:
        return self.identifier == UNSOLICITED_IDENTIFIER

    @property
    def is_chat(self) -> bool:
        return self.type == MessageType.chat.value


class ChatEvent(BaseModel):
    """Chat payload carried JSON-encoded inside a ``Chat`` frame's message."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    channel: int = Field(default=0, alias="Channel")
    message: str = Field(default="", alias="Message")
    user_id: str = Field(default="", alias="UserId")
    username: str = Field(default="", alias="Username")
    color: str = Field(default="", alias="Color")
    time: int = Field(default=0, alias="Time")

    @property
    def timestamp(self) -> datetime:
        return datetime.fromtimestamp(self.time, tz=timezone.utc)


class CommandFrame(BaseModel):
    """Outbound command. Identifier 0 opts out of reply correlation."""

    model_config = ConfigDict(populate_by_name=True)

    identifier: int = Field(default=UNSOLICITED_IDENTIFIER, alias="Identifier")
    message: str = Field(alias="Message")
    name: Literal["RCON"] = Field(default=PROTOCOL_NAME, alias="Name")
