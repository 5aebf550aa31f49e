"""Encode/decode helpers between raw websocket text and frame models."""

from __future__ import annotations

from typing import Union

from pydantic import ValidationError

from webrcon.errors import DecodeFailure
from webrcon.models.frames import ChatEvent, CommandFrame, GenericFrame


def decode_frame(raw: Union[str, bytes]) -> GenericFrame:
    try:
        return GenericFrame.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeFailure(f"malformed frame: {exc.errors(include_url=False)}") from exc


def decode_chat(frame: GenericFrame) -> ChatEvent:
    """Decode the nested chat payload of a ``Chat`` frame."""

    try:
        return ChatEvent.model_validate_json(frame.message)
    except ValidationError as exc:
        raise DecodeFailure(f"malformed chat payload: {exc.errors(include_url=False)}") from exc


def encode_command(frame: CommandFrame) -> str:
    return frame.model_dump_json(by_alias=True)
