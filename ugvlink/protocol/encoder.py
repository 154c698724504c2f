"""
Command encoding.

A command is sent as one flat JSON object: the "T" opcode first, then
the payload fields as siblings under their wire names.

    Speed(l=0.5, r=0.5)   ->  {"T":1,"L":0.5,"R":0.5}
    GetBaseFeedback()     ->  {"T":130}

json.dumps escapes control characters inside strings, so the output
never contains a raw newline and always fits on one line.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ugvlink.protocol.constants import ProtocolConstants

if TYPE_CHECKING:
    from ugvlink.models.commands import CommandMessage


def command_to_dict(msg: CommandMessage) -> dict[str, Any]:
    """
    Build the wire object for a command.

    Args:
        msg: Command to convert.

    Returns:
        Dict with the opcode under "T" followed by the payload fields.
    """
    wire: dict[str, Any] = {ProtocolConstants.TAG_FIELD: int(msg.opcode)}
    wire.update(msg.payload())
    return wire


def encode(msg: CommandMessage) -> bytes:
    """
    Encode a command as one line of JSON, without the terminator.

    Args:
        msg: Command to encode.

    Returns:
        UTF-8 encoded compact JSON object.
    """
    text = json.dumps(
        command_to_dict(msg),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode(ProtocolConstants.TEXT_ENCODING)
