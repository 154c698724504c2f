"""
Protocol layer for the UGV JSON line protocol.

This module contains the wire-level handling:
- Opcodes, feedback tags and protocol constants
- Feedback decoding (tag dispatch and schema validation)
- Command encoding (flat opcode + payload objects)
- Line framing over a transport
"""

from ugvlink.protocol.constants import CommandOpcode, FeedbackTag, ProtocolConstants
from ugvlink.protocol.decoder import FEEDBACK_SCHEMAS, decode, parse_object, peek_tag
from ugvlink.protocol.encoder import command_to_dict, encode
from ugvlink.protocol.framing import read_message, write_message

__all__ = [
    # Constants
    "CommandOpcode",
    "FeedbackTag",
    "ProtocolConstants",
    # Decoding
    "FEEDBACK_SCHEMAS",
    "decode",
    "parse_object",
    "peek_tag",
    # Encoding
    "command_to_dict",
    "encode",
    # Framing
    "read_message",
    "write_message",
]
