"""
Line framing over a byte-stream transport.

Every message is one line terminated by a single 0x0A byte:

    {"T":1001,"L":0.2,...}\\n

read_message returns the line with the terminator stripped. A line cut
short by the end of the stream is returned as it is and left for the
decoder to judge. Only an end of stream with no pending bytes is
reported as ConnectionClosedError.

The framer keeps no buffer of its own. Unconsumed bytes stay in the
transport, so a cancelled read_message loses nothing and the next call
starts at the same line boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ugvlink.exceptions import ConnectionClosedError, PartialWriteError, TransportError
from ugvlink.protocol.constants import ProtocolConstants

if TYPE_CHECKING:
    from ugvlink.transport.abc import AbstractTransport

TERMINATOR = bytes([ProtocolConstants.LINE_TERMINATOR])


async def read_message(stream: AbstractTransport, timeout: float | None = None) -> bytes:
    """
    Read one line from the stream.

    Args:
        stream: Transport to read from.
        timeout: Read timeout in seconds. None waits indefinitely.

    Returns:
        The line's bytes without the trailing 0x0A.

    Raises:
        ConnectionClosedError: If the stream ended before any byte arrived.
        TimeoutError: If the timeout expired.
        TransportError: If the read failed.
    """
    data = await stream.read_until(ProtocolConstants.LINE_TERMINATOR, timeout)
    if not data:
        raise ConnectionClosedError(f"{stream.port_name} closed")

    if data.endswith(TERMINATOR):
        return data[:-1]
    return data


async def write_message(stream: AbstractTransport, payload: bytes) -> int:
    """
    Write one line to the stream.

    The payload and the terminator are written as two transport writes.
    Neither is retried.

    Args:
        stream: Transport to write to.
        payload: Line contents. Must not contain 0x0A.

    Returns:
        Total number of bytes written, terminator included.

    Raises:
        ValueError: If the payload contains a line terminator.
        TransportError: If the payload could not be written.
        PartialWriteError: If the payload was written but the terminator was not.
    """
    if TERMINATOR in payload:
        raise ValueError("Payload must not contain a line terminator")

    body = await stream.write(payload)
    try:
        tail = await stream.write(TERMINATOR)
    except TransportError as e:
        raise PartialWriteError(
            f"Terminator write failed on {stream.port_name}: {e}",
            bytes_written=body,
        ) from e
    return body + tail
