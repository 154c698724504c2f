"""
Transport over an asyncio stream pair.

StreamTransport adapts any asyncio StreamReader/StreamWriter pair to the
AbstractTransport interface: TCP connections, pipes, or a serial port
opened through pyserial-asyncio (see AsyncSerialTransport).

Example:
    >>> reader, writer = await asyncio.open_connection("rover.local", 8888)
    >>> transport = StreamTransport(reader, writer, port_name="tcp://rover.local:8888")
    >>> line = await transport.read_until()
"""

from __future__ import annotations

import asyncio
import logging

from ugvlink.exceptions import TimeoutError, TransportError
from ugvlink.protocol.constants import ProtocolConstants
from ugvlink.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)


class StreamTransport(AbstractTransport):
    """
    Transport wrapping an asyncio StreamReader/StreamWriter pair.

    A transport built from existing streams is open from the start.
    Subclasses that create their own streams override _open_streams().

    Reads never buffer beyond the StreamReader, so bytes after the
    returned line stay in the reader for the next call.

    Attributes:
        port_name: Identifier given at construction.
        is_open: Whether both streams are present and the writer is not closing.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None = None,
        writer: asyncio.StreamWriter | None = None,
        *,
        port_name: str = "stream",
        default_timeout: float | None = ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT,
    ) -> None:
        """
        Initialize the stream transport.

        Args:
            reader: Stream to read lines from.
            writer: Stream to write lines to.
            port_name: Identifier used in logs and error messages.
            default_timeout: Default read timeout in seconds (None waits forever).
        """
        self._reader = reader
        self._writer = writer
        self._port_name = port_name
        self._default_timeout = default_timeout

    @property
    def is_open(self) -> bool:
        """Check if the streams are present and usable."""
        return (
            self._writer is not None
            and not self._writer.is_closing()
            and self._reader is not None
        )

    @property
    def port_name(self) -> str:
        """Get the transport identifier."""
        return self._port_name

    async def _open_streams(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        """
        Create the reader/writer pair.

        Raises:
            TransportError: Always, a plain StreamTransport cannot reopen.
        """
        raise TransportError(f"{self._port_name} has no streams to open")

    async def open(self) -> None:
        """
        Open the transport.

        Does nothing if the streams are already open.

        Raises:
            TransportError: If the streams cannot be created.
        """
        if self.is_open:
            return
        self._reader, self._writer = await self._open_streams()
        logger.info("Opened %s", self._port_name)

    async def close(self) -> None:
        """
        Close the writer and drop both streams.

        Safe to call multiple times.
        """
        if self._writer is not None:
            try:
                self._writer.close()
                await self._writer.wait_closed()
            except (OSError, RuntimeError) as e:
                logger.debug("Error while closing %s: %s", self._port_name, e)
            logger.info("Closed %s", self._port_name)

        self._reader = None
        self._writer = None

    async def write(self, data: bytes) -> int:
        """
        Write data and wait for the writer to drain.

        Args:
            data: Bytes to transmit.

        Returns:
            Number of bytes written.

        Raises:
            TransportError: If the transport is not open or write fails.
        """
        if not self.is_open:
            raise TransportError(f"{self._port_name} is not open")

        try:
            self._writer.write(data)
            await self._writer.drain()
        except Exception as e:
            raise TransportError(f"Write failed: {e}") from e
        return len(data)

    async def _read_line(self, separator: bytes) -> bytes:
        """
        Read one line of any length from the reader.

        Lines longer than the reader limit are taken in pieces, so an
        oversized line is consumed whole and the next read starts at the
        following line.
        """
        chunks: list[bytes] = []
        while True:
            try:
                chunks.append(await self._reader.readuntil(separator))
                break
            except asyncio.LimitOverrunError as e:
                logger.debug(
                    "Line on %s exceeds reader limit, reading in pieces (%d bytes)",
                    self._port_name,
                    e.consumed,
                )
                chunks.append(await self._reader.readexactly(e.consumed))
            except asyncio.IncompleteReadError as e:
                # Stream ended before the terminator
                chunks.append(e.partial)
                break
        return b"".join(chunks)

    async def read_until(
        self,
        terminator: int = ProtocolConstants.LINE_TERMINATOR,
        timeout: float | None = None,
    ) -> bytes:
        """
        Read data until a terminator byte is received.

        Args:
            terminator: Byte value to read until (default: 0x0A / LF).
            timeout: Read timeout in seconds. None uses default timeout.

        Returns:
            Bytes read including the terminator. At end of stream, the
            remaining partial bytes (empty if there were none).

        Raises:
            TimeoutError: If timeout expires before terminator is received.
            TransportError: If the transport is not open or read fails.
        """
        if not self.is_open:
            raise TransportError(f"{self._port_name} is not open")

        effective_timeout = timeout if timeout is not None else self._default_timeout
        separator = bytes([terminator])

        try:
            if effective_timeout is None:
                return await self._read_line(separator)
            return await asyncio.wait_for(
                self._read_line(separator),
                timeout=effective_timeout,
            )

        except asyncio.TimeoutError:
            raise TimeoutError(
                f"Timeout waiting for terminator 0x{terminator:02X}",
                timeout_seconds=effective_timeout,
            ) from None
        except Exception as e:
            raise TransportError(f"Read failed: {e}") from e

    def discard_buffers(self) -> None:
        """
        Discard pending data.

        asyncio streams offer no public way to drop buffered bytes, so a
        plain StreamTransport has nothing to discard.
        """

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"{type(self).__name__}({self._port_name!r}, {status})"
