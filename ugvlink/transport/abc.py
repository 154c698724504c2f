"""
Abstract transport interface for the UGV line protocol.

This module defines the narrow byte-stream capability the protocol layer
depends on. Transports handle the low-level communication with the board
over serial ports, sockets or anything else that delivers bytes in order.

The transport layer is responsible for:
- Opening/closing the physical connection
- Reading up to a terminator byte
- Writing raw bytes
- Timeout handling

Implementations:
- StreamTransport: any asyncio StreamReader/StreamWriter pair
- AsyncSerialTransport: pyserial-asyncio based serial port
- MockTransport: for testing without hardware
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ugvlink.protocol.constants import ProtocolConstants

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Abstract base class for byte-stream transports.

    Transports support async context manager protocol for safe resource
    management:

        async with AsyncSerialTransport("/dev/serial0") as transport:
            await transport.write(b'{"T":130}\\n')
            line = await transport.read_until()

    Attributes:
        is_open: Whether the transport connection is currently open.
        port_name: Identifier for the transport (e.g., serial port name).
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """
        Check if the transport connection is currently open.

        Returns:
            True if connected and ready for I/O, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def port_name(self) -> str:
        """
        Get the transport identifier.

        Returns:
            Port name or identifier string (e.g., "/dev/serial0", "tcp://host:port").
        """
        ...

    @abstractmethod
    async def open(self) -> None:
        """
        Open the transport connection.

        Raises:
            TransportError: If the connection cannot be established.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """
        Close the transport connection.

        Releases the physical connection and any associated resources.
        Safe to call multiple times (idempotent).
        """
        ...

    @abstractmethod
    async def write(self, data: bytes) -> int:
        """
        Write data to the transport.

        Each call is passed straight to the underlying stream. Nothing is
        queued or batched, so backpressure comes from the stream itself.

        Args:
            data: Bytes to send.

        Returns:
            Number of bytes written.

        Raises:
            TransportError: If the transport is not open or write fails.
        """
        ...

    @abstractmethod
    async def read_until(
        self,
        terminator: int = ProtocolConstants.LINE_TERMINATOR,
        timeout: float | None = None,
    ) -> bytes:
        """
        Read data until a terminator byte is received.

        The terminator is included in the returned data. If the stream
        ends first, whatever bytes remain are returned without a
        terminator; an empty result means the stream had already ended.

        Args:
            terminator: Byte value to read until (default: 0x0A / LF).
            timeout: Read timeout in seconds. None uses transport default.

        Returns:
            Bytes read including the terminator, or the remaining bytes at
            end of stream.

        Raises:
            TimeoutError: If timeout expires before terminator is received.
            TransportError: If the transport is not open or read fails.
        """
        ...

    @abstractmethod
    def discard_buffers(self) -> None:
        """
        Discard any pending data in input and output buffers.

        Useful for resynchronizing on a line boundary after errors.
        """
        ...

    async def __aenter__(self) -> AbstractTransport:
        """Async context manager entry - opens the transport."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes the transport."""
        await self.close()
