"""
Async serial transport using pyserial-asyncio.

This module provides the transport for talking to the UGV control board
over its UART.

Serial Configuration:
- Baud rate: 115200 (default)
- Data bits: 8
- Parity: None
- Stop bits: 1
- Flow control: None, with RTS and DTR deasserted

Some boards wire RTS/DTR to the ESP32 reset and boot pins, so both lines
are held low once the port is open.

Example:
    >>> transport = AsyncSerialTransport("/dev/serial0")
    >>> async with transport:
    ...     await transport.write(b'{"T":130}\\n')
    ...     line = await transport.read_until()
"""

from __future__ import annotations

import asyncio
import logging

import serial
import serial_asyncio

from ugvlink.exceptions import TransportError
from ugvlink.protocol.constants import ProtocolConstants
from ugvlink.transport.stream import StreamTransport

# Module logger
logger = logging.getLogger(__name__)


class AsyncSerialTransport(StreamTransport):
    """
    Async serial transport using pyserial-asyncio.

    Provides non-blocking serial communication using Python's asyncio
    framework. This is the transport for real hardware.

    Attributes:
        port_name: Serial port path (e.g., "/dev/serial0", "COM3").
        baudrate: Configured baud rate.
        is_open: Whether the port is currently open.

    Example:
        >>> transport = AsyncSerialTransport("/dev/serial0", baudrate=115200)
        >>> await transport.open()
        >>> try:
        ...     await transport.write(b'{"T":0}\\n')
        ... finally:
        ...     await transport.close()
    """

    def __init__(
        self,
        port: str,
        baudrate: int = ProtocolConstants.DEFAULT_BAUD_RATE,
        default_timeout: float | None = ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT,
        buffer_limit: int = ProtocolConstants.READ_BUFFER_LIMIT,
    ) -> None:
        """
        Initialize the async serial transport.

        Args:
            port: Serial port path (e.g., "/dev/serial0", "COM3").
            baudrate: Baud rate (default: 115200).
            default_timeout: Default read timeout in seconds (default: wait forever).
            buffer_limit: Maximum bytes buffered while waiting for a terminator.
        """
        super().__init__(port_name=port, default_timeout=default_timeout)
        self._baudrate = baudrate
        self._buffer_limit = buffer_limit
        self._serial_instance: serial.Serial | None = None

    @property
    def baudrate(self) -> int:
        """Get the configured baud rate."""
        return self._baudrate

    async def _open_streams(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        """
        Open the serial port with 8N1 settings and no flow control.

        Raises:
            TransportError: If the port cannot be opened.
        """
        try:
            reader, writer = await serial_asyncio.open_serial_connection(
                url=self._port_name,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
                limit=self._buffer_limit,
            )
        except serial.SerialException as e:
            raise TransportError(f"Failed to open serial port {self._port_name}: {e}") from e
        except OSError as e:
            raise TransportError(f"OS error opening {self._port_name}: {e}") from e

        # Get reference to underlying serial port for line control and buffers
        transport = writer.transport
        if hasattr(transport, "serial"):
            self._serial_instance = transport.serial
            self._serial_instance.rts = False
            self._serial_instance.dtr = False

        logger.debug("Serial port %s configured at %d baud", self._port_name, self._baudrate)
        return reader, writer

    async def close(self) -> None:
        """Close the serial port. Safe to call multiple times."""
        await super().close()
        self._serial_instance = None

    def discard_buffers(self) -> None:
        """
        Discard any pending data in input and output buffers.

        Note: This operates on the underlying serial port and does not
        affect data already buffered by the asyncio layer.
        """
        if self._serial_instance is None:
            return
        try:
            self._serial_instance.reset_input_buffer()
            self._serial_instance.reset_output_buffer()
        except serial.SerialException as e:
            logger.debug("Could not reset buffers on %s: %s", self._port_name, e)

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"AsyncSerialTransport({self._port_name!r}, baudrate={self._baudrate}, {status})"
