"""
UGV control board client.

This module ties framing and the codec to a transport. It provides the
two building blocks of a board driver:

- a read loop: read a line, decode it, hand the report to a consumer
- a write loop: take commands from a queue, encode them, write each line

The client starts no tasks of its own. The application schedules
feedback() and pump_commands() as it sees fit; the two share no state,
so they can run concurrently without locking.

Example:
    >>> from ugvlink import UgvClient
    >>> from ugvlink.transport import AsyncSerialTransport
    >>>
    >>> async def main():
    ...     async with UgvClient(AsyncSerialTransport("/dev/serial0")) as client:
    ...         await client.set_feedback_flow(True)
    ...         async for report in client.feedback():
    ...             print(report)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

from ugvlink.exceptions import ConnectionClosedError, DecodeError
from ugvlink.models.commands import (
    EmergencyStop,
    GetBaseFeedback,
    GetIMUData,
    GetIMUOffset,
    RosCtrl,
    SetBaseFeedbackFlow,
    Speed,
)
from ugvlink.protocol.decoder import decode
from ugvlink.protocol.encoder import encode
from ugvlink.protocol.framing import read_message, write_message

if TYPE_CHECKING:
    from ugvlink.models.commands import CommandMessage
    from ugvlink.models.feedback import FeedbackMessage
    from ugvlink.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)


async def read_feedback(
    transport: AbstractTransport,
    timeout: float | None = None,
) -> FeedbackMessage:
    """
    Read and decode one feedback line.

    Args:
        transport: Transport carrying board-to-host lines.
        timeout: Read timeout in seconds. None waits indefinitely.

    Returns:
        The decoded report.

    Raises:
        ConnectionClosedError: If the stream ended.
        TransportError: If the read failed.
        DecodeError: If the line could not be decoded. The line is consumed.
    """
    line = await read_message(transport, timeout)
    return decode(line)


async def write_command(transport: AbstractTransport, command: CommandMessage) -> int:
    """
    Encode and write one command line.

    Args:
        transport: Transport carrying host-to-board lines.
        command: Command to send.

    Returns:
        Number of bytes written, terminator included.

    Raises:
        TransportError: If the write failed.
    """
    return await write_message(transport, encode(command))


class UgvClient:
    """
    Client for a UGV control board.

    Reads feedback from one transport and writes commands to the same
    transport or, if given, to a separate command transport. Using two
    handles on one device lets the read and write loops run without
    sharing a stream.

    Attributes:
        transport: Transport feedback is read from.
        command_transport: Transport commands are written to.

    Example:
        >>> client = UgvClient(MockTransport())
        >>> async with client:
        ...     await client.set_speed(0.2, 0.2)
        ...     await client.emergency_stop()
    """

    def __init__(
        self,
        transport: AbstractTransport,
        command_transport: AbstractTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            transport: Transport for board-to-host feedback.
            command_transport: Transport for host-to-board commands.
                Defaults to the feedback transport.
            timeout: Read timeout in seconds. None waits indefinitely.
        """
        self._transport = transport
        self._command_transport = command_transport or transport
        self._timeout = timeout

    @property
    def transport(self) -> AbstractTransport:
        """Get the feedback transport."""
        return self._transport

    @property
    def command_transport(self) -> AbstractTransport:
        """Get the command transport."""
        return self._command_transport

    @property
    def is_open(self) -> bool:
        """Check if both transports are open."""
        return self._transport.is_open and self._command_transport.is_open

    def _transports(self) -> list[AbstractTransport]:
        if self._command_transport is self._transport:
            return [self._transport]
        return [self._transport, self._command_transport]

    async def open(self) -> None:
        """Open any transport that is not open yet."""
        for transport in self._transports():
            if not transport.is_open:
                logger.debug("Opening transport %s", transport.port_name)
                await transport.open()

    async def close(self) -> None:
        """Close all open transports."""
        for transport in self._transports():
            if transport.is_open:
                await transport.close()

    async def send(self, command: CommandMessage) -> int:
        """
        Send one command.

        Args:
            command: Command to send.

        Returns:
            Number of bytes written.

        Raises:
            TransportError: If the write failed.
        """
        logger.debug("Sending %s (T=%d)", type(command).__name__, command.opcode)
        return await write_command(self._command_transport, command)

    async def receive(self) -> FeedbackMessage:
        """
        Receive one feedback report.

        Returns:
            The decoded report.

        Raises:
            ConnectionClosedError: If the feedback stream ended.
            TransportError: If the read failed.
            DecodeError: If the line could not be decoded.
        """
        report = await read_feedback(self._transport, self._timeout)
        logger.debug("Received %s", type(report).__name__)
        return report

    async def feedback(self) -> AsyncGenerator[FeedbackMessage, None]:
        """
        Stream feedback reports until the stream ends.

        Lines that fail to decode, including unknown tags from newer
        firmware, are logged and skipped.

        Yields:
            Decoded reports in arrival order.

        Raises:
            TransportError: If a read failed.
        """
        while True:
            try:
                report = await self.receive()
            except ConnectionClosedError:
                logger.info("Feedback stream %s closed", self._transport.port_name)
                return
            except DecodeError as e:
                logger.warning("Skipping feedback line: %s", e)
                continue

            yield report

    async def pump_commands(self, queue: asyncio.Queue[CommandMessage | None]) -> int:
        """
        Send queued commands until a None item is received.

        Each command is written as soon as it is taken from the queue.

        Args:
            queue: Source of commands. Put None to stop the pump.

        Returns:
            Number of commands sent.

        Raises:
            TransportError: If a write failed.
        """
        sent = 0
        while True:
            command = await queue.get()
            try:
                if command is None:
                    logger.debug("Command pump stopped after %d commands", sent)
                    return sent
                await self.send(command)
                sent += 1
            finally:
                queue.task_done()

    async def emergency_stop(self) -> int:
        """Stop all motors."""
        return await self.send(EmergencyStop())

    async def set_speed(self, left: float, right: float) -> int:
        """
        Set wheel speeds.

        Args:
            left: Left wheel speed, positive forward.
            right: Right wheel speed, positive forward.
        """
        return await self.send(Speed(l=left, r=right))

    async def drive(self, linear: float, angular: float) -> int:
        """
        Set body velocity (UGV01 with encoders only).

        Args:
            linear: Linear velocity in m/s.
            angular: Angular velocity in rad/s.
        """
        return await self.send(RosCtrl(x=linear, z=angular))

    async def set_feedback_flow(self, enabled: bool) -> int:
        """Enable or disable continuous base information reports."""
        return await self.send(SetBaseFeedbackFlow(cmd=1 if enabled else 0))

    async def request_base_feedback(self) -> int:
        """Request one base information report."""
        return await self.send(GetBaseFeedback())

    async def request_imu_data(self) -> int:
        """Request one IMU report."""
        return await self.send(GetIMUData())

    async def request_imu_offset(self) -> int:
        """Request the stored IMU offsets."""
        return await self.send(GetIMUOffset())

    async def __aenter__(self) -> UgvClient:
        """Async context manager entry - opens the transports."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - closes the transports."""
        await self.close()

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        if self._command_transport is self._transport:
            return f"UgvClient({self._transport.port_name!r}, {status})"
        return (
            f"UgvClient({self._transport.port_name!r}, "
            f"command={self._command_transport.port_name!r}, {status})"
        )
