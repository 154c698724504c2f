"""
Mock transport for testing.

This module provides a mock transport implementation that allows testing
the line protocol without a control board. Incoming bytes are queued in
advance, written lines are recorded, and end of stream or write failures
can be simulated.

Example:
    >>> from ugvlink.transport import MockTransport
    >>> from ugvlink import UgvClient
    >>>
    >>> mock = MockTransport()
    >>> mock.add_response(b'{"T":1002,"gx":0,...}\\n')
    >>>
    >>> async with UgvClient(mock) as client:
    ...     report = await client.receive()
"""

from __future__ import annotations

from collections import deque

from ugvlink.exceptions import TimeoutError, TransportError
from ugvlink.protocol.constants import ProtocolConstants
from ugvlink.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without hardware.

    Responses are consumed in FIFO order and may split or join lines
    freely, as a real byte stream would. Once feed_eof() has been called
    and the queue is drained, reads behave like a closed stream.

    Attributes:
        written_data: List of all bytes written to the transport.

    Example:
        >>> mock = MockTransport()
        >>> mock.add_responses(b'{"T":1', b'29,"gx":0}\\n')
        >>> mock.feed_eof()
        >>>
        >>> async with mock:
        ...     assert await mock.read_until() == b'{"T":129,"gx":0}\\n'
        ...     assert await mock.read_until() == b""
    """

    def __init__(
        self,
        port_name: str = "mock://test",
        default_timeout: float | None = 5.0,
    ) -> None:
        """
        Initialize the mock transport.

        Args:
            port_name: Identifier for the mock transport.
            default_timeout: Default timeout for read operations.
        """
        self._port_name = port_name
        self._default_timeout = default_timeout
        self._is_open = False
        self._responses: deque[bytes] = deque()
        self._written_data: list[bytes] = []
        self._read_buffer = bytearray()
        self._eof = False
        self._writes_before_failure: int | None = None

    @property
    def is_open(self) -> bool:
        """Check if the mock transport is open."""
        return self._is_open

    @property
    def port_name(self) -> str:
        """Get the mock port name."""
        return self._port_name

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written to the transport."""
        return self._written_data.copy()

    @property
    def written_bytes(self) -> bytes:
        """Get everything written, joined into one byte string."""
        return b"".join(self._written_data)

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    def add_response(self, response: bytes) -> None:
        """
        Add bytes to the incoming queue.

        Args:
            response: Bytes the next reads will see.
        """
        self._responses.append(response)

    def add_responses(self, *responses: bytes) -> None:
        """
        Add multiple chunks to the incoming queue.

        Args:
            *responses: Multiple byte chunks to add.
        """
        for response in responses:
            self._responses.append(response)

    def feed_eof(self) -> None:
        """Mark the end of the incoming stream after the queued chunks."""
        self._eof = True

    def fail_writes_after(self, count: int | None) -> None:
        """
        Make writes fail after a number of successful ones.

        Args:
            count: Number of writes that still succeed. None disables failures.
        """
        self._writes_before_failure = count

    def clear(self) -> None:
        """Clear all written data, pending responses and end-of-stream state."""
        self._written_data.clear()
        self._responses.clear()
        self._read_buffer.clear()
        self._eof = False

    def clear_written(self) -> None:
        """Clear only the written data history."""
        self._written_data.clear()

    async def open(self) -> None:
        """Open the mock transport."""
        if self._is_open:
            raise TransportError("Mock transport already open")
        self._is_open = True

    async def close(self) -> None:
        """Close the mock transport."""
        self._is_open = False

    async def write(self, data: bytes) -> int:
        """
        Write data to the mock transport.

        Args:
            data: Bytes to write.

        Returns:
            Number of bytes written.

        Raises:
            TransportError: If transport is not open or a failure was scheduled.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        if self._writes_before_failure is not None:
            if self._writes_before_failure <= 0:
                raise TransportError("Mock write failure")
            self._writes_before_failure -= 1

        self._written_data.append(bytes(data))
        return len(data)

    async def read_until(
        self,
        terminator: int = ProtocolConstants.LINE_TERMINATOR,
        timeout: float | None = None,
    ) -> bytes:
        """
        Read data until terminator is found.

        Args:
            terminator: Byte to read until.
            timeout: Read timeout (ignored in mock).

        Returns:
            Bytes including terminator, or the remaining bytes once the
            stream has ended.

        Raises:
            TimeoutError: If no complete line is available and no end of stream was fed.
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        # Load queued chunks until a terminator shows up
        while terminator not in self._read_buffer and self._responses:
            self._read_buffer.extend(self._responses.popleft())

        if terminator in self._read_buffer:
            idx = self._read_buffer.index(terminator)
            result = bytes(self._read_buffer[:idx + 1])
            del self._read_buffer[:idx + 1]
            return result

        if self._eof:
            result = bytes(self._read_buffer)
            self._read_buffer.clear()
            return result

        raise TimeoutError("No mock response available")

    def discard_buffers(self) -> None:
        """Discard pending data in buffers."""
        self._read_buffer.clear()

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def assert_write_count(self, expected: int) -> None:
        """
        Assert number of write operations.

        Args:
            expected: Expected number of writes.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Write count mismatch: expected {expected}, got {actual}")
