"""Tests for StreamTransport and AsyncSerialTransport."""

import asyncio

import pytest

from ugvlink.client import UgvClient
from ugvlink.exceptions import (
    ConnectionClosedError,
    TimeoutError,
    TransportError,
    UnknownTagError,
)
from ugvlink.models.feedback import IMUData
from ugvlink.protocol.decoder import decode
from ugvlink.protocol.framing import read_message, write_message
from ugvlink.transport.serial_async import AsyncSerialTransport
from ugvlink.transport.stream import StreamTransport

IMU_LINE = b'{"T":1002,"gx":0,"gy":0,"gz":0,"ax":0,"ay":0,"az":1,"mx":0,"my":0,"mz":0}\n'


class FakeWriter:
    """Minimal StreamWriter stand-in that records written bytes."""

    def __init__(self, fail_with=None):
        self.data = bytearray()
        self.closed = False
        self._fail_with = fail_with

    def write(self, data):
        if self._fail_with is not None:
            raise self._fail_with
        self.data.extend(data)

    async def drain(self):
        pass

    def is_closing(self):
        return self.closed

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass


def make_transport(data=b"", eof=True, writer=None, **kwargs):
    """Build a StreamTransport whose reader holds the given bytes."""
    reader = asyncio.StreamReader()
    if data:
        reader.feed_data(data)
    if eof:
        reader.feed_eof()
    return StreamTransport(reader, writer or FakeWriter(), port_name="test", **kwargs)


class TestStreamTransportRead:
    """Tests for reading from a StreamTransport."""

    @pytest.mark.asyncio
    async def test_is_open_with_streams(self):
        """Test a transport built from streams starts open."""
        transport = make_transport()
        assert transport.is_open
        await transport.open()  # no-op when already open
        assert transport.is_open

    @pytest.mark.asyncio
    async def test_read_lines(self):
        """Test lines are returned with their terminator."""
        transport = make_transport(b"one\ntwo\n")
        assert await transport.read_until() == b"one\n"
        assert await transport.read_until() == b"two\n"

    @pytest.mark.asyncio
    async def test_partial_then_empty_at_eof(self):
        """Test the remainder is returned at end of stream, then empty bytes."""
        transport = make_transport(b"one\ntail")
        assert await transport.read_until() == b"one\n"
        assert await transport.read_until() == b"tail"
        assert await transport.read_until() == b""

    @pytest.mark.asyncio
    async def test_read_message_and_decode(self):
        """Test the framer and decoder over a real StreamReader."""
        transport = make_transport(IMU_LINE)
        report = decode(await read_message(transport))
        assert isinstance(report, IMUData)
        assert report.az == 1

    @pytest.mark.asyncio
    async def test_zero_byte_read_is_connection_closed(self):
        """Test an empty stream raises ConnectionClosedError from the framer."""
        transport = make_transport()
        with pytest.raises(ConnectionClosedError):
            await read_message(transport)

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test a read timeout raises the library TimeoutError."""
        transport = make_transport(eof=False)
        with pytest.raises(TimeoutError) as exc_info:
            await transport.read_until(timeout=0.01)
        assert exc_info.value.timeout_seconds == 0.01

    @pytest.mark.asyncio
    async def test_default_timeout(self):
        """Test the constructor timeout applies when none is given."""
        transport = make_transport(eof=False, default_timeout=0.01)
        with pytest.raises(TimeoutError):
            await read_message(transport)

    @pytest.mark.asyncio
    async def test_cancelled_read_keeps_framing(self):
        """Test cancelling a pending read loses no bytes."""
        reader = asyncio.StreamReader()
        transport = StreamTransport(reader, FakeWriter())

        task = asyncio.ensure_future(read_message(transport))
        await asyncio.sleep(0)
        reader.feed_data(b'{"T":10')
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        reader.feed_data(b'02}\nnext\n')
        assert await read_message(transport) == b'{"T":1002}'
        assert await read_message(transport) == b"next"

    @pytest.mark.asyncio
    async def test_line_longer_than_reader_limit(self):
        """Test an oversized line is consumed whole and the next line is intact."""
        long_line = b'{"T":9999,"pad":"' + b"x" * 64 + b'"}'
        reader = asyncio.StreamReader(limit=16)
        reader.feed_data(long_line + b'\n{"T":1}\n')
        reader.feed_eof()
        transport = StreamTransport(reader, FakeWriter())

        line = await read_message(transport)
        assert line == long_line
        with pytest.raises(UnknownTagError):
            decode(line)

        assert await read_message(transport) == b'{"T":1}'
        with pytest.raises(ConnectionClosedError):
            await read_message(transport)

    @pytest.mark.asyncio
    async def test_long_report_through_small_limit(self):
        """Test a valid report longer than the reader limit still decodes."""
        reader = asyncio.StreamReader(limit=16)
        reader.feed_data(IMU_LINE + IMU_LINE)
        transport = StreamTransport(reader, FakeWriter())

        assert isinstance(decode(await read_message(transport)), IMUData)
        assert isinstance(decode(await read_message(transport)), IMUData)

    @pytest.mark.asyncio
    async def test_oversized_partial_line_at_eof(self):
        """Test an unterminated oversized tail is returned at end of stream."""
        reader = asyncio.StreamReader(limit=8)
        reader.feed_data(b"x" * 30)
        reader.feed_eof()
        transport = StreamTransport(reader, FakeWriter())

        assert await read_message(transport) == b"x" * 30
        with pytest.raises(ConnectionClosedError):
            await read_message(transport)

    @pytest.mark.asyncio
    async def test_feedback_skips_oversized_line(self):
        """Test the client feedback stream skips an oversized line and continues."""
        reader = asyncio.StreamReader(limit=16)
        reader.feed_data(b'{"T":9999,"pad":"' + b"x" * 64 + b'"}\n' + IMU_LINE)
        reader.feed_eof()

        async with UgvClient(StreamTransport(reader, FakeWriter())) as client:
            reports = [report async for report in client.feedback()]

        assert [type(r) for r in reports] == [IMUData]

    @pytest.mark.asyncio
    async def test_read_when_closed(self):
        """Test reading a closed transport raises TransportError."""
        transport = make_transport(b"one\n")
        await transport.close()
        assert not transport.is_open
        with pytest.raises(TransportError):
            await transport.read_until()


class TestStreamTransportWrite:
    """Tests for writing to a StreamTransport."""

    @pytest.mark.asyncio
    async def test_write_line(self):
        """Test write_message pushes payload and terminator to the writer."""
        writer = FakeWriter()
        transport = make_transport(writer=writer)
        assert await write_message(transport, b'{"T":130}') == 10
        assert bytes(writer.data) == b'{"T":130}\n'

    @pytest.mark.asyncio
    async def test_write_failure(self):
        """Test writer errors become TransportError."""
        transport = make_transport(writer=FakeWriter(fail_with=OSError("broken pipe")))
        with pytest.raises(TransportError) as exc_info:
            await transport.write(b"x")
        assert "broken pipe" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_write_when_closed(self):
        """Test writing after close raises TransportError."""
        writer = FakeWriter()
        transport = make_transport(writer=writer)
        await transport.close()
        assert writer.closed
        with pytest.raises(TransportError):
            await transport.write(b"x")

    @pytest.mark.asyncio
    async def test_reopen_without_factory(self):
        """Test a plain StreamTransport cannot reopen once closed."""
        transport = make_transport()
        await transport.close()
        with pytest.raises(TransportError):
            await transport.open()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        """Test closing twice does not raise."""
        transport = make_transport()
        await transport.close()
        await transport.close()
        assert "closed" in repr(transport)


class TestAsyncSerialTransport:
    """Tests for AsyncSerialTransport that need no hardware."""

    def test_defaults(self):
        """Test default serial settings."""
        transport = AsyncSerialTransport("/dev/serial0")
        assert transport.port_name == "/dev/serial0"
        assert transport.baudrate == 115200
        assert not transport.is_open
        assert repr(transport) == "AsyncSerialTransport('/dev/serial0', baudrate=115200, closed)"

    def test_discard_buffers_when_closed(self):
        """Test discarding buffers on a closed port is harmless."""
        AsyncSerialTransport("/dev/serial0").discard_buffers()

    @pytest.mark.asyncio
    async def test_open_missing_port(self):
        """Test opening a missing device raises TransportError."""
        transport = AsyncSerialTransport("/dev/ugvlink-missing-port")
        with pytest.raises(TransportError):
            await transport.open()
        assert not transport.is_open

    @pytest.mark.asyncio
    async def test_write_when_closed(self):
        """Test writing before open raises TransportError."""
        with pytest.raises(TransportError):
            await AsyncSerialTransport("/dev/serial0").write(b"x")
