"""Tests for MockTransport."""

import asyncio

import pytest

from ugvlink.exceptions import TimeoutError, TransportError
from ugvlink.transport.mock import MockTransport


class TestMockTransport:
    """Tests for MockTransport class."""

    @pytest.fixture
    def transport(self):
        """Create a MockTransport instance."""
        return MockTransport()

    @pytest.mark.asyncio
    async def test_open_close(self, transport):
        """Test opening and closing transport."""
        assert not transport.is_open
        await transport.open()
        assert transport.is_open
        await transport.close()
        assert not transport.is_open

    @pytest.mark.asyncio
    async def test_double_open_raises(self, transport):
        """Test that opening twice raises error."""
        await transport.open()
        with pytest.raises(TransportError):
            await transport.open()

    @pytest.mark.asyncio
    async def test_write_records_data(self, transport):
        """Test that write records data and returns its length."""
        await transport.open()
        assert await transport.write(b"hello") == 5
        assert await transport.write(b"world") == 5
        assert transport.written_data == [b"hello", b"world"]
        assert transport.written_bytes == b"helloworld"
        assert transport.last_written == b"world"

    @pytest.mark.asyncio
    async def test_write_when_closed_raises(self, transport):
        """Test that writing to closed transport raises."""
        with pytest.raises(TransportError):
            await transport.write(b"test")

    @pytest.mark.asyncio
    async def test_read_until_terminator(self, transport):
        """Test reading until the default line terminator."""
        await transport.open()
        transport.add_response(b"hello\n")
        assert await transport.read_until() == b"hello\n"

    @pytest.mark.asyncio
    async def test_read_until_custom_terminator(self, transport):
        """Test reading until another terminator byte."""
        await transport.open()
        transport.add_response(b"hello\rworld\n")
        assert await transport.read_until(0x0D) == b"hello\r"
        assert await transport.read_until() == b"world\n"

    @pytest.mark.asyncio
    async def test_read_joins_chunks(self, transport):
        """Test a line spread over several responses."""
        await transport.open()
        transport.add_responses(b"he", b"ll", b"o\nnext")
        assert await transport.read_until() == b"hello\n"

    @pytest.mark.asyncio
    async def test_read_no_data_raises_timeout(self, transport):
        """Test that reading with no data and no end of stream raises timeout."""
        await transport.open()
        with pytest.raises(TimeoutError):
            await transport.read_until()

    @pytest.mark.asyncio
    async def test_read_after_eof(self, transport):
        """Test end of stream returns the remainder, then empty bytes."""
        await transport.open()
        transport.add_response(b"tail")
        transport.feed_eof()
        assert await transport.read_until() == b"tail"
        assert await transport.read_until() == b""

    @pytest.mark.asyncio
    async def test_clear(self, transport):
        """Test clearing transport state."""
        await transport.open()
        await transport.write(b"test")
        transport.add_response(b"line\n")
        transport.feed_eof()
        transport.clear()
        assert transport.written_data == []
        with pytest.raises(TimeoutError):
            await transport.read_until()

    @pytest.mark.asyncio
    async def test_discard_buffers(self, transport):
        """Test discarding buffered bytes."""
        await transport.open()
        transport.add_response(b"one\ntwo")
        await transport.read_until()
        transport.discard_buffers()
        with pytest.raises(TimeoutError):
            await transport.read_until()

    @pytest.mark.asyncio
    async def test_fail_writes_after(self, transport):
        """Test scheduled write failures."""
        await transport.open()
        transport.fail_writes_after(2)
        await transport.write(b"a")
        await transport.write(b"b")
        with pytest.raises(TransportError):
            await transport.write(b"c")
        assert transport.written_data == [b"a", b"b"]

        transport.fail_writes_after(None)
        await transport.write(b"d")
        assert transport.last_written == b"d"

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test async context manager protocol."""
        async with MockTransport() as transport:
            assert transport.is_open
            transport.add_response(b"x\n")
            assert await transport.read_until() == b"x\n"
        assert not transport.is_open

    def test_assert_written(self, transport):
        """Test assert_written helper."""

        async def run():
            await transport.open()
            await transport.write(b"test")
            transport.assert_written(b"test")
            transport.assert_written(b"test", 0)
            transport.assert_written(b"test", -1)

        asyncio.run(run())

    def test_assert_written_fails(self, transport):
        """Test assert_written raises on mismatch."""

        async def run():
            await transport.open()
            await transport.write(b"test")
            with pytest.raises(AssertionError):
                transport.assert_written(b"wrong")

        asyncio.run(run())

    def test_assert_write_count(self, transport):
        """Test assert_write_count helper."""

        async def run():
            await transport.open()
            await transport.write(b"a")
            await transport.write(b"b")
            transport.assert_write_count(2)
            with pytest.raises(AssertionError):
                transport.assert_write_count(3)

        asyncio.run(run())
