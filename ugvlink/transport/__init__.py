"""
Transport layer for the UGV line protocol.

This package provides transport implementations for talking to the
control board over any ordered byte stream.

Available transports:
- StreamTransport: any asyncio StreamReader/StreamWriter pair
- AsyncSerialTransport: async serial port using pyserial-asyncio
- MockTransport: mock transport for testing without hardware

Example:
    >>> from ugvlink.transport import AsyncSerialTransport
    >>> async with AsyncSerialTransport("/dev/serial0") as transport:
    ...     await transport.write(b'{"T":130}\\n')
    ...     line = await transport.read_until()

Testing Example:
    >>> from ugvlink.transport import MockTransport
    >>> mock = MockTransport()
    >>> mock.add_response(b'{"T":129,"gx":0,"gy":0,"gz":0,"ax":0,"ay":0,"az":0,"cx":0,"cy":0,"cz":0}\\n')
"""

from ugvlink.transport.abc import AbstractTransport
from ugvlink.transport.mock import MockTransport
from ugvlink.transport.serial_async import AsyncSerialTransport
from ugvlink.transport.stream import StreamTransport

__all__ = [
    "AbstractTransport",
    "AsyncSerialTransport",
    "MockTransport",
    "StreamTransport",
]
