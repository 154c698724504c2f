"""
ugvlink - Python library for talking to Waveshare-style UGV control boards.

The board speaks newline-delimited JSON over a serial link. Commands and
feedback reports are flat JSON objects whose integer "T" field selects
the message type. This library provides the message models, the codec
and line framing, and an async client built on top of them.

Example:
    >>> from ugvlink import UgvClient, Speed
    >>> from ugvlink.transport import AsyncSerialTransport
    >>>
    >>> async def main():
    ...     async with UgvClient(AsyncSerialTransport("/dev/serial0")) as client:
    ...         await client.send(Speed(l=0.2, r=0.2))
    ...         report = await client.receive()
"""

from ugvlink.client import UgvClient, read_feedback, write_command
from ugvlink.exceptions import (
    ConnectionClosedError,
    DecodeError,
    MalformedJsonError,
    PartialWriteError,
    ProtocolError,
    SchemaMismatchError,
    TagInvalidError,
    TagMissingError,
    TimeoutError,
    TransportError,
    UgvLinkError,
    UnknownTagError,
)
from ugvlink.models import (
    PWM,
    BaseInfo,
    CalibrateIMU,
    CommandMessage,
    EmergencyStop,
    FeedbackMessage,
    GetBaseFeedback,
    GetIMUData,
    GetIMUOffset,
    IMUData,
    IMUOffsetData,
    MotorPID,
    OLEDScreenControl,
    OLEDScreenRestore,
    RosCtrl,
    SetBaseFeedbackFlow,
    SetIMUOffset,
    Speed,
)
from ugvlink.protocol import (
    CommandOpcode,
    FeedbackTag,
    decode,
    encode,
    read_message,
    write_message,
)
from ugvlink.transport import AbstractTransport, AsyncSerialTransport

__version__ = "0.1.0"
__all__ = [
    # Client
    "UgvClient",
    "read_feedback",
    "write_command",
    # Codec
    "encode",
    "decode",
    "read_message",
    "write_message",
    "CommandOpcode",
    "FeedbackTag",
    # Commands
    "CommandMessage",
    "EmergencyStop",
    "Speed",
    "MotorPID",
    "OLEDScreenControl",
    "OLEDScreenRestore",
    "PWM",
    "RosCtrl",
    "GetIMUData",
    "CalibrateIMU",
    "GetIMUOffset",
    "SetIMUOffset",
    "GetBaseFeedback",
    "SetBaseFeedbackFlow",
    # Feedback
    "FeedbackMessage",
    "BaseInfo",
    "IMUData",
    "IMUOffsetData",
    # Exceptions
    "UgvLinkError",
    "TransportError",
    "PartialWriteError",
    "ConnectionClosedError",
    "TimeoutError",
    "ProtocolError",
    "DecodeError",
    "MalformedJsonError",
    "TagMissingError",
    "TagInvalidError",
    "UnknownTagError",
    "SchemaMismatchError",
    # Transport
    "AbstractTransport",
    "AsyncSerialTransport",
    # Version
    "__version__",
]
