"""
Exception hierarchy for ugvlink.

All exceptions inherit from UgvLinkError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Transport failures are distinct from an orderly end of stream
2. Every decode failure is a ProtocolError and consumes only its own line
3. Decode errors carry the offending line for debugging
4. An unknown feedback tag is an ordinary, recoverable error
"""

from __future__ import annotations


class UgvLinkError(Exception):
    """
    Base exception for all ugvlink errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all ugvlink errors with a single except clause.
    """

    pass


class TransportError(UgvLinkError):
    """
    Transport-level error.

    Raised for low-level transport issues:
    - Serial port errors
    - I/O errors
    - Writing to or reading from a closed transport

    The library never retries after a TransportError; that policy belongs
    to the loop that owns the transport.
    """

    pass


class PartialWriteError(TransportError):
    """
    A line was only partly written.

    Raised when the payload of a line reached the transport but the
    terminator did not. The bytes already pushed cannot be recalled.
    """

    def __init__(self, message: str = "Partial line written", *, bytes_written: int = 0) -> None:
        super().__init__(message)
        self.bytes_written = bytes_written

    def __str__(self) -> str:
        return f"{super().__str__()} ({self.bytes_written} bytes sent)"


class ConnectionClosedError(UgvLinkError):
    """
    The byte stream ended before any data of a new line arrived.

    Kept apart from TransportError so the caller can decide whether to
    reconnect.
    """

    def __init__(self, message: str = "Connection closed") -> None:
        super().__init__(message)


class TimeoutError(UgvLinkError):  # noqa: A001 - intentionally shadows builtin
    """
    Communication timeout.

    Raised by transports when a caller-supplied read timeout expires
    before a complete line arrives.
    """

    def __init__(
        self,
        message: str = "Communication timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base


class ProtocolError(UgvLinkError):
    """
    Protocol-level error.

    Raised when data on the wire does not follow the line protocol.
    """

    pass


class DecodeError(ProtocolError):
    """
    A feedback line could not be decoded.

    Base class for every decoder failure. The raw line is kept for
    diagnostics and truncated when displayed.
    """

    def __init__(self, message: str, *, raw_data: bytes | str | None = None) -> None:
        super().__init__(message)
        self.raw_data = raw_data

    def __str__(self) -> str:
        base = super().__str__()
        if self.raw_data:
            data = self.raw_data if isinstance(self.raw_data, str) else repr(self.raw_data)
            display_data = data[:40] + "..." if len(data) > 40 else data
            return f"{base} data={display_data}"
        return base


class MalformedJsonError(DecodeError):
    """Line is not valid UTF-8 JSON, or its top-level value is not an object."""

    pass


class TagMissingError(DecodeError):
    """The "T" discriminant field is absent."""

    pass


class TagInvalidError(DecodeError):
    """The "T" discriminant field is present but not an integer."""

    def __init__(self, value: object, *, raw_data: bytes | str | None = None) -> None:
        super().__init__(f"Invalid tag value {value!r}", raw_data=raw_data)
        self.value = value


class UnknownTagError(DecodeError):
    """
    The discriminant names no known feedback schema.

    Firmware revisions add new tags over time, so callers are expected
    to log and skip these lines.
    """

    def __init__(self, tag: int, *, raw_data: bytes | str | None = None) -> None:
        super().__init__(f"Unknown feedback tag {tag}", raw_data=raw_data)
        self.tag = tag


class SchemaMismatchError(DecodeError):
    """
    A recognized tag whose payload does not fit its schema.

    Raised when a required field is missing or a field has an
    incompatible type. field_name holds the wire name of the field.
    """

    def __init__(
        self,
        field_name: str,
        *,
        record_type: str | None = None,
        detail: str | None = None,
        raw_data: bytes | str | None = None,
    ) -> None:
        message = f"Schema mismatch on field {field_name!r}"
        if record_type:
            message += f" of {record_type}"
        if detail:
            message += f": {detail}"
        super().__init__(message, raw_data=raw_data)
        self.field_name = field_name
        self.record_type = record_type
