"""
Feedback decoding.

Decoding is a two-phase parse:

1. The line is parsed as generic JSON and the "T" tag is inspected.
2. The tag selects a schema from FEEDBACK_SCHEMAS, and the same object
   is validated against that schema.

Every failure is raised as a DecodeError subclass. Nothing is cached
between calls, so decode is safe to call from concurrent tasks.
"""

from __future__ import annotations

import json
from typing import Any, Final

from pydantic import ValidationError

from ugvlink.exceptions import (
    MalformedJsonError,
    SchemaMismatchError,
    TagInvalidError,
    TagMissingError,
    UnknownTagError,
)
from ugvlink.models.feedback import FEEDBACK_TYPES, FeedbackMessage
from ugvlink.protocol.constants import ProtocolConstants

FEEDBACK_SCHEMAS: Final[dict[int, type[FeedbackMessage]]] = {
    int(tag): cls for tag, cls in FEEDBACK_TYPES.items()
}
"""Feedback tag value to schema. Unlisted tags raise UnknownTagError."""


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not a valid JSON value")


def parse_object(line: bytes | str) -> dict[str, Any]:
    """
    Parse a line as a JSON object.

    Args:
        line: One line without its terminator.

    Returns:
        The decoded top-level object.

    Raises:
        MalformedJsonError: If the line is not JSON or not an object.
            NaN and Infinity are not JSON and are rejected.
    """
    try:
        value = json.loads(line, parse_constant=_reject_constant)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise MalformedJsonError(f"Invalid JSON: {e}", raw_data=line) from e

    if not isinstance(value, dict):
        raise MalformedJsonError(
            f"Expected a JSON object, got {type(value).__name__}",
            raw_data=line,
        )
    return value


def peek_tag(obj: dict[str, Any], line: bytes | str | None = None) -> int:
    """
    Read the integer "T" tag of a parsed object.

    Args:
        obj: Parsed JSON object.
        line: Raw line, attached to errors.

    Returns:
        The tag value.

    Raises:
        TagMissingError: If there is no "T" field.
        TagInvalidError: If "T" is not an integer.
    """
    if ProtocolConstants.TAG_FIELD not in obj:
        raise TagMissingError("Missing tag field", raw_data=line)

    tag = obj[ProtocolConstants.TAG_FIELD]
    # bool is an int subclass but never a valid tag
    if not isinstance(tag, int) or isinstance(tag, bool):
        raise TagInvalidError(tag, raw_data=line)
    return tag


def decode(line: bytes | str) -> FeedbackMessage:
    """
    Decode one feedback line.

    Args:
        line: One line with the terminator already stripped.

    Returns:
        BaseInfo, IMUData or IMUOffsetData, chosen by the "T" tag.

    Raises:
        MalformedJsonError: If the line is not a JSON object.
        TagMissingError: If the tag field is absent.
        TagInvalidError: If the tag is not an integer.
        UnknownTagError: If no schema is registered for the tag.
        SchemaMismatchError: If a required field is missing or mistyped.
    """
    obj = parse_object(line)
    tag = peek_tag(obj, line)

    schema = FEEDBACK_SCHEMAS.get(tag)
    if schema is None:
        raise UnknownTagError(tag, raw_data=line)

    try:
        return schema.model_validate(obj)
    except ValidationError as e:
        error = e.errors()[0]
        loc = error.get("loc") or ("<root>",)
        raise SchemaMismatchError(
            str(loc[0]),
            record_type=schema.__name__,
            detail=error.get("msg"),
            raw_data=line,
        ) from e
