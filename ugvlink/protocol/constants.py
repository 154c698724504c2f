"""
UGV control board opcodes, feedback tags and protocol constants.

Outbound commands and inbound feedback share the "T" field but use
independent numbering. Value 129 appears in both tables (SetIMUOffset
outbound, IMU offset report inbound), so the two are kept as separate
enums and must never be mixed.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class CommandOpcode(IntEnum):
    """
    Opcodes for host-to-board commands.

    Sent as the "T" field of every outbound line.
    """

    OLED_SCREEN_RESTORE = -3
    """Restore the default OLED screen contents."""

    EMERGENCY_STOP = 0
    """Stop all motors immediately."""

    SPEED = 1
    """Set left/right wheel speeds."""

    MOTOR_PID = 2
    """Set motor PID gains (UGV01 with encoders only)."""

    OLED_SCREEN_CONTROL = 3
    """Write text to the OLED screen."""

    PWM = 11
    """Set raw left/right motor PWM."""

    ROS_CTRL = 13
    """Set linear and angular velocity (UGV01 with encoders only)."""

    GET_IMU_DATA = 126
    """Request one IMU report."""

    CALIBRATE_IMU = 127
    """Run IMU calibration on the board."""

    GET_IMU_OFFSET = 128
    """Request the stored IMU calibration offsets."""

    SET_IMU_OFFSET = 129
    """Store new IMU calibration offsets."""

    GET_BASE_FEEDBACK = 130
    """Request one base information report."""

    SET_BASE_FEEDBACK_FLOW = 131
    """Enable or disable continuous base information reports."""


class FeedbackTag(IntEnum):
    """
    Tags for board-to-host feedback.

    Read from the "T" field of every inbound line.
    """

    IMU_OFFSET = 129
    """IMU calibration offsets."""

    BASE_INFO = 1001
    """Wheel speeds, attitude, odometry, battery and gimbal/arm state."""

    IMU = 1002
    """Raw gyro, accelerometer and magnetometer readings."""


class ProtocolConstants:
    """
    Line protocol constants.

    Contains the line delimiter, field names, and serial defaults used
    throughout the protocol implementation.
    """

    # ===== Line Framing =====

    LINE_TERMINATOR: Final[int] = 0x0A
    """End of line delimiter (Line Feed)."""

    TEXT_ENCODING: Final[str] = "utf-8"
    """Character encoding of every line."""

    TAG_FIELD: Final[str] = "T"
    """Name of the discriminant field in both directions."""

    # ===== Timing =====

    DEFAULT_RECEIVE_TIMEOUT: Final[float | None] = None
    """Default read timeout in seconds. None waits until a line or end of stream."""

    # ===== Serial Port Configuration =====

    DEFAULT_BAUD_RATE: Final[int] = 115200
    """Default baud rate of the control board UART."""

    READ_BUFFER_LIMIT: Final[int] = 32000
    """Maximum bytes buffered while waiting for a line terminator."""

    # ===== Value Ranges =====

    INT16_MIN: Final[int] = -32768
    """Smallest value of a signed 16-bit wire integer."""

    INT16_MAX: Final[int] = 32767
    """Largest value of a signed 16-bit wire integer."""
