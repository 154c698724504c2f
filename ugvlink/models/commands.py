"""
Pydantic models for outbound commands.

Each command is an immutable model whose opcode is a property of the
class, not of the data it carries. Field names are Python identifiers;
the names used on the wire are declared as aliases.

Design principles:
- All models are frozen (immutable)
- Floats must be finite so every command is valid JSON
- Text must be encodable as UTF-8
- Integer fields are limited to the signed 16-bit range of the firmware
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ugvlink.protocol.constants import CommandOpcode, ProtocolConstants

Int16 = Annotated[int, Field(ge=ProtocolConstants.INT16_MIN, le=ProtocolConstants.INT16_MAX)]


class CommandMessage(BaseModel):
    """
    Base class for all host-to-board commands.

    Subclasses set OPCODE and declare their payload fields. A command
    with no fields encodes to the opcode alone.

    Example:
        >>> cmd = Speed(l=0.5, r=0.5)
        >>> cmd.opcode
        <CommandOpcode.SPEED: 1>
        >>> cmd.payload()
        {'L': 0.5, 'R': 0.5}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    OPCODE: ClassVar[CommandOpcode]

    @property
    def opcode(self) -> CommandOpcode:
        """Get the opcode sent in the "T" field."""
        return self.OPCODE

    def payload(self) -> dict[str, Any]:
        """
        Get the payload fields keyed by wire name.

        Returns:
            Field values in declaration order, without the opcode.
        """
        return self.model_dump(by_alias=True)


class EmergencyStop(CommandMessage):
    """Stop all motors immediately."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.EMERGENCY_STOP


class Speed(CommandMessage):
    """
    Set wheel speeds.

    Positive values drive forward, negative values reverse. The board
    accepts roughly -0.5 to 0.5 for each side.
    """

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.SPEED

    l: float = Field(alias="L", description="Left wheel speed")  # noqa: E741
    r: float = Field(alias="R", description="Right wheel speed")


class MotorPID(CommandMessage):
    """Set motor PID gains. Only UGV01 boards with encoders honour this."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.MOTOR_PID

    p: float = Field(alias="P", description="Proportional gain")
    i: float = Field(alias="I", description="Integral gain")
    d: float = Field(alias="D", description="Derivative gain")
    windup_limit: float = Field(alias="L", description="Integral windup limit")


class OLEDScreenControl(CommandMessage):
    """Write a line of text to the OLED screen."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.OLED_SCREEN_CONTROL

    text: str = Field(alias="Text")

    @field_validator("text")
    @classmethod
    def _check_encodable(cls, value: str) -> str:
        # Lone surrogates have no UTF-8 form
        try:
            value.encode(ProtocolConstants.TEXT_ENCODING)
        except UnicodeEncodeError as e:
            raise ValueError(f"text is not encodable as {ProtocolConstants.TEXT_ENCODING}") from e
        return value


class OLEDScreenRestore(CommandMessage):
    """Restore the default OLED screen."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.OLED_SCREEN_RESTORE


class PWM(CommandMessage):
    """
    Set raw motor PWM.

    Positive values drive forward, negative values reverse. The board
    accepts -255 to 255 for each side.
    """

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.PWM

    l: Int16 = Field(alias="L", description="Left motor PWM")  # noqa: E741
    r: Int16 = Field(alias="R", description="Right motor PWM")


class RosCtrl(CommandMessage):
    """Set body velocity. Only UGV01 boards with encoders honour this."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.ROS_CTRL

    x: float = Field(alias="X", description="Linear velocity in m/s")
    z: float = Field(alias="Z", description="Angular velocity in rad/s")


class GetIMUData(CommandMessage):
    """Request one IMU report (answered with tag 1002)."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.GET_IMU_DATA


class CalibrateIMU(CommandMessage):
    """Start IMU calibration. Keep the rover still until it finishes."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.CALIBRATE_IMU


class GetIMUOffset(CommandMessage):
    """Request the stored IMU offsets (answered with tag 129)."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.GET_IMU_OFFSET


class SetIMUOffset(CommandMessage):
    """Store IMU calibration offsets for gyro, accelerometer and compass."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.SET_IMU_OFFSET

    gx: float
    gy: float
    gz: float
    ax: float
    ay: float
    az: float
    cx: float
    cy: float
    cz: float


class GetBaseFeedback(CommandMessage):
    """Request one base information report (answered with tag 1001)."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.GET_BASE_FEEDBACK


class SetBaseFeedbackFlow(CommandMessage):
    """Enable (1) or disable (0) continuous base information reports."""

    OPCODE: ClassVar[CommandOpcode] = CommandOpcode.SET_BASE_FEEDBACK_FLOW

    cmd: Int16


COMMAND_TYPES: Final[dict[CommandOpcode, type[CommandMessage]]] = {
    cls.OPCODE: cls
    for cls in (
        EmergencyStop,
        Speed,
        MotorPID,
        OLEDScreenControl,
        OLEDScreenRestore,
        PWM,
        RosCtrl,
        GetIMUData,
        CalibrateIMU,
        GetIMUOffset,
        SetIMUOffset,
        GetBaseFeedback,
        SetBaseFeedbackFlow,
    )
}
"""Every command variant keyed by its opcode."""
