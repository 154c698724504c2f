"""
Pydantic models for inbound feedback reports.

Feedback models validate strictly: numbers must be JSON numbers, never
strings or booleans. Fields that older firmware does not send are
declared optional and default to None when absent. Keys the schema
does not know about are ignored.
"""

from __future__ import annotations

from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field

from ugvlink.protocol.constants import FeedbackTag


class FeedbackMessage(BaseModel):
    """
    Base class for all board-to-host feedback reports.

    Subclasses set TAG to the "T" value that selects them.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    TAG: ClassVar[FeedbackTag]

    @property
    def tag(self) -> FeedbackTag:
        """Get the feedback tag this report was selected by."""
        return self.TAG


class BaseInfo(FeedbackMessage):
    """
    Base information report (tag 1001).

    Sent on request or continuously when feedback flow is enabled.
    Odometry, yaw and the arm/gimbal fields depend on the firmware
    revision and board variant, and are None when not reported.

    Example:
        >>> info = decode(b'{"T":1001,"L":0.2,"R":0.6,...,"v":11.0}')
        >>> info.v
        11.0
        >>> info.torque_base is None
        True
    """

    TAG: ClassVar[FeedbackTag] = FeedbackTag.BASE_INFO

    l: float = Field(alias="L", description="Left wheel speed")  # noqa: E741
    r: float = Field(alias="R", description="Right wheel speed")

    gx: float
    gy: float
    gz: float
    ax: float
    ay: float
    az: float

    roll: float = Field(alias="r")
    pitch: float = Field(alias="p")
    yaw: float | None = Field(default=None, alias="y")

    q0: float
    q1: float
    q2: float
    q3: float

    odl: float | None = Field(default=None, description="Left wheel odometry")
    odr: float | None = Field(default=None, description="Right wheel odometry")

    v: float = Field(description="Battery voltage")

    arm_base: float | None = Field(default=None, alias="ab")
    arm_shoulder: float | None = Field(default=None, alias="as")
    arm_elbow: float | None = Field(default=None, alias="ae")
    arm_tilt: float | None = Field(default=None, alias="at")

    torque_base: float | None = Field(default=None, alias="torB")
    torque_shoulder: float | None = Field(default=None, alias="torS")
    torque_elbow: float | None = Field(default=None, alias="torE")
    torque_hand: float | None = Field(default=None, alias="torH")

    pan: float | None = None
    tilt: float | None = None


class IMUData(FeedbackMessage):
    """
    Raw IMU report (tag 1002): gyro, accelerometer and magnetometer.

    The firmware measures these as single-precision floats. Values are
    kept as parsed and not rounded to single precision.
    """

    TAG: ClassVar[FeedbackTag] = FeedbackTag.IMU

    gx: float
    gy: float
    gz: float
    ax: float
    ay: float
    az: float
    mx: float
    my: float
    mz: float


class IMUOffsetData(FeedbackMessage):
    """
    IMU calibration offsets (tag 129), the reply to GetIMUOffset.

    Single-precision on the board, kept as parsed here.
    """

    TAG: ClassVar[FeedbackTag] = FeedbackTag.IMU_OFFSET

    gx: float
    gy: float
    gz: float
    ax: float
    ay: float
    az: float
    cx: float
    cy: float
    cz: float


FEEDBACK_TYPES: Final[dict[FeedbackTag, type[FeedbackMessage]]] = {
    cls.TAG: cls for cls in (BaseInfo, IMUData, IMUOffsetData)
}
"""Every feedback variant keyed by its tag."""
