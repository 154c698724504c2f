"""
Data models for the UGV JSON line protocol.

This module contains Pydantic models for both directions:

- Commands sent to the board (CommandMessage and its variants)
- Feedback reports received from the board (FeedbackMessage and its variants)
"""

from ugvlink.models.commands import (
    COMMAND_TYPES,
    PWM,
    CalibrateIMU,
    CommandMessage,
    EmergencyStop,
    GetBaseFeedback,
    GetIMUData,
    GetIMUOffset,
    MotorPID,
    OLEDScreenControl,
    OLEDScreenRestore,
    RosCtrl,
    SetBaseFeedbackFlow,
    SetIMUOffset,
    Speed,
)
from ugvlink.models.feedback import (
    FEEDBACK_TYPES,
    BaseInfo,
    FeedbackMessage,
    IMUData,
    IMUOffsetData,
)

__all__ = [
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
    "COMMAND_TYPES",
    # Feedback
    "FeedbackMessage",
    "BaseInfo",
    "IMUData",
    "IMUOffsetData",
    "FEEDBACK_TYPES",
]
