"""Data models for goveelan."""

from goveelan.models.device import (
    Device,
    DeviceCapabilities,
    DeviceState,
    RGBColor,
    ScanResult,
)
from goveelan.models.message import LanMessage, MessageContent, discovery_probe

__all__ = [
    "Device",
    "DeviceCapabilities",
    "DeviceState",
    "LanMessage",
    "MessageContent",
    "RGBColor",
    "ScanResult",
    "discovery_probe",
]
