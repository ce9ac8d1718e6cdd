from __future__ import annotations

from .commands import (
    brightness_command,
    build_command,
    color_command,
    color_temperature_command,
    query_status,
    send_command,
    status_command,
    turn_command,
)
from .discovery import discover
from .mock_device import MockGoveeDevice, run_mock_device
from .parser import parse_device_response, parse_message, parse_state
from .registry import DeviceRegistry

__all__ = [
    "DeviceRegistry",
    "MockGoveeDevice",
    "brightness_command",
    "build_command",
    "color_command",
    "color_temperature_command",
    "discover",
    "parse_device_response",
    "parse_message",
    "parse_state",
    "query_status",
    "run_mock_device",
    "send_command",
    "status_command",
    "turn_command",
]
