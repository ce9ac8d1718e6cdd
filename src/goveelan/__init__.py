"""goveelan - discover and control smart lights over their UDP LAN API."""

from __future__ import annotations

from importlib.metadata import version

from .config import ControlConfig, DiscoveryConfig, Settings, get_settings
from .core import DeviceRegistry, discover, query_status, send_command
from .errors import CommandError, CommandTimeoutError, DiscoveryError, GoveeLanError
from .models import Device, DeviceCapabilities, DeviceState, RGBColor, ScanResult
from .storage import Database

__all__ = [
    "CommandError",
    "CommandTimeoutError",
    "ControlConfig",
    "Database",
    "Device",
    "DeviceCapabilities",
    "DeviceRegistry",
    "DeviceState",
    "DiscoveryConfig",
    "DiscoveryError",
    "GoveeLanError",
    "RGBColor",
    "ScanResult",
    "Settings",
    "__version__",
    "discover",
    "get_settings",
    "query_status",
    "send_command",
]

__version__ = version("goveelan")
