from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)

DEFAULT_BRIGHTNESS = 50
DEFAULT_COLOR_TEMPERATURE = 5000
DEFAULT_MODE = "normal"


class RGBColor(BaseModel):
    model_config = _WIRE_CONFIG

    r: int = Field(default=255, ge=0, le=255)
    g: int = Field(default=255, ge=0, le=255)
    b: int = Field(default=255, ge=0, le=255)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


class DeviceState(BaseModel):
    model_config = _WIRE_CONFIG

    on: bool = False
    brightness: int = Field(default=DEFAULT_BRIGHTNESS, ge=0, le=255)
    color: RGBColor = Field(default_factory=RGBColor)
    color_temperature: int = Field(default=DEFAULT_COLOR_TEMPERATURE, ge=0, le=65535)
    mode: str = DEFAULT_MODE


class DeviceCapabilities(BaseModel):
    model_config = _WIRE_CONFIG

    power_control: bool = True
    brightness_control: bool = True
    color_control: bool = True
    color_temperature_control: bool = True
    music_mode: bool = True


class Device(BaseModel):
    """A smart light that answered on the LAN API."""

    model_config = _WIRE_CONFIG

    id: str
    name: str
    model: str
    ip: str
    lan_api_enabled: bool = True
    online: bool = True
    state: DeviceState = Field(default_factory=DeviceState)
    capabilities: DeviceCapabilities = Field(default_factory=DeviceCapabilities)


class ScanResult(BaseModel):
    model_config = _WIRE_CONFIG

    scan_timestamp: datetime
    devices: list[Device]
