"""Turn LAN API datagrams into :class:`Device` records.

Every recognized ``msg.cmd`` tag maps to one parser in ``_PARSERS``. A datagram
that is not JSON, lacks the ``msg``/``cmd``/``data`` envelope, carries an
unknown tag or misses the device id yields ``None``: foreign or garbled
packets are expected on a shared discovery port and are never an error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from goveelan.models import (
    Device,
    DeviceCapabilities,
    DeviceState,
    LanMessage,
    MessageContent,
    RGBColor,
)
from goveelan.models.device import DEFAULT_COLOR_TEMPERATURE, DEFAULT_MODE
from goveelan.models.message import CMD_DEV_STATUS, CMD_SCAN

logger = logging.getLogger(__name__)

SCAN_FALLBACK_NAME = "Govee Device"
STATUS_FALLBACK_NAME = "Unknown Device"
UNKNOWN_MODEL = "Unknown"

Address = tuple[Any, ...]


def _int_field(data: dict[str, Any], key: str, default: int, upper: int) -> int:
    value = data.get(key)
    # bool is an int subclass but JSON true/false is not a number here
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        return default
    return min(value, upper)


def _str_field(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _first_str(data: dict[str, Any], *keys: str, default: str) -> str:
    # an empty string is a value, only absent or non-string fields fall through
    for key in keys:
        value = _str_field(data, key)
        if value is not None:
            return value
    return default


def _parse_color(value: Any) -> RGBColor:
    if not isinstance(value, dict):
        return RGBColor()
    return RGBColor(
        r=_int_field(value, "r", 255, 255),
        g=_int_field(value, "g", 255, 255),
        b=_int_field(value, "b", 255, 255),
    )


def parse_state(data: dict[str, Any]) -> DeviceState:
    """Build a :class:`DeviceState` from a status payload, defaulting missing fields."""
    on_off = data.get("onOff")
    return DeviceState(
        on=isinstance(on_off, int) and not isinstance(on_off, bool) and on_off == 1,
        brightness=_int_field(data, "brightness", 0, 255),
        color=_parse_color(data.get("color")),
        color_temperature=_int_field(
            data, "colorTemInKelvin", DEFAULT_COLOR_TEMPERATURE, 65535
        ),
        mode=_first_str(data, "mode", default=DEFAULT_MODE),
    )


def _source_host(src_addr: Address) -> str:
    return str(src_addr[0])


def _parse_scan(data: dict[str, Any], src_addr: Address) -> Device | None:
    device_id = _str_field(data, "device")
    if device_id is None:
        return None
    return Device(
        id=device_id,
        name=_first_str(data, "deviceName", "sku", default=SCAN_FALLBACK_NAME),
        model=_first_str(data, "sku", default=UNKNOWN_MODEL),
        ip=_first_str(data, "ip", default=_source_host(src_addr)),
        lan_api_enabled=True,
        online=True,
        # scan responses carry no state; capabilities are assumed, not queried
        state=DeviceState(),
        capabilities=DeviceCapabilities(),
    )


def _parse_status(data: dict[str, Any], src_addr: Address) -> Device | None:
    device_id = _str_field(data, "device")
    if device_id is None:
        return None
    music_mode = data.get("musicMode")
    return Device(
        id=device_id,
        name=_first_str(data, "deviceName", default=STATUS_FALLBACK_NAME),
        model=_first_str(data, "sku", default=UNKNOWN_MODEL),
        ip=_source_host(src_addr),
        lan_api_enabled=True,
        online="onOff" in data,
        state=parse_state(data),
        capabilities=DeviceCapabilities(
            color_temperature_control="colorTemInKelvin" in data,
            music_mode=music_mode if isinstance(music_mode, bool) else False,
        ),
    )


_PARSERS: dict[str, Callable[[dict[str, Any], Address], Device | None]] = {
    CMD_SCAN: _parse_scan,
    CMD_DEV_STATUS: _parse_status,
}


def message_from_document(document: Any) -> LanMessage | None:
    """Validate the ``{"msg": {"cmd", "data"}}`` envelope of a decoded document."""
    if not isinstance(document, dict):
        return None
    msg = document.get("msg")
    if not isinstance(msg, dict):
        return None
    cmd = msg.get("cmd")
    data = msg.get("data")
    if not isinstance(cmd, str) or not isinstance(data, dict):
        return None
    return LanMessage(msg=MessageContent(cmd=cmd, data=data))


def parse_message(payload: bytes) -> LanMessage | None:
    try:
        document = json.loads(payload)
    except (UnicodeDecodeError, ValueError, RecursionError):
        return None
    return message_from_document(document)


def parse_device_response(payload: bytes, src_addr: Address) -> Device | None:
    message = parse_message(payload)
    if message is None:
        logger.debug("Ignoring non LAN API datagram from %s", src_addr[0])
        return None

    parser = _PARSERS.get(message.msg.cmd)
    if parser is None:
        logger.debug("Unknown command type '%s' from %s", message.msg.cmd, src_addr[0])
        return None

    device = parser(message.msg.data, src_addr)
    if device is None:
        logger.debug(
            "'%s' response from %s has no device id", message.msg.cmd, src_addr[0]
        )
    return device
