from __future__ import annotations

import ipaddress
import json
import logging
import socket
from typing import Any

from goveelan.config import DEFAULT_CONTROL_PORT
from goveelan.errors import CommandError, CommandTimeoutError
from goveelan.models import DeviceState, LanMessage
from goveelan.models.message import (
    CMD_BRIGHTNESS,
    CMD_COLORWC,
    CMD_DEV_STATUS,
    CMD_STATUS_UPDATE,
    CMD_TURN,
)

from .parser import message_from_document, parse_state

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_TIMEOUT = 2.0
RECEIVE_BUFFER_SIZE = 2048

MIN_COLOR_TEMPERATURE = 2000
MAX_COLOR_TEMPERATURE = 9000

ACKNOWLEDGEMENT: dict[str, Any] = {"success": True}


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def build_command(cmd: str, data: dict[str, Any] | None = None) -> str:
    return LanMessage.build(cmd, data).model_dump_json()


def turn_command(on: bool) -> str:
    return build_command(CMD_TURN, {"value": 1 if on else 0})


def brightness_command(value: int) -> str:
    """Brightness is a percentage on the wire."""
    return build_command(CMD_BRIGHTNESS, {"value": _clamp(value, 0, 100)})


def color_command(r: int, g: int, b: int) -> str:
    color = {"r": _clamp(r, 0, 255), "g": _clamp(g, 0, 255), "b": _clamp(b, 0, 255)}
    return build_command(CMD_COLORWC, {"color": color})


def color_temperature_command(kelvin: int) -> str:
    kelvin = _clamp(kelvin, MIN_COLOR_TEMPERATURE, MAX_COLOR_TEMPERATURE)
    return build_command(CMD_COLORWC, {"colorTemInKelvin": kelvin})


def status_command() -> str:
    return build_command(CMD_DEV_STATUS)


def _device_address(device_ip: str, port: int) -> tuple[socket.AddressFamily, str]:
    try:
        address = ipaddress.ip_address(device_ip)
    except ValueError as exc:
        raise CommandError(f"Invalid device address: {device_ip}:{port}") from exc
    family = socket.AF_INET6 if address.version == 6 else socket.AF_INET
    return family, str(address)


def send_command(
    device_ip: str,
    message: str | bytes,
    expect_response: bool = False,
    port: int = DEFAULT_CONTROL_PORT,
    timeout: float = DEFAULT_RESPONSE_TIMEOUT,
) -> Any:
    """Send ``message`` verbatim to ``device_ip:port`` over UDP.

    Without ``expect_response`` this returns ``{"success": True}`` as soon as
    the datagram is handed to the OS; UDP gives no delivery confirmation.
    Otherwise it waits up to ``timeout`` seconds for one reply and returns it
    decoded as JSON.

    Raises:
        CommandTimeoutError: no reply arrived in time.
        CommandError: the address, socket, send, receive or reply decoding
            failed.
    """
    family, host = _device_address(device_ip, port)
    try:
        payload = message.encode("utf-8") if isinstance(message, str) else message
    except UnicodeEncodeError as exc:
        raise CommandError(f"Failed to encode command: {exc}") from exc
    logger.debug("Sending command to %s:%d: %r", host, port, payload)

    try:
        sock = socket.socket(family, socket.SOCK_DGRAM)
    except OSError as exc:
        raise CommandError(f"Failed to create socket: {exc}") from exc

    with sock:
        try:
            sock.bind(("::" if family == socket.AF_INET6 else "0.0.0.0", 0))
        except OSError as exc:
            raise CommandError(f"Failed to create socket: {exc}") from exc

        if expect_response:
            sock.settimeout(timeout)

        try:
            sock.sendto(payload, (host, port))
        except OSError as exc:
            raise CommandError(f"Failed to send command: {exc}") from exc

        if not expect_response:
            return dict(ACKNOWLEDGEMENT)

        try:
            reply, _ = sock.recvfrom(RECEIVE_BUFFER_SIZE)
        except TimeoutError as exc:
            raise CommandTimeoutError(
                f"No response from {host}:{port} within {timeout:.1f}s"
            ) from exc
        except OSError as exc:
            raise CommandError(f"Failed to receive response: {exc}") from exc

    try:
        return json.loads(reply)
    except (ValueError, RecursionError) as exc:
        raise CommandError(f"Failed to parse response: {exc}") from exc


def query_status(
    device_ip: str,
    port: int = DEFAULT_CONTROL_PORT,
    timeout: float = DEFAULT_RESPONSE_TIMEOUT,
) -> DeviceState:
    """Ask a device for its current state."""
    reply = send_command(
        device_ip, status_command(), expect_response=True, port=port, timeout=timeout
    )
    message = message_from_document(reply)
    if message is None or message.msg.cmd not in (CMD_DEV_STATUS, CMD_STATUS_UPDATE):
        raise CommandError(f"Unexpected status reply from {device_ip}: {reply!r}")
    return parse_state(message.msg.data)
