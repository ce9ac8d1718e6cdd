"""Find LAN API devices with a single scan probe.

A probe is sent once, to the limited broadcast address or, when the network
refuses broadcast, to the multicast group. Replies arrive on a separate
response port and are collected until the timeout elapses.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
import time

from goveelan.config import DiscoveryConfig
from goveelan.errors import DiscoveryError
from goveelan.models import Device, discovery_probe

from .parser import parse_device_response
from .registry import DeviceRegistry

logger = logging.getLogger(__name__)

RECEIVE_BUFFER_SIZE = 2048


def _parse_address(value: str, label: str) -> str:
    try:
        return str(ipaddress.ip_address(value))
    except ValueError as exc:
        raise DiscoveryError(f"Invalid {label} address: {value!r}") from exc


def _create_socket(label: str) -> socket.socket:
    try:
        return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        raise DiscoveryError(f"Failed to create {label} socket: {exc}") from exc


def _open_response_socket(config: DiscoveryConfig, timeout: float) -> socket.socket:
    sock = _create_socket("response")
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((config.bind_address, config.response_port))
    except OSError as exc:
        sock.close()
        raise DiscoveryError(
            f"Failed to bind response socket on port {config.response_port}: {exc}"
        ) from exc

    try:
        sock.settimeout(timeout)
    except (OSError, ValueError) as exc:
        sock.close()
        raise DiscoveryError(f"Failed to set socket timeout: {exc}") from exc
    return sock


def _open_send_socket() -> socket.socket:
    sock = _create_socket("send")
    try:
        sock.bind(("0.0.0.0", 0))
    except OSError as exc:
        sock.close()
        raise DiscoveryError(f"Failed to bind send socket: {exc}") from exc

    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
    except OSError as exc:
        sock.close()
        raise DiscoveryError(f"Failed to enable broadcast: {exc}") from exc
    return sock


def _encode_probe() -> bytes:
    try:
        return discovery_probe().to_bytes()
    except (TypeError, ValueError) as exc:
        raise DiscoveryError(f"Failed to serialize discovery message: {exc}") from exc


def _send_probe(sock: socket.socket, probe: bytes, config: DiscoveryConfig) -> str:
    """Send the probe once and return the address it went to."""
    broadcast = _parse_address(config.broadcast_address, "broadcast")
    try:
        sock.sendto(probe, (broadcast, config.discovery_port))
    except OSError as exc:
        logger.warning(
            "Broadcast to %s:%d failed (%s), trying multicast",
            broadcast,
            config.discovery_port,
            exc,
        )
    else:
        logger.debug("Sent broadcast probe to %s:%d", broadcast, config.discovery_port)
        return broadcast

    group = _parse_address(config.multicast_group, "multicast")
    try:
        sock.sendto(probe, (group, config.discovery_port))
    except OSError as exc:
        raise DiscoveryError(f"Failed to send discovery message: {exc}") from exc
    logger.debug("Sent multicast probe to %s:%d", group, config.discovery_port)
    return group


def _collect(
    sock: socket.socket, registry: DeviceRegistry, timeout: float
) -> list[Device]:
    devices: list[Device] = []
    response_count = 0
    start = time.monotonic()

    while True:
        remaining = timeout - (time.monotonic() - start)
        if remaining <= 0:
            break
        sock.settimeout(remaining)
        try:
            payload, src_addr = sock.recvfrom(RECEIVE_BUFFER_SIZE)
        except (TimeoutError, BlockingIOError):
            continue
        except OSError as exc:
            logger.warning("Error receiving discovery response: %s", exc)
            continue

        response_count += 1
        logger.debug(
            "Response #%d: %d bytes from %s", response_count, len(payload), src_addr[0]
        )
        device = parse_device_response(payload, src_addr)
        if device is None:
            continue

        logger.info(
            "Found device '%s' (%s) at %s, id=%s",
            device.name,
            device.model,
            device.ip,
            device.id,
        )
        devices.append(device)
        registry.insert(device)

    logger.info(
        "Discovery complete: %d responses, %d devices", response_count, len(devices)
    )
    return devices


def discover(
    registry: DeviceRegistry, config: DiscoveryConfig | None = None
) -> list[Device]:
    """Probe the LAN and return every device that answered within the timeout.

    Devices are returned in arrival order, one entry per valid reply, so a
    device answering twice shows up twice. Each one is also upserted into
    ``registry``. Raises :class:`DiscoveryError` when sockets cannot be set up
    or the probe cannot be sent by either path.
    """
    config = config or DiscoveryConfig()
    timeout = config.timeout_ms / 1000

    logger.info(
        "Discovering devices (timeout=%dms, multicast=%s:%d, response port=%d)",
        config.timeout_ms,
        config.multicast_group,
        config.discovery_port,
        config.response_port,
    )
    with _open_response_socket(config, timeout) as response_sock:
        with _open_send_socket() as send_sock:
            probe = _encode_probe()
            _send_probe(send_sock, probe, config)
        return _collect(response_sock, registry, timeout)
