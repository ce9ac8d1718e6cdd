"""Mock LAN API light for development and testing."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from goveelan.config import (
    DEFAULT_CONTROL_PORT,
    DEFAULT_DISCOVERY_PORT,
    DEFAULT_RESPONSE_PORT,
)
from goveelan.models import DeviceState, LanMessage, RGBColor
from goveelan.models.message import (
    CMD_BRIGHTNESS,
    CMD_COLORWC,
    CMD_DEV_STATUS,
    CMD_SCAN,
    CMD_TURN,
)

from .parser import parse_message

logger = logging.getLogger(__name__)

Address = tuple[Any, ...]


class _Endpoint(asyncio.DatagramProtocol):
    def __init__(self, device: MockGoveeDevice, label: str) -> None:
        self._device = device
        self._label = label
        self.transport: asyncio.DatagramTransport | None = None

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        assert isinstance(transport, asyncio.DatagramTransport)
        self.transport = transport

    def datagram_received(self, data: bytes, addr: Address) -> None:
        message = parse_message(data)
        if message is None:
            logger.debug("[%s] Ignoring garbage from %s", self._label, addr[0])
            return
        logger.debug("[%s] Received '%s' from %s", self._label, message.msg.cmd, addr)
        reply = self._device.handle(self._label, message, addr)
        if reply is not None and self.transport is not None:
            payload, target = reply
            self.transport.sendto(payload, target)


@dataclass
class MockGoveeDevice:
    """Mock light answering scan probes and control commands over UDP.

    Scan probes on ``discovery_port`` are answered to ``<sender>:response_port``,
    the way real devices do. Control messages on ``control_port`` update the
    state, and ``devStatus`` is answered to the sender's own address.
    """

    device_id: str = "AA:BB:CC:DD:EE:FF:00:01"
    sku: str = "H6159"
    name: str | None = None
    host: str = "0.0.0.0"
    advertised_ip: str | None = None
    discovery_port: int = DEFAULT_DISCOVERY_PORT
    response_port: int = DEFAULT_RESPONSE_PORT
    control_port: int = DEFAULT_CONTROL_PORT
    music_mode: bool = True

    state: DeviceState = field(default_factory=DeviceState)

    _transports: list[asyncio.DatagramTransport] = field(
        default_factory=list, repr=False
    )

    async def start(self) -> None:
        """Bind the discovery and control endpoints."""
        loop = asyncio.get_running_loop()
        for label, port in (
            ("discovery", self.discovery_port),
            ("control", self.control_port),
        ):
            transport, _ = await loop.create_datagram_endpoint(
                lambda label=label: _Endpoint(self, label),
                local_addr=(self.host, port),
            )
            self._transports.append(transport)
        logger.info(
            "Mock device %s (%s) listening on %s ports %d/%d",
            self.device_id,
            self.sku,
            self.host,
            self.discovery_port,
            self.control_port,
        )

    async def stop(self) -> None:
        for transport in self._transports:
            transport.close()
        self._transports.clear()
        logger.info("Mock device %s stopped", self.device_id)

    async def run_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        finally:
            await self.stop()

    def handle(
        self, label: str, message: LanMessage, addr: Address
    ) -> tuple[bytes, Address] | None:
        cmd = message.msg.cmd
        data = message.msg.data

        if label == "discovery":
            if cmd != CMD_SCAN:
                return None
            return self.scan_response(), (addr[0], self.response_port)

        if cmd == CMD_DEV_STATUS:
            return self.status_response(), addr
        if cmd == CMD_TURN:
            self.state.on = data.get("value") == 1
            logger.info("Power turned %s", "on" if self.state.on else "off")
        elif cmd == CMD_BRIGHTNESS:
            if isinstance(data.get("value"), int):
                self.state.brightness = data["value"]
            logger.info("Brightness set to %d", self.state.brightness)
        elif cmd == CMD_COLORWC:
            if isinstance(data.get("color"), dict):
                self.state.color = RGBColor.model_validate(data["color"])
            if isinstance(data.get("colorTemInKelvin"), int):
                self.state.color_temperature = data["colorTemInKelvin"]
            logger.info(
                "Color set to %s / %dK",
                self.state.color.as_tuple(),
                self.state.color_temperature,
            )
        else:
            logger.debug("Unsupported command '%s'", cmd)
        return None

    def scan_response(self) -> bytes:
        data: dict[str, Any] = {"device": self.device_id, "sku": self.sku}
        if self.name:
            data["deviceName"] = self.name
        if self.advertised_ip:
            data["ip"] = self.advertised_ip
        return LanMessage.build(CMD_SCAN, data).to_bytes()

    def status_response(self) -> bytes:
        data: dict[str, Any] = {
            "device": self.device_id,
            "sku": self.sku,
            "onOff": 1 if self.state.on else 0,
            "brightness": self.state.brightness,
            "color": self.state.color.model_dump(),
            "colorTemInKelvin": self.state.color_temperature,
            "mode": self.state.mode,
            "musicMode": self.music_mode,
        }
        if self.name:
            data["deviceName"] = self.name
        return LanMessage.build(CMD_DEV_STATUS, data).to_bytes()


async def run_mock_device(
    device_id: str = "AA:BB:CC:DD:EE:FF:00:01",
    sku: str = "H6159",
    name: str | None = None,
    host: str = "0.0.0.0",
) -> None:
    """Run a mock device until cancelled."""
    device = MockGoveeDevice(device_id=device_id, sku=sku, name=name, host=host)
    await device.run_forever()
