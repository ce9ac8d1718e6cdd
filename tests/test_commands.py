from __future__ import annotations

import asyncio
import json
import socket
import time

import pytest

from goveelan.core import (
    MockGoveeDevice,
    brightness_command,
    color_command,
    color_temperature_command,
    query_status,
    send_command,
    status_command,
    turn_command,
)
from goveelan.errors import CommandError, CommandTimeoutError


def test_fire_and_forget_returns_acknowledgement():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.settimeout(2.0)
        port = listener.getsockname()[1]

        start = time.monotonic()
        result = send_command("127.0.0.1", '{"msg":{"cmd":"turn"}}', port=port)
        elapsed = time.monotonic() - start
        payload, _ = listener.recvfrom(2048)

    assert result == {"success": True}
    assert elapsed < 0.5
    assert payload == b'{"msg":{"cmd":"turn"}}'


def test_bytes_message_sent_verbatim():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.settimeout(2.0)

        send_command("127.0.0.1", b"\x00raw\xff", port=listener.getsockname()[1])
        payload, _ = listener.recvfrom(2048)

    assert payload == b"\x00raw\xff"


def test_fire_and_forget_without_listener():
    assert send_command("127.0.0.1", "hello", port=9) == {"success": True}


def test_invalid_address():
    with pytest.raises(CommandError, match="Invalid device address"):
        send_command("light.local", "hello")


def test_reply_is_decoded(udp_responder):
    reply = b'{"msg":{"cmd":"devStatus","data":{"onOff":1}}}'

    with udp_responder([reply]) as (port, received):
        result = send_command(
            "127.0.0.1", status_command(), expect_response=True, port=port
        )

    assert result == {"msg": {"cmd": "devStatus", "data": {"onOff": 1}}}
    assert json.loads(received[0]) == {"msg": {"cmd": "devStatus", "data": {}}}


def test_non_json_reply_is_error(udp_responder):
    with udp_responder([b"OK"]) as (port, _):
        with pytest.raises(CommandError, match="Failed to parse response"):
            send_command("127.0.0.1", "hello", expect_response=True, port=port)


def test_deeply_nested_reply_is_error(udp_responder):
    with udp_responder([b"[" * 2000]) as (port, _):
        with pytest.raises(CommandError, match="Failed to parse response"):
            send_command("127.0.0.1", "hello", expect_response=True, port=port)


def test_unencodable_message_is_error():
    with pytest.raises(CommandError, match="Failed to encode command"):
        send_command("127.0.0.1", "\ud800", port=9)


def test_reply_timeout():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as silent:
        silent.bind(("127.0.0.1", 0))

        start = time.monotonic()
        with pytest.raises(CommandTimeoutError):
            send_command(
                "127.0.0.1",
                "hello",
                expect_response=True,
                port=silent.getsockname()[1],
                timeout=0.2,
            )
        elapsed = time.monotonic() - start

    assert elapsed < 1.5


def test_command_builders():
    assert json.loads(turn_command(True)) == {
        "msg": {"cmd": "turn", "data": {"value": 1}}
    }
    assert json.loads(turn_command(False))["msg"]["data"] == {"value": 0}
    assert json.loads(brightness_command(150))["msg"]["data"] == {"value": 100}
    assert json.loads(brightness_command(-5))["msg"]["data"] == {"value": 0}
    assert json.loads(color_command(300, 128, -1))["msg"] == {
        "cmd": "colorwc",
        "data": {"color": {"r": 255, "g": 128, "b": 0}},
    }
    assert json.loads(color_temperature_command(1000))["msg"]["data"] == {
        "colorTemInKelvin": 2000
    }


def test_query_status_rejects_foreign_reply(udp_responder):
    with udp_responder([b'{"msg":{"cmd":"scan","data":{}}}']) as (port, _):
        with pytest.raises(CommandError, match="Unexpected status reply"):
            query_status("127.0.0.1", port=port)


def test_control_mock_device(free_udp_port):
    mock = MockGoveeDevice(
        host="127.0.0.1",
        discovery_port=free_udp_port(),
        control_port=free_udp_port(),
    )
    port = mock.control_port

    def _drive():
        send_command("127.0.0.1", turn_command(True), port=port)
        send_command("127.0.0.1", brightness_command(80), port=port)
        send_command("127.0.0.1", color_command(10, 20, 30), port=port)
        time.sleep(0.1)
        return query_status("127.0.0.1", port=port)

    async def _main():
        await mock.start()
        try:
            return await asyncio.to_thread(_drive)
        finally:
            await mock.stop()

    state = asyncio.run(_main())

    assert state.on is True
    assert state.brightness == 80
    assert state.color.as_tuple() == (10, 20, 30)
    assert mock.state.on is True
