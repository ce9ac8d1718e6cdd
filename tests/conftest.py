from __future__ import annotations

import socket
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import pytest

from goveelan.config import get_settings


@pytest.fixture(autouse=True)
def _isolate_settings_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("GOVEELAN_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def free_udp_port() -> Callable[[], int]:
    def _pick() -> int:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.bind(("127.0.0.1", 0))
            return sock.getsockname()[1]

    return _pick


@contextmanager
def _udp_responder(
    replies: list[bytes], reply_port: int | None = None
) -> Iterator[tuple[int, list[bytes]]]:
    """Answer the first datagram with ``replies``.

    Replies go to ``<sender>:reply_port`` when given, else back to the sender.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5.0)
    received: list[bytes] = []

    def _serve() -> None:
        try:
            data, addr = sock.recvfrom(4096)
        except OSError:
            return
        received.append(data)
        target = (addr[0], reply_port) if reply_port else addr
        for reply in replies:
            sock.sendto(reply, target)

    thread = threading.Thread(target=_serve, daemon=True)
    thread.start()
    try:
        yield sock.getsockname()[1], received
    finally:
        thread.join(timeout=5.0)
        sock.close()


@pytest.fixture
def udp_responder():
    return _udp_responder
