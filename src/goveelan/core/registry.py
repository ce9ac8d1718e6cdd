from __future__ import annotations

import threading

from goveelan.models import Device


class DeviceRegistry:
    """Thread-safe store of discovered devices keyed by device id.

    The lock is only held while touching the dict; callers never hold it
    across socket I/O. Reads hand out deep copies so the stored records can
    only change through :meth:`insert`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._devices: dict[str, Device] = {}

    def insert(self, device: Device) -> None:
        with self._lock:
            self._devices[device.id] = device.model_copy(deep=True)

    def get(self, device_id: str) -> Device | None:
        with self._lock:
            device = self._devices.get(device_id)
            return None if device is None else device.model_copy(deep=True)

    def get_all(self) -> list[Device]:
        with self._lock:
            return [device.model_copy(deep=True) for device in self._devices.values()]

    def clear(self) -> None:
        with self._lock:
            self._devices.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)

    def __contains__(self, device_id: object) -> bool:
        with self._lock:
            return device_id in self._devices
