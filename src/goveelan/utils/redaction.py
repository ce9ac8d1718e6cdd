from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Redactor:
    enabled: bool = True
    _id_map: dict[str, int] = field(default_factory=dict)
    _id_counter: int = 0

    def redact_ip(self, ip: str) -> str:
        if not self.enabled:
            return ip
        parts = ip.split(".")
        if len(parts) == 4 and all(part.isdigit() for part in parts):
            return f"x.x.x.{parts[3]}"
        if ":" in ip:
            return f"{ip.split(':', 1)[0]}:x"
        return ip

    def redact_device_id(self, device_id: str) -> str:
        """Keep the vendor prefix of a MAC-style id, number the rest."""
        if not self.enabled:
            return device_id
        parts = device_id.split(":")
        if len(parts) < 6:
            return device_id
        prefix = ":".join(parts[:3])
        counter = self._id_map.get(device_id)
        if counter is None:
            self._id_counter += 1
            counter = self._id_counter
            self._id_map[device_id] = counter
        hidden = ":".join("xx" for _ in parts[3:-1])
        return f"{prefix}:{hidden}:{counter:02d}"
