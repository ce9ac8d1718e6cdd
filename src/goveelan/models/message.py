"""LAN API wire envelope: ``{"msg": {"cmd": ..., "data": {...}}}``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

CMD_SCAN = "scan"
CMD_DEV_STATUS = "devStatus"
CMD_STATUS_UPDATE = "statusUpdate"
CMD_TURN = "turn"
CMD_BRIGHTNESS = "brightness"
CMD_COLORWC = "colorwc"


class MessageContent(BaseModel):
    cmd: str
    data: dict[str, Any] = Field(default_factory=dict)


class LanMessage(BaseModel):
    msg: MessageContent

    @classmethod
    def build(cls, cmd: str, data: dict[str, Any] | None = None) -> LanMessage:
        return cls(msg=MessageContent(cmd=cmd, data=data or {}))

    def to_bytes(self) -> bytes:
        return self.model_dump_json().encode("utf-8")


def discovery_probe() -> LanMessage:
    return LanMessage.build(CMD_SCAN, {"account_topic": "reserve"})
