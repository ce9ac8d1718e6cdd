from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .paths import default_config_path, default_data_dir, expand_path

CONFIG_ENV_VAR = "GOVEELAN_CONFIG"

DEFAULT_MULTICAST_GROUP = "239.255.255.250"
DEFAULT_BROADCAST_ADDRESS = "255.255.255.255"
DEFAULT_DISCOVERY_PORT = 4001
DEFAULT_RESPONSE_PORT = 4002
DEFAULT_CONTROL_PORT = 4003


class DatabaseConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class DiscoveryConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    timeout_ms: int = Field(default=5000, gt=0)
    multicast_group: str = DEFAULT_MULTICAST_GROUP
    broadcast_address: str = DEFAULT_BROADCAST_ADDRESS
    discovery_port: int = Field(default=DEFAULT_DISCOVERY_PORT, ge=1, le=65535)
    response_port: int = Field(default=DEFAULT_RESPONSE_PORT, ge=0, le=65535)
    bind_address: str = "0.0.0.0"


class ControlConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    port: int = Field(default=DEFAULT_CONTROL_PORT, ge=1, le=65535)
    response_timeout: float = Field(default=2.0, gt=0)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    control: ControlConfig = Field(default_factory=ControlConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.database.path)


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    discovery = settings.discovery
    control = settings.control
    lines = [
        "# goveelan configuration",
        "",
        "[database]",
        f"path = {_toml_string(settings.database.path)}",
        "",
        "[discovery]",
        f"timeout_ms = {discovery.timeout_ms}",
        f"multicast_group = {_toml_string(discovery.multicast_group)}",
        f"broadcast_address = {_toml_string(discovery.broadcast_address)}",
        f"discovery_port = {discovery.discovery_port}",
        f"response_port = {discovery.response_port}",
        f"bind_address = {_toml_string(discovery.bind_address)}",
        "",
        "[control]",
        f"port = {control.port}",
        f"response_timeout = {control.response_timeout}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
