"""Tests for config, storage and redaction."""

from __future__ import annotations

import pytest

from goveelan.config import (
    CONFIG_ENV_VAR,
    DiscoveryConfig,
    Settings,
    default_config_path,
    get_settings,
    load_settings,
    write_settings,
)
from goveelan.models import Device
from goveelan.storage import Database
from goveelan.utils.redaction import Redactor


def test_config_roundtrip(tmp_path):
    path = tmp_path / "config.toml"
    settings = Settings(
        discovery=DiscoveryConfig(timeout_ms=1500, multicast_group="239.1.2.3")
    )
    write_settings(settings, path)

    loaded = load_settings(path)
    assert loaded.discovery.timeout_ms == 1500
    assert loaded.discovery.multicast_group == "239.1.2.3"
    assert loaded.control.port == 4003


def test_config_defaults():
    settings = get_settings()

    assert settings.discovery.timeout_ms == 5000
    assert settings.discovery.multicast_group == "239.255.255.250"
    assert settings.discovery.discovery_port == 4001
    assert settings.discovery.response_port == 4002
    assert settings.control.port == 4003
    assert settings.control.response_timeout == 2.0


def test_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[discovery]\ntimeout = 5\n")

    with pytest.raises(ValueError, match="Invalid config file"):
        load_settings(path)


def test_config_rejects_bad_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[discovery\n")

    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


def test_config_env_var_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))

    with pytest.raises(FileNotFoundError):
        get_settings()


def test_scan_roundtrip(tmp_path):
    db = Database(tmp_path)
    devices = [Device(id="ABC123", name="Strip", model="H6159", ip="192.168.1.50")]

    db.save_scan(devices)
    result = db.load_current_scan()

    assert result is not None
    assert result.devices == devices
    assert '"lanApiEnabled": true' in db.current_scan_path.read_text()


def test_load_scan_missing(tmp_path):
    assert Database(tmp_path).load_current_scan() is None


def test_load_scan_corrupt(tmp_path):
    db = Database(tmp_path)
    db.ensure_dirs()
    db.current_scan_path.write_text("{")

    with pytest.raises(ValueError, match="Invalid JSON"):
        db.load_current_scan()


def test_redaction():
    redactor = Redactor()

    assert redactor.redact_ip("192.168.1.50") == "x.x.x.50"
    first = "AA:BB:CC:DD:EE:FF:00:01"
    assert redactor.redact_device_id(first) == "AA:BB:CC:xx:xx:xx:xx:01"
    assert redactor.redact_device_id("11:22:33:44:55:66:77:88").endswith(":02")
    assert redactor.redact_device_id(first).endswith(":01")
    assert redactor.redact_device_id("ABC123") == "ABC123"


def test_redaction_disabled():
    redactor = Redactor(enabled=False)

    assert redactor.redact_ip("192.168.1.50") == "192.168.1.50"
    assert redactor.redact_device_id("AA:BB:CC:DD:EE:FF") == "AA:BB:CC:DD:EE:FF"


def test_empty_xdg_variable_falls_back_to_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", "")
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_config_path() == tmp_path / ".config" / "goveelan" / "config.toml"
