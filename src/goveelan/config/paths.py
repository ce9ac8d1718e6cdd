from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "goveelan"
CONFIG_FILENAME = "config.toml"


def _xdg_home(variable: str, *fallback: str) -> Path:
    # an empty XDG variable counts as unset
    value = os.environ.get(variable)
    return Path(value) if value else Path.home().joinpath(*fallback)


def default_config_path() -> Path:
    return _xdg_home("XDG_CONFIG_HOME", ".config") / APP_NAME / CONFIG_FILENAME


def default_data_dir() -> Path:
    return _xdg_home("XDG_DATA_HOME", ".local", "share") / APP_NAME


def expand_path(value: str | Path) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(str(value))))
