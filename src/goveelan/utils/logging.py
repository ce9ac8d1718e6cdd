from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

LOGLEVEL_ENV_VARS = ("GOVEELAN_LOGLEVEL", "LOGLEVEL")

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def _level_from_env() -> str:
    for name in LOGLEVEL_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return "INFO"


def setup_logging(level: LogLevel | str | None = None) -> None:
    """Install coloredlogs on the root logger.

    ``level`` wins over ``GOVEELAN_LOGLEVEL``, which wins over ``LOGLEVEL``.
    """
    resolved = (level or _level_from_env()).upper()

    coloredlogs.install(
        level=resolved,
        fmt=DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )

    # datagram endpoint chatter from the mock device
    logging.getLogger("asyncio").setLevel(logging.WARNING)
