"""Exceptions raised by goveelan."""

from __future__ import annotations


class GoveeLanError(Exception):
    """Base class for all errors raised by this package."""


class DiscoveryError(GoveeLanError):
    """Discovery could not set up its sockets or send the probe."""


class CommandError(GoveeLanError):
    """A control command could not be sent or its reply could not be read."""


class CommandTimeoutError(CommandError):
    """No reply arrived within the command timeout."""
