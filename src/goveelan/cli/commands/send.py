from __future__ import annotations

import json

import typer

from goveelan.cli.common import exit_with_error, load_settings_or_exit
from goveelan.core import send_command
from goveelan.errors import GoveeLanError


def send(
    device_ip: str = typer.Argument(..., help="Device IP address"),
    message: str = typer.Argument(..., help="Raw message, sent verbatim"),
    expect_response: bool = typer.Option(
        False, "--expect-response", "-r", help="Wait for a single reply"
    ),
    port: int | None = typer.Option(None, "--port", "-p", help="Command port"),
) -> None:
    """Send a raw LAN API message to a device."""
    settings = load_settings_or_exit()
    try:
        reply = send_command(
            device_ip,
            message,
            expect_response=expect_response,
            port=port or settings.control.port,
            timeout=settings.control.response_timeout,
        )
    except GoveeLanError as exc:
        exit_with_error(exc)
    typer.echo(json.dumps(reply, indent=2))


def register(app: typer.Typer) -> None:
    app.command()(send)
